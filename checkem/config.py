"""Configuration loading from environment variables."""

from __future__ import annotations

import hashlib
import os

from checkem.hashing import resolve_algorithm
from checkem.models.config import CheckemConfig, LogConfig, TrackerConfig


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"CHECKEM_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _validate_hash_algorithm(value: str) -> str:
    try:
        return resolve_algorithm(value)
    except ValueError:
        guaranteed = sorted(a for a in hashlib.algorithms_guaranteed if not a.startswith("shake_"))
        raise ValueError(f"Invalid hash algorithm: {value}. Must be one of {guaranteed}") from None


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> CheckemConfig:
    """Load configuration from CHECKEM_* environment variables."""
    return CheckemConfig(
        tracker=TrackerConfig(
            store_path=_env("STORE_PATH", ""),
            auto_save=_env_bool("AUTO_SAVE", False),
            create_if_missing=_env_bool("CREATE_IF_MISSING", False),
            hash_algorithm=_validate_hash_algorithm(_env("HASH_ALGORITHM", "sha256")),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            json=_env_bool("LOG_JSON", True),
        ),
    )
