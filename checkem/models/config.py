"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TrackerConfig:
    """Tracker persistence and hashing configuration."""

    store_path: str = ""
    auto_save: bool = False
    create_if_missing: bool = False
    hash_algorithm: str = "sha256"


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    json: bool = True


@dataclass
class CheckemConfig:
    """Top-level checkem configuration."""

    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    log: LogConfig = field(default_factory=LogConfig)
