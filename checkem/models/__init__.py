"""Core data structures for checkem."""

from checkem.models.config import CheckemConfig, LogConfig, TrackerConfig
from checkem.models.records import MISSING, SCALAR_TYPES, Record, Scalar, Store, is_scalar, same_value

__all__ = [
    "MISSING",
    "SCALAR_TYPES",
    "CheckemConfig",
    "LogConfig",
    "Record",
    "Scalar",
    "Store",
    "TrackerConfig",
    "is_scalar",
    "same_value",
]
