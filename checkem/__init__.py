"""checkem: persistent change detection for keyed values and content checksums."""

from checkem.app import open_tracker
from checkem.errors import (
    CheckemError,
    InvalidArgumentError,
    RecordNotFoundError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from checkem.models.records import Record
from checkem.tracker import Tracker

__version__ = "0.1.0"

__all__ = [
    "CheckemError",
    "InvalidArgumentError",
    "Record",
    "RecordNotFoundError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "Tracker",
    "open_tracker",
]
