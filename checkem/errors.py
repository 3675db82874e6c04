"""Exception hierarchy for checkem."""

from __future__ import annotations


class CheckemError(Exception):
    """Base class for every error raised by checkem."""


class InvalidArgumentError(CheckemError, ValueError):
    """Raised when a caller passes an empty key or a missing/unsupported value."""


class RecordNotFoundError(CheckemError, KeyError):
    """Raised when a key is queried that has never been checked."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No record found for key: {self.key!r}"


class StorageError(CheckemError):
    """Raised when the backing store cannot be read or written.

    Carries the storage location and the underlying exception so that callers
    can report or retry without parsing the message.
    """

    action = "access"

    def __init__(self, location: str, cause: BaseException) -> None:
        super().__init__(f"Failed to {self.action} store at {location}: {cause}")
        self.location = location
        self.cause = cause


class StorageReadError(StorageError):
    """The store exists but could not be read or parsed."""

    action = "load"


class StorageWriteError(StorageError):
    """The store could not be written.  In-memory state is still intact."""

    action = "save"
