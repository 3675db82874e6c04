"""Whole-blob storage backends for the tracker store.

StorageBackend -- ABC every backend must implement.
FileStorage    -- Local filesystem; writes go through a temp file and
                  ``os.replace`` so readers never see a partial store.
MemoryStorage  -- Dict-backed backend for tests and ephemeral trackers.
"""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

_log = structlog.get_logger(component="storage.file")


class StorageBackend(ABC):
    """Abstract base class for store persistence.

    Backends move opaque text blobs keyed by a location string.  I/O problems
    are reported by raising ``OSError``; the tracker wraps them with the
    location attached.
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Identifier used in logs."""

    @abstractmethod
    def exists(self, location: str) -> bool:
        """Return True if a store is present at *location*."""

    @abstractmethod
    def read(self, location: str) -> str:
        """Return the full contents stored at *location*."""

    @abstractmethod
    def write(self, location: str, data: str) -> None:
        """Replace the contents at *location* with *data* in one step."""


class FileStorage(StorageBackend):
    """Stores each location as a UTF-8 file on the local filesystem.

    Args:
        fsync: Flush the temp file to disk before renaming it into place.
               Defaults to True.
    """

    def __init__(self, fsync: bool = True) -> None:
        self._fsync = fsync

    @property
    def backend_name(self) -> str:
        return "file"

    @staticmethod
    def _path(location: str) -> Path:
        return Path(location).expanduser()

    def exists(self, location: str) -> bool:
        return self._path(location).is_file()

    def read(self, location: str) -> str:
        return self._path(location).read_text(encoding="utf-8")

    def write(self, location: str, data: str) -> None:
        path = self._path(location)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
                f.flush()
                if self._fsync:
                    os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            # Leave the previous store untouched and clean up the partial temp file.
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
        _log.debug("file_written", path=str(path), bytes=len(data))


class MemoryStorage(StorageBackend):
    """Keeps stores in a plain dict.  Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._blobs: dict[str, str] = dict(initial or {})

    @property
    def backend_name(self) -> str:
        return "memory"

    def exists(self, location: str) -> bool:
        return location in self._blobs

    def read(self, location: str) -> str:
        try:
            return self._blobs[location]
        except KeyError:
            raise FileNotFoundError(location) from None

    def write(self, location: str, data: str) -> None:
        self._blobs[location] = data

    def locations(self) -> list[str]:
        """Return every location that currently holds a store."""
        return list(self._blobs)
