"""Storage layer for checkem.

Moves the serialized store to and from durable storage as a single blob.

Submodules:
    backend -- StorageBackend ABC plus file and in-memory implementations.
"""

from checkem.storage.backend import FileStorage, MemoryStorage, StorageBackend

__all__ = ["FileStorage", "MemoryStorage", "StorageBackend"]
