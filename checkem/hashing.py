"""Content hashing used for checksum-based change detection."""

from __future__ import annotations

import hashlib
from pathlib import Path

DEFAULT_ALGORITHM = "sha256"
_CHUNK_SIZE = 65536


def resolve_algorithm(algorithm: str) -> str:
    """Return the normalised algorithm name, or raise ValueError if unusable.

    Only fixed-length digests are accepted; the ``shake_*`` family is rejected.
    """
    name = algorithm.lower()
    if name not in hashlib.algorithms_available or name.startswith("shake_"):
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")
    return name


def hash_content(content: str | bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Return the lowercase hex digest of *content*.

    Strings are encoded as UTF-8 before hashing, so ``"abc"`` and ``b"abc"``
    produce the same digest.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    elif not isinstance(content, (bytes, bytearray, memoryview)):
        raise TypeError(f"Cannot hash content of type {type(content).__name__}")
    hasher = hashlib.new(resolve_algorithm(algorithm))
    hasher.update(content)
    return hasher.hexdigest()


def hash_file(file_path: Path | str, algorithm: str = DEFAULT_ALGORITHM, chunk_size: int = _CHUNK_SIZE) -> str:
    """Compute the hex digest of a file's contents, reading in chunks.

    Args:
        file_path:  Path to the file.
        algorithm:  Any fixed-length algorithm accepted by :func:`hashlib.new`.
        chunk_size: Bytes to read at a time.

    Raises:
        OSError: The file is missing or unreadable.
    """
    hasher = hashlib.new(resolve_algorithm(algorithm))
    with open(Path(file_path).expanduser(), "rb") as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)
    return hasher.hexdigest()
