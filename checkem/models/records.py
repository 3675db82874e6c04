"""Tracked record data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

# Scalar types a record may hold.  bool is listed explicitly even though it
# subclasses int; comparisons below are on the exact type.
SCALAR_TYPES: Final = (str, int, float, bool)

Scalar = str | int | float | bool


class _Missing:
    """Placeholder value of a record that has never been checked."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<MISSING>"


MISSING: Final = _Missing()


def is_scalar(value: object) -> bool:
    """Return True if *value* is one of the supported scalar types."""
    return type(value) in SCALAR_TYPES


def same_value(stored: object, current: object) -> bool:
    """Strict equality: same concrete type and equal value.

    ``1``, ``1.0``, ``True`` and ``"1"`` are all distinct.  NaN never equals
    itself, so a NaN value is reported as changed on every check.
    """
    if stored is MISSING:
        return False
    return type(stored) is type(current) and stored == current


@dataclass(frozen=True)
class Record:
    """Last-observed state of a single tracked key.

    Produced by the Tracker on every check and replaced wholesale rather than
    mutated.  ``updated_at`` is None only for records loaded from a store that
    never recorded it.

    ``value`` keeps its concrete type and is compared with :func:`same_value`:
    an int and a float holding the same number are different values, so
    ``1`` followed by ``1.0`` is reported as a change.
    """

    value: Scalar | _Missing = MISSING
    updated_at: datetime | None = None
    last_checked: datetime | None = None
    times_checked: int = 0
    times_updated: int = 0

    @property
    def has_value(self) -> bool:
        return self.value is not MISSING


Store = dict[str, Record]
