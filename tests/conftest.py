"""Shared fixtures for checkem tests.

Provides a deterministic clock, storage backends and record factories so tests
can assert exact timestamps without sleeping.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import structlog

from checkem.models.records import Record
from checkem.storage.backend import MemoryStorage
from checkem.tracker import Tracker

# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------

T0 = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=UTC)


class StepClock:
    """Returns T0, T0 + step, T0 + 2*step, ... on successive calls."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(seconds=1)) -> None:
        self._next = start
        self._step = step
        self.calls = 0

    def __call__(self) -> datetime:
        now = self._next
        self._next = now + self._step
        self.calls += 1
        return now

    def peek(self) -> datetime:
        """Return the time the next call will produce."""
        return self._next


def make_record(
    value: object = "v1",
    updated_at: datetime | None = T0,
    last_checked: datetime | None = T0,
    times_checked: int = 1,
    times_updated: int = 1,
) -> Record:
    """Create a Record with sensible defaults for testing."""
    return Record(
        value=value,  # type: ignore[arg-type]
        updated_at=updated_at,
        last_checked=last_checked,
        times_checked=times_checked,
        times_updated=times_updated,
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def reset_structlog():
    """Undo any structlog configuration the test applies."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "state" / "checkem.json"


@pytest.fixture
def tracker(clock: StepClock) -> Tracker:
    """In-memory tracker with no storage location."""
    return Tracker(clock=clock)
