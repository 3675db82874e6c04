"""Change tracker: detects whether a keyed value differs from its last observation.

The tracker owns an in-memory store of Records keyed by identifier and
optionally persists it through a StorageBackend.  Two persistence modes are
supported:

* manual    -- ``auto_save=False``; callers batch checks and call ``save()``.
* auto-save -- ``auto_save=True``; the whole store is written after every check.

The store is read and written as a whole.  Nothing here is safe against other
processes writing the same location concurrently.
"""

from __future__ import annotations

from collections.abc import Callable, KeysView
from datetime import UTC, datetime
from os import PathLike

import structlog

from checkem.errors import InvalidArgumentError, RecordNotFoundError, StorageReadError, StorageWriteError
from checkem.hashing import DEFAULT_ALGORITHM, hash_content, hash_file, resolve_algorithm
from checkem.models.config import TrackerConfig
from checkem.models.records import Record, Scalar, Store, is_scalar, same_value
from checkem.storage.backend import FileStorage, StorageBackend
from checkem.tracker.codec import decode_store, encode_store

_log = structlog.get_logger(component="tracker")

# Zero-state record used for keys that have never been checked.
_BASELINE = Record()

Location = str | PathLike[str]


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class Tracker:
    """Tracks named values and reports whether they changed since last seen.

    Args:
        location:          Where the store lives.  When given, the store is
                           loaded immediately.
        auto_save:         Persist the whole store after every ``check``.
        create_if_missing: Write an empty store when *location* does not exist
                           yet, instead of only warning.
        storage:           Backend used for reads and writes.  Defaults to
                           :class:`FileStorage`.
        hash_algorithm:    Digest used by ``check_checksum`` and ``check_file``.
        clock:             Returns the current time.  Defaults to UTC now.

    Raises:
        StorageReadError:  The store exists but cannot be read or parsed.
        StorageWriteError: ``create_if_missing`` is set and the empty store
                           cannot be written.
        ValueError:        *hash_algorithm* is not a usable digest.
    """

    def __init__(
        self,
        location: Location | None = None,
        *,
        auto_save: bool = False,
        create_if_missing: bool = False,
        storage: StorageBackend | None = None,
        hash_algorithm: str = DEFAULT_ALGORITHM,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store: Store = {}
        self._location: str | None = None
        self._storage = storage or FileStorage()
        self._auto_save = auto_save
        self._create_if_missing = create_if_missing
        self._hash_algorithm = resolve_algorithm(hash_algorithm)
        self._clock = clock or _utcnow

        if location is not None:
            self.load(location)

    @classmethod
    def from_config(cls, config: TrackerConfig, **overrides: object) -> Tracker:
        """Build a tracker from a :class:`TrackerConfig`.

        Keyword *overrides* (``storage``, ``clock``, ...) take precedence over
        the config values.
        """
        kwargs: dict[str, object] = {
            "location": config.store_path or None,
            "auto_save": config.auto_save,
            "create_if_missing": config.create_if_missing,
            "hash_algorithm": config.hash_algorithm,
        }
        kwargs.update(overrides)
        return cls(**kwargs)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def location(self) -> str | None:
        return self._location

    @property
    def auto_save(self) -> bool:
        return self._auto_save

    @property
    def hash_algorithm(self) -> str:
        return self._hash_algorithm

    @property
    def records(self) -> Store:
        """Shallow copy of the store.  Records are immutable."""
        return dict(self._store)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _bind(self, location: Location | None) -> str | None:
        """Resolve the target location, binding an explicit one if none is set."""
        if location is None:
            return self._location
        target = str(location)
        if self._location is None:
            self._location = target
        return target

    def _write(self, target: str, store: Store) -> None:
        data = encode_store(store)
        try:
            self._storage.write(target, data)
        except OSError as exc:
            _log.error("store_write_failed", location=target, error=str(exc))
            raise StorageWriteError(target, exc) from exc

    def load(self, location: Location | None = None) -> Store:
        """Replace the in-memory store with the one persisted at *location*.

        A missing store is a normal empty start: it is created when
        ``create_if_missing`` is set and otherwise reported as a warning.
        Either way the in-memory store is left untouched, as it is on any
        failure.

        Returns:
            A copy of the newly loaded store, or an empty dict when the store
            does not exist.

        Raises:
            StorageReadError:  The store exists but cannot be read or parsed.
            StorageWriteError: The empty store could not be created.
        """
        target = self._bind(location)
        if target is None:
            _log.debug("load_skipped_no_location")
            return dict(self._store)

        try:
            exists = self._storage.exists(target)
        except OSError as exc:
            _log.error("store_read_failed", location=target, error=str(exc))
            raise StorageReadError(target, exc) from exc

        if not exists:
            if self._create_if_missing:
                self._write(target, {})
                _log.info("store_created", location=target, backend=self._storage.backend_name)
            else:
                _log.warning("store_not_found", location=target, backend=self._storage.backend_name)
            return {}

        try:
            store = decode_store(self._storage.read(target))
        except (OSError, ValueError) as exc:
            _log.error("store_read_failed", location=target, error=str(exc))
            raise StorageReadError(target, exc) from exc

        self._store = store
        _log.debug("store_loaded", location=target, records=len(store))
        return dict(store)

    def save(self, location: Location | None = None) -> None:
        """Write the whole store to *location*, or to the bound location.

        Does nothing when the tracker has no location.

        Raises:
            StorageWriteError: The write failed.  The in-memory store is still
                               current, so ``save()`` can be retried.
        """
        target = self._bind(location)
        if target is None:
            _log.debug("save_skipped_no_location")
            return
        self._write(target, self._store)
        _log.debug("store_saved", location=target, records=len(self._store))

    # ------------------------------------------------------------------
    # Change detection
    # ------------------------------------------------------------------

    def check(self, key: str, value: Scalar) -> bool:
        """Record an observation of *value* under *key*.

        The first check of a key always counts as a change.  Values compare
        strictly: both the concrete type and the value must match, so ``1``,
        ``1.0``, ``True`` and ``"1"`` are four different values.  Naive clock
        readings are taken as UTC.

        Returns:
            True if *value* differs from the previously stored value.

        Raises:
            InvalidArgumentError: *key* is empty or *value* is None or not a
                                  string, number or boolean.
            StorageWriteError:    Auto-save failed.  The new observation is
                                  still recorded in memory.
        """
        if not isinstance(key, str) or not key:
            raise InvalidArgumentError("key must be a non-empty string")
        if value is None:
            raise InvalidArgumentError(f"value is required for key {key!r}")
        if not is_scalar(value):
            raise InvalidArgumentError(
                f"value for key {key!r} must be a string, number or boolean, got {type(value).__name__}"
            )

        record = self._store.get(key, _BASELINE)
        changed = not same_value(record.value, value)
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)

        self._store[key] = Record(
            value=value,
            updated_at=now if changed else record.updated_at,
            last_checked=now,
            times_checked=record.times_checked + 1,
            times_updated=record.times_updated + 1 if changed else record.times_updated,
        )
        _log.debug(
            "record_checked",
            key=key,
            changed=changed,
            times_checked=record.times_checked + 1,
        )

        if self._auto_save:
            self.save()
        return changed

    def check_checksum(self, key: str, content: str | bytes) -> bool:
        """Like :meth:`check`, tracking the hex digest of *content* instead of the content."""
        if content is None:
            raise InvalidArgumentError(f"content is required for key {key!r}")
        if not isinstance(content, (str, bytes, bytearray, memoryview)):
            raise InvalidArgumentError(
                f"content for key {key!r} must be str or bytes, got {type(content).__name__}"
            )
        return self.check(key, hash_content(content, self._hash_algorithm))

    def check_file(self, key: str, path: str | PathLike[str]) -> bool:
        """Like :meth:`check_checksum`, hashing the contents of the file at *path*.

        Raises:
            OSError: The file is missing or unreadable.
        """
        return self.check(key, hash_file(path, self._hash_algorithm))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_last_update(self, key: str) -> datetime | None:
        """Return when the value under *key* last changed.

        Raises:
            RecordNotFoundError: *key* has never been checked.
        """
        record = self._store.get(key)
        if record is None:
            raise RecordNotFoundError(key)
        return record.updated_at

    def get(self, key: str) -> Record | None:
        return self._store.get(key)

    def keys(self) -> KeysView[str]:
        return self._store.keys()

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"Tracker(location={self._location!r}, records={len(self._store)}, auto_save={self._auto_save})"
