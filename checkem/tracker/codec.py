"""JSON encoding of the tracker store.

The on-disk layout is one JSON object keyed by tracked identifier::

    {
      "homepage": {
        "value": "9f86d081...",
        "updatedAt": "2024-01-15T10:30:00.123456+00:00",
        "lastChecked": "2024-01-15T11:00:00.000001+00:00",
        "timesChecked": 3,
        "timesUpdated": 1
      }
    }

Timestamps are ISO-8601 with microseconds and UTC offset, or null.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from checkem.models.records import Record, Store, is_scalar


def _encode_timestamp(ts: datetime | None) -> str | None:
    return ts.isoformat() if ts is not None else None


def _decode_timestamp(raw: object, field_name: str, key: str) -> datetime | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ValueError(f"{key}: {field_name} must be an ISO-8601 string or null, got {type(raw).__name__}")
    try:
        ts = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ValueError(f"{key}: invalid {field_name} timestamp {raw!r}") from exc
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def _decode_counter(raw: object, field_name: str, key: str) -> int:
    if raw is None:
        return 0
    # bool is an int subclass; a stored true/false is not a counter.
    if type(raw) is not int or raw < 0:
        raise ValueError(f"{key}: {field_name} must be a non-negative integer, got {raw!r}")
    return raw


def record_to_dict(record: Record) -> dict[str, Any]:
    """Serialise *record* to a JSON-ready dict using the stored field names."""
    if not record.has_value:
        raise ValueError("Cannot serialise a record that has no value")
    return {
        "value": record.value,
        "updatedAt": _encode_timestamp(record.updated_at),
        "lastChecked": _encode_timestamp(record.last_checked),
        "timesChecked": record.times_checked,
        "timesUpdated": record.times_updated,
    }


def record_from_dict(key: str, data: object) -> Record:
    """Rebuild a Record from its stored dict, validating every field."""
    if not isinstance(data, dict):
        raise ValueError(f"{key}: record must be an object, got {type(data).__name__}")
    if "value" not in data:
        raise ValueError(f"{key}: record has no value")
    value = data["value"]
    if not is_scalar(value):
        raise ValueError(f"{key}: value must be a string, number or boolean, got {type(value).__name__}")

    times_checked = _decode_counter(data.get("timesChecked"), "timesChecked", key)
    times_updated = _decode_counter(data.get("timesUpdated"), "timesUpdated", key)
    if times_updated > times_checked:
        raise ValueError(f"{key}: timesUpdated ({times_updated}) exceeds timesChecked ({times_checked})")

    return Record(
        value=value,
        updated_at=_decode_timestamp(data.get("updatedAt"), "updatedAt", key),
        last_checked=_decode_timestamp(data.get("lastChecked"), "lastChecked", key),
        times_checked=times_checked,
        times_updated=times_updated,
    )


def encode_store(store: Store) -> str:
    """Serialise the whole store to pretty-printed JSON text."""
    payload = {key: record_to_dict(record) for key, record in store.items()}
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def decode_store(text: str) -> Store:
    """Parse JSON text produced by :func:`encode_store`.

    Raises:
        ValueError: The text is not valid JSON or any record is malformed.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise ValueError("invalid JSON: nesting too deep") from exc

    if not isinstance(payload, dict):
        raise ValueError(f"store must be a JSON object, got {type(payload).__name__}")

    store: Store = {}
    for key, data in payload.items():
        if not key:
            raise ValueError("store contains an empty key")
        store[key] = record_from_dict(key, data)
    return store
