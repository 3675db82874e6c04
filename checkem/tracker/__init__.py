"""Change tracking for checkem.

Submodules:
    codec   -- JSON encoding of the store, ISO-8601 timestamps.
    tracker -- Tracker: change detection plus load/save of the store.
"""

from checkem.tracker.codec import decode_store, encode_store
from checkem.tracker.tracker import Tracker

__all__ = ["Tracker", "decode_store", "encode_store"]
