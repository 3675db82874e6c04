"""Entry point that wires configuration, logging and a Tracker together.

Order: config (``CHECKEM_*`` env vars unless one is passed) → logging →
tracker.  Embedding applications that manage structlog themselves can build a
:class:`Tracker` directly instead.
"""

from __future__ import annotations

import structlog

from checkem.config import load_config
from checkem.models.config import CheckemConfig
from checkem.observability.logging import setup_logging
from checkem.tracker import Tracker

_log = structlog.get_logger(component="app")


def open_tracker(config: CheckemConfig | None = None, **overrides: object) -> Tracker:
    """Configure logging from *config* and return a ready Tracker.

    Keyword *overrides* are passed to :meth:`Tracker.from_config` and take
    precedence over ``config.tracker``.

    Raises:
        ValueError:        An environment variable holds an invalid value.
        StorageReadError:  The configured store exists but cannot be read.
        StorageWriteError: ``create_if_missing`` is set and the store cannot
                           be created.
    """
    config = config or load_config()
    setup_logging(config.log)

    tracker = Tracker.from_config(config.tracker, **overrides)
    _log.info(
        "tracker_opened",
        location=tracker.location,
        auto_save=tracker.auto_save,
        records=len(tracker),
    )
    return tracker
