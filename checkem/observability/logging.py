"""structlog configuration driven by :class:`LogConfig`.

checkem modules log through module-level ``structlog.get_logger(component=...)``
proxies; this module only decides how those events are filtered and rendered.
"""

from __future__ import annotations

import logging
import sys

import structlog

from checkem.models.config import LogConfig


def _renderer(config: LogConfig) -> structlog.typing.Processor:
    if config.json:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=False)


def _processors(config: LogConfig) -> list[structlog.typing.Processor]:
    chain: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
    ]
    if config.json:
        # Tracebacks become structured data instead of a preformatted string.
        chain += [structlog.dev.set_exc_info, structlog.processors.dict_tracebacks]
    chain.append(_renderer(config))
    return chain


def setup_logging(config: LogConfig | None = None) -> None:
    """Route checkem's structlog events to stderr at ``config.level``.

    Loggers are not cached on first use, so module-level loggers follow any
    later call to this function.
    """
    config = config or LogConfig()
    level = logging.getLevelNamesMapping().get(config.level.upper(), logging.INFO)

    structlog.configure(
        processors=_processors(config),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
