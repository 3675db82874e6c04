"""Observability helpers for checkem."""

from checkem.observability.logging import setup_logging

__all__ = ["setup_logging"]
