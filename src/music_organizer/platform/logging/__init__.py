"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export the configured logger, setup helpers, events and the Rich handler.
Why: Provide a single canonical import path for every layer.
"""

from __future__ import annotations

from .config import DEFAULT_LOG_FILE, LOGGER_NAME, level_for_verbosity, logger, setup_logger
from .events import ProcessingEvent
from .handlers import EventRichHandler

__all__ = [
    "DEFAULT_LOG_FILE",
    "EventRichHandler",
    "LOGGER_NAME",
    "ProcessingEvent",
    "level_for_verbosity",
    "logger",
    "setup_logger",
]
