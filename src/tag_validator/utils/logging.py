"""Structured logging setup with structlog."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, TextIO

import structlog

from tag_validator.config.settings import LoggingSettings, get_settings

# File opened by the last configure_logging() call, closed on reconfigure
_log_file: Optional[TextIO] = None


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog from LoggingSettings.

    Events below ``level`` are dropped. ``format`` selects JSON lines or the
    console renderer. When ``file`` is set, output is appended to that file
    instead of stderr.
    """
    global _log_file
    settings = settings or get_settings().logging

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    if _log_file is not None:
        _log_file.close()
        _log_file = None

    if settings.file:
        path = Path(settings.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _log_file = path.open("a", encoding="utf-8")
        logger_factory: Any = structlog.WriteLoggerFactory(file=_log_file)
    else:
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(settings.level)),
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )
