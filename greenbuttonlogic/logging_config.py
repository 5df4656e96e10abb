"""Structured logging configuration.

Logs go to stderr so CSV written to stdout stays clean. Until
configure_logging is called explicitly, only warnings and errors are shown.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

DEFAULT_LEVEL = "WARNING"


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # resolve sys.stderr per logger so redirected streams are honoured
    return structlog.PrintLogger(sys.stderr)


def configure_logging(level: str = DEFAULT_LEVEL, *, json: bool = False) -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum level name, e.g. "INFO" or "DEBUG".
        json: Render events as JSON lines instead of console text.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Applies the quiet stderr defaults the first time, unless the caller
    already configured structlog.

    Args:
        name: Logger name, usually __name__.
    """
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)
