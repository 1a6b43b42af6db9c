"""Structured logging for MinCare, built on *structlog*."""

from __future__ import annotations

import logging
import sys

import structlog

# Stdlib loggers that are too chatty at INFO.
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "uvicorn.access")


def setup_logging(level: str = "INFO", *, json_output: bool | None = None) -> None:
    """Configure structlog processors and align the stdlib root level.

    Call once at process startup.  When *json_output* is ``None`` the
    renderer is chosen from the terminal: pretty console output on a TTY,
    one JSON object per line otherwise.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if json_output is None:
        json_output = not sys.stderr.isatty()

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=numeric_level, stream=sys.stderr, format="%(message)s")
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
