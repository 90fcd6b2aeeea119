"""structlog setup. Called once per invocation from the Lambda entry point."""

from __future__ import annotations

import logging

import structlog

LOG_LEVEL_DEBUG = "DEBUG"


def resolve_level(level: str) -> int:
    """Map the configured verbosity to a stdlib level. Only DEBUG is honoured; anything else is INFO."""
    if level.strip().upper() == LOG_LEVEL_DEBUG:
        return logging.DEBUG
    return logging.INFO


def configure_logging(level: str) -> None:
    """Route all structlog loggers to JSON lines on stdout at the configured level.

    Events carry an ISO-8601 UTC timestamp, the level and any bound context vars.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
