"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
The CLI sets the level once; modules grab loggers at import time.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL, SUPPORTED_LOG_LEVELS
from core.errors import GeoConfigError


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Install the structured processor chain behind a level filter.

    Args:
        level: Case-insensitive level name, e.g. ``info`` or ``debug``.

    Raises:
        GeoConfigError: If the level name is not supported.
    """
    level_number = resolve_log_level(level)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_number),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A lazily bound structlog logger.
    """
    return structlog.get_logger(name)


def resolve_log_level(level: str) -> int:
    """Map a level name onto its stdlib logging number.

    Args:
        level: Case-insensitive level name.

    Returns:
        Numeric logging level.

    Raises:
        GeoConfigError: If the level name is not supported.
    """
    normalized_level = level.strip().lower()
    if normalized_level not in SUPPORTED_LOG_LEVELS:
        raise GeoConfigError(
            f"Unsupported log level '{level}'. "
            f"Use one of: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return logging.getLevelName(normalized_level.upper())
