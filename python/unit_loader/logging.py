"""Structured logging for unit-loader.

This module provides structured logging functions that attach key/value
fields to each record, so registration and resolution activity can be
filtered by identifier, strategy, or path.

Records go to the ``unit_loader`` logger of the standard logging module,
with an extra TRACE level below DEBUG for per-strategy resolution misses.

Example:
    >>> from unit_loader import log_info, log_debug
    >>>
    >>> log_info("Loader setup complete", {"strategies": "6"})
    >>> log_debug("Resolved unit", {"identifier": "JFoo", "strategy": "prefix"})
"""

from __future__ import annotations

import logging as _logging
from typing import Any

from .types import LogContext

TRACE = 5
_logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "unit_loader"

_LEVELS = {
    "trace": TRACE,
    "debug": _logging.DEBUG,
    "info": _logging.INFO,
    "warn": _logging.WARNING,
    "error": _logging.ERROR,
}

_logger = _logging.getLogger(LOGGER_NAME)


def log_error(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an ERROR level message with structured fields.

    Use this for failures that abort an operation.

    Args:
        message: The log message.
        fields: Optional structured fields for context. Can be a dict
                or a LogContext instance.
    """
    _emit(_logging.ERROR, message, fields)


def log_warn(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a WARN level message with structured fields.

    Use this for configuration mistakes surfaced to the caller.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(_logging.WARNING, message, fields)


def log_info(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an INFO level message with structured fields.

    Use this for lifecycle events such as setup and bootstrap.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(_logging.INFO, message, fields)


def log_debug(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a DEBUG level message with structured fields.

    Use this for registrations and successful resolutions.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(_logging.DEBUG, message, fields)


def log_trace(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a TRACE level message with structured fields.

    Use this for very verbose logging, like each strategy miss.
    This level is typically disabled.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(TRACE, message, fields)


def set_log_level(level: str) -> None:
    """Set the level of the unit_loader logger from a config string.

    Args:
        level: One of trace, debug, info, warn, error.

    Raises:
        ValueError: If the level name is unknown.
    """
    try:
        _logger.setLevel(_LEVELS[level.lower()])
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None


def _emit(
    level: int,
    message: str,
    fields: dict[str, Any] | LogContext | None,
) -> None:
    if not _logger.isEnabledFor(level):
        return
    fields_dict = _normalize_fields(fields)
    _logger.log(level, message, extra={"fields": fields_dict or {}})


def _normalize_fields(
    fields: dict[str, Any] | LogContext | None,
) -> dict[str, str] | None:
    """Normalize fields to a dict of strings.

    Args:
        fields: Input fields as dict, LogContext, or None.

    Returns:
        Dict with string values, or None if no fields.
    """
    if fields is None:
        return None

    if isinstance(fields, LogContext):
        # Convert LogContext to dict, excluding None values
        return {k: str(v) for k, v in fields.model_dump().items() if v is not None}

    return {k: str(v) for k, v in fields.items()}


__all__ = [
    "TRACE",
    "LOGGER_NAME",
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
    "set_log_level",
]
