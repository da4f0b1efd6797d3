"""Logging utilities for gitprompt.

This module provides a standalone structlog logger factory that writes
JSON-formatted or text-formatted logs to a rotating log file. The logger is
self-contained and does not modify global structlog configuration.

A prompt is redrawn constantly, so the file handler is opened lazily: no log
file is created until the first record passes the level filter.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Final, Literal, cast

import structlog

from ._paths import get_log_file

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]

DEFAULT_MAX_BYTES: Final = 1_048_576
DEFAULT_BACKUP_COUNT: Final = 3


def _log_level_from_string(level: str, *, respect_env: bool = True) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, GITPROMPT_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("GITPROMPT_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.WARNING)


def _create_stdlib_logger(
    log_path: Path,
    *,
    log_level: int,
    max_bytes: int,
    backup_count: int,
) -> logging.Logger:
    """Create an isolated stdlib logger with a lazily opened rotating handler.

    Args:
        log_path: Path to the log file.
        log_level: Level threshold for the handler.
        max_bytes: Maximum size in bytes before rotation.
        backup_count: Number of rotated log files to keep.

    Returns:
        A stdlib logger that does not propagate to the root logger.
    """
    stdlib_logger = logging.getLogger(f"gitprompt.{log_path.stem}")
    stdlib_logger.handlers.clear()
    stdlib_logger.propagate = False
    stdlib_logger.setLevel(log_level)

    handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        delay=True,
    )
    handler.setLevel(log_level)
    # structlog renders the final line
    handler.setFormatter(logging.Formatter("%(message)s"))
    stdlib_logger.addHandler(handler)
    return stdlib_logger


def create_logger(
    *,
    level: str = "warning",
    log_format: LogFormatType = "json",
    log_file: str = "",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> FilteringBoundLogger:
    """Create a standalone structlog logger for gitprompt.

    The log level can be overridden by environment variables:
    - GITPROMPT_DEBUG: If set, enables DEBUG level logging regardless of config

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (uses the platform log directory if empty).
        max_bytes: Maximum size in bytes before rotation.
        backup_count: Number of rotated log files to keep.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    log_path = Path(log_file) if log_file else get_log_file()
    effective_level = _log_level_from_string(level)

    log_path.parent.mkdir(parents=True, exist_ok=True)
    stdlib_logger = _create_stdlib_logger(
        log_path,
        log_level=effective_level,
        max_bytes=max_bytes,
        backup_count=backup_count,
    )

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    wrapper_class = structlog.make_filtering_bound_logger(effective_level)

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            stdlib_logger,
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
        ),
    )


def create_null_logger() -> FilteringBoundLogger:
    """Create a logger that drops every record.

    Used when no logger is supplied, e.g. by library callers and tests.

    Returns:
        A FilteringBoundLogger that filters out all levels.
    """
    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.ReturnLogger(),
            processors=[],
            wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        ),
    )
