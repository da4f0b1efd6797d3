"""Shared utilities for gitprompt."""

from ._logging import (
    DEFAULT_BACKUP_COUNT,
    DEFAULT_MAX_BYTES,
    LogFormatType,
    create_logger,
    create_null_logger,
)
from ._paths import get_log_dir, get_log_file, get_user_config_dir, get_user_config_file

__all__ = [
    "DEFAULT_BACKUP_COUNT",
    "DEFAULT_MAX_BYTES",
    "LogFormatType",
    "create_logger",
    "create_null_logger",
    "get_log_dir",
    "get_log_file",
    "get_user_config_dir",
    "get_user_config_file",
]
