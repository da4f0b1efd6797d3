"""Logging configuration model.

This module provides the LoggingConfig Pydantic model for logging settings.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from gitprompt.config._models._common import LogFormat, LogLevel
from gitprompt.utils import DEFAULT_BACKUP_COUNT, DEFAULT_MAX_BYTES


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty uses the platform log directory).
        max_bytes: Size in bytes at which the log file rotates.
        backup_count: Number of rotated files kept.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.JSON
    file: str = ""
    max_bytes: int = Field(default=DEFAULT_MAX_BYTES, ge=1)
    backup_count: int = Field(default=DEFAULT_BACKUP_COUNT, ge=0)
