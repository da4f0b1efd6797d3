"""Configuration models.

This module provides Pydantic models for gitprompt configuration sections
and the main Config container class.
"""

from gitprompt.config._models._common import (
    ColorName,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from gitprompt.config._models._config import Config
from gitprompt.config._models._logging import LoggingConfig
from gitprompt.config._models._render import (
    OperationLabels,
    RenderConfig,
    SegmentColors,
)
from gitprompt.config._models._status import StatusConfig

__all__ = [
    "ColorName",
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "OperationLabels",
    "RenderConfig",
    "SegmentColors",
    "StatusConfig",
]
