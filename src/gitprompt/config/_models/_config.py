# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing gitprompt configuration values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

import tomli_w
from pydantic import BaseModel, ConfigDict, PrivateAttr

from gitprompt.config._defaults import DEFAULT_CONFIG
from gitprompt.config._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
)
from gitprompt.config._models._common import ConfigSource, ConfigSourceName
from gitprompt.config._models._logging import LoggingConfig
from gitprompt.config._models._render import RenderConfig
from gitprompt.config._models._status import StatusConfig

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Self


class Config(BaseModel):
    """Configuration container with typed access.

    This class provides immutable, type-safe access to gitprompt
    configuration. Use factory methods to create instances rather than the
    constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _render: RenderConfig = PrivateAttr(default_factory=RenderConfig)
    _status: StatusConfig = PrivateAttr(default_factory=StatusConfig)
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
        _render: RenderConfig | None = None,
        _status: StatusConfig | None = None,
        _logging: LoggingConfig | None = None,
    ) -> None:
        """Initialize configuration container.

        This constructor is intended for internal use. Use factory methods
        like from_dict() or load() to create Config instances.

        Args:
            _data: The complete merged configuration dictionary.
            _sources: Sources that contributed to this configuration.
            _render: Parsed render configuration section.
            _status: Parsed status configuration section.
            _logging: Parsed logging configuration section.
        """
        super().__init__()
        self._data = _data if _data is not None else copy_value(DEFAULT_CONFIG)
        self._sources = _sources
        self._render = _render if _render is not None else RenderConfig()
        self._status = _status if _status is not None else StatusConfig()
        self._logging = _logging if _logging is not None else LoggingConfig()

    @classmethod
    def _build(
        cls,
        merged: dict[str, Any],
        sources: tuple[ConfigSource, ...],
        *,
        validate: bool,
        strict: bool,
    ) -> Self:
        # Deferred import to avoid circular dependency
        from gitprompt.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        if validate:
            issues = validate_config(merged, strict=strict)
            raise_if_validation_errors(issues)

        return cls(
            _data=merged,
            _sources=sources,
            _render=RenderConfig.model_validate(merged.get("render", {})),
            _status=StatusConfig.model_validate(merged.get("status", {})),
            _logging=LoggingConfig.model_validate(merged.get("logging", {})),
        )

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        validate: bool = True,
        strict: bool = False,
    ) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values.
            validate: Whether to validate the configuration.
            strict: Reject unknown keys during validation.

        Returns:
            Configuration object from the dictionary.

        Raises:
            ConfigValidationError: If validation fails (when validate=True).
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        return cls._build(merged, (), validate=validate, strict=strict)

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        include_env: bool = True,
        include_cli: bool = False,
        cli_overrides: dict[str, Any] | None = None,
        strict: bool = False,
    ) -> Self:
        """Load merged configuration from all sources.

        Discovers all configuration sources and merges them in precedence order
        (defaults -> user or explicit file -> env -> cli).

        Args:
            config_path: Explicit config file replacing the user config file.
                It must exist.
            include_env: Include environment variables as a source.
            include_cli: Include CLI overrides.
            cli_overrides: Dict of CLI argument overrides. Only used if
                include_cli is True.
            strict: Reject unknown keys during validation.

        Returns:
            Merged configuration object.

        Raises:
            FileNotFoundError: If config_path does not exist.
            ConfigLoadError: If config files cannot be loaded.
            ConfigValidationError: If merged config fails validation.
        """
        # Deferred import to avoid circular dependency
        from gitprompt.config._discovery import discover_sources  # noqa: PLC0415

        sources = discover_sources(
            config_path=config_path,
            include_env=include_env,
            include_cli=include_cli,
            cli_overrides=cli_overrides,
        )

        # Sources are discovered highest-to-lowest, so reverse for merging
        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        for source in reversed(sources):
            values: dict[str, Any] = {}

            if source.name in (ConfigSourceName.DEFAULT, ConfigSourceName.CLI):
                values = source.values
            elif source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.name == ConfigSourceName.FILE:
                # Explicit file: read even when missing so the error surfaces
                values = read_toml_file(source.path) if source.path else {}
            elif source.path and source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )

            if values:
                merged = deep_merge(merged, values)

        return cls._build(
            merged, tuple(reversed(loaded_sources)), validate=True, strict=strict
        )

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration.

        Returns:
            List of ConfigSource objects in precedence order.
        """
        return list(self._sources)

    @property
    def render(self) -> RenderConfig:
        """Return the render configuration section."""
        return self._render

    @property
    def status(self) -> StatusConfig:
        """Return the status configuration section."""
        return self._status

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._logging

    def to_dict(self, *, include_defaults: bool = True) -> dict[str, Any]:
        """Convert configuration to a dictionary.

        Args:
            include_defaults: Whether to include default values. If False,
                only values that differ from defaults are included.

        Returns:
            Dictionary representation of the configuration.
        """
        if include_defaults:
            return copy_value(self._data)
        return _diff_from_defaults(self._data, DEFAULT_CONFIG)

    def to_toml(self, *, include_defaults: bool = False) -> str:
        """Convert configuration to a TOML string.

        Args:
            include_defaults: Whether to include default values. If False,
                only values that differ from defaults are included.

        Returns:
            TOML string representation of the configuration.
        """
        return tomli_w.dumps(self.to_dict(include_defaults=include_defaults))


def _diff_from_defaults(
    data: dict[str, Any],
    defaults: dict[str, Any],
) -> dict[str, Any]:
    """Extract values that differ from defaults.

    Args:
        data: Current configuration data.
        defaults: Default configuration values.

    Returns:
        Dictionary containing only non-default values.
    """
    result: dict[str, Any] = {}

    for key, value in data.items():
        if key not in defaults:
            result[key] = copy_value(value)
        elif isinstance(value, dict) and isinstance(defaults[key], dict):
            nested_diff = _diff_from_defaults(value, defaults[key])
            if nested_diff:
                result[key] = nested_diff
        elif value != defaults[key]:
            result[key] = copy_value(value)

    return result
