"""Configuration source discovery.

This module determines the platform-specific user configuration file path
and assembles the list of configuration sources in precedence order.
"""

from pathlib import Path
from typing import Any

from gitprompt.utils import get_user_config_file

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/gitprompt/config.toml``
    - macOS: ``~/Library/Application Support/gitprompt/config.toml``
    - Windows: ``%APPDATA%\gitprompt\config.toml``

    The path is returned regardless of whether the file exists.

    Returns:
        Path to the user config file for the current platform.
    """
    return get_user_config_file()


def _file_exists(path: Path) -> bool:
    """Check if a file exists, handling permission errors gracefully.

    Args:
        path: Path to check.

    Returns:
        True if the file exists and is accessible, False otherwise.
    """
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    *,
    config_path: Path | None = None,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Discovers configuration sources in precedence order (highest first).
    File-based sources are checked for existence but not read.

    Args:
        config_path: Explicit config file. Replaces the user config file.
        include_env: Include environment variables as a source.
        include_cli: Include CLI overrides as a source.
        cli_overrides: Dictionary of CLI argument overrides. Only used
            if include_cli is True.

    Returns:
        List of ConfigSource objects in precedence order (highest first).
        Sources that don't exist are still included with exists=False.

    Examples:
        >>> sources = discover_sources()
        >>> [s.name.value for s in sources]
        ['env', 'user', 'default']
        >>> overrides = {"render": {"color": "zsh"}}
        >>> sources = discover_sources(include_cli=True, cli_overrides=overrides)
    """
    sources: list[ConfigSource] = []

    if include_cli:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides or {},
            )
        )

    if include_env:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.ENV,
                path=None,
                exists=True,  # Actual values parsed during loading phase
                values={},
            )
        )

    if config_path is not None:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.FILE,
                path=config_path,
                exists=_file_exists(config_path),
                values={},
            )
        )
    else:
        user_path = get_user_config_path()
        sources.append(
            ConfigSource(
                name=ConfigSourceName.USER,
                path=user_path,
                exists=_file_exists(user_path),
                values={},
            )
        )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
