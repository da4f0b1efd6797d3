from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from gitprompt.exceptions import ConfigError, ConfigLoadError

from ._models import Config

if TYPE_CHECKING:
    from pathlib import Path

STRICT_CONFIG_ENV = "GITPROMPT_STRICT_CONFIG"


def is_strict_mode() -> bool:
    """Check whether configuration errors should be fatal."""
    return os.environ.get(STRICT_CONFIG_ENV, "0") == "1"


def safe_load_config(
    *,
    config_path: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Handles errors based on the GITPROMPT_STRICT_CONFIG environment variable:
    - If unset or "0": warn to stderr and return the default config
    - If "1": re-raise, and reject unknown keys during validation

    When config_path is provided, the file must exist (explicit user request)
    regardless of the mode.

    Args:
        config_path: Explicit path to config file (--config flag).
        cli_overrides: CLI argument overrides to pass to Config.load().

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
        On failure (non-strict mode), returns default Config with error message.

    Raises:
        ConfigLoadError: If config_path does not exist, or in strict mode
            when a config file cannot be parsed.
        ConfigValidationError: In strict mode, when validation fails.
    """
    strict_mode = is_strict_mode()

    if config_path is not None and not config_path.is_file():
        msg = f"Config file not found: {config_path}"
        raise ConfigLoadError(msg, path=config_path)

    try:
        config = Config.load(
            config_path=config_path,
            include_env=True,
            include_cli=cli_overrides is not None,
            cli_overrides=cli_overrides,
            strict=strict_mode,
        )
    except ConfigError as e:
        if strict_mode:
            raise
        error_msg = str(e)
    except OSError as e:
        if strict_mode:
            msg = f"Failed to load config: {e}"
            raise ConfigLoadError(msg, path=config_path) from e
        error_msg = f"Failed to load config: {e}"
    else:
        return config, None

    print(f"Warning: {error_msg}", file=sys.stderr)  # noqa: T201
    return Config.from_dict({}, validate=False), error_msg
