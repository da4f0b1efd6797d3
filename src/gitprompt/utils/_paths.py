from pathlib import Path

import platformdirs

_APP_NAME = "gitprompt"


def get_user_config_dir() -> Path:
    """Get the platform-specific gitprompt config directory."""
    return platformdirs.user_config_path(_APP_NAME)


def get_user_config_file() -> Path:
    """Get the path to the user config file inside the config directory."""
    return get_user_config_dir() / "config.toml"


def get_log_dir() -> Path:
    """Get the platform-specific gitprompt log directory."""
    return platformdirs.user_log_path(_APP_NAME)


def get_log_file() -> Path:
    """Get the path to the default log file inside the log directory."""
    return get_log_dir() / "gitprompt.log"
