"""XDG-compliant path management for archive-uninstall.

Only configuration is stored on disk:
- Config: ~/.config/archive-uninstall/ (or XDG_CONFIG_HOME/archive-uninstall/)
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "archive-uninstall"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/archive-uninstall/ (or XDG_CONFIG_HOME/archive-uninstall/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/archive-uninstall/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/archive-uninstall/theme.toml.
    """
    return get_config_dir() / "theme.toml"
