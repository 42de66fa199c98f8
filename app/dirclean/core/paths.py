"""XDG-compliant path management for dirclean.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and application data.

XDG defaults:
- Config: ~/.config/dirclean/
- Data: ~/.local/share/dirclean/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "dirclean"

# Name of the JSON document holding all cleaner profiles
CONFIGURATION_FILENAME = "dirclean.configuration.json"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_DATA_HOME").
        default_subdir: Default subdirectory under home (e.g., ".local/share").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/dirclean/ (or XDG_CONFIG_HOME/dirclean/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_data_dir() -> Path:
    """Get the private application data directory path.

    The data directory holds the cleaner configuration document.

    Returns:
        Path to ~/.local/share/dirclean/ (or XDG_DATA_HOME/dirclean/).
    """
    return _get_xdg_dir("XDG_DATA_HOME", ".local/share")


def get_configuration_path() -> Path:
    """Get the cleaner configuration file path.

    Returns:
        Path to ~/.local/share/dirclean/dirclean.configuration.json.
    """
    return get_data_dir() / CONFIGURATION_FILENAME


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/dirclean/theme.toml.
    """
    return get_config_dir() / "theme.toml"

