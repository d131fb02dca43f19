"""XDG-compliant path management for dirlist.

This module provides the standardized location of the optional settings
file, following the XDG Base Directory Specification.

XDG defaults:
- Config: ~/.config/dirlist/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "dirlist"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

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
        Path to ~/.config/dirlist/ (or XDG_CONFIG_HOME/dirlist/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the default settings file path.

    Returns:
        Path to ~/.config/dirlist/config.toml.
    """
    return get_config_dir() / "config.toml"

