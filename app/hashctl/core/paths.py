"""XDG-compliant path management for hashctl.

This module provides standardized paths following the XDG Base Directory
Specification for configuration files.

XDG defaults:
- Config: ~/.config/hashctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "hashctl"

# Where a scan writes its manifest when no output is given
DEFAULT_OUTPUT_PATH = "/var/tmp/all_hashes.txt"


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
        Path to ~/.config/hashctl/ (or XDG_CONFIG_HOME/hashctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the main configuration file path.

    Returns:
        Path to ~/.config/hashctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/hashctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def expand_path(value: str | Path) -> Path:
    """Expand a leading ``~`` and make a path absolute without resolving symlinks.

    Args:
        value: User-supplied path.

    Returns:
        Absolute Path.
    """
    return Path(os.path.abspath(os.path.expanduser(os.fspath(value))))
