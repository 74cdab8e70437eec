"""Shared helpers for CLI commands.

This module provides helper functions used across multiple CLI command
modules to avoid code duplication.
"""

from pathlib import Path

import typer

from hashctl.core.config import ConfigError, HashctlConfig, load_config
from hashctl.core.paths import get_config_path
from hashctl.utils.formatting import print_error


def selected_config_path(ctx: typer.Context) -> Path:
    """Return the configuration file chosen by ``--config`` or the default."""
    config_path: Path | None = None
    if isinstance(ctx.obj, dict):
        config_path = ctx.obj.get("config_path")
    return config_path or get_config_path()


def require_config(ctx: typer.Context) -> HashctlConfig:
    """Load the configuration selected by the global options or exit.

    Args:
        ctx: Typer context carrying the global ``config_path`` option.

    Returns:
        Validated HashctlConfig.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    try:
        return load_config(selected_config_path(ctx))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
