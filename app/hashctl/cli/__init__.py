"""CLI package for hashctl.

This package contains the Typer application and all subcommands.
"""

from hashctl.cli.main import app

__all__ = ["app"]
