"""CLI commands for hashctl.

This package contains all subcommand implementations.
"""

from hashctl.cli.commands import compare, config, scan, show

__all__ = ["compare", "config", "scan", "show"]
