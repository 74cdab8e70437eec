"""Configuration commands.

Provides commands to inspect and initialize the hashctl configuration
file (excluded roots, digest algorithm, listing palette, default output).
"""

from typing import Annotated

import tomli_w
import typer
from rich.text import Text

from hashctl.cli.types import require_config, selected_config_path
from hashctl.core.config import ConfigError, HashctlConfig, save_config
from hashctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Inspect and initialize configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration as TOML."""
    config = require_config(ctx)
    console.print(Text(tomli_w.dumps(config.model_dump()).rstrip()))


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the configuration file path."""
    console.print(Text(str(selected_config_path(ctx))))


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write a configuration file populated with the defaults."""
    config_path = selected_config_path(ctx)

    if config_path.exists() and not force:
        print_info(f"Configuration already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        written = save_config(HashctlConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Configuration written to {written}")
