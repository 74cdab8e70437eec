"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from hashctl import __version__
from hashctl.cli.commands import compare, config, scan, show

# Create main Typer app
app = typer.Typer(
    name="hashctl",
    help="Scan a filesystem into a SHA-256 manifest, compare and display manifests.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

_LOG_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"hashctl version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, log_file: Path | None) -> None:
    """Route log records to stderr, or to a file when one is given.

    Args:
        verbose: Log at DEBUG instead of WARNING.
        log_file: Optional file receiving the log instead of stderr.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    if log_file is not None:
        logging.basicConfig(filename=log_file, level=level, format=_LOG_FILE_FORMAT, force=True)
    else:
        logging.basicConfig(level=level, format=_LOG_CONSOLE_FORMAT, force=True)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose (debug) logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write log messages to this file instead of stderr.",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (default: ~/.config/hashctl/config.toml).",
        ),
    ] = None,
) -> None:
    """hashctl - Filesystem integrity scanning.

    Walk a directory tree, record a digest for every regular file, and
    compare or display the resulting manifests.
    """
    configure_logging(verbose, log_file)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path


# Register commands
app.command(name="scan")(scan.scan)
app.command(name="compare")(compare.compare)
app.command(name="show")(show.show)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
