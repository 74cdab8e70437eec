"""Show command implementation.

Displays a manifest with each digest colored from a cycling palette.
"""

from pathlib import Path
from typing import Annotated

import typer

from hashctl.cli.display import print_manifest_listing
from hashctl.cli.types import require_config
from hashctl.core.manifest import ManifestError, ManifestNotFoundError, read_manifest_lines
from hashctl.core.paths import expand_path
from hashctl.utils.formatting import print_error, print_info


def show(
    ctx: typer.Context,
    manifest: Annotated[
        Path,
        typer.Argument(help="Manifest file to display."),
    ],
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            min=1,
            help="Limit number of records to display.",
        ),
    ] = None,
) -> None:
    """Display a manifest, coloring each digest with cycling colors."""
    config = require_config(ctx)
    path = expand_path(manifest)

    try:
        shown = print_manifest_listing(read_manifest_lines(path), config.palette, limit)
    except ManifestNotFoundError as e:
        print_error(f"Manifest not found: {path}")
        raise typer.Exit(code=1) from e
    except ManifestError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if shown == 0:
        print_info("Manifest contains no records.")
