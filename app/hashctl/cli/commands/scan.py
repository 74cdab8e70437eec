"""Scan command implementation.

Walks a directory tree and writes one ``<digest><TAB><path>`` line per
regular file to a manifest.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text

from hashctl.cli.display import create_summary_table
from hashctl.cli.types import require_config
from hashctl.core.manifest import ManifestError, ManifestWriter, manifest_exists
from hashctl.core.paths import expand_path
from hashctl.filesystem.digest import UnsupportedAlgorithmError
from hashctl.filesystem.scanner import Scanner, ScanError, ScanSummary
from hashctl.models.record import DigestRecord
from hashctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def scan(
    ctx: typer.Context,
    root: Annotated[
        Path,
        typer.Argument(help="Directory to scan."),
    ] = Path("/"),
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Manifest file to write (default from config: /var/tmp/all_hashes.txt).",
        ),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-x",
            help="Additional root to skip (repeatable).",
        ),
    ] = None,
    no_default_excludes: Annotated[
        bool,
        typer.Option(
            "--no-default-excludes",
            help="Do not skip the configured pseudo-filesystems (/proc, /sys, ...).",
        ),
    ] = False,
    algorithm: Annotated[
        str | None,
        typer.Option(
            "--algorithm",
            "-a",
            help="256-bit hashlib algorithm (default from config: sha256).",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Overwrite an existing manifest without asking."),
    ] = False,
) -> None:
    """Scan a directory tree and write a digest manifest.

    Each line of the manifest is <digest><TAB><path>. Files that cannot
    be read are recorded as ERROR<TAB><path> and the scan continues.
    Symlinks are never followed.

    Examples:
        hashctl scan                               # Whole filesystem
        hashctl scan /etc -o ~/etc-hashes.txt      # One tree
        hashctl scan / -x /home -x /var/cache      # Extra exclusions
    """
    config = require_config(ctx)
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    root_path = expand_path(root)
    out_path = expand_path(output or config.default_output)

    exclude_roots = [] if no_default_excludes else list(config.exclude_roots)
    exclude_roots.extend(str(expand_path(p)) for p in exclude or [])

    if root_path.is_symlink():
        print_error(f"Scan root is a symlink and will not be followed: {root_path}")
        raise typer.Exit(code=1)

    if not root_path.is_dir():
        print_error(f"Scan root is not a directory: {root_path}")
        raise typer.Exit(code=1)

    if out_path.is_dir():
        print_error(f"Output path is a directory: {out_path}")
        raise typer.Exit(code=1)

    overwrite = yes
    if manifest_exists(out_path) and not yes:
        overwrite = typer.confirm(
            f"Output file {out_path} already exists. Overwrite?",
            default=False,
        )
        if not overwrite:
            print_info("Aborted.")
            raise typer.Exit(code=1)

    with Progress(
        SpinnerColumn(),
        TextColumn("[info]{task.completed:.0f} files[/info]"),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
        disable=quiet,
    ) as progress:
        task = progress.add_task("Scanning...", total=None)

        def _on_record(record: DigestRecord) -> None:
            progress.update(task, advance=1, description=escape(record.path))

        try:
            scanner = Scanner(
                exclude_roots=exclude_roots,
                algorithm=algorithm or config.algorithm,
                on_record=_on_record,
            )
        except UnsupportedAlgorithmError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

        if not quiet:
            skipped = ", ".join(scanner.exclusions.roots) or "nothing"
            message = (
                f"Scanning {root_path} (skipping {skipped}) and writing "
                f"{scanner.algorithm} digests to: {out_path}"
            )
            console.print(Text(message))
            console.print("[muted]Each line: <digest><TAB><path>[/muted]")

        try:
            with ManifestWriter.open(out_path, overwrite=overwrite) as sink:
                summary = scanner.scan(root_path, sink)
        except ManifestError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        except ScanError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        except KeyboardInterrupt:
            progress.stop()
            print_warning(f"Scan interrupted. Partial manifest kept at {out_path}")
            raise typer.Exit(code=130) from None

    _report(summary, out_path, quiet)


def _report(summary: ScanSummary, out_path: Path, quiet: bool) -> None:
    """Print the outcome of a completed scan."""
    if not quiet:
        console.print(create_summary_table(summary, str(out_path)))
    for failure in summary.failures:
        print_warning(f"Unreadable ({failure.describe()}): {escape(failure.path)}")
    if summary.errors:
        print_warning(f"{summary.errors} file(s) could not be read and were recorded as ERROR.")
    print_success(f"Scan complete. Output: {out_path}")
