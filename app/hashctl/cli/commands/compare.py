"""Compare command implementation.

Compares two manifests by path and digest and shows the differences.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from hashctl.cli.display import print_diff_report, print_diff_summary
from hashctl.core.diff import compare_manifests
from hashctl.core.manifest import require_manifest
from hashctl.core.paths import expand_path
from hashctl.utils.formatting import console, print_warning


def compare(
    first: Annotated[
        Path,
        typer.Argument(help="First (reference) manifest."),
    ],
    second: Annotated[
        Path,
        typer.Argument(help="Second manifest."),
    ],
    brief: Annotated[
        bool,
        typer.Option(
            "--brief",
            "-b",
            help="Show summary counts only.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON for scripting.",
        ),
    ] = False,
    exit_code: Annotated[
        bool,
        typer.Option(
            "--exit-code",
            help="Exit with status 1 when differences are found.",
        ),
    ] = False,
) -> None:
    """Compare two manifests by path and digest.

    Difference types:
      ONLY_IN_FIRST: path is listed only in the first manifest
      ONLY_IN_SECOND: path is listed only in the second manifest
      MISMATCH: digests differ; differing characters are highlighted

    Two ERROR entries for the same path are not a mismatch.

    Examples:
        hashctl compare before.txt after.txt
        hashctl compare before.txt after.txt --brief
        hashctl compare before.txt after.txt --json
    """
    first_manifest = require_manifest(expand_path(first))
    second_manifest = require_manifest(expand_path(second))

    report = compare_manifests(first_manifest, second_manifest)

    if json_output:
        console.print_json(json.dumps(report.to_dict()))
    else:
        for manifest in (first_manifest, second_manifest):
            if manifest.malformed:
                print_warning(
                    f"Skipped {len(manifest.malformed)} malformed line(s) in {manifest.source}"
                )

        if brief:
            if not report.identical:
                console.print(f"[removed]Only in first:[/removed] {len(report.only_in_first)}")
                console.print(f"[added]Only in second:[/added] {len(report.only_in_second)}")
                console.print(f"[changed]Mismatched:[/changed] {len(report.mismatched)}")
        else:
            print_diff_report(report)
        print_diff_summary(report)

    if exit_code and not report.identical:
        raise typer.Exit(code=1)
