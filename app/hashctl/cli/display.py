"""Shared Rich display functions for scans, comparisons and listings.

Provides the renderers used by CLI commands: the diff report with a
character-level highlight on mismatched digests, the colorized manifest
listing, and the scan summary.
"""

from collections.abc import Iterable, Sequence

from rich.table import Table
from rich.text import Text

from hashctl.core.diff import DiffReport, MismatchEntry
from hashctl.filesystem.scanner import ScanSummary
from hashctl.models.manifest import MalformedLine
from hashctl.models.record import ERROR_SENTINEL, DigestRecord
from hashctl.utils.formatting import console, print_success, print_warning


def highlight_mismatch(entry: MismatchEntry) -> tuple[Text, Text]:
    """Render both digests of a mismatch with differing characters highlighted.

    A position past the end of the shorter digest is shown as a
    highlighted space so both lines stay aligned.

    Args:
        entry: Mismatch to render.

    Returns:
        Tuple of (first, second) Rich Text objects.
    """
    first = Text()
    second = Text()
    for i, differs in enumerate(entry.mask):
        a = entry.first[i] if i < len(entry.first) else " "
        b = entry.second[i] if i < len(entry.second) else " "
        style = "highlight" if differs else "digest"
        first.append(a, style=style)
        second.append(b, style=style)
    return first, second


def print_diff_report(report: DiffReport) -> None:
    """Print a full comparison report.

    Args:
        report: The DiffReport to print.
    """
    for path in report.only_in_first:
        console.print(Text.assemble(("ONLY_IN_FIRST", "removed"), "\t", path), soft_wrap=True)

    for path in report.only_in_second:
        console.print(Text.assemble(("ONLY_IN_SECOND", "added"), "\t", path), soft_wrap=True)

    for entry in report.mismatched:
        first, second = highlight_mismatch(entry)
        header = Text.assemble(("MISMATCH", "changed"), " for file: ", entry.path)
        console.print(header, soft_wrap=True)
        console.print(Text.assemble("First : ", first), soft_wrap=True)
        console.print(Text.assemble("Second: ", second), soft_wrap=True)
        console.print()


def print_diff_summary(report: DiffReport) -> None:
    """Print summary line for a comparison.

    Args:
        report: The DiffReport to summarize.
    """
    if report.identical:
        print_success("Files match (by path and hash).")
        return

    parts: list[str] = []
    if report.only_in_first:
        parts.append(f"[removed]{len(report.only_in_first)} only in first[/removed]")
    if report.only_in_second:
        parts.append(f"[added]{len(report.only_in_second)} only in second[/added]")
    if report.mismatched:
        parts.append(f"[changed]{len(report.mismatched)} mismatched[/changed]")

    summary = ", ".join(parts)
    console.print(f"[warning]Differences found:[/warning] {summary} ({report.total_changes} total)")


def print_manifest_listing(
    lines: Iterable[DigestRecord | MalformedLine],
    palette: Sequence[str],
    limit: int | None = None,
) -> int:
    """Print manifest records with the digest colored from a cycling palette.

    Unreadable entries show the ERROR sentinel in the sentinel style.
    Malformed lines are reported as warnings and do not consume a color.

    Args:
        lines: Decoded manifest lines in file order.
        palette: Colors to cycle through, one per record.
        limit: Maximum number of records to print. A footer notes the
            truncation when further records were left out.

    Returns:
        Number of records printed.
    """
    shown = 0
    for decoded in lines:
        if isinstance(decoded, MalformedLine):
            print_warning(f"Skipping malformed {decoded.describe()}")
            continue
        if limit is not None and shown >= limit:
            console.print(f"\n[dim](showing first {shown} records)[/dim]")
            break

        if decoded.is_error:
            digest = Text(ERROR_SENTINEL, style="sentinel")
        else:
            digest = Text(decoded.digest_field, style=palette[shown % len(palette)])
        console.print(Text.assemble(digest, "\t", (decoded.path, "path")), soft_wrap=True)
        shown += 1

    return shown


def create_summary_table(summary: ScanSummary, output: str) -> Table:
    """Create a Rich table summarizing a completed scan.

    Args:
        summary: Counters collected by the scanner.
        output: Manifest destination.

    Returns:
        Rich Table with one row per counter.
    """
    table = Table(
        title="Scan Summary",
        show_header=False,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Metric", style="muted")
    table.add_column("Value", justify="right")

    table.add_row("Root", Text(summary.root))
    table.add_row("Manifest", Text(output))
    table.add_row("Records", f"[info]{summary.records}[/info]")
    table.add_row("Digested", f"[success]{summary.digested}[/success]")
    table.add_row("Unreadable (ERROR)", _count(summary.errors, "warning"))
    table.add_row("Unlistable directories", _count(summary.unreadable_dirs, "warning"))
    table.add_row("Excluded paths pruned", str(summary.pruned))
    table.add_row("Skipped (links, special)", str(summary.skipped))
    return table


def _count(value: int, style: str) -> str:
    """Style a counter only when it is non-zero."""
    return f"[{style}]{value}[/{style}]" if value else "0"
