"""Diff engine for comparing two manifests.

This module provides the comparison of two loaded manifests by path
(identity) and digest string (equality), producing a DiffReport of
paths found only in one side and paths whose digests differ.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hashctl.core.manifest import load_manifest

if TYPE_CHECKING:
    from pathlib import Path

    from hashctl.models.manifest import Manifest


@dataclass(frozen=True, slots=True)
class MismatchEntry:
    """A path present in both manifests with differing digest fields.

    Attributes:
        path: Path that differs.
        first: Digest field in the first manifest (hex or ERROR).
        second: Digest field in the second manifest (hex or ERROR).
    """

    path: str
    first: str
    second: str

    @property
    def mask(self) -> tuple[bool, ...]:
        """Position-aligned mask of differing characters."""
        return diff_mask(self.first, self.second)


@dataclass(frozen=True, slots=True)
class DiffReport:
    """Result of comparing two manifests.

    Attributes:
        only_in_first: Paths present only in the first manifest.
        only_in_second: Paths present only in the second manifest.
        mismatched: Paths present in both with different digests.
    """

    only_in_first: tuple[str, ...] = ()
    only_in_second: tuple[str, ...] = ()
    mismatched: tuple[MismatchEntry, ...] = ()

    @property
    def identical(self) -> bool:
        """Check if the manifests match by path and digest.

        Returns:
            True if there are no differences, False otherwise.
        """
        return not (self.only_in_first or self.only_in_second or self.mismatched)

    @property
    def total_changes(self) -> int:
        """Total number of differences found."""
        return len(self.only_in_first) + len(self.only_in_second) + len(self.mismatched)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the report.
        """
        return {
            "identical": self.identical,
            "summary": {
                "only_in_first": len(self.only_in_first),
                "only_in_second": len(self.only_in_second),
                "mismatched": len(self.mismatched),
                "total": self.total_changes,
            },
            "only_in_first": list(self.only_in_first),
            "only_in_second": list(self.only_in_second),
            "mismatched": [
                {"path": m.path, "first": m.first, "second": m.second} for m in self.mismatched
            ],
        }


def diff_mask(first: str, second: str) -> tuple[bool, ...]:
    """Mark the character positions at which two strings differ.

    Both strings are walked up to the length of the longer one; a
    position past the end of the shorter string counts as differing.
    This is a display aid and has no bearing on digest equality.

    Args:
        first: First string.
        second: Second string.

    Returns:
        Tuple of booleans, True where the strings differ.
    """
    length = max(len(first), len(second))
    return tuple(
        i >= len(first) or i >= len(second) or first[i] != second[i] for i in range(length)
    )


def compare_manifests(first: Manifest, second: Manifest) -> DiffReport:
    """Compare two manifests by path and digest.

    Paths missing from the second manifest are reported in
    ``only_in_first``, paths missing from the first in ``only_in_second``.
    Paths present in both are mismatched when their digest fields differ
    as strings; two ERROR entries are equal.

    Args:
        first: First (reference) manifest.
        second: Second manifest.

    Returns:
        DiffReport with results ordered as the paths first appeared.
    """
    only_in_first: list[str] = []
    mismatched: list[MismatchEntry] = []

    for path, digest in first.entries.items():
        other = second.get(path)
        if other is None:
            only_in_first.append(path)
        elif digest != other:
            mismatched.append(MismatchEntry(path=path, first=digest, second=other))

    only_in_second = [path for path in second.entries if path not in first]

    return DiffReport(
        only_in_first=tuple(only_in_first),
        only_in_second=tuple(only_in_second),
        mismatched=tuple(mismatched),
    )


def compare_files(first: Path, second: Path) -> DiffReport:
    """Load two manifest files and compare them.

    Args:
        first: Path to the first manifest.
        second: Path to the second manifest.

    Returns:
        DiffReport for the two manifests.

    Raises:
        ManifestNotFoundError: If either file doesn't exist.
        ManifestReadError: If either file cannot be read.
    """
    return compare_manifests(load_manifest(first), load_manifest(second))
