"""Loaded manifest model.

A manifest file is an ordered list of records as written by a scan, but
it is consumed as a mapping from path to digest field. Duplicate paths
are resolved by last-write-wins.
"""

from dataclasses import dataclass, field
from pathlib import Path

from hashctl.models.record import ERROR_SENTINEL


@dataclass(frozen=True, slots=True)
class MalformedLine:
    """A manifest line that could not be decoded.

    Attributes:
        text: The offending line, stripped of line terminators.
        reason: Why the line was rejected.
        line_number: 1-based line number in the source, if known.
    """

    text: str
    reason: str
    line_number: int | None = None

    def describe(self) -> str:
        """Format a diagnostic for this line."""
        where = f"line {self.line_number}: " if self.line_number is not None else ""
        return f"{where}{self.reason}: {self.text!r}"


@dataclass(slots=True)
class Manifest:
    """Path to digest-field mapping loaded from a manifest file.

    Attributes:
        entries: Path to digest field (hex digest or ERROR), in first-seen order.
        duplicates: Paths that appeared more than once (later entries won).
        malformed: Lines skipped during loading.
        source: File the manifest was loaded from, if any.
    """

    entries: dict[str, str] = field(default_factory=dict)
    duplicates: list[str] = field(default_factory=list)
    malformed: list[MalformedLine] = field(default_factory=list)
    source: Path | None = None

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    def get(self, path: str) -> str | None:
        """Get the digest field for a path, or None if absent."""
        return self.entries.get(path)

    def add(self, path: str, digest_field: str) -> None:
        """Insert an entry, letting a later duplicate supersede the earlier one."""
        if path in self.entries:
            self.duplicates.append(path)
        self.entries[path] = digest_field

    @property
    def error_count(self) -> int:
        """Number of entries recorded as unreadable."""
        return sum(1 for value in self.entries.values() if value == ERROR_SENTINEL)
