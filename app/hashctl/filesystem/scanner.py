"""Filesystem scanner producing per-file digest records.

Walks a directory tree from a root without following symlinks, prunes
excluded subtrees before enumerating them, digests every regular file
and streams the resulting records to a sink as they are produced.
"""

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from hashctl.filesystem.digest import DEFAULT_ALGORITHM, digest_file, resolve_algorithm
from hashctl.filesystem.exclusions import DEFAULT_EXCLUDE_ROOTS, ExclusionSet
from hashctl.models.record import DigestFailure, DigestRecord

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Raised when a scan cannot start (e.g. the root is not a directory)."""


@dataclass(frozen=True, slots=True)
class ScanFailure:
    """A file recorded as ERROR, with the reason it could not be read."""

    path: str
    failure: DigestFailure
    detail: str | None = None

    def describe(self) -> str:
        """Format the reason, including the OS message when it adds anything."""
        if self.detail and self.detail.lower() != self.failure.label:
            return f"{self.failure.label} ({self.detail})"
        return self.failure.label


class RecordSink(Protocol):
    """Destination for records produced by a scan."""

    path: Path

    def write(self, record: DigestRecord) -> None: ...


@dataclass(slots=True)
class ScanSummary:
    """Counters collected during one scan.

    Attributes:
        root: Absolute root the scan started from.
        records: Records written to the sink.
        errors: Records written with the error sentinel.
        pruned: Excluded subtrees (or files) that were skipped.
        unreadable_dirs: Directories that could not be listed.
        skipped: Entries ignored (symlinks, special files, unencodable paths).
        failures: Files recorded as ERROR, in scan order.
    """

    root: str
    records: int = 0
    errors: int = 0
    pruned: int = 0
    unreadable_dirs: int = 0
    skipped: int = 0
    failures: list[ScanFailure] = field(default_factory=list)

    @property
    def digested(self) -> int:
        """Number of files digested successfully."""
        return self.records - self.errors


class Scanner:
    """Walks a tree and digests every regular file.

    Args:
        exclude_roots: Roots whose subtrees are never traversed. Defaults
            to the pseudo-filesystem mount points.
        algorithm: hashlib algorithm producing 256-bit digests.
        on_record: Optional callback invoked after each record is produced.
    """

    def __init__(
        self,
        *,
        exclude_roots: Iterable[str] = DEFAULT_EXCLUDE_ROOTS,
        algorithm: str = DEFAULT_ALGORITHM,
        on_record: Callable[[DigestRecord], None] | None = None,
    ) -> None:
        self._exclusions = ExclusionSet.from_paths(exclude_roots)
        self._algorithm = resolve_algorithm(algorithm)
        self._on_record = on_record
        self._summary = ScanSummary(root="")
        self._ignored: frozenset[str] = frozenset()

    @property
    def exclusions(self) -> ExclusionSet:
        return self._exclusions

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def scan(self, root: str | Path, sink: RecordSink) -> ScanSummary:
        """Scan a tree and append one record per regular file to the sink.

        Each record is handed to the sink as soon as it is computed. The
        sink's own destination file is never digested.

        Args:
            root: Directory to start from.
            sink: Open destination (usually a ManifestWriter).

        Returns:
            ScanSummary for the completed scan.

        Raises:
            ScanError: If the root is missing, a symlink or not a directory.
        """
        self._ignored = frozenset({os.path.abspath(sink.path)})
        try:
            for record in self.walk(root):
                sink.write(record)
        finally:
            self._ignored = frozenset()
        return self._summary

    def walk(self, root: str | Path) -> Iterator[DigestRecord]:
        """Yield digest records for every regular file under root.

        Traversal order is depth-first but carries no meaning. Symlinks
        are never followed. Failures on individual files become error
        records; failures on individual directories are logged and skipped.

        Args:
            root: Directory to start from.

        Yields:
            DigestRecord per regular file not under an excluded root.

        Raises:
            ScanError: If the root is missing, a symlink or not a directory.
        """
        root_path = os.path.abspath(os.path.expanduser(os.fspath(root)))
        if os.path.islink(root_path):
            raise ScanError(f"Scan root is a symlink and will not be followed: {root_path}")
        if not os.path.isdir(root_path):
            raise ScanError(f"Scan root is not a directory: {root_path}")

        self._summary = ScanSummary(root=root_path)

        if self._exclusions.matches(root_path):
            logger.warning("Scan root %s is excluded; nothing to scan", root_path)
            self._summary.pruned += 1
            return

        pending = [root_path]
        while pending:
            directory = pending.pop()
            yield from self._scan_directory(directory, pending)

    def _scan_directory(self, directory: str, pending: list[str]) -> Iterator[DigestRecord]:
        """Digest the files of one directory and queue its subdirectories.

        Args:
            directory: Directory to list.
            pending: Stack of directories still to visit.

        Yields:
            DigestRecord for each regular file in the directory.
        """
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", directory, e.strerror or e)
            self._summary.unreadable_dirs += 1
            return

        subdirs: list[str] = []
        for entry in entries:
            path = entry.path

            if self._exclusions.matches(path):
                logger.debug("Pruning excluded path: %s", path)
                self._summary.pruned += 1
                continue

            try:
                if entry.is_symlink():
                    logger.debug("Skipping symlink: %s", path)
                    self._summary.skipped += 1
                    continue
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(path)
                    continue
                is_file = entry.is_file(follow_symlinks=False)
            except OSError as e:
                # Entry vanished or became unreadable after listing.
                logger.info("Cannot stat %s: %s", path, e.strerror or e)
                is_file = True

            if not is_file:
                logger.debug("Skipping special file: %s", path)
                self._summary.skipped += 1
                continue

            if path in self._ignored:
                logger.debug("Skipping scan destination: %s", path)
                continue

            if "\n" in path:
                logger.warning("Skipping path containing a newline: %r", path)
                self._summary.skipped += 1
                continue

            result = digest_file(path, self._algorithm)
            record = DigestRecord.from_result(path, result)
            self._summary.records += 1
            if result.failure is not None:
                self._summary.errors += 1
                self._summary.failures.append(ScanFailure(path, result.failure, result.detail))
            if self._on_record is not None:
                self._on_record(record)
            yield record

        # Reverse so subdirectories are visited in listing order.
        pending.extend(reversed(subdirs))
