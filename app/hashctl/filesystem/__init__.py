"""Filesystem traversal and hashing module.

This module provides the exclusion matcher, the per-file digest engine
and the scanner that walks a tree and streams digest records.
"""

from hashctl.filesystem.digest import (
    DEFAULT_ALGORITHM,
    UnsupportedAlgorithmError,
    digest_file,
    resolve_algorithm,
)
from hashctl.filesystem.exclusions import DEFAULT_EXCLUDE_ROOTS, ExclusionSet, is_excluded
from hashctl.filesystem.scanner import (
    RecordSink,
    ScanError,
    ScanFailure,
    Scanner,
    ScanSummary,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_EXCLUDE_ROOTS",
    "ExclusionSet",
    "RecordSink",
    "ScanError",
    "ScanFailure",
    "ScanSummary",
    "Scanner",
    "UnsupportedAlgorithmError",
    "digest_file",
    "is_excluded",
    "resolve_algorithm",
]
