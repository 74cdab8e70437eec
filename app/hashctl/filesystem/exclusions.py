"""Excluded filesystem roots that are never traversed.

This module defines the default pseudo-filesystem mount points skipped
by a scan and the lexical prefix matcher that decides whether a path
lies under one of the configured roots.
"""

import os
from collections.abc import Iterable
from dataclasses import dataclass

# Virtual filesystems that hang or never terminate when walked.
# Patterns are plain absolute paths; matching is prefix-based.
DEFAULT_EXCLUDE_ROOTS: tuple[str, ...] = (
    "/proc",
    "/sys",
    "/dev",
    "/run",
)


def _normalize_root(root: str) -> str:
    """Strip trailing separators, keeping the filesystem root intact."""
    stripped = root.rstrip(os.sep)
    return stripped or os.sep


def is_excluded(path: str, exclude_roots: Iterable[str]) -> bool:
    """Check if a path equals or is nested under an excluded root.

    Matching is purely lexical: ``..`` components and symlinks are not
    resolved. A sibling sharing a string prefix (``/variant`` vs ``/var``)
    is not excluded.

    Args:
        path: Path produced by traversal.
        exclude_roots: Root paths whose subtrees are skipped.

    Returns:
        True if the path matches any excluded root, False otherwise.
    """
    for raw_root in exclude_roots:
        root = _normalize_root(raw_root)
        if root == os.sep:
            return True
        if path == root or path.startswith(root + os.sep):
            return True

    return False


@dataclass(frozen=True, slots=True)
class ExclusionSet:
    """Ordered, de-duplicated set of excluded roots.

    Attributes:
        roots: Normalized root paths in configuration order.
    """

    roots: tuple[str, ...] = ()

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> "ExclusionSet":
        """Build an exclusion set, dropping empty entries and duplicates.

        Args:
            paths: Configured root paths.

        Returns:
            ExclusionSet with normalized roots.
        """
        seen: dict[str, None] = {}
        for path in paths:
            if not path:
                continue
            seen.setdefault(_normalize_root(path), None)
        return cls(roots=tuple(seen))

    def matches(self, path: str) -> bool:
        """Check if a path falls under any root of this set."""
        return is_excluded(path, self.roots)

    def __bool__(self) -> bool:
        return bool(self.roots)
