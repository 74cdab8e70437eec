"""Tests for excluded root matching."""

import pytest
from hashctl.filesystem.exclusions import DEFAULT_EXCLUDE_ROOTS, ExclusionSet, is_excluded


class TestDefaultExcludeRoots:
    """Tests for the default pseudo-filesystem roots."""

    def test_defaults_are_pseudo_filesystems(self) -> None:
        """Defaults cover the virtual filesystem mount points."""
        assert DEFAULT_EXCLUDE_ROOTS == ("/proc", "/sys", "/dev", "/run")

    @pytest.mark.parametrize("path", ["/proc", "/proc/1/status", "/sys/kernel", "/dev/null"])
    def test_defaults_exclude_virtual_paths(self, path: str) -> None:
        """Paths inside the default roots are excluded."""
        assert is_excluded(path, DEFAULT_EXCLUDE_ROOTS) is True

    @pytest.mark.parametrize("path", ["/etc/hosts", "/home/user", "/", "/device", "/running"])
    def test_defaults_keep_regular_paths(self, path: str) -> None:
        """Ordinary paths are not excluded by the defaults."""
        assert is_excluded(path, DEFAULT_EXCLUDE_ROOTS) is False


class TestIsExcluded:
    """Tests for is_excluded prefix matching."""

    def test_exact_match(self) -> None:
        """A path equal to a root is excluded."""
        assert is_excluded("/var", ["/var"]) is True

    def test_nested_path(self) -> None:
        """A path below a root is excluded."""
        assert is_excluded("/var/log/syslog", ["/var"]) is True

    def test_sibling_with_shared_prefix_not_excluded(self) -> None:
        """A sibling sharing the root as a string prefix is not excluded."""
        assert is_excluded("/variant", ["/var"]) is False
        assert is_excluded("/var2/file", ["/var"]) is False

    def test_parent_not_excluded(self) -> None:
        """The parent of a root is not excluded."""
        assert is_excluded("/", ["/var"]) is False

    def test_trailing_separator_on_root(self) -> None:
        """A root written with a trailing slash behaves like the plain root."""
        assert is_excluded("/var", ["/var/"]) is True
        assert is_excluded("/var/tmp", ["/var/"]) is True
        assert is_excluded("/variant", ["/var/"]) is False

    def test_filesystem_root_excludes_everything(self) -> None:
        """Excluding / excludes every absolute path."""
        assert is_excluded("/etc/hosts", ["/"]) is True
        assert is_excluded("/", ["/"]) is True

    def test_no_roots(self) -> None:
        """An empty exclusion list excludes nothing."""
        assert is_excluded("/proc", []) is False

    def test_matching_is_lexical(self) -> None:
        """Dot-dot components are not resolved."""
        assert is_excluded("/proc/../etc", ["/proc"]) is True
        assert is_excluded("/etc/../proc", ["/proc"]) is False

    def test_multiple_roots(self) -> None:
        """Any matching root excludes the path."""
        roots = ["/proc", "/mnt/backup"]
        assert is_excluded("/mnt/backup/a", roots) is True
        assert is_excluded("/mnt/other", roots) is False


class TestExclusionSet:
    """Tests for the ExclusionSet value object."""

    def test_from_paths_deduplicates_in_order(self) -> None:
        """Duplicates (after normalization) are dropped, order is kept."""
        exclusions = ExclusionSet.from_paths(["/sys", "/proc/", "/sys", "", "/proc"])
        assert exclusions.roots == ("/sys", "/proc")

    def test_matches(self) -> None:
        """matches() delegates to prefix matching."""
        exclusions = ExclusionSet.from_paths(["/var"])
        assert exclusions.matches("/var/cache") is True
        assert exclusions.matches("/variant") is False

    def test_empty_set_is_falsy(self) -> None:
        """An empty set is falsy and excludes nothing."""
        exclusions = ExclusionSet.from_paths([])
        assert not exclusions
        assert exclusions.matches("/proc") is False
