"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
from pathlib import Path

import pytest
from hashctl.utils import formatting


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch):
    """Point XDG_CONFIG_HOME at an empty directory so user config never leaks in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture(autouse=True)
def wide_consoles(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich from wrapping long temporary paths in captured output."""
    monkeypatch.setattr(formatting.console, "width", 400)
    monkeypatch.setattr(formatting.err_console, "width", 400)


@pytest.fixture
def digest_a() -> str:
    """A valid 64-character digest."""
    return "abc123" + "0" * 58


@pytest.fixture
def digest_b() -> str:
    """Another valid 64-character digest."""
    return "def456" + "0" * 58


@pytest.fixture
def digest_c() -> str:
    """A third valid 64-character digest."""
    return "999aaa" + "0" * 58


@pytest.fixture
def write_manifest(tmp_path: Path):
    """Write raw manifest text to a file and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Small directory tree with nested files.

    Layout::

        tree/
            top.txt          "top"
            sub/
                nested.txt   "nested"
                deeper/
                    leaf.bin b"\\x00\\x01"
    """
    root = tmp_path / "tree"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "top.txt").write_bytes(b"top")
    (root / "sub" / "nested.txt").write_bytes(b"nested")
    (root / "sub" / "deeper" / "leaf.bin").write_bytes(b"\x00\x01")
    return root


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the logging setup performed by the CLI callback."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
