"""Unit tests for scan command.

Tests for the CLI scan command implementation.
"""

import errno
import hashlib
import os
from pathlib import Path
from unittest.mock import patch

import hashctl.filesystem.digest as digest_module
from hashctl.cli.main import app
from hashctl.core.manifest import load_manifest
from typer.testing import CliRunner

runner = CliRunner()


class TestScanCommand:
    """Tests for hashctl scan command."""

    def test_scan_help(self) -> None:
        """Scan command shows help."""
        result = runner.invoke(app, ["scan", "--help"])
        assert result.exit_code == 0
        assert "digest manifest" in result.output

    def test_scan_writes_manifest(self, sample_tree: Path, tmp_path: Path) -> None:
        """Scanning a tree writes one record per regular file."""
        out = tmp_path / "hashes.txt"

        result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(out)])

        assert result.exit_code == 0, result.output
        manifest = load_manifest(out)
        assert len(manifest) == 3
        assert manifest.get(str(sample_tree / "top.txt")) == hashlib.sha256(b"top").hexdigest()
        assert f"Scan complete. Output: {out}" in result.output

    def test_scan_announces_destination(self, sample_tree: Path, tmp_path: Path) -> None:
        """The header names the root, exclusions and destination."""
        out = tmp_path / "hashes.txt"

        result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(out)])

        assert f"Scanning {sample_tree}" in result.output
        assert "/proc" in result.output
        assert str(out) in result.output
        assert "<digest><TAB><path>" in result.output

    def test_quiet_suppresses_header_and_table(self, sample_tree: Path, tmp_path: Path) -> None:
        out = tmp_path / "hashes.txt"

        result = runner.invoke(app, ["--quiet", "scan", str(sample_tree), "-o", str(out)])

        assert result.exit_code == 0
        assert "Scanning" not in result.output
        assert "Scan Summary" not in result.output
        assert "Scan complete" in result.output

    def test_extra_exclusion(self, sample_tree: Path, tmp_path: Path) -> None:
        """--exclude prunes a subtree."""
        out = tmp_path / "hashes.txt"

        result = runner.invoke(
            app, ["scan", str(sample_tree), "-o", str(out), "-x", str(sample_tree / "sub")]
        )

        assert result.exit_code == 0
        assert list(load_manifest(out).entries) == [str(sample_tree / "top.txt")]

    def test_no_default_excludes(self, sample_tree: Path, tmp_path: Path) -> None:
        """--no-default-excludes clears the configured exclusions."""
        out = tmp_path / "hashes.txt"

        result = runner.invoke(
            app, ["scan", str(sample_tree), "-o", str(out), "--no-default-excludes"]
        )

        assert result.exit_code == 0
        assert "skipping nothing" in result.output

    def test_config_exclusions_used(self, sample_tree: Path, tmp_path: Path) -> None:
        """Exclusions come from the selected config file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text(f'exclude_roots = ["{sample_tree / "sub"}"]\n')
        out = tmp_path / "hashes.txt"

        result = runner.invoke(app, ["-c", str(config_file), "scan", str(sample_tree), "-o", str(out)])

        assert result.exit_code == 0
        assert len(load_manifest(out)) == 1

    def test_algorithm_option(self, sample_tree: Path, tmp_path: Path) -> None:
        out = tmp_path / "hashes.txt"

        result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(out), "-a", "sha3_256"])

        assert result.exit_code == 0
        expected = hashlib.sha3_256(b"top").hexdigest()
        assert load_manifest(out).get(str(sample_tree / "top.txt")) == expected

    def test_unsupported_algorithm(self, sample_tree: Path, tmp_path: Path) -> None:
        out = tmp_path / "hashes.txt"

        result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(out), "-a", "md5"])

        assert result.exit_code == 1
        assert "256-bit" in result.output
        assert not out.exists()

    def test_default_output_from_config(self, sample_tree: Path, tmp_path: Path) -> None:
        """Without --output the configured default destination is used."""
        out = tmp_path / "configured.txt"
        config_file = tmp_path / "config.toml"
        config_file.write_text(f'default_output = "{out}"\n')

        result = runner.invoke(app, ["-c", str(config_file), "scan", str(sample_tree)])

        assert result.exit_code == 0
        assert len(load_manifest(out)) == 3

    def test_missing_root(self, tmp_path: Path) -> None:
        out = tmp_path / "hashes.txt"

        result = runner.invoke(app, ["scan", str(tmp_path / "nope"), "-o", str(out)])

        assert result.exit_code == 1
        assert "not a directory" in result.output
        assert not out.exists()

    def test_output_is_directory(self, sample_tree: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "Output path is a directory" in result.output

    def test_existing_output_declined(self, sample_tree: Path, tmp_path: Path) -> None:
        """Declining the overwrite prompt leaves the file untouched."""
        out = tmp_path / "hashes.txt"
        out.write_text("previous\n")

        result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(out)], input="n\n")

        assert result.exit_code == 1
        assert "Aborted." in result.output
        assert out.read_text() == "previous\n"

    def test_existing_output_confirmed(self, sample_tree: Path, tmp_path: Path) -> None:
        out = tmp_path / "hashes.txt"
        out.write_text("previous\n")

        result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(out)], input="y\n")

        assert result.exit_code == 0
        assert len(load_manifest(out)) == 3

    def test_existing_output_with_yes(self, sample_tree: Path, tmp_path: Path) -> None:
        out = tmp_path / "hashes.txt"
        out.write_text("previous\n")

        result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(out), "--yes"])

        assert result.exit_code == 0
        assert "previous" not in out.read_text()

    def test_unreadable_files_reported(self, sample_tree: Path, tmp_path: Path) -> None:
        """Unreadable files are recorded as ERROR and the scan still succeeds."""
        from hashctl.models.record import DigestFailure, DigestResult

        out = tmp_path / "hashes.txt"
        with patch(
            "hashctl.filesystem.scanner.digest_file",
            return_value=DigestResult(failure=DigestFailure.PERMISSION_DENIED),
        ):
            result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(out)])

        assert result.exit_code == 0
        assert "3 file(s) could not be read" in result.output
        assert load_manifest(out).error_count == 3

    def test_unreadable_file_named_with_reason(self, sample_tree: Path, tmp_path: Path) -> None:
        """Each unreadable file is listed by path with the reason it failed."""
        locked = sample_tree / "locked.bin"
        locked.write_bytes(b"secret")
        out = tmp_path / "hashes.txt"
        real_open = os.open

        def _deny_locked(path: str, flags: int, *args: object) -> int:
            if path == str(locked):
                raise PermissionError(errno.EACCES, "Permission denied")
            return real_open(path, flags, *args)

        with patch.object(digest_module.os, "open", side_effect=_deny_locked):
            result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert f"Unreadable (permission denied): {locked}" in result.output
        assert "1 file(s) could not be read" in result.output
        assert load_manifest(out).get(str(locked)) == "ERROR"

    def test_symlinked_root_rejected(self, sample_tree: Path, tmp_path: Path) -> None:
        """A scan root that is a symlink is refused and nothing is written."""
        link = tmp_path / "link"
        link.symlink_to(sample_tree, target_is_directory=True)
        out = tmp_path / "hashes.txt"

        result = runner.invoke(app, ["scan", str(link), "-o", str(out)])

        assert result.exit_code == 1
        assert "symlink" in result.output
        assert not out.exists()

    def test_interrupt_keeps_partial_manifest(self, sample_tree: Path, tmp_path: Path) -> None:
        """Ctrl-C exits 130 and keeps the records written so far."""
        out = tmp_path / "hashes.txt"

        with patch("hashctl.cli.commands.scan.Scanner.scan", side_effect=KeyboardInterrupt):
            result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(out)])

        assert result.exit_code == 130
        assert "Scan interrupted" in result.output
        assert out.exists()

    def test_invalid_config(self, sample_tree: Path, tmp_path: Path) -> None:
        config_file = tmp_path / "config.toml"
        config_file.write_text('palette = ["nope-color"]\n')

        result = runner.invoke(app, ["-c", str(config_file), "scan", str(sample_tree)])

        assert result.exit_code == 1
        assert "invalid palette color" in result.output
