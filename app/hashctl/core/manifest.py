"""Manifest file I/O operations.

This module provides loading of manifest files into path to digest
mappings and the streaming writer used by scans. Manifests are read and
written as UTF-8 with ``surrogateescape`` so paths that are not valid
UTF-8 survive unchanged.
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType
from typing import IO, Self

from hashctl.core.codec import decode_line, encode_record
from hashctl.models.manifest import MalformedLine, Manifest
from hashctl.models.record import DigestRecord

logger = logging.getLogger(__name__)

MANIFEST_ENCODING = "utf-8"
MANIFEST_ERRORS = "surrogateescape"


class ManifestError(Exception):
    """Base exception for manifest-related errors."""


class ManifestNotFoundError(ManifestError):
    """Raised when a manifest file is not found."""


class ManifestReadError(ManifestError):
    """Raised when a manifest file exists but cannot be read."""


class ManifestDestinationError(ManifestError):
    """Raised when a scan destination cannot be created or opened."""


class ManifestExistsError(ManifestDestinationError):
    """Raised when a scan destination exists and overwriting was not allowed."""


def read_manifest_lines(path: Path) -> Iterator[DigestRecord | MalformedLine]:
    """Decode a manifest file line by line, in file order.

    Blank lines are skipped. Lines are split on ``\\n`` only, so a stray
    carriage return stays attached to its line and is stripped by the codec.

    Args:
        path: Path to the manifest file.

    Yields:
        DigestRecord or MalformedLine for every non-blank line.

    Raises:
        ManifestNotFoundError: If the file doesn't exist.
        ManifestReadError: If the path is not a file or cannot be read.
    """
    if not path.exists():
        raise ManifestNotFoundError(f"Manifest not found: {path}")
    if not path.is_file():
        raise ManifestReadError(f"Manifest is not a regular file: {path}")

    try:
        with open(path, "rb") as f:
            for number, raw in enumerate(f, start=1):
                line = raw.decode(MANIFEST_ENCODING, MANIFEST_ERRORS)
                decoded = decode_line(line, line_number=number)
                if decoded is not None:
                    yield decoded
    except OSError as e:
        raise ManifestReadError(f"Failed to read manifest {path}: {e}") from e


def load_manifest(path: Path) -> Manifest:
    """Load a manifest file into a path to digest mapping.

    Blank lines are skipped silently. Malformed lines are skipped with a
    warning and kept on ``Manifest.malformed``. Duplicate paths resolve to
    the last occurrence.

    Args:
        path: Path to the manifest file.

    Returns:
        Loaded Manifest.

    Raises:
        ManifestNotFoundError: If the file doesn't exist.
        ManifestReadError: If the path is not a file or cannot be read.
    """
    manifest = Manifest(source=path)
    for decoded in read_manifest_lines(path):
        if isinstance(decoded, MalformedLine):
            logger.warning("Skipping malformed line in %s %s", path, decoded.describe())
            manifest.malformed.append(decoded)
            continue
        manifest.add(decoded.path, decoded.digest_field)

    if manifest.duplicates:
        logger.warning(
            "%s contains %d duplicate path(s); later entries take precedence",
            path,
            len(manifest.duplicates),
        )

    return manifest


def manifest_exists(path: Path) -> bool:
    """Check if a manifest file exists.

    Args:
        path: Path to check.

    Returns:
        True if the file exists, False otherwise.
    """
    return path.exists()


def require_manifest(path: Path) -> Manifest:
    """Load a manifest or exit with a helpful error message.

    This is a convenience wrapper around load_manifest() for CLI commands.

    Args:
        path: Manifest path.

    Returns:
        Loaded Manifest.

    Raises:
        typer.Exit: If the manifest cannot be loaded.
    """
    import typer

    from hashctl.utils.formatting import print_error, print_info

    try:
        return load_manifest(path)
    except ManifestNotFoundError as e:
        print_error(f"Manifest not found: {path}")
        print_info("Run 'hashctl scan --output <file>' to create one.")
        raise typer.Exit(code=1) from e
    except ManifestError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


class ManifestWriter:
    """Append-only writer for a manifest being produced by a scan.

    Every record is flushed as soon as it is written, so an interrupted
    scan leaves a valid partial manifest.

    Example:
        >>> with ManifestWriter.open(Path("/var/tmp/hashes.txt"), overwrite=True) as sink:
        ...     sink.write(DigestRecord(path="/etc/hosts", digest=None))
    """

    def __init__(self, path: Path, stream: IO[str]) -> None:
        self.path = path
        self._stream = stream
        self.records_written = 0

    @classmethod
    def open(cls, path: Path, *, overwrite: bool = False) -> Self:
        """Create or truncate a manifest destination.

        Parent directories are created as needed.

        Args:
            path: Destination file.
            overwrite: Whether an existing file may be truncated.

        Returns:
            An open ManifestWriter.

        Raises:
            ManifestExistsError: If the file exists and overwrite is False.
            ManifestDestinationError: If the destination is a directory or
                cannot be created.
        """
        if path.is_dir():
            raise ManifestDestinationError(f"Destination is a directory: {path}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ManifestDestinationError(f"Cannot create parent of {path}: {e}") from e

        try:
            # Without overwrite, creation must be exclusive.
            stream = open(  # noqa: SIM115
                path,
                "w" if overwrite else "x",
                encoding=MANIFEST_ENCODING,
                errors=MANIFEST_ERRORS,
                newline="\n",
            )
        except FileExistsError as e:
            raise ManifestExistsError(f"Destination already exists: {path}") from e
        except OSError as e:
            raise ManifestDestinationError(f"Cannot open destination {path}: {e}") from e

        logger.debug("Writing manifest to %s", path)
        return cls(path, stream)

    def write(self, record: DigestRecord) -> None:
        """Append one record and flush it to disk.

        Raises:
            ValueError: If the record cannot be encoded.
        """
        self._stream.write(encode_record(record))
        self._stream.flush()
        self.records_written += 1

    def close(self) -> None:
        """Close the underlying file."""
        self._stream.close()

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
