"""Digest record models.

This module defines the per-file data structures produced by the digest
engine and persisted in manifests: the outcome of hashing a single file
and the path/digest record written for it.
"""

from dataclasses import dataclass
from enum import Enum

# Reserved digest-field value for files whose content could not be read.
ERROR_SENTINEL = "ERROR"

# Manifests always carry 256-bit digests rendered as lowercase hex.
DIGEST_HEX_LENGTH = 64


class DigestFailure(str, Enum):
    """Reason a file could not be digested.

    Attributes:
        PERMISSION_DENIED: The file exists but cannot be opened for reading.
        VANISHED: The file disappeared between discovery and reading.
        NOT_REGULAR: The path no longer refers to a regular file.
        IO_ERROR: Any other read failure.
    """

    PERMISSION_DENIED = "permission_denied"
    VANISHED = "vanished"
    NOT_REGULAR = "not_regular"
    IO_ERROR = "io_error"

    @property
    def label(self) -> str:
        """Human-readable reason."""
        return _FAILURE_LABELS[self]


_FAILURE_LABELS = {
    DigestFailure.PERMISSION_DENIED: "permission denied",
    DigestFailure.VANISHED: "vanished before it could be read",
    DigestFailure.NOT_REGULAR: "no longer a regular file",
    DigestFailure.IO_ERROR: "I/O error",
}


@dataclass(frozen=True, slots=True)
class DigestResult:
    """Outcome of digesting a single file.

    Exactly one of ``digest`` and ``failure`` is set.

    Attributes:
        digest: Lowercase hex digest of the file content.
        failure: Classification of the read failure.
        detail: Human-readable explanation of the failure.
    """

    digest: str | None = None
    failure: DigestFailure | None = None
    detail: str | None = None

    def __post_init__(self) -> None:
        """Validate that exactly one outcome is present."""
        if (self.digest is None) == (self.failure is None):
            msg = "DigestResult requires exactly one of digest or failure"
            raise ValueError(msg)

    @property
    def ok(self) -> bool:
        """Check if the file was digested successfully."""
        return self.digest is not None


@dataclass(frozen=True, slots=True)
class DigestRecord:
    """A single manifest entry: a path and its digest or the error state.

    Attributes:
        path: Absolute filesystem path (identity key in a manifest).
        digest: Hex digest, or None when the file was unreadable.
    """

    path: str
    digest: str | None = None

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.digest == ERROR_SENTINEL:
            msg = f"Use digest=None for unreadable files, not {ERROR_SENTINEL!r}"
            raise ValueError(msg)

    @property
    def is_error(self) -> bool:
        """Check if this record marks an unreadable file."""
        return self.digest is None

    @property
    def digest_field(self) -> str:
        """Digest column as written to a manifest."""
        return ERROR_SENTINEL if self.digest is None else self.digest

    @classmethod
    def from_result(cls, path: str, result: DigestResult) -> "DigestRecord":
        """Build a record from a digest outcome.

        Args:
            path: Path that was digested.
            result: Outcome of the digest engine.

        Returns:
            DigestRecord carrying the digest, or the error state on failure.
        """
        return cls(path=path, digest=result.digest)
