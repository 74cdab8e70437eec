"""Content digest computation for single files.

Reads a regular file as an opaque byte stream and renders its digest as
lowercase hex. Read failures are classified and returned rather than
raised, so one unreadable file never aborts a scan.
"""

import errno
import hashlib
import logging
import os
import stat

from hashctl.models.record import DIGEST_HEX_LENGTH, DigestFailure, DigestResult

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "sha256"

_CHUNK_SIZE = 1024 * 1024

# Never follow a symlink swapped in after discovery, never block on a FIFO.
_OPEN_FLAGS = os.O_RDONLY | getattr(os, "O_NOFOLLOW", 0) | getattr(os, "O_NONBLOCK", 0)


class UnsupportedAlgorithmError(ValueError):
    """Raised when a digest algorithm is unknown or not 256 bits wide."""


def resolve_algorithm(name: str) -> str:
    """Validate a digest algorithm name.

    The manifest format assumes a fixed-width hex digest, so only
    algorithms producing 256-bit digests are accepted.

    Args:
        name: hashlib algorithm name (e.g. "sha256", "sha3_256", "blake2s").

    Returns:
        The normalized (lowercase) algorithm name.

    Raises:
        UnsupportedAlgorithmError: If the algorithm is unknown or has the
            wrong digest size.
    """
    normalized = name.strip().lower()
    try:
        hasher = hashlib.new(normalized)
    except (ValueError, TypeError) as e:
        msg = f"Unknown digest algorithm: {name!r}"
        raise UnsupportedAlgorithmError(msg) from e

    if hasher.digest_size * 2 != DIGEST_HEX_LENGTH:
        msg = (
            f"Digest algorithm {name!r} produces {hasher.digest_size * 8}-bit digests; "
            f"a 256-bit algorithm is required"
        )
        raise UnsupportedAlgorithmError(msg)

    return normalized


def _classify(error: OSError) -> DigestFailure:
    """Map an OSError raised while reading to a failure classification."""
    if isinstance(error, FileNotFoundError):
        return DigestFailure.VANISHED
    if isinstance(error, PermissionError):
        return DigestFailure.PERMISSION_DENIED
    if error.errno in (errno.ELOOP, errno.EISDIR, errno.ENXIO):
        return DigestFailure.NOT_REGULAR
    return DigestFailure.IO_ERROR


def digest_file(path: str, algorithm: str = DEFAULT_ALGORITHM) -> DigestResult:
    """Compute the content digest of a single regular file.

    Args:
        path: Path to a regular file. Symlinks are not followed.
        algorithm: Validated hashlib algorithm name.

    Returns:
        DigestResult with the hex digest, or a failure classification.
    """
    try:
        fd = os.open(path, _OPEN_FLAGS)
    except OSError as e:
        failure = _classify(e)
        logger.info("Cannot open %s (%s): %s", path, failure.value, e.strerror or e)
        return DigestResult(failure=failure, detail=e.strerror or str(e))

    try:
        if not stat.S_ISREG(os.fstat(fd).st_mode):
            logger.info("Not a regular file: %s", path)
            return DigestResult(failure=DigestFailure.NOT_REGULAR, detail="not a regular file")

        hasher = hashlib.new(algorithm)
        with os.fdopen(fd, "rb", closefd=False) as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                hasher.update(chunk)
    except OSError as e:
        failure = _classify(e)
        logger.info("Cannot read %s (%s): %s", path, failure.value, e.strerror or e)
        return DigestResult(failure=failure, detail=e.strerror or str(e))
    finally:
        os.close(fd)

    return DigestResult(digest=hasher.hexdigest())
