"""Data models for hashctl.

This package contains the digest record and manifest data structures
shared by the scanner, codec and comparator.
"""

from hashctl.models.manifest import MalformedLine, Manifest
from hashctl.models.record import (
    DIGEST_HEX_LENGTH,
    ERROR_SENTINEL,
    DigestFailure,
    DigestRecord,
    DigestResult,
)

__all__ = [
    "DIGEST_HEX_LENGTH",
    "ERROR_SENTINEL",
    "DigestFailure",
    "DigestRecord",
    "DigestResult",
    "MalformedLine",
    "Manifest",
]
