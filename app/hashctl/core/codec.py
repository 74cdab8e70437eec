"""Manifest line codec.

Each manifest line holds one record::

    <digest-or-ERROR><TAB><path>

There is no header and no trailing metadata. Decoding follows a single
grammar: split at the first tab; when no tab is present, fall back to
the first run of whitespace. The fallback is a best-effort tolerance for
hand-edited or legacy files and is not lossless for paths that begin
with whitespace.
"""

import re

from hashctl.models.manifest import MalformedLine
from hashctl.models.record import DIGEST_HEX_LENGTH, ERROR_SENTINEL, DigestRecord

FIELD_SEPARATOR = "\t"

_HEX_DIGEST_RE = re.compile(rf"[0-9a-fA-F]{{{DIGEST_HEX_LENGTH}}}")
_WHITESPACE_RUN_RE = re.compile(r"\s+")


def encode_record(record: DigestRecord) -> str:
    """Encode a record as a single manifest line.

    Args:
        record: Record to encode.

    Returns:
        The line, terminated by a newline.

    Raises:
        ValueError: If the path contains a newline and cannot be
            represented in the line format.
    """
    if "\n" in record.path:
        msg = f"Path contains a newline and cannot be stored in a manifest: {record.path!r}"
        raise ValueError(msg)
    return f"{record.digest_field}{FIELD_SEPARATOR}{record.path}\n"


def is_valid_digest_field(value: str) -> bool:
    """Check if a digest column holds a hex digest or the error sentinel."""
    return value == ERROR_SENTINEL or _HEX_DIGEST_RE.fullmatch(value) is not None


def _split_fields(line: str) -> tuple[str, str] | None:
    """Split a line into digest and path columns."""
    if FIELD_SEPARATOR in line:
        digest, _, path = line.partition(FIELD_SEPARATOR)
        return digest, path

    match = _WHITESPACE_RUN_RE.search(line)
    if match is None:
        return None
    return line[: match.start()], line[match.end() :]


def decode_line(line: str, line_number: int | None = None) -> DigestRecord | MalformedLine | None:
    """Decode one manifest line.

    Args:
        line: Raw line, with or without its terminator.
        line_number: 1-based position in the source, used in diagnostics.

    Returns:
        DigestRecord for a valid line, MalformedLine for an invalid one,
        or None for a blank line.
    """
    text = line.strip("\r\n")
    if not text.strip():
        return None

    fields = _split_fields(text)
    if fields is None:
        return MalformedLine(text=text, reason="missing path field", line_number=line_number)

    digest, path = fields
    # A stray embedded newline ends the path.
    path = path.split("\n", 1)[0]

    if not digest:
        return MalformedLine(text=text, reason="empty digest field", line_number=line_number)
    if not path:
        return MalformedLine(text=text, reason="empty path field", line_number=line_number)
    if not is_valid_digest_field(digest):
        return MalformedLine(text=text, reason="malformed digest", line_number=line_number)

    return DigestRecord(path=path, digest=None if digest == ERROR_SENTINEL else digest)
