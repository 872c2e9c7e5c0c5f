"""Content digests used for file and character-set identity."""

from __future__ import annotations

import hashlib
from pathlib import Path

from subfont.reporting import Reporter, ReportLevel


HASH_ERROR = "hash_error"


def hash_bytes(data: bytes) -> str:
    """Return the hexadecimal MD5 digest of ``data``."""
    return hashlib.md5(data, usedforsecurity=False).hexdigest()


def hash_file(path: Path, reporter: Reporter | None = None) -> str:
    """Return the digest of a file, or `HASH_ERROR` when it cannot be read."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        if reporter is not None:
            reporter.report(ReportLevel.ERROR, f"Failed to hash {path.name}: {exc}")
        return HASH_ERROR
    return hash_bytes(data)


def digests_match(left: str | None, right: str | None) -> bool:
    """Compare two digests; the error sentinel never matches anything."""
    if left is None or right is None:
        return False
    if left == HASH_ERROR or right == HASH_ERROR:
        return False
    return left == right


__all__ = ["HASH_ERROR", "digests_match", "hash_bytes", "hash_file"]
