"""Shared filesystem helpers."""

from __future__ import annotations

import contextlib
import os
from pathlib import Path


def temp_path_for(path: Path) -> Path:
    """Return the sibling temporary path used while publishing ``path``."""
    return path.with_name(f"{path.name}.tmp")


def atomic_write_bytes(path: Path, data: bytes, *, temp_path: Path | None = None) -> None:
    """Write ``data`` next to ``path`` then move it into place.

    Readers observe either the previous file or the complete new one. The
    temporary file is removed when any step fails.
    """
    temp = temp_path or temp_path_for(path)
    try:
        with temp.open("wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp, path)
    except BaseException:
        with contextlib.suppress(OSError):
            temp.unlink()
        raise


def atomic_write_text(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    atomic_write_bytes(path, text.encode(encoding))


__all__ = ["atomic_write_bytes", "atomic_write_text", "temp_path_for"]
