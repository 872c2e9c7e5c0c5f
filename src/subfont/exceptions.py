"""Exception hierarchy for the font subsetting pipeline."""

from __future__ import annotations


class SubfontError(RuntimeError):
    """Base exception for subfont failures."""


class WorkspaceError(SubfontError):
    """Raised when the working directories cannot be prepared."""


class ConfigError(SubfontError):
    """Raised when a configuration file cannot be loaded or validated."""


class UnsupportedFormatError(SubfontError):
    """Raised for font containers the pipeline refuses to handle (WOFF v1)."""


class FontParseError(SubfontError):
    """Raised when a font file cannot be parsed for metadata."""


class DecompressError(SubfontError):
    """Raised when a WOFF2 payload cannot be decompressed."""


class SubsetError(SubfontError):
    """Raised when the subsetter fails to produce an output font."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConfigError",
    "DecompressError",
    "FontParseError",
    "SubfontError",
    "SubsetError",
    "UnsupportedFormatError",
    "WorkspaceError",
    "exception_hint",
    "exception_messages",
]
