"""Package and cache version helpers."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version


# Bump whenever outputs produced by an older release must be regenerated.
CULL_VERSION = "fontcull-2"


def get_version() -> str:
    """Return the installed subfont version."""
    try:
        return _pkg_version("subfont")
    except PackageNotFoundError:
        return "0.0.0"


__all__ = ["CULL_VERSION", "get_version"]
