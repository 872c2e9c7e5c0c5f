"""Command implementations for the subfont CLI."""

from __future__ import annotations

from .assets import export, tags
from .run import run


__all__ = ["export", "run", "tags"]
