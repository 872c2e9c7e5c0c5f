"""Alias to output filename manifest consumed by the web integration."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import json
from pathlib import Path

from subfont.utils import atomic_write_text


def manifest_alias(base_name: str) -> str:
    """Return the manifest key for a font base name."""
    return base_name.lower().replace(" ", "")


def build_manifest(entries: Iterable[tuple[str, str]] | Mapping[str, str]) -> dict[str, str]:
    """Return a mapping sorted by alias."""
    pairs = entries.items() if isinstance(entries, Mapping) else entries
    return dict(sorted(pairs))


def dumps_manifest(mapping: Mapping[str, str]) -> str:
    return json.dumps(build_manifest(mapping), indent=2, ensure_ascii=False)


def write_manifest(path: Path, mapping: Mapping[str, str]) -> None:
    """Persist the manifest with sorted keys, replacing any previous file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    atomic_write_text(path, dumps_manifest(mapping))


def load_manifest(path: Path) -> dict[str, str]:
    """Read a manifest; absent or malformed files yield an empty mapping."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    if not isinstance(data, dict):
        return {}
    return {str(key): str(value) for key, value in data.items() if isinstance(value, str)}


__all__ = [
    "build_manifest",
    "dumps_manifest",
    "load_manifest",
    "manifest_alias",
    "write_manifest",
]
