"""Font metadata inspection backed by fontTools."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fontTools.ttLib import TTFont

from subfont.exceptions import FontParseError


TYPOGRAPHIC_FAMILY = 16
FAMILY = 1
TYPOGRAPHIC_SUBFAMILY = 17
SUBFAMILY = 2

DEFAULT_FAMILY = "UnknownFamily"
DEFAULT_STYLE = "Regular"


@dataclass(frozen=True, slots=True)
class FontMetadata:
    """Identity information read from a font's name and fvar tables."""

    family: str
    style: str
    is_variable: bool

    @property
    def display_style(self) -> str:
        """Style suffix for display, empty for the regular face."""
        return "" if self.style == DEFAULT_STYLE else self.style


def _name(font: TTFont, preferred: int, fallback: int) -> str | None:
    if "name" not in font:
        return None
    table = font["name"]
    for name_id in (preferred, fallback):
        value = table.getDebugName(name_id)
        if value:
            return value
    return None


def read_font_metadata(path: Path) -> FontMetadata:
    """Parse ``path`` (TTF, OTF or WOFF2) and return its metadata.

    Raises `FontParseError` for unreadable, corrupted or compressed payloads
    that cannot be decoded.
    """
    try:
        with TTFont(path, lazy=True) as font:
            family = _name(font, TYPOGRAPHIC_FAMILY, FAMILY) or DEFAULT_FAMILY
            style = _name(font, TYPOGRAPHIC_SUBFAMILY, SUBFAMILY) or DEFAULT_STYLE
            is_variable = "fvar" in font
    except Exception as exc:  # fontTools raises a wide range of errors on bad input
        raise FontParseError(f"Unable to parse font {path.name}: {exc}") from exc
    return FontMetadata(family=family, style=style, is_variable=is_variable)


__all__ = ["DEFAULT_FAMILY", "DEFAULT_STYLE", "FontMetadata", "read_font_metadata"]
