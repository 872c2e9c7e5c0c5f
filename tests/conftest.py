from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
import pytest

from subfont.config import SubfontSettings


ASCII = "".join(chr(code) for code in range(0x20, 0x7F))

FontFactory = Callable[..., Path]


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 600))
    pen.lineTo((500, 600))
    pen.lineTo((500, 0))
    pen.closePath()
    return pen.glyph()


def build_font(
    path: Path,
    *,
    family: str = "Inter",
    style: str = "Regular",
    variable: bool = False,
    characters: Iterable[str] = ASCII,
    woff2: bool | None = None,
) -> Path:
    codepoints = sorted({ord(ch) for ch in characters})
    names = [f"uni{code:04X}" for code in codepoints]
    glyph_order = [".notdef", *names]

    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap(dict(zip(codepoints, names)))
    builder.setupGlyf({name: _box_glyph() for name in glyph_order})
    builder.setupHorizontalMetrics({name: (600, 100) for name in glyph_order})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": family, "styleName": style})
    builder.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    builder.setupPost()
    if variable:
        builder.setupFvar(axes=[("wght", 100, 400, 900, "Weight")], instances=[])

    if woff2 is None:
        woff2 = path.suffix.lower() == ".woff2"
    if woff2:
        builder.font.flavor = "woff2"
    path.parent.mkdir(parents=True, exist_ok=True)
    builder.save(str(path))
    return path


@pytest.fixture
def font_factory() -> FontFactory:
    return build_font


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "src" / "assets" / "fonts").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def settings(project: Path) -> SubfontSettings:
    return SubfontSettings(project_root=project, jobs=2)


@pytest.fixture
def font_dir(project: Path) -> Path:
    return project / "src" / "assets" / "fonts"
