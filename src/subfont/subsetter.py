"""fontTools-backed decompression and subsetting."""

from __future__ import annotations

from collections.abc import Iterable
from io import BytesIO

from fontTools.subset import Options, Subsetter
from fontTools.ttLib import TTFont, woff2

from subfont.exceptions import DecompressError, SubsetError


WOFF2_SIGNATURE = b"wOF2"

# OpenType layout features kept in every subset; text shaping breaks without them.
LAYOUT_FEATURES: tuple[str, ...] = ("ccmp", "locl", "kern", "liga", "mark", "mkmk")


def is_woff2(data: bytes) -> bool:
    return data[:4] == WOFF2_SIGNATURE


def decompress_woff2(data: bytes) -> bytes:
    """Return the raw sfnt payload of a WOFF2 font."""
    source = BytesIO(data)
    target = BytesIO()
    try:
        woff2.decompress(source, target)
    except Exception as exc:  # brotli and the WOFF2 reader raise assorted errors
        raise DecompressError(str(exc) or type(exc).__name__) from exc
    return target.getvalue()


def _options(features: Iterable[str]) -> Options:
    options = Options()
    options.layout_features = list(features)
    options.flavor = "woff2"
    options.name_IDs = ["*"]
    options.name_languages = ["*"]
    options.notdef_outline = True
    options.recalc_timestamp = False
    return options


def subset_to_woff2(
    font_data: bytes,
    characters: Iterable[str],
    features: Iterable[str] = LAYOUT_FEATURES,
) -> bytes:
    """Subset a raw TTF/OTF payload to ``characters`` and return WOFF2 bytes."""
    options = _options(features)
    unicodes = sorted({ord(ch) for ch in characters})
    try:
        with TTFont(BytesIO(font_data), recalcTimestamp=False) as font:
            subsetter = Subsetter(options=options)
            subsetter.populate(unicodes=unicodes)
            subsetter.subset(font)
            font.flavor = "woff2"
            buffer = BytesIO()
            font.save(buffer)
    except Exception as exc:  # fontTools raises a wide range of errors on bad input
        raise SubsetError(str(exc) or type(exc).__name__) from exc
    return buffer.getvalue()


__all__ = [
    "LAYOUT_FEATURES",
    "WOFF2_SIGNATURE",
    "decompress_woff2",
    "is_woff2",
    "subset_to_woff2",
]
