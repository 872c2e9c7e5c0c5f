"""Discover candidate source fonts and pick one canonical file per base name.

A staging directory may hold several encodings of the same font (a static
WOFF2 next to the TTF it was built from, a variable OTF, symlinked aliases).
Candidates sharing a file stem form a `FontGroup`; the candidate with the best
`VariantRank` becomes the subsetting source for that group.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path

from subfont.exceptions import FontParseError, UnsupportedFormatError
from subfont.metadata import FontMetadata, read_font_metadata
from subfont.reporting import Reporter, ReportLevel


class FontFormat(str, Enum):
    """Font containers accepted as subsetting sources."""

    TTF = "ttf"
    OTF = "otf"
    WOFF2 = "woff2"

    @property
    def suffix(self) -> str:
        return f".{self.value}"

    @classmethod
    def from_path(cls, path: Path) -> FontFormat | None:
        """Classify ``path`` by extension.

        Returns ``None`` for unrelated files and raises `UnsupportedFormatError`
        for WOFF v1 containers.
        """
        suffix = path.suffix.lower()
        if suffix == ".woff":
            raise UnsupportedFormatError(f"{path.name}: WOFF format not supported")
        for member in cls:
            if member.suffix == suffix:
                return member
        return None


class VariantRank(IntEnum):
    """Preference order among candidates of a group; lower wins."""

    WOFF2_STATIC = 0
    TTF_STATIC = 2
    OTF_STATIC = 3
    WOFF2_VARIABLE = 10
    TTF_VARIABLE = 12
    OTF_VARIABLE = 13

    @classmethod
    def of(cls, font_format: FontFormat, is_variable: bool) -> VariantRank:
        return _RANKS[(font_format, is_variable)]


_RANKS: dict[tuple[FontFormat, bool], VariantRank] = {
    (FontFormat.WOFF2, False): VariantRank.WOFF2_STATIC,
    (FontFormat.TTF, False): VariantRank.TTF_STATIC,
    (FontFormat.OTF, False): VariantRank.OTF_STATIC,
    (FontFormat.WOFF2, True): VariantRank.WOFF2_VARIABLE,
    (FontFormat.TTF, True): VariantRank.TTF_VARIABLE,
    (FontFormat.OTF, True): VariantRank.OTF_VARIABLE,
}


@dataclass(frozen=True, slots=True)
class FontCandidate:
    """A supported font file discovered in the staging directory."""

    path: Path
    format: FontFormat
    metadata: FontMetadata
    order: int = 0

    @property
    def base_name(self) -> str:
        return self.path.stem

    @property
    def file_name(self) -> str:
        return self.path.name

    @property
    def rank(self) -> VariantRank:
        return VariantRank.of(self.format, self.metadata.is_variable)


@dataclass(slots=True)
class FontGroup:
    """Candidates sharing a base name, in discovery order."""

    base_name: str
    candidates: list[FontCandidate] = field(default_factory=list)

    @property
    def canonical(self) -> FontCandidate:
        # min() keeps the first of equal ranks, so ties follow discovery order.
        return min(self.candidates, key=lambda candidate: candidate.rank)

    def others(self) -> list[FontCandidate]:
        chosen = self.canonical
        return [candidate for candidate in self.candidates if candidate is not chosen]


MetadataReader = Callable[[Path], FontMetadata]


def is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def scan_candidates(
    directory: Path,
    reporter: Reporter,
    *,
    read_metadata: MetadataReader = read_font_metadata,
) -> list[FontCandidate]:
    """Return the usable candidates found directly under ``directory``."""
    if not directory.is_dir():
        return []

    candidates: list[FontCandidate] = []
    seen_realpaths: set[Path] = set()

    for path in sorted(directory.iterdir(), key=lambda entry: entry.name):
        if is_hidden(path) or not path.is_file():
            continue
        try:
            font_format = FontFormat.from_path(path)
        except UnsupportedFormatError:
            reporter.report(
                ReportLevel.INFO, f"- {path.name}: WOFF format not supported - skipping"
            )
            continue
        if font_format is None:
            continue

        try:
            real_path = path.resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            reporter.report(ReportLevel.WARNING, f"Skipping unresolvable {path.name}: {exc}")
            continue
        if real_path in seen_realpaths:
            reporter.report(
                ReportLevel.WARNING,
                f"Skipping duplicate {path.name} (symlink/realpath collision)",
            )
            continue
        if path.is_symlink():
            reporter.report(ReportLevel.WARNING, f"Skipping symlink {path.name}")
            continue
        seen_realpaths.add(real_path)

        try:
            metadata = read_metadata(path)
        except FontParseError:
            reporter.report(
                ReportLevel.ERROR, f"✗ Skipping invalid/corrupted font {path.name}"
            )
            continue

        candidates.append(
            FontCandidate(
                path=path,
                format=font_format,
                metadata=metadata,
                order=len(candidates),
            )
        )
    return candidates


def group_candidates(candidates: Iterable[FontCandidate]) -> dict[str, FontGroup]:
    """Group candidates by base name, preserving discovery order."""
    groups: dict[str, FontGroup] = {}
    for candidate in candidates:
        group = groups.setdefault(candidate.base_name, FontGroup(candidate.base_name))
        group.candidates.append(candidate)
    return groups


__all__ = [
    "FontCandidate",
    "FontFormat",
    "FontGroup",
    "MetadataReader",
    "VariantRank",
    "group_candidates",
    "is_hidden",
    "scan_candidates",
]
