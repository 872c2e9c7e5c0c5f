"""Helpers exposing the published fonts to a web build.

The manifest written by a run maps aliases to files in the font directory.
These helpers turn it into public (optionally content-hashed) URLs, render
preload links and ``@font-face`` rules, and copy the files into a build
output directory.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import hashlib
from pathlib import Path
import shutil
from typing import Literal

from subfont.config import FontFaceConfig, ProjectLayout
from subfont.manifest import load_manifest
from subfont.reporting import Reporter, ReportLevel


DEFAULT_PREFIX = "/_astro/fonts/"
PUBLIC_HASH_LENGTH = 10

GITIGNORE_MARKER = ".subfont/*"
GITIGNORE_BLOCK = "\n# Subfont directory\n.subfont/*\n!.subfont/source\n"

Placement = Literal["head", "body"]


@dataclass(frozen=True, slots=True)
class FontAsset:
    """A published font resolved from the manifest."""

    alias: str
    file_name: str
    path: Path
    public_name: str
    url: str


def public_font_name(path: Path, *, hash_fonts: bool = True) -> str:
    """Return the served file name, suffixed with a content hash when requested."""
    if not hash_fonts:
        return path.name
    digest = hashlib.sha256(path.read_bytes()).hexdigest()[:PUBLIC_HASH_LENGTH]
    return f"{path.stem}-{digest}{path.suffix}"


def resolve_font_assets(
    layout: ProjectLayout,
    reporter: Reporter,
    *,
    prefix: str = DEFAULT_PREFIX,
    hash_fonts: bool = True,
) -> list[FontAsset]:
    """Resolve every manifest entry whose file is present in the font directory."""
    if not layout.manifest_path.is_file():
        reporter.report(ReportLevel.WARNING, "Manifest not found - no fonts to process.")
        return []

    assets: list[FontAsset] = []
    for alias, file_name in load_manifest(layout.manifest_path).items():
        path = layout.font_dir / file_name
        if not path.is_file():
            reporter.report(
                ReportLevel.WARNING, f'Font file for "{alias}" not found: {path}'
            )
            continue
        try:
            public_name = public_font_name(path, hash_fonts=hash_fonts)
        except OSError as exc:
            reporter.report(ReportLevel.ERROR, f"Failed to hash font {file_name}: {exc}")
            continue
        assets.append(
            FontAsset(
                alias=alias,
                file_name=file_name,
                path=path,
                public_name=public_name,
                url=f"{prefix}{public_name}",
            )
        )
    return assets


def match_face_config(alias: str, config: Mapping[str, FontFaceConfig]) -> FontFaceConfig:
    """Return the options for ``alias``.

    Exact keys win; otherwise the first key equal to, or a prefix of, the
    alias (case-insensitive) is used.
    """
    if alias in config:
        return config[alias]
    lowered = alias.lower()
    for key, value in config.items():
        candidate = key.lower()
        if candidate == lowered or lowered.startswith(candidate):
            return value
    return FontFaceConfig()


def _default_family(alias: str) -> str:
    return alias[:1].upper() + alias[1:]


def render_font_tags(
    assets: Iterable[FontAsset],
    config: Mapping[str, FontFaceConfig],
    placement: Placement,
    *,
    global_styles: bool = True,
) -> str:
    """Render preload links and ``@font-face`` blocks for one placement."""
    style_open = "<style is:global>" if global_styles else "<style>"
    chunks: list[str] = []
    for asset in assets:
        options = match_face_config(asset.alias, config)
        if options.preload and options.tag_placement == placement:
            chunks.append(
                f'<link rel="preload" href="{asset.url}" as="font" '
                'type="font/woff2" crossorigin>\n'
            )
        if options.style_placement == placement:
            family = options.alias or _default_family(asset.alias)
            chunks.append(
                f"{style_open}\n"
                "@font-face {\n"
                f'  font-family: "{family}";\n'
                f'  src: url("{asset.url}") format("woff2");\n'
                f"  font-display: {options.display};\n"
                f"  font-weight: {options.weight};\n"
                "}\n"
                "</style>\n"
            )
    return "".join(chunks)


def export_assets(assets: Iterable[FontAsset], destination: Path, reporter: Reporter) -> int:
    """Copy the assets into ``destination`` under their public names."""
    destination.mkdir(parents=True, exist_ok=True)
    copied = 0
    for asset in assets:
        target = destination / asset.public_name
        if not asset.path.is_file():
            reporter.report(ReportLevel.WARNING, f"Source missing during copy: {asset.path}")
            continue
        try:
            shutil.copyfile(asset.path, target)
        except OSError as exc:
            reporter.report(
                ReportLevel.ERROR, f"Failed to copy {asset.path} → {target}: {exc}"
            )
            continue
        copied += 1
    return copied


def ensure_gitignore(path: Path) -> bool:
    """Append the working-directory rules to an existing ``.gitignore``.

    Returns ``True`` when the file was modified.
    """
    if not path.is_file():
        return False
    content = path.read_text(encoding="utf-8")
    if GITIGNORE_MARKER in content:
        return False
    with path.open("a", encoding="utf-8") as handle:
        handle.write(GITIGNORE_BLOCK)
    return True


__all__ = [
    "DEFAULT_PREFIX",
    "FontAsset",
    "Placement",
    "ensure_gitignore",
    "export_assets",
    "match_face_config",
    "public_font_name",
    "render_font_tags",
    "resolve_font_assets",
]
