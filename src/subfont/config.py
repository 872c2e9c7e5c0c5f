"""Configuration models used by the font subsetting pipeline.

SubfontSettings

`project_root` (`Path`)
: Root of the web project. Defaults to the `PROJECT_ROOT` environment variable
  when it resolves to an existing path, otherwise to the canonical current
  working directory.

`src_dir` (`Path`)
: Directory scanned recursively for text-bearing files, relative to the root.

`font_dir` (`Path`)
: Directory holding the original fonts and receiving the optimised `.woff2`
  outputs.

`work_dir` (`Path`)
: Private working directory holding the staged sources, the cache, and the
  manifest.

`jobs` (`int | None`)
: Upper bound on worker threads for both parallel phases. `None` lets the
  executor pick its default.

`verbose` (`bool`)
: Emit debug-level diagnostics.

FontFaceConfig

`preload` (`bool`)
: Emit a `<link rel="preload">` tag for the font.

`tag_placement` / `style_placement` (`"head" | "body"`)
: Where the preload link and the `@font-face` block are rendered.

`alias` (`str | None`)
: CSS family name. Defaults to the capitalised manifest key.

`display` (`str`)
: `font-display` descriptor.

`weight` (`str`)
: `font-weight` descriptor, a single value or a range.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from subfont.exceptions import ConfigError


PROJECT_ROOT_ENV = "PROJECT_ROOT"
FONT_CONFIG_FILENAME = "subfont.yaml"


def resolve_project_root(value: str | Path | None = None) -> Path:
    """Return the canonical project root.

    An explicit ``value`` wins, then the ``PROJECT_ROOT`` environment variable;
    either is ignored when it cannot be canonicalised.
    """
    candidate = value if value is not None else os.environ.get(PROJECT_ROOT_ENV)
    if candidate:
        try:
            return Path(candidate).expanduser().resolve(strict=True)
        except OSError:
            pass
    return Path.cwd().resolve()


@dataclass(frozen=True, slots=True)
class ProjectLayout:
    """Absolute paths derived from the settings."""

    root: Path
    src_dir: Path
    font_dir: Path
    work_dir: Path

    @property
    def source_dir(self) -> Path:
        return self.work_dir / "source"

    @property
    def cache_file(self) -> Path:
        return self.work_dir / "cache.json"

    @property
    def manifest_path(self) -> Path:
        return self.work_dir / "font-manifest.json"

    @property
    def gitignore(self) -> Path:
        return self.root / ".gitignore"

    @property
    def font_config(self) -> Path:
        return self.root / FONT_CONFIG_FILENAME


class SubfontSettings(BaseModel):
    """Settings controlling one subsetting run."""

    model_config = ConfigDict(extra="forbid")

    project_root: Path = Field(default_factory=resolve_project_root)
    src_dir: Path = Path("src")
    font_dir: Path = Path("src/assets/fonts")
    work_dir: Path = Path(".subfont")
    jobs: int | None = Field(default=None, ge=1)
    verbose: bool = False

    @classmethod
    def from_environment(cls, **overrides: Any) -> SubfontSettings:
        """Build settings honouring ``PROJECT_ROOT`` and explicit overrides."""
        root = overrides.pop("project_root", None)
        values = {key: value for key, value in overrides.items() if value is not None}
        return cls(project_root=resolve_project_root(root), **values)

    def layout(self) -> ProjectLayout:
        root = self.project_root
        return ProjectLayout(
            root=root,
            src_dir=root / self.src_dir,
            font_dir=root / self.font_dir,
            work_dir=root / self.work_dir,
        )


class FontFaceConfig(BaseModel):
    """Per-font options used when rendering preload links and `@font-face` rules."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    preload: bool = True
    tag_placement: Literal["head", "body"] = Field(default="head", alias="tagPlacement")
    style_placement: Literal["head", "body"] = Field(default="head", alias="stylePlacement")
    alias: str | None = None
    display: str = "swap"
    weight: str = "100 900"

    @field_validator("weight", mode="before")
    @classmethod
    def _stringify_weight(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value


def parse_font_face_config(data: Mapping[str, Any] | None) -> dict[str, FontFaceConfig]:
    """Validate a mapping of manifest keys to font face options."""
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError("Font configuration must be a mapping of font keys to options.")
    parsed: dict[str, FontFaceConfig] = {}
    for key, value in data.items():
        try:
            parsed[str(key)] = FontFaceConfig.model_validate(value or {})
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration for font '{key}': {exc}") from exc
    return parsed


def load_font_face_config(path: Path) -> dict[str, FontFaceConfig]:
    """Load ``subfont.yaml``; a missing file yields an empty configuration."""
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Unable to read font configuration '{path}': {exc}") from exc
    return parse_font_face_config(data)


__all__ = [
    "FONT_CONFIG_FILENAME",
    "PROJECT_ROOT_ENV",
    "FontFaceConfig",
    "ProjectLayout",
    "SubfontSettings",
    "load_font_face_config",
    "parse_font_face_config",
    "resolve_project_root",
]
