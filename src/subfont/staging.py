"""Content-addressed copy of original fonts into the staging directory."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
import shutil

from subfont.exceptions import UnsupportedFormatError
from subfont.hashing import digests_match, hash_file
from subfont.reporting import Reporter, ReportLevel
from subfont.variants import FontFormat, is_hidden


def sync_sources(
    font_dir: Path,
    source_dir: Path,
    managed: Iterable[str],
    reporter: Reporter,
) -> list[str]:
    """Copy original fonts from ``font_dir`` into ``source_dir``.

    WOFF2 files whose base name is tracked by the cache are outputs of a
    previous run and are left alone. Other supported files are copied only
    when their content differs from the staged copy. Returns the names of the
    copied files.
    """
    managed_bases = set(managed)
    copied: list[str] = []
    for path in sorted(font_dir.iterdir(), key=lambda entry: entry.name):
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
        if font_format is FontFormat.WOFF2 and path.stem in managed_bases:
            reporter.report(ReportLevel.INFO, f"- {path.name}: Managed subset (skipping copy)")
            continue

        target = source_dir / path.name
        source_digest = hash_file(path, reporter)
        target_digest = hash_file(target) if target.is_file() else None
        if digests_match(source_digest, target_digest):
            continue
        try:
            shutil.copy2(path, target)
        except OSError as exc:
            reporter.report(ReportLevel.ERROR, f"Failed to stage {path.name}: {exc}")
            continue
        copied.append(path.name)
    return copied


__all__ = ["sync_sources"]
