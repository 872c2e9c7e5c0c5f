"""Collect the characters used across a project's source tree."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import cached_property
import os
from pathlib import Path

from subfont.hashing import hash_bytes
from subfont.reporting import Reporter, ReportLevel


BASELINE_CHARACTERS = "".join(chr(code) for code in range(0x20, 0x7F))

TEXT_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".astro",
        ".md",
        ".mdx",
        ".ts",
        ".tsx",
        ".js",
        ".jsx",
        ".json",
        ".html",
        ".vue",
        ".svelte",
    }
)

# Above this size subsetting gets noticeably slow.
LARGE_CHARSET_THRESHOLD = 10_000

_BOM = "\ufeff"


@dataclass(frozen=True)
class CharacterSet:
    """Characters to keep, with their canonical ordering and digest."""

    characters: frozenset[str]

    @cached_property
    def text(self) -> str:
        return "".join(sorted(self.characters))

    @cached_property
    def digest(self) -> str:
        return hash_bytes(self.text.encode("utf-8"))

    @property
    def codepoints(self) -> list[int]:
        return [ord(ch) for ch in self.text]

    def __len__(self) -> int:
        return len(self.characters)

    def __contains__(self, item: object) -> bool:
        return item in self.characters


def baseline_set() -> CharacterSet:
    return CharacterSet(frozenset(BASELINE_CHARACTERS))


def iter_text_files(
    root: Path, extensions: Iterable[str] = TEXT_EXTENSIONS
) -> Iterator[Path]:
    """Yield text-bearing files under ``root`` in a stable order."""
    if not root.is_dir():
        return
    allowed = frozenset(extensions)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.suffix in allowed and path.is_file():
                yield path


def decode_text(data: bytes) -> str:
    """Decode UTF-8, or map each byte to its Latin-1 code point when invalid."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")
    if text.startswith(_BOM):
        text = text[1:]
    return text


def read_characters(path: Path) -> frozenset[str]:
    """Return the characters of a single file; unreadable files yield nothing."""
    try:
        data = path.read_bytes()
    except OSError:
        return frozenset()
    return frozenset(decode_text(data))


def combine(left: frozenset[str], right: frozenset[str]) -> frozenset[str]:
    """Join two partial character sets."""
    return left | right


def _fold(paths: Sequence[Path]) -> frozenset[str]:
    partial: set[str] = set()
    for path in paths:
        partial.update(read_characters(path))
    return frozenset(partial)


def _chunk(items: Sequence[Path], count: int) -> list[Sequence[Path]]:
    count = max(1, min(count, len(items)))
    size, extra = divmod(len(items), count)
    chunks: list[Sequence[Path]] = []
    start = 0
    for index in range(count):
        end = start + size + (1 if index < extra else 0)
        chunks.append(items[start:end])
        start = end
    return chunks


def reduce_pairwise(partials: Sequence[frozenset[str]]) -> frozenset[str]:
    """Combine partial sets as a balanced binary tree."""
    level = list(partials)
    if not level:
        return frozenset()
    while len(level) > 1:
        paired = [combine(level[i], level[i + 1]) for i in range(0, len(level) - 1, 2)]
        if len(level) % 2:
            paired.append(level[-1])
        level = paired
    return level[0]


def _default_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


def extract_characters(
    root: Path,
    *,
    jobs: int | None = None,
    reporter: Reporter | None = None,
) -> CharacterSet:
    """Scan ``root`` and return the baseline plus every character encountered."""
    paths = list(iter_text_files(root))
    if not paths:
        return baseline_set()

    if reporter is not None:
        reporter.report(
            ReportLevel.INFO,
            f"Scanning {len(paths)} source files for unique characters...",
        )

    workers = jobs or _default_workers()
    chunks = _chunk(paths, workers)
    with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
        partials = list(executor.map(_fold, chunks))

    found = reduce_pairwise(partials)
    return CharacterSet(combine(frozenset(BASELINE_CHARACTERS), found))


__all__ = [
    "BASELINE_CHARACTERS",
    "LARGE_CHARSET_THRESHOLD",
    "TEXT_EXTENSIONS",
    "CharacterSet",
    "baseline_set",
    "combine",
    "decode_text",
    "extract_characters",
    "iter_text_files",
    "read_characters",
    "reduce_pairwise",
]
