"""Persistent record of the last processed sources and character set."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from subfont.hashing import digests_match
from subfont.utils import atomic_write_text
from subfont.version import CULL_VERSION


class CacheRecord(BaseModel):
    """Cache state threaded through a run.

    ``fonts`` maps each output base name to the digest of the source file that
    produced it. A missing ``version`` key is read as the current version.
    """

    model_config = ConfigDict(extra="ignore")

    text_hash: str = ""
    version: str = CULL_VERSION
    fonts: dict[str, str] = Field(default_factory=dict)

    def is_current(self) -> bool:
        return self.version == CULL_VERSION

    def managed_bases(self) -> set[str]:
        """Return the base names whose outputs this tool owns."""
        return set(self.fonts)

    def invalidated(self) -> CacheRecord:
        """Return a copy with every per-font entry dropped."""
        return self.model_copy(update={"fonts": {}})

    def to_json(self) -> str:
        payload = {
            "text_hash": self.text_hash,
            "version": self.version,
            "fonts": dict(sorted(self.fonts.items())),
        }
        return json.dumps(payload, indent=2, ensure_ascii=False)


class CacheStore:
    """Load and persist a `CacheRecord` at a fixed path."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> CacheRecord:
        """Return the stored record; absent or unreadable files yield a default."""
        if not self.exists():
            return CacheRecord()
        try:
            return CacheRecord.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError):
            return CacheRecord()

    def load_for_run(self) -> tuple[CacheRecord, set[str], bool]:
        """Load the record, clearing font entries written by another version.

        Returns the record, the base names whose outputs an earlier run
        published, and whether a version mismatch invalidated the record.
        Published outputs stay managed across an invalidation so they are
        never staged as sources.
        """
        existed = self.exists()
        record = self.load()
        managed = record.managed_bases()
        if existed and not record.is_current():
            return record.invalidated(), managed, True
        return record, managed, False

    def save(self, record: CacheRecord) -> None:
        """Overwrite the stored record atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write_text(self.path, record.to_json())


def is_up_to_date(
    record: CacheRecord,
    base_name: str,
    digest: str,
    text_hash: str,
    output_path: Path,
) -> bool:
    """Return whether ``base_name`` can keep its existing output."""
    if not record.is_current():
        return False
    if not digests_match(record.fonts.get(base_name), digest):
        return False
    if record.text_hash != text_hash:
        return False
    return output_path.is_file()


__all__ = ["CacheRecord", "CacheStore", "is_up_to_date"]
