from __future__ import annotations

import hashlib

from subfont.hashing import HASH_ERROR, digests_match, hash_bytes, hash_file
from subfont.reporting import RecordingReporter, ReportLevel


def test_hash_bytes_is_md5_hex() -> None:
    assert hash_bytes(b"hello") == hashlib.md5(b"hello").hexdigest()


def test_hash_file_reads_content(tmp_path) -> None:
    target = tmp_path / "font.ttf"
    target.write_bytes(b"\x00\x01\x00\x00payload")
    assert hash_file(target) == hash_bytes(b"\x00\x01\x00\x00payload")


def test_hash_file_returns_sentinel_on_missing_file(tmp_path) -> None:
    reporter = RecordingReporter()
    digest = hash_file(tmp_path / "missing.ttf", reporter)

    assert digest == HASH_ERROR
    errors = reporter.messages(ReportLevel.ERROR)
    assert len(errors) == 1
    assert errors[0].startswith("Failed to hash missing.ttf")


def test_sentinel_never_matches() -> None:
    assert digests_match("abc", "abc")
    assert not digests_match("abc", "abd")
    assert not digests_match(HASH_ERROR, HASH_ERROR)
    assert not digests_match(None, "abc")
    assert not digests_match("abc", None)
