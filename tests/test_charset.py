from __future__ import annotations

from pathlib import Path

from subfont.charset import (
    BASELINE_CHARACTERS,
    CharacterSet,
    decode_text,
    extract_characters,
    iter_text_files,
    reduce_pairwise,
)
from subfont.hashing import hash_bytes
from subfont.reporting import RecordingReporter


def _write(path: Path, content: str | bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")


def test_baseline_covers_printable_ascii() -> None:
    assert len(BASELINE_CHARACTERS) == 95
    assert BASELINE_CHARACTERS[0] == " "
    assert BASELINE_CHARACTERS[-1] == "~"


def test_missing_root_yields_baseline(tmp_path: Path) -> None:
    charset = extract_characters(tmp_path / "absent")
    assert charset.characters == frozenset(BASELINE_CHARACTERS)


def test_extracts_characters_from_supported_extensions(tmp_path: Path) -> None:
    _write(tmp_path / "pages" / "index.astro", "Grüße")
    _write(tmp_path / "components" / "hello.tsx", "こんにちは")
    _write(tmp_path / "notes.py", "Ω")

    charset = extract_characters(tmp_path)

    assert "ü" in charset
    assert "ß" in charset
    assert "こ" in charset
    assert "Ω" not in charset


def test_text_and_digest_are_sorted_canonical(tmp_path: Path) -> None:
    _write(tmp_path / "a.md", "zé")
    charset = extract_characters(tmp_path)

    assert charset.text == "".join(sorted(charset.characters))
    assert charset.digest == hash_bytes(charset.text.encode("utf-8"))


def test_digest_is_independent_of_worker_count(tmp_path: Path) -> None:
    for index in range(23):
        _write(tmp_path / f"file{index:02d}.md", chr(0x400 + index) * 3)

    single = extract_characters(tmp_path, jobs=1)
    many = extract_characters(tmp_path, jobs=7)

    assert single.digest == many.digest
    assert single.characters == many.characters


def test_byte_order_mark_is_dropped(tmp_path: Path) -> None:
    _write(tmp_path / "bom.json", b"\xef\xbb\xbf{}")
    charset = extract_characters(tmp_path)
    assert "\ufeff" not in charset


def test_invalid_utf8_falls_back_to_latin1() -> None:
    assert decode_text(b"caf\xe9") == "café"


def test_iter_text_files_is_sorted_and_filtered(tmp_path: Path) -> None:
    _write(tmp_path / "b" / "two.md", "x")
    _write(tmp_path / "a" / "one.html", "x")
    _write(tmp_path / "a" / "skip.css", "x")
    _write(tmp_path / "root.vue", "x")

    names = [path.relative_to(tmp_path).as_posix() for path in iter_text_files(tmp_path)]

    assert names == ["root.vue", "a/one.html", "b/two.md"]


def test_scanning_is_reported(tmp_path: Path) -> None:
    _write(tmp_path / "a.md", "x")
    reporter = RecordingReporter()
    extract_characters(tmp_path, reporter=reporter)
    assert "Scanning 1 source files for unique characters..." in reporter.messages()


def test_reduce_pairwise_joins_odd_partial_counts() -> None:
    partials = [frozenset(ch) for ch in "abcde"]
    assert reduce_pairwise(partials) == frozenset("abcde")
    assert reduce_pairwise([]) == frozenset()


def test_character_set_membership() -> None:
    charset = CharacterSet(frozenset("ba"))
    assert len(charset) == 2
    assert charset.codepoints == [ord("a"), ord("b")]
