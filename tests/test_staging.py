from __future__ import annotations

from pathlib import Path

from subfont.reporting import RecordingReporter, ReportLevel
from subfont.staging import sync_sources


def _dirs(tmp_path: Path) -> tuple[Path, Path]:
    fonts = tmp_path / "fonts"
    source = tmp_path / "source"
    fonts.mkdir()
    source.mkdir()
    return fonts, source


def test_copies_new_and_changed_fonts(tmp_path: Path) -> None:
    fonts, source = _dirs(tmp_path)
    (fonts / "Inter.ttf").write_bytes(b"v1")
    (fonts / "notes.txt").write_text("ignored", encoding="utf-8")

    assert sync_sources(fonts, source, set(), RecordingReporter()) == ["Inter.ttf"]
    assert (source / "Inter.ttf").read_bytes() == b"v1"
    assert not (source / "notes.txt").exists()

    assert sync_sources(fonts, source, set(), RecordingReporter()) == []

    (fonts / "Inter.ttf").write_bytes(b"v2")
    assert sync_sources(fonts, source, set(), RecordingReporter()) == ["Inter.ttf"]
    assert (source / "Inter.ttf").read_bytes() == b"v2"


def test_managed_woff2_outputs_are_not_staged(tmp_path: Path) -> None:
    fonts, source = _dirs(tmp_path)
    (fonts / "Inter.woff2").write_bytes(b"subset")
    (fonts / "Mono.woff2").write_bytes(b"user supplied")
    reporter = RecordingReporter()

    copied = sync_sources(fonts, source, {"Inter"}, reporter)

    assert copied == ["Mono.woff2"]
    assert not (source / "Inter.woff2").exists()
    assert "- Inter.woff2: Managed subset (skipping copy)" in reporter.messages(ReportLevel.INFO)


def test_woff_and_hidden_files_are_skipped(tmp_path: Path) -> None:
    fonts, source = _dirs(tmp_path)
    (fonts / "Legacy.woff").write_bytes(b"woff")
    (fonts / ".DS_Store.ttf").write_bytes(b"hidden")
    reporter = RecordingReporter()

    assert sync_sources(fonts, source, set(), reporter) == []
    assert reporter.messages(ReportLevel.INFO) == ["- Legacy.woff: WOFF format not supported - skipping"]
