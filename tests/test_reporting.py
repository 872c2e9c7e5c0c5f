from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import logging

import pytest

from subfont import reporting
from subfont.reporting import (
    ConsoleReporter,
    LoggingReporter,
    NullReporter,
    RecordingReporter,
    ReportLevel,
    ensure_reporter,
)
import subfont.ui.cli.state as cli_state


def test_recording_reporter_shortcuts() -> None:
    reporter = RecordingReporter()
    reporter.info("Scanning %d files", 3)
    reporter.warning("careful")
    reporter.report("bogus", "unknown levels become info")

    assert reporter.records == [
        (ReportLevel.INFO, "Scanning 3 files"),
        (ReportLevel.WARNING, "careful"),
        (ReportLevel.INFO, "unknown levels become info"),
    ]
    assert reporter.messages(ReportLevel.WARNING) == ["careful"]


def test_logging_reporter_maps_levels(caplog: pytest.LogCaptureFixture) -> None:
    reporter = LoggingReporter()
    with caplog.at_level(logging.DEBUG, logger="subfont"):
        reporter.success("done")
        reporter.error("broken")

    assert [(record.levelno, record.getMessage()) for record in caplog.records] == [
        (logging.INFO, "done"),
        (logging.ERROR, "broken"),
    ]


def test_ensure_reporter_defaults_to_logging() -> None:
    assert isinstance(ensure_reporter(None), LoggingReporter)
    null = NullReporter()
    assert ensure_reporter(null) is null


def test_console_reporter_falls_back_to_secho(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(reporting, "_resolve_state", lambda: None)
    reporter = ConsoleReporter(verbose=False)

    reporter.info("hello")
    reporter.debug("hidden")
    reporter.warning("watch out")

    captured = capsys.readouterr()
    assert "hello" in captured.out
    assert "hidden" not in captured.out
    assert "watch out" in captured.err


def test_console_reporter_keeps_cli_state_in_worker_threads(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(cli_state, "_STATE_VAR", cli_state.ContextVar("test_state", default=None))
    state = cli_state.set_cli_state(verbosity=2)
    captured: list[tuple[str, str, object]] = []

    def fake_render(level, message, *, exception=None, state=None) -> None:
        captured.append((level, message, state))

    monkeypatch.setattr(cli_state, "render_message", fake_render)
    reporter = ConsoleReporter(verbose=True)

    with ThreadPoolExecutor(max_workers=2) as executor:
        list(executor.map(reporter.warning, ["first", "second"]))

    assert sorted(message for _, message, _ in captured) == ["first", "second"]
    assert all(level == "warning" for level, _, _ in captured)
    assert all(seen is state for _, _, seen in captured)
