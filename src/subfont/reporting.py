"""Reporting helpers shared by the pipeline stages.

Every stage receives a `Reporter` and calls ``report(level, message)``; how the
message is rendered is the reporter's concern. `ConsoleReporter` integrates
with the CLI state and its Rich consoles, `LoggingReporter` forwards to the
standard `logging` module for library callers, and `RecordingReporter` keeps
messages in memory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from threading import Lock
from typing import Any, Protocol, runtime_checkable

import typer


logger = logging.getLogger("subfont")


class ReportLevel(str, Enum):
    """Severity attached to a reported message."""

    DEBUG = "debug"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@runtime_checkable
class Reporter(Protocol):
    """Interface used by the pipeline to surface progress and diagnostics."""

    def report(self, level: ReportLevel | str, message: str) -> None: ...


def _coerce_level(level: ReportLevel | str) -> ReportLevel:
    if isinstance(level, ReportLevel):
        return level
    try:
        return ReportLevel(str(level).lower())
    except ValueError:
        return ReportLevel.INFO


def _render_message(message: str, args: tuple[Any, ...]) -> str:
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = " ".join([message, *(str(arg) for arg in args)])
    return message


class _ReporterShortcuts:
    """Convenience methods mirroring the CLI vocabulary; subclasses provide ``report``."""

    def debug(self, message: str, *args: Any) -> None:
        self.report(ReportLevel.DEBUG, _render_message(message, args))

    def info(self, message: str, *args: Any) -> None:
        self.report(ReportLevel.INFO, _render_message(message, args))

    def success(self, message: str, *args: Any) -> None:
        self.report(ReportLevel.SUCCESS, _render_message(message, args))

    def warning(self, message: str, *args: Any) -> None:
        self.report(ReportLevel.WARNING, _render_message(message, args))

    def error(self, message: str, *args: Any) -> None:
        self.report(ReportLevel.ERROR, _render_message(message, args))


def _resolve_state() -> object | None:
    try:
        from subfont.ui.cli.state import get_cli_state
    except ImportError:  # pragma: no cover - CLI extras unavailable
        return None
    try:
        return get_cli_state(create=False)
    except RuntimeError:
        return None


_SECHO_COLORS = {
    ReportLevel.DEBUG: "bright_black",
    ReportLevel.INFO: "blue",
    ReportLevel.SUCCESS: "green",
    ReportLevel.WARNING: "yellow",
    ReportLevel.ERROR: "red",
}


@dataclass(slots=True)
class ConsoleReporter(_ReporterShortcuts):
    """Render messages on the CLI consoles with graceful degradation."""

    verbose: bool = False
    _state: object | None = field(default=None, init=False, repr=False)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self._state = _resolve_state()

    def report(self, level: ReportLevel | str, message: str) -> None:
        resolved = _coerce_level(level)
        if resolved is ReportLevel.DEBUG and not self.verbose:
            return
        with self._lock:
            if self._state is not None and self._render_rich(resolved, message):
                return
            err = resolved in {ReportLevel.WARNING, ReportLevel.ERROR}
            typer.secho(f" {message}", fg=_SECHO_COLORS[resolved], err=err)

    def _render_rich(self, level: ReportLevel, message: str) -> bool:
        from rich.text import Text

        from subfont.ui.cli.state import render_message

        if level in {ReportLevel.WARNING, ReportLevel.ERROR}:
            render_message(level.value, message, state=self._state)  # type: ignore[arg-type]
            return True
        console = self._state.console  # type: ignore[attr-defined]
        if level is ReportLevel.SUCCESS:
            console.print(Text.assemble((" ✓ ", "bold green"), (message, "green")))
        elif level is ReportLevel.DEBUG:
            console.print(Text(f" {message}", style="dim"))
        else:
            console.print(Text(f" {message}", style="blue"))
        return True


_LOGGING_LEVELS = {
    ReportLevel.DEBUG: logging.DEBUG,
    ReportLevel.INFO: logging.INFO,
    ReportLevel.SUCCESS: logging.INFO,
    ReportLevel.WARNING: logging.WARNING,
    ReportLevel.ERROR: logging.ERROR,
}


class LoggingReporter(_ReporterShortcuts):
    """Reporter that forwards messages to the standard logging module."""

    def __init__(self, *, logger_obj: logging.Logger | None = None) -> None:
        self._logger = logger_obj or logger

    def report(self, level: ReportLevel | str, message: str) -> None:
        self._logger.log(_LOGGING_LEVELS[_coerce_level(level)], message)


class NullReporter(_ReporterShortcuts):
    """Reporter that ignores every message."""

    def report(self, level: ReportLevel | str, message: str) -> None:
        return


class RecordingReporter(_ReporterShortcuts):
    """Reporter that keeps every message in memory."""

    def __init__(self) -> None:
        self.records: list[tuple[ReportLevel, str]] = []
        self._lock = Lock()

    def report(self, level: ReportLevel | str, message: str) -> None:
        with self._lock:
            self.records.append((_coerce_level(level), message))

    def messages(self, level: ReportLevel | str | None = None) -> list[str]:
        """Return recorded messages, optionally filtered by level."""
        if level is None:
            return [message for _, message in self.records]
        wanted = _coerce_level(level)
        return [message for recorded, message in self.records if recorded is wanted]


def ensure_reporter(reporter: Reporter | None) -> Reporter:
    """Return ``reporter`` or a logging-backed default."""
    return reporter if reporter is not None else LoggingReporter()


__all__ = [
    "ConsoleReporter",
    "LoggingReporter",
    "NullReporter",
    "RecordingReporter",
    "ReportLevel",
    "Reporter",
    "ensure_reporter",
]
