"""Parallel subsetting of stale font groups.

Each `ProcessingTask` is handled independently: the canonical source is read,
decompressed when needed, subset to the shared character set, published
atomically as ``<base>.woff2`` and superseded same-base outputs are removed.
Failures drop the task and leave the original files untouched.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
import contextlib
from dataclasses import dataclass
from pathlib import Path

from subfont.charset import CharacterSet
from subfont.exceptions import DecompressError, SubsetError, exception_hint
from subfont.manifest import manifest_alias
from subfont.reporting import Reporter, ReportLevel
from subfont.subsetter import LAYOUT_FEATURES, decompress_woff2, is_woff2, subset_to_woff2
from subfont.utils import atomic_write_bytes, temp_path_for


OUTPUT_SUFFIX = ".woff2"


@dataclass(frozen=True, slots=True)
class ProcessingTask:
    """Work item for one stale base name."""

    base_name: str
    source_path: Path
    source_digest: str
    output_dir: Path

    @property
    def output_name(self) -> str:
        return f"{self.base_name}{OUTPUT_SUFFIX}"

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_name

    @property
    def temp_path(self) -> Path:
        return temp_path_for(self.output_path)

    @property
    def alias(self) -> str:
        return manifest_alias(self.base_name)


@dataclass(frozen=True, slots=True)
class TaskResult:
    """Outcome of a successful task."""

    base_name: str
    source_digest: str
    alias: str
    output_name: str
    original_size: int
    new_size: int


Subsetter = Callable[[bytes, CharacterSet, Sequence[str]], bytes]


def _default_subsetter(data: bytes, charset: CharacterSet, features: Sequence[str]) -> bytes:
    return subset_to_woff2(data, charset.text, features)


def sweep_stale_outputs(task: ProcessingTask, reporter: Reporter) -> list[Path]:
    """Delete files in the output directory sharing the task's base name."""
    removed: list[Path] = []
    try:
        entries = sorted(task.output_dir.iterdir())
    except OSError as exc:
        reporter.report(ReportLevel.WARNING, f"Could not scan {task.output_dir}: {exc}")
        return removed
    for entry in entries:
        if entry.name == task.output_name or entry.stem != task.base_name:
            continue
        if not entry.is_file():
            continue
        try:
            entry.unlink()
        except OSError as exc:
            reporter.report(ReportLevel.WARNING, f"Could not remove old {entry.name}: {exc}")
            continue
        removed.append(entry)
    return removed


def run_task(
    task: ProcessingTask,
    charset: CharacterSet,
    reporter: Reporter,
    *,
    features: Sequence[str] = LAYOUT_FEATURES,
    subsetter: Subsetter = _default_subsetter,
) -> TaskResult | None:
    """Process a single task, returning ``None`` when it has to be dropped."""
    try:
        source_bytes = task.source_path.read_bytes()
    except OSError as exc:
        reporter.report(
            ReportLevel.ERROR, f"Failed to read input for {task.output_name}: {exc}"
        )
        return None

    font_data = source_bytes
    if task.source_path.suffix.lower() == OUTPUT_SUFFIX or is_woff2(source_bytes):
        try:
            font_data = decompress_woff2(source_bytes)
        except DecompressError as exc:
            reporter.report(
                ReportLevel.WARNING, f"Decompress failed for {task.output_name}: {exc}"
            )
            return None

    try:
        woff2_data = subsetter(font_data, charset, features)
    except SubsetError as exc:
        reporter.report(ReportLevel.WARNING, f"Subset error for {task.output_name}: {exc}")
        reporter.report(
            ReportLevel.ERROR,
            f"✗ Failed to process {task.output_name} - keeping original formats",
        )
        with contextlib.suppress(OSError):
            task.temp_path.unlink()
        return None

    try:
        atomic_write_bytes(task.output_path, woff2_data, temp_path=task.temp_path)
    except OSError as exc:
        reporter.report(ReportLevel.ERROR, f"Failed to write {task.output_name}: {exc}")
        return None

    sweep_stale_outputs(task, reporter)

    original_kb = len(source_bytes) // 1024
    new_kb = len(woff2_data) // 1024
    reporter.report(
        ReportLevel.SUCCESS, f"{task.output_name}: {original_kb}KB → {new_kb}KB"
    )
    return TaskResult(
        base_name=task.base_name,
        source_digest=task.source_digest,
        alias=task.alias,
        output_name=task.output_name,
        original_size=len(source_bytes),
        new_size=len(woff2_data),
    )


def process_tasks(
    tasks: Sequence[ProcessingTask],
    charset: CharacterSet,
    reporter: Reporter,
    *,
    jobs: int | None = None,
    features: Sequence[str] = LAYOUT_FEATURES,
    subsetter: Subsetter = _default_subsetter,
) -> list[TaskResult]:
    """Run ``tasks`` on a thread pool and collect the successful results."""
    if not tasks:
        return []

    def _guarded(task: ProcessingTask) -> TaskResult | None:
        try:
            return run_task(
                task, charset, reporter, features=features, subsetter=subsetter
            )
        except Exception as exc:  # one broken task must not sink the batch
            detail = exception_hint(exc) or type(exc).__name__
            reporter.report(
                ReportLevel.ERROR,
                f"Unexpected failure while processing {task.output_name}: {detail}",
            )
            return None

    with ThreadPoolExecutor(max_workers=jobs) as executor:
        outcomes = list(executor.map(_guarded, tasks))
    return [outcome for outcome in outcomes if outcome is not None]


__all__ = [
    "OUTPUT_SUFFIX",
    "ProcessingTask",
    "TaskResult",
    "process_tasks",
    "run_task",
    "sweep_stale_outputs",
]
