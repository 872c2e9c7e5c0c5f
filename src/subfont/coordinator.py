"""Run coordination: from the project tree to published subsets."""

from __future__ import annotations

from dataclasses import dataclass, field

from subfont.assets import ensure_gitignore
from subfont.cache import CacheRecord, CacheStore, is_up_to_date
from subfont.charset import LARGE_CHARSET_THRESHOLD, CharacterSet, extract_characters
from subfont.config import ProjectLayout, SubfontSettings
from subfont.exceptions import WorkspaceError
from subfont.hashing import HASH_ERROR, hash_file
from subfont.manifest import build_manifest, write_manifest
from subfont.metadata import read_font_metadata
from subfont.pipeline import ProcessingTask, Subsetter, TaskResult, process_tasks
from subfont.reporting import Reporter, ReportLevel, ensure_reporter
from subfont.staging import sync_sources
from subfont.variants import MetadataReader, group_candidates, scan_candidates
from subfont.version import CULL_VERSION


@dataclass(slots=True)
class RunSummary:
    """What a run decided and produced."""

    text_hash: str = ""
    characters: int = 0
    up_to_date: list[str] = field(default_factory=list)
    processed: list[TaskResult] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    manifest: dict[str, str] = field(default_factory=dict)
    skipped: bool = False

    @property
    def total(self) -> int:
        return len(self.up_to_date) + len(self.processed) + len(self.failed)


def _prepare_workspace(layout: ProjectLayout) -> None:
    try:
        layout.work_dir.mkdir(parents=True, exist_ok=True)
        layout.source_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WorkspaceError(
            f"Unable to create working directory {layout.work_dir}: {exc}"
        ) from exc


def plan_tasks(
    layout: ProjectLayout,
    cache: CacheRecord,
    charset: CharacterSet,
    reporter: Reporter,
    *,
    read_metadata: MetadataReader = read_font_metadata,
) -> tuple[list[ProcessingTask], dict[str, str], dict[str, str], list[str]]:
    """Split the staged groups into fresh and stale ones.

    Returns the tasks to run plus the cache entries, manifest entries and base
    names carried over from fresh groups.
    """
    candidates = scan_candidates(layout.source_dir, reporter, read_metadata=read_metadata)
    groups = group_candidates(candidates)

    tasks: list[ProcessingTask] = []
    fonts: dict[str, str] = {}
    manifest: dict[str, str] = {}
    fresh: list[str] = []

    for base_name, group in groups.items():
        source = group.canonical
        digest = hash_file(source.path, reporter)
        if digest == HASH_ERROR:
            continue
        task = ProcessingTask(
            base_name=base_name,
            source_path=source.path,
            source_digest=digest,
            output_dir=layout.font_dir,
        )
        if is_up_to_date(cache, base_name, digest, charset.digest, task.output_path):
            try:
                size_kb = task.output_path.stat().st_size // 1024
            except OSError:
                size_kb = 0
            reporter.report(
                ReportLevel.INFO, f"- {task.output_name}: Up to date ({size_kb}KB cached)"
            )
            fonts[base_name] = digest
            manifest[task.alias] = task.output_name
            fresh.append(base_name)
            continue
        reporter.report(
            ReportLevel.DEBUG,
            f"- {task.output_name}: using {source.file_name} ({source.rank.name})",
        )
        tasks.append(task)
    return tasks, fonts, manifest, fresh


def run_subset(
    settings: SubfontSettings | None = None,
    reporter: Reporter | None = None,
    *,
    read_metadata: MetadataReader = read_font_metadata,
    subsetter: Subsetter | None = None,
) -> RunSummary:
    """Run one incremental subsetting pass over the project.

    Per-font failures are reported and dropped. `WorkspaceError` is raised
    when the working directories or the final cache/manifest cannot be
    written.
    """
    settings = settings or SubfontSettings.from_environment()
    reporter = ensure_reporter(reporter)
    layout = settings.layout()

    reporter.report(ReportLevel.INFO, "🚀 Starting Font Subset Optimization...")

    charset = extract_characters(layout.src_dir, jobs=settings.jobs, reporter=reporter)
    summary = RunSummary(text_hash=charset.digest, characters=len(charset))
    if len(charset) > LARGE_CHARSET_THRESHOLD:
        reporter.report(
            ReportLevel.WARNING,
            f"Large character set detected ({len(charset)} unique chars) - "
            "subsetting may take a while",
        )

    if not layout.font_dir.is_dir():
        reporter.report(ReportLevel.WARNING, f"No font directory found at {layout.font_dir}.")
        summary.skipped = True
        return summary

    _prepare_workspace(layout)

    store = CacheStore(layout.cache_file)
    cache, managed, invalidated = store.load_for_run()
    if invalidated:
        reporter.report(
            ReportLevel.WARNING, "Subsetter version change detected - reprocessing all fonts."
        )

    try:
        ensure_gitignore(layout.gitignore)
    except OSError as exc:
        reporter.report(ReportLevel.WARNING, f"Could not update {layout.gitignore.name}: {exc}")

    sync_sources(layout.font_dir, layout.source_dir, managed, reporter)

    tasks, fonts, manifest, fresh = plan_tasks(
        layout, cache, charset, reporter, read_metadata=read_metadata
    )
    summary.up_to_date = fresh

    pipeline_kwargs = {"subsetter": subsetter} if subsetter is not None else {}
    results = process_tasks(tasks, charset, reporter, jobs=settings.jobs, **pipeline_kwargs)

    for result in results:
        fonts[result.base_name] = result.source_digest
        manifest[result.alias] = result.output_name
    succeeded = {result.base_name for result in results}
    summary.processed = results
    summary.failed = [task.base_name for task in tasks if task.base_name not in succeeded]
    summary.manifest = build_manifest(manifest)

    record = CacheRecord(text_hash=charset.digest, version=CULL_VERSION, fonts=fonts)
    try:
        write_manifest(layout.manifest_path, summary.manifest)
        reporter.report(
            ReportLevel.SUCCESS, f"Manifest generated at {layout.manifest_path.name}"
        )
        store.save(record)
    except (OSError, TypeError, ValueError) as exc:
        raise WorkspaceError(f"Unable to persist run results: {exc}") from exc

    reporter.report(ReportLevel.SUCCESS, "✨ Finished! All fonts optimized.")
    return summary


__all__ = ["RunSummary", "plan_tasks", "run_subset"]
