"""Incremental web font subsetting.

Architecture
: `extract_characters` reduces a source tree to the set of characters it
  uses, with a digest that only depends on that set.
: `CacheStore` remembers which source digest produced each output and which
  character set was used, so unchanged fonts are skipped on later runs.
: `scan_candidates`/`group_candidates` pick one canonical source per base name
  among duplicated, symlinked, or multi-format font files.
: `process_tasks` subsets the stale groups in parallel and publishes each
  output atomically; `run_subset` wires everything and writes the manifest.
"""

from subfont.cache import CacheRecord, CacheStore, is_up_to_date
from subfont.charset import CharacterSet, extract_characters
from subfont.config import FontFaceConfig, ProjectLayout, SubfontSettings
from subfont.coordinator import RunSummary, run_subset
from subfont.exceptions import SubfontError, WorkspaceError
from subfont.pipeline import ProcessingTask, TaskResult, process_tasks
from subfont.reporting import (
    ConsoleReporter,
    LoggingReporter,
    NullReporter,
    RecordingReporter,
    Reporter,
    ReportLevel,
)
from subfont.variants import FontCandidate, FontFormat, FontGroup, VariantRank
from subfont.version import CULL_VERSION, get_version


__version__ = get_version()

__all__ = [
    "CULL_VERSION",
    "CacheRecord",
    "CacheStore",
    "CharacterSet",
    "ConsoleReporter",
    "FontCandidate",
    "FontFaceConfig",
    "FontFormat",
    "FontGroup",
    "LoggingReporter",
    "NullReporter",
    "ProcessingTask",
    "ProjectLayout",
    "RecordingReporter",
    "ReportLevel",
    "Reporter",
    "RunSummary",
    "SubfontError",
    "SubfontSettings",
    "TaskResult",
    "VariantRank",
    "WorkspaceError",
    "__version__",
    "extract_characters",
    "get_version",
    "is_up_to_date",
    "process_tasks",
    "run_subset",
]
