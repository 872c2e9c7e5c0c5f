"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


PROJECT_PANEL = "Project"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

RootOption = Annotated[
    Path | None,
    typer.Option(
        "--root",
        "-r",
        help="Project root. Defaults to $PROJECT_ROOT or the current directory.",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        rich_help_panel=PROJECT_PANEL,
    ),
]

JobsOption = Annotated[
    int | None,
    typer.Option(
        "--jobs",
        "-j",
        min=1,
        help="Maximum number of worker threads.",
        rich_help_panel=PROJECT_PANEL,
    ),
]

PrefixOption = Annotated[
    str,
    typer.Option(
        "--prefix",
        help="Public URL prefix under which fonts are served.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

HashFontsOption = Annotated[
    bool,
    typer.Option(
        "--hash/--no-hash",
        help="Append a content hash to the public font file names.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase diagnostic output (repeat for more detail).",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks on unexpected errors.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]


__all__ = [
    "DebugOption",
    "HashFontsOption",
    "JobsOption",
    "PrefixOption",
    "RootOption",
    "VerboseOption",
]
