"""Implementation of the `subfont run` command."""

from __future__ import annotations

import typer

from subfont.config import SubfontSettings
from subfont.coordinator import RunSummary, run_subset
from subfont.exceptions import SubfontError
from subfont.reporting import ConsoleReporter

from .._options import DebugOption, JobsOption, RootOption, VerboseOption
from ..state import emit_error, get_cli_state, set_cli_state


def _present_summary(summary: RunSummary) -> None:
    if summary.skipped:
        return
    from rich.table import Table
    from rich.text import Text

    table = Table(title="Font subsets", header_style="bold cyan")
    table.add_column("Alias", style="magenta")
    table.add_column("File")
    table.add_column("Status")

    processed = {result.output_name: result for result in summary.processed}
    for alias, file_name in summary.manifest.items():
        result = processed.get(file_name)
        if result is None:
            status = "[green]cached[/]"
        else:
            status = (
                f"[bold green]subset[/] {result.original_size // 1024}KB → "
                f"{result.new_size // 1024}KB"
            )
        table.add_row(Text(alias), Text(file_name), status)
    for base_name in summary.failed:
        table.add_row("-", Text(base_name), "[red]failed[/]")

    get_cli_state().console.print(table)


def run(
    ctx: typer.Context,
    root: RootOption = None,
    jobs: JobsOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Subset the project's fonts to the characters used in its sources."""
    set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)
    settings = SubfontSettings.from_environment(
        project_root=root,
        jobs=jobs,
        verbose=verbose > 0,
    )
    reporter = ConsoleReporter(verbose=settings.verbose)
    try:
        summary = run_subset(settings, reporter)
    except SubfontError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    if verbose:
        _present_summary(summary)


__all__ = ["run"]
