"""Typer application wiring for the subfont CLI."""

from __future__ import annotations

import typer

from subfont.version import get_version

from .commands import export, run, tags
from .state import debug_enabled, emit_error, get_cli_state


app = typer.Typer(
    help="Subset web fonts to the characters a project actually uses.",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)

app.command("run")(run)
app.command("tags")(tags)
app.command("export")(export)


@app.command("version")
def version() -> None:
    """Print the installed subfont version."""
    typer.echo(get_version())


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:
        state = get_cli_state()
        if state.show_tracebacks:
            from rich.traceback import Traceback

            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(f"✗ Critical failure: {exc}", exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
