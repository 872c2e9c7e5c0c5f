"""Implementation of the `subfont tags` and `subfont export` commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from subfont.assets import (
    DEFAULT_PREFIX,
    Placement,
    export_assets,
    render_font_tags,
    resolve_font_assets,
)
from subfont.config import SubfontSettings, load_font_face_config
from subfont.exceptions import SubfontError
from subfont.reporting import ConsoleReporter

from .._options import DebugOption, HashFontsOption, PrefixOption, RootOption
from ..state import emit_error, get_cli_state, set_cli_state


PlacementOption = Annotated[
    str,
    typer.Option(
        "--placement",
        "-p",
        help="Render the tags destined for the document head or body.",
    ),
]


def _placement(value: str) -> Placement:
    lowered = value.strip().lower()
    if lowered == "head":
        return "head"
    if lowered == "body":
        return "body"
    raise typer.BadParameter("placement must be 'head' or 'body'.", param_hint="--placement")


def tags(
    ctx: typer.Context,
    root: RootOption = None,
    placement: PlacementOption = "head",
    prefix: PrefixOption = DEFAULT_PREFIX,
    hash_fonts: HashFontsOption = True,
    debug: DebugOption = False,
) -> None:
    """Print preload links and @font-face rules for the published fonts."""
    set_cli_state(ctx=ctx, debug=debug)
    target = _placement(placement)
    layout = SubfontSettings.from_environment(project_root=root).layout()
    reporter = ConsoleReporter()
    try:
        config = load_font_face_config(layout.font_config)
    except SubfontError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    assets = resolve_font_assets(layout, reporter, prefix=prefix, hash_fonts=hash_fonts)
    output = render_font_tags(assets, config, target)
    if output:
        typer.echo(output, nl=False)


def export(
    ctx: typer.Context,
    destination: Annotated[
        Path,
        typer.Argument(
            help="Directory receiving the published font files.",
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
        ),
    ],
    root: RootOption = None,
    prefix: PrefixOption = DEFAULT_PREFIX,
    hash_fonts: HashFontsOption = True,
    debug: DebugOption = False,
) -> None:
    """Copy the published fonts into a build output directory."""
    set_cli_state(ctx=ctx, debug=debug)
    layout = SubfontSettings.from_environment(project_root=root).layout()
    reporter = ConsoleReporter()
    assets = resolve_font_assets(layout, reporter, prefix=prefix, hash_fonts=hash_fonts)
    try:
        copied = export_assets(assets, destination, reporter)
    except OSError as exc:
        emit_error(f"Unable to prepare {destination}: {exc}", exception=exc)
        raise typer.Exit(code=1) from exc
    plural = "" if copied == 1 else "s"
    get_cli_state().console.print(
        f"Copied {copied} font file{plural} to {destination}", markup=False
    )


__all__ = ["export", "tags"]
