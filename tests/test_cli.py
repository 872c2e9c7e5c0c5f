from __future__ import annotations

import importlib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from subfont.exceptions import WorkspaceError
from subfont.ui.cli import app
import subfont.ui.cli.state as cli_state
from subfont.version import get_version


run_module = importlib.import_module("subfont.ui.cli.commands.run")
runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_state(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_state, "_STATE_VAR", cli_state.ContextVar("test_state", default=None))


@pytest.fixture
def inter(project: Path, font_dir: Path, font_factory) -> Path:
    source = project / "src" / "pages" / "index.astro"
    source.parent.mkdir(parents=True)
    source.write_text("<h1>Grüße</h1>", encoding="utf-8")
    return font_factory(font_dir / "Inter-Regular.ttf", characters="Grüße ")


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.output.strip() == get_version()


def test_run_command_subsets_fonts(project: Path, font_dir: Path, inter: Path) -> None:
    result = runner.invoke(app, ["run", "--root", str(project), "--jobs", "2"])

    assert result.exit_code == 0, result.output
    assert "Starting Font Subset Optimization" in result.output
    assert "Finished! All fonts optimized." in result.output
    assert (font_dir / "Inter-Regular.woff2").is_file()


def test_run_command_verbose_prints_summary(project: Path, inter: Path) -> None:
    result = runner.invoke(app, ["run", "--root", str(project), "-v"])

    assert result.exit_code == 0, result.output
    assert "Font subsets" in result.output
    assert "inter-regular" in result.output


def test_run_command_honours_project_root_env(
    project: Path, inter: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PROJECT_ROOT", str(project))
    result = runner.invoke(app, ["run"])

    assert result.exit_code == 0, result.output
    assert (project / ".subfont" / "font-manifest.json").is_file()


def test_run_command_without_fonts(tmp_path: Path) -> None:
    result = runner.invoke(app, ["run", "--root", str(tmp_path)])

    assert result.exit_code == 0
    assert "No font directory found" in result.output


def test_run_command_reports_workspace_errors(
    project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def fail(settings, reporter):
        raise WorkspaceError("Unable to create working directory")

    monkeypatch.setattr(run_module, "run_subset", fail)
    result = runner.invoke(app, ["run", "--root", str(project)])

    assert result.exit_code == 1
    assert "Unable to create working directory" in result.output


def test_jobs_must_be_positive(project: Path) -> None:
    result = runner.invoke(app, ["run", "--root", str(project), "--jobs", "0"])
    assert result.exit_code != 0


def test_tags_command_renders_head_markup(project: Path, inter: Path) -> None:
    assert runner.invoke(app, ["run", "--root", str(project)]).exit_code == 0

    result = runner.invoke(app, ["tags", "--root", str(project), "--no-hash"])

    assert result.exit_code == 0, result.output
    assert '<link rel="preload" href="/_astro/fonts/Inter-Regular.woff2"' in result.output
    assert 'font-family: "Inter-regular";' in result.output


def test_tags_command_uses_font_config(project: Path, inter: Path) -> None:
    (project / "subfont.yaml").write_text(
        "inter:\n  alias: Inter\n  stylePlacement: body\n", encoding="utf-8"
    )
    assert runner.invoke(app, ["run", "--root", str(project)]).exit_code == 0

    body = runner.invoke(
        app, ["tags", "--root", str(project), "--placement", "body", "--prefix", "/fonts/"]
    )

    assert body.exit_code == 0, body.output
    assert 'font-family: "Inter";' in body.output
    assert 'src: url("/fonts/Inter-Regular-' in body.output
    assert "preload" not in body.output


def test_tags_command_rejects_unknown_placement(project: Path) -> None:
    result = runner.invoke(app, ["tags", "--root", str(project), "--placement", "footer"])
    assert result.exit_code != 0


def test_tags_command_reports_invalid_config(project: Path) -> None:
    (project / "subfont.yaml").write_text("inter: {tagPlacement: footer}\n", encoding="utf-8")
    result = runner.invoke(app, ["tags", "--root", str(project)])

    assert result.exit_code == 1
    assert "Invalid configuration for font 'inter'" in result.output


def test_export_command_copies_fonts(project: Path, inter: Path, tmp_path: Path) -> None:
    assert runner.invoke(app, ["run", "--root", str(project)]).exit_code == 0
    destination = tmp_path / "dist" / "fonts"

    result = runner.invoke(app, ["export", str(destination), "--root", str(project)])

    assert result.exit_code == 0, result.output
    exported = [path.name for path in destination.iterdir()]
    assert len(exported) == 1
    assert exported[0].startswith("Inter-Regular-")
    assert "Copied 1 font file to" in result.output
