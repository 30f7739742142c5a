"""
Integration tests for the edit_resume.py command-line front end.
Tests: each command opens the stored document, applies one change, and persists it.
"""

import importlib.util
import json
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from folio.contexts.persistence import STORAGE_KEY

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "edit_resume.py"

runner = CliRunner()


@pytest.fixture
def cli(tmp_path, monkeypatch):
    """Load the CLI module with storage, logs and exports under tmp_path."""
    spec = importlib.util.spec_from_file_location("edit_resume", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    monkeypatch.setattr(module, "STORAGE_PATH", tmp_path / "storage")
    monkeypatch.setattr(module, "LOGS_PATH", tmp_path / "logs")
    monkeypatch.setattr(module, "EXPORT_PATH", tmp_path / "exports")
    yield module
    # The CLI points loguru at the runner's stdout; drop those sinks
    logger.remove()


def _stored(tmp_path):
    return json.loads((tmp_path / "storage" / STORAGE_KEY).read_text(encoding="utf-8"))


@pytest.mark.integration
def test_no_command_shows_help(cli):
    """Test that running without a command prints help."""
    result = runner.invoke(cli.app, [])

    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.integration
def test_add_persists_placeholder(cli, tmp_path):
    """Test that 'add' appends a section and writes it to storage."""
    result = runner.invoke(cli.app, ["add"])

    assert result.exit_code == 0, result.output
    assert [s["title"] for s in _stored(tmp_path)["sections"]] == ["Summary", "Skills", "New Section"]


@pytest.mark.integration
def test_edit_and_move(cli, tmp_path):
    """Test that consecutive invocations build on the stored document."""
    assert runner.invoke(cli.app, ["edit", "1", "--title", "  Tools  "]).exit_code == 0
    assert runner.invoke(cli.app, ["move", "1", "0"]).exit_code == 0

    sections = _stored(tmp_path)["sections"]
    assert [s["title"] for s in sections] == ["Tools", "Summary"]
    assert sections[0]["content"].startswith("<ul")


@pytest.mark.integration
def test_invalid_move_fails_without_writing(cli, tmp_path):
    """Test that a rejected move exits non-zero and stores nothing."""
    result = runner.invoke(cli.app, ["move", "x", "0"])

    assert result.exit_code == 1
    assert not (tmp_path / "storage" / STORAGE_KEY).exists()


@pytest.mark.integration
def test_remove_requires_confirmation(cli, tmp_path):
    """Test that declining the confirmation leaves the document alone."""
    declined = runner.invoke(cli.app, ["remove", "0"], input="n\n")
    assert declined.exit_code == 1
    assert not (tmp_path / "storage" / STORAGE_KEY).exists()

    accepted = runner.invoke(cli.app, ["remove", "0", "--yes"])
    assert accepted.exit_code == 0
    assert [s["title"] for s in _stored(tmp_path)["sections"]] == ["Skills"]


@pytest.mark.integration
def test_export_then_import(cli, tmp_path):
    """Test exporting resume-data.json and importing it after a reset."""
    assert runner.invoke(cli.app, ["sample", "--yes"]).exit_code == 0
    export = runner.invoke(cli.app, ["export"])
    assert export.exit_code == 0
    exported = tmp_path / "exports" / "resume-data.json"
    assert exported.exists()

    assert runner.invoke(cli.app, ["reset", "--yes"]).exit_code == 0
    assert not (tmp_path / "storage" / STORAGE_KEY).exists()

    imported = runner.invoke(cli.app, ["import", str(exported)])
    assert imported.exit_code == 0, imported.output
    assert _stored(tmp_path) == json.loads(exported.read_text(encoding="utf-8"))


@pytest.mark.integration
def test_import_invalid_file_reports_error(cli, tmp_path):
    """Test that an import without sections is reported and nothing is stored."""
    bad = tmp_path / "bad.json"
    bad.write_text('{"name": "B"}', encoding="utf-8")

    result = runner.invoke(cli.app, ["import", str(bad)])

    assert result.exit_code == 1
    assert "Import failed" in result.output
    assert not (tmp_path / "storage" / STORAGE_KEY).exists()


@pytest.mark.integration
def test_theme_and_preview(cli, tmp_path):
    """Test theme persistence and themed preview output."""
    assert runner.invoke(cli.app, ["theme", "green"]).exit_code == 0
    shown = runner.invoke(cli.app, ["theme"])
    assert "green" in shown.output

    output = tmp_path / "preview.html"
    assert runner.invoke(cli.app, ["preview", "--output", str(output)]).exit_code == 0
    assert "theme-green" in output.read_text(encoding="utf-8")


@pytest.mark.integration
def test_header_and_save(cli, tmp_path):
    """Test header editing and explicit save."""
    assert runner.invoke(cli.app, ["header", "--name", " Jane Doe "]).exit_code == 0
    assert _stored(tmp_path)["name"] == "Jane Doe"

    assert runner.invoke(cli.app, ["save"]).exit_code == 0
    status = runner.invoke(cli.app, ["status"])
    assert "Sections: 2" in status.output
