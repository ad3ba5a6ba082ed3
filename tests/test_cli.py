"""Tests for the tsdoc-coverage CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from rich.console import Console

from tsdoc_coverage.cli import cli
from tsdoc_coverage.reporters.terminal import reporter

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A project directory that is also the working directory."""
    (tmp_path / "a.ts").write_text(
        "/** Documented. */\nexport function a() {}\n", encoding="utf-8"
    )
    (tmp_path / "b.ts").write_text("export const b = () => 1;\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestTopLevel:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.0.0" in result.output

    def test_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "documentation coverage" in result.output
        assert "check" in result.output

    def test_no_command_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, [])
        assert result.exit_code == 2
        assert "check" in result.output

    def test_unknown_command(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["audit"])
        assert result.exit_code != 0


class TestCheckCommand:
    def test_prints_table(self, runner: CliRunner, project: Path) -> None:
        with patch.object(reporter, "console", Console(width=200)):
            result = runner.invoke(cli, ["check"])
        assert result.exit_code == 0, result.output
        assert "Total" in result.output
        assert "50%" in result.output
        assert "a.ts" in result.output

    def test_reports_all_files(self, runner: CliRunner, project: Path) -> None:
        with patch("tsdoc_coverage.cli.reporter.print_coverage_summary") as mock_print:
            result = runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        (summary,) = mock_print.call_args.args
        assert [f.file_path for f in summary.files] == [
            str((project / "a.ts").resolve()),
            str((project / "b.ts").resolve()),
        ]
        assert summary.files[1].undocumented_lines == "1-1"

    def test_empty_directory(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        with patch("tsdoc_coverage.cli.reporter.print_coverage_summary") as mock_print:
            result = runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        (summary,) = mock_print.call_args.args
        assert summary.files == []

    def test_read_failure_is_fatal(self, runner: CliRunner, project: Path) -> None:
        with patch("tsdoc_coverage.project.parse_file", side_effect=OSError("denied")):
            result = runner.invoke(cli, ["check"])
        assert result.exit_code != 0
        assert isinstance(result.exception, OSError)
