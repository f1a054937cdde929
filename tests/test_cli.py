"""Tests for the typer CLI."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from effluent_report.cli.app import app
from tests.conftest import SAMPLE_LINES, day_lines


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("EFFLUENT_PERCENTILE", "EFFLUENT_MIN_SAMPLES", "EFFLUENT_OUTPUT_DIR",
                 "EFFLUENT_EXCEL", "EFFLUENT_CSV", "EFFLUENT_DAILY_PAGES", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestReportCommand:
    """Test the report command end to end."""

    def test_writes_artifacts(self, runner, write_export, tmp_path):
        path = write_export(day_lines("01-03-2024", 12) + day_lines("02-03-2024", 4))
        out_dir = tmp_path / "out"

        result = runner.invoke(app, ["report", path, "--output-dir", str(out_dir)])

        assert result.exit_code == 0, result.output
        assert len(list(out_dir.glob("rvt-report-*.xlsx"))) == 1
        assert len(list(out_dir.glob("rvt-report-*.csv"))) == 1

    def test_no_csv(self, runner, write_export, tmp_path):
        path = write_export(day_lines("01-03-2024", 12))
        out_dir = tmp_path / "out"

        result = runner.invoke(app, ["report", path, "--output-dir", str(out_dir), "--no-csv"])

        assert result.exit_code == 0, result.output
        assert list(out_dir.glob("*.csv")) == []
        assert len(list(out_dir.glob("*.xlsx"))) == 1

    def test_malformed_line_writes_nothing(self, runner, write_export, tmp_path):
        path = write_export(day_lines("01-03-2024", 3) + [SAMPLE_LINES["bad_timestamp"]])
        out_dir = tmp_path / "out"

        result = runner.invoke(app, ["report", path, "--output-dir", str(out_dir)])

        assert result.exit_code == 1
        assert "Zeitstempel" in result.output
        assert not out_dir.exists()

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(app, ["report", str(tmp_path / "missing.txt")])
        assert result.exit_code == 1
        assert "gefunden" in result.output

    def test_invalid_percentile(self, runner, write_export, tmp_path):
        path = write_export(day_lines("01-03-2024", 12))
        result = runner.invoke(
            app, ["report", path, "--output-dir", str(tmp_path), "--percentile", "2"]
        )
        assert result.exit_code == 1
        assert "percentile" in result.output

    def test_no_format_enabled(self, runner, write_export, tmp_path):
        path = write_export(day_lines("01-03-2024", 12))
        result = runner.invoke(
            app, ["report", path, "--output-dir", str(tmp_path), "--no-csv", "--no-excel"]
        )
        assert result.exit_code == 1

    def test_verbose_option(self, runner, write_export, tmp_path):
        path = write_export(day_lines("01-03-2024", 12))
        out_dir = tmp_path / "out"

        result = runner.invoke(app, ["report", path, "--output-dir", str(out_dir), "--verbose"])

        assert result.exit_code == 0, result.output
        assert len(list(out_dir.glob("*.xlsx"))) == 1

    def test_unknown_log_level(self, runner, write_export, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        path = write_export(day_lines("01-03-2024", 12))

        result = runner.invoke(app, ["report", path, "--output-dir", str(tmp_path / "out")])

        assert result.exit_code == 1
        assert "LOUD" in result.output
        assert not (tmp_path / "out").exists()

    def test_unwritable_output_dir(self, runner, write_export, tmp_path):
        path = write_export(day_lines("01-03-2024", 12))
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        result = runner.invoke(app, ["report", path, "--output-dir", str(blocker / "out")])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Could not write report" in result.output


class TestSummaryCommand:
    """Test the terminal summary."""

    def test_gated_days_only(self, runner, write_export):
        path = write_export(day_lines("01-03-2024", 12) + day_lines("02-03-2024", 4))
        result = runner.invoke(app, ["summary", path])
        assert result.exit_code == 0, result.output
        assert "2024-03-01" in result.output
        assert "2024-03-02" not in result.output

    def test_all_days(self, runner, write_export):
        path = write_export(day_lines("01-03-2024", 12) + day_lines("02-03-2024", 4))
        result = runner.invoke(app, ["summary", path, "--all-days"])
        assert result.exit_code == 0, result.output
        assert "2024-03-02" in result.output

    def test_no_days_with_enough_readings(self, runner, write_export):
        path = write_export(day_lines("01-03-2024", 3))
        result = runner.invoke(app, ["summary", path])
        assert result.exit_code == 0
        assert "No days" in result.output

    def test_min_samples_from_env(self, runner, write_export, monkeypatch):
        monkeypatch.setenv("EFFLUENT_MIN_SAMPLES", "3")
        path = write_export(day_lines("01-03-2024", 12) + day_lines("02-03-2024", 4))
        result = runner.invoke(app, ["summary", path])
        assert result.exit_code == 0, result.output
        assert "2024-03-02" in result.output

    def test_output_settings_ignored(self, runner, write_export, monkeypatch):
        monkeypatch.setenv("EFFLUENT_EXCEL", "false")
        monkeypatch.setenv("EFFLUENT_CSV", "false")
        path = write_export(day_lines("01-03-2024", 12))
        result = runner.invoke(app, ["summary", path, "--verbose"])
        assert result.exit_code == 0, result.output
        assert "2024-03-01" in result.output
