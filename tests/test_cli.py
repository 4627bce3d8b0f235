"""
Tests for the CSV loader (io/table.py), settings (config.py) and the Typer CLI.
"""

import json

import pandas as pd
import pytest
from typer.testing import CliRunner

from joblens.cli import app
from joblens.config import AnalyticsSettings
from joblens.io.table import frame_to_table, read_table

runner = CliRunner()

CSV = """title,company_name,salary,skills,date_posted,location
SWE,Acme,"$80,000","[""Go"",""SQL""]",2024-05-02,"Austin, TX"
SWE II,Acme,"$90,000","[""go""]",2024-06-10,"Austin, TX"
PM,Beta,,[],,
"""


@pytest.fixture
def sheet(tmp_path):
    path = tmp_path / "jobs.csv"
    path.write_text(CSV, encoding="utf-8")
    return path


class TestReadTable:
    """Test read_table() / frame_to_table()"""

    def test_reads_text_cells(self, sheet):
        table = read_table(sheet)
        assert table["headers"] == ["title", "company_name", "salary", "skills", "date_posted", "location"]
        assert table["rows"][0] == ["SWE", "Acme", "$80,000", '["Go","SQL"]', "2024-05-02", "Austin, TX"]

    def test_trailing_blanks_trimmed(self, sheet):
        assert read_table(sheet)["rows"][2] == ["PM", "Beta", "", "[]"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_table(tmp_path / "nope.csv")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        assert read_table(path) == {"headers": [], "rows": []}

    def test_frame_to_table_keeps_numbers_as_text(self):
        df = pd.DataFrame({"experience": [3, 5]})
        assert frame_to_table(df) == {"headers": ["experience"], "rows": [["3"], ["5"]]}


class TestSettings:
    """Test AnalyticsSettings.from_env()"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("JOBLENS_SKILL_LIMIT", raising=False)
        assert AnalyticsSettings.from_env().skill_limit == 50

    def test_override(self, monkeypatch):
        monkeypatch.setenv("JOBLENS_COMPANY_LIMIT", "2")
        monkeypatch.setenv("JOBLENS_RECENT_DAYS", " ")
        settings = AnalyticsSettings.from_env()
        assert settings.company_limit == 2
        assert settings.recent_days == 30

    def test_bad_value(self, monkeypatch):
        monkeypatch.setenv("JOBLENS_TITLE_LIMIT", "ten")
        with pytest.raises(ValueError, match="JOBLENS_TITLE_LIMIT"):
            AnalyticsSettings.from_env()


class TestCli:
    """Test the Typer commands"""

    def test_analyze_full_report(self, sheet):
        result = runner.invoke(app, ["analyze", str(sheet), "--now", "2024-06-30"])
        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        assert report["summary"]["total_jobs"] == 3
        assert report["summary"]["average_salary"] == 85000
        assert report["summary"]["recent_jobs"] == 1

    def test_analyze_aware_now(self, sheet):
        result = runner.invoke(app, ["analyze", str(sheet), "--now", "2024-06-30T00:00:00+00:00"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["summary"]["recent_jobs"] == 1

    def test_analyze_section(self, sheet):
        result = runner.invoke(app, ["analyze", str(sheet), "--section", "titles"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == [
            {"name": "SWE", "count": 2},
            {"name": "PM", "count": 1},
        ]

    def test_unknown_section(self, sheet):
        result = runner.invoke(app, ["analyze", str(sheet), "--section", "nope"])
        assert result.exit_code != 0

    def test_bad_now(self, sheet):
        result = runner.invoke(app, ["analyze", str(sheet), "--now", "yesterday"])
        assert result.exit_code != 0

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "nope.csv")])
        assert result.exit_code == 1

    def test_headers(self, sheet):
        result = runner.invoke(app, ["headers", str(sheet)])
        assert result.exit_code == 0
        assert json.loads(result.stdout)[0] == "title"
