"""Tests for the typer CLI."""

import json

import pytest
from rich.console import Console
from typer.testing import CliRunner

from callqa_analytics import cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    monkeypatch.setattr(cli, "console", Console(width=200))
    monkeypatch.delenv("CALLQA_CAMPAIGN", raising=False)
    monkeypatch.delenv("CALLQA_DATA_PATH", raising=False)


def invoke(*args):
    return runner.invoke(cli.app, [str(arg) for arg in args])


class TestDashboard:
    def test_prints_summary(self, data_dir):
        result = invoke("dashboard", "--data", data_dir)
        assert result.exit_code == 0
        assert "Total calls" in result.stdout
        assert "Unresolved reasons" in result.stdout
        assert "System Outage" in result.stdout

    def test_writes_json(self, data_dir, tmp_path):
        output = tmp_path / "out.json"
        result = invoke("dashboard", "--data", data_dir, "--output", output)
        assert result.exit_code == 0
        assert json.loads(output.read_text())["total_calls"] == 3

    def test_date_and_call_type_filters(self, data_dir, tmp_path):
        output = tmp_path / "out.json"
        result = invoke(
            "dashboard",
            "--data", data_dir,
            "--start", "2024-03-01",
            "--end", "2024-03-02",
            "--call-type", "Billing",
            "--output", output,
        )
        assert result.exit_code == 0
        assert json.loads(output.read_text())["total_calls"] == 1

    def test_campaign_from_env(self, data_dir, monkeypatch):
        monkeypatch.setenv("CALLQA_CAMPAIGN", "banking")
        result = invoke("dashboard", "--data", data_dir)
        assert result.exit_code == 0
        assert "Dissatisfaction reasons" in result.stdout

    def test_bad_date_exits_with_error(self, data_dir):
        result = invoke("dashboard", "--data", data_dir, "--start", "not-a-date")
        assert result.exit_code == 1


class TestOtherCommands:
    def test_drivers(self, data_dir):
        result = invoke("drivers", "--data", data_dir, "--sort-key", "driver", "--ascending")
        assert result.exit_code == 0
        assert result.stdout.index("Billing") < result.stdout.index("Outage")

    def test_alerts(self, data_dir):
        result = invoke("alerts", "--data", data_dir)
        assert result.exit_code == 0
        assert "CALL-2" in result.stdout
        assert "Best service ever" in result.stdout

    def test_search(self, data_dir):
        result = invoke("search", "--data", data_dir, "--agent", "alice")
        assert result.exit_code == 0
        assert "CALL-1" in result.stdout
        assert "CALL-2" not in result.stdout

    def test_feed(self, data_dir):
        result = invoke("feed", "--data", data_dir, "--query", "bob", "--page", "4")
        assert result.exit_code == 0
        assert "page 1 of 1" in result.stdout
        assert "CALL-2" in result.stdout

    def test_report(self, data_dir):
        result = invoke("report", "CALL-2", "--data", data_dir, "--note", "Coach on tone")
        assert result.exit_code == 0
        assert "Analysis for: bob_1.txt" in result.stdout
        assert "Coach on tone" in result.stdout

    def test_export(self, data_dir, tmp_path):
        output = tmp_path / "calls.csv"
        result = invoke("export", "--data", data_dir, "--output", output)
        assert result.exit_code == 0
        assert len(output.read_text().strip().splitlines()) == 4

    def test_report_prints_transcript_dialogue(self, data_dir):
        result = invoke("report", "CALL-1", "--data", data_dir)
        assert result.exit_code == 0
        assert "CALL TRANSCRIPT\nhello from alice" in result.stdout

    def test_search_by_unresolved_reason(self, data_dir):
        result = invoke("search", "--data", data_dir, "--reason", "System Outage")
        assert result.exit_code == 0
        assert "CALL-2" in result.stdout
        assert "CALL-1" not in result.stdout
        assert "CALL-3" not in result.stdout


class TestMarkupInData:
    @pytest.fixture
    def bracket_dir(self, tmp_path, make_payload):
        payload = make_payload(
            agent="[red]Dan",
            call_id="CALL-9",
            resolved=False,
            reason_category="[/i] outage",
            complaint_quote="[/b] you were [bold]rude",
            procedure_flow=20,
            ownership=20,
            empathy=20,
        )
        (tmp_path / "calls.json").write_text(json.dumps(payload))
        return tmp_path

    def test_alerts_print_quotes_literally(self, bracket_dir):
        result = invoke("alerts", "--data", bracket_dir)
        assert result.exit_code == 0
        assert "[/b] you were [bold]rude" in result.stdout
        assert "[red]Dan" in result.stdout

    def test_dashboard_prints_names_and_reasons_literally(self, bracket_dir):
        result = invoke("dashboard", "--data", bracket_dir)
        assert result.exit_code == 0
        assert "[red]Dan" in result.stdout
        assert "[/i] outage" in result.stdout

    def test_search_prints_cells_literally(self, bracket_dir):
        result = invoke("search", "--data", bracket_dir)
        assert result.exit_code == 0
        assert "[red]Dan" in result.stdout
