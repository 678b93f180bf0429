"""Tests für die Kommandozeile (click CliRunner, isoliertes Arbeitsverzeichnis)."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli


@pytest.fixture
def runner(tmp_path: Path, monkeypatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def _stored(tmp_path: Path) -> list[dict]:
    data = json.loads((tmp_path / "output" / "schedule_entries.json").read_text(encoding="utf-8"))
    return data["scheduleEntries"]


class TestCli:
    def test_init_writes_config(self, runner, tmp_path):
        result = runner.invoke(cli, ["init"])
        assert result.exit_code == 0
        assert (tmp_path / "config" / "wochenraster.yaml").exists()

    def test_add_and_list(self, runner, tmp_path):
        result = runner.invoke(cli, ["add", "-s", "Mathe", "-d", "Monday", "08:00", "09:30"])
        assert result.exit_code == 0, result.output
        entries = _stored(tmp_path)
        assert entries[0]["subject"] == "Mathe"
        assert entries[0]["start"] == "08:00"

        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "Mathe" in result.output

    def test_add_rejects_blank_subject(self, runner, tmp_path):
        result = runner.invoke(cli, ["add", "-s", " ", "-d", "Monday", "08:00", "09:30"])
        assert result.exit_code == 1
        assert not (tmp_path / "output" / "schedule_entries.json").exists()

    def test_add_rejects_bad_day(self, runner):
        result = runner.invoke(cli, ["add", "-s", "Mathe", "-d", "Funday", "08:00", "09:30"])
        assert result.exit_code == 1

    def test_import_text_and_check(self, runner, tmp_path):
        result = runner.invoke(cli, ["import-text", "MTH 8:30AM-10:00AM", "-s", "CCS05"])
        assert result.exit_code == 0
        assert [e["day"] for e in _stored(tmp_path)] == ["Monday", "Thursday"]

        result = runner.invoke(cli, ["check"])
        assert result.exit_code == 0

    def test_import_json_invalid(self, runner, tmp_path):
        bad = tmp_path / "antwort.json"
        bad.write_text("kein json", encoding="utf-8")
        result = runner.invoke(cli, ["import-json", str(bad)])
        assert result.exit_code == 1

    def test_select_creates_entry(self, runner, tmp_path):
        result = runner.invoke(cli, ["select", "Wednesday", "4", "6", "-s", "Labor"])
        assert result.exit_code == 0, result.output
        entry = _stored(tmp_path)[0]
        assert (entry["day"], entry["start"], entry["end"]) == ("Wednesday", "09:00", "10:30")

    def test_select_preview_only(self, runner, tmp_path):
        result = runner.invoke(cli, ["select", "Wednesday", "4", "6"])
        assert result.exit_code == 0
        assert "09:00–10:30" in result.output
        assert not (tmp_path / "output" / "schedule_entries.json").exists()

    def test_edit_and_delete(self, runner, tmp_path):
        runner.invoke(cli, ["add", "-s", "Mathe", "-d", "Monday", "08:00", "09:30"])
        entry_id = _stored(tmp_path)[0]["id"]

        result = runner.invoke(cli, ["edit", entry_id[:8], "--end", "10:00"])
        assert result.exit_code == 0
        assert _stored(tmp_path)[0]["end"] == "10:00"

        result = runner.invoke(cli, ["edit", entry_id, "--end", "07:00"])
        assert result.exit_code == 1

        result = runner.invoke(cli, ["delete", entry_id])
        assert result.exit_code == 0
        assert _stored(tmp_path) == []

    def test_push_preview(self, runner):
        runner.invoke(cli, ["add", "-s", "Mathe", "-d", "Monday", "08:00", "09:30"])
        result = runner.invoke(cli, ["push-preview", "--week-of", "2026-10-19", "--weeks", "3"])
        assert result.exit_code == 0
        resources = json.loads(result.output)
        assert resources[0]["start"]["dateTime"] == "2026-10-19T08:00:00"
        assert resources[0]["recurrence"] == ["RRULE:FREQ=WEEKLY;COUNT=3"]

    def test_export(self, runner, tmp_path):
        runner.invoke(cli, ["add", "-s", "Mathe", "-d", "Monday", "08:00", "09:30"])
        result = runner.invoke(cli, ["export", "-o", "plan.xlsx"])
        assert result.exit_code == 0
        assert (tmp_path / "plan.xlsx").exists()
