"""Tests für die Kommandozeile (click CliRunner, isoliertes Dateisystem)."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli


DATA = "facility.json"


def _run(runner: CliRunner, *args: str):
    return runner.invoke(cli, ["--data", DATA, *args], obj={})


@pytest.fixture
def runner():
    r = CliRunner()
    with r.isolated_filesystem():
        yield r


@pytest.fixture
def facility(runner):
    """Zwei Plätze, eine Zone und eine Buchung am 14.10.2026 auf Platz 1."""
    _run(runner, "layout", "add-court", "--color", "wpt")
    _run(runner, "layout", "add-court")
    _run(runner, "layout", "add-zone", "--name", "Empfang")
    result = _run(runner, "book", "1", "--date", "2026-10-14", "--time", "18:00",
                  "--duration", "90", "--client", "Lucía", "--deposit", "20")
    assert result.exit_code == 0, result.output
    return runner


def _saved() -> dict:
    return json.loads(Path(DATA).read_text(encoding="utf-8"))


# ─── ALLGEMEIN ────────────────────────────────────────────────────────────────

class TestGeneral:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "layout" in result.output
        assert "book" in result.output

    def test_config_show_defaults(self, runner):
        result = _run(runner, "config", "show")
        assert result.exit_code == 0
        assert "Standardwerte" in result.output

    def test_scenario_list_empty(self, runner):
        result = _run(runner, "scenario", "list")
        assert result.exit_code == 0
        assert "Keine Szenarien" in result.output


# ─── LAYOUT ───────────────────────────────────────────────────────────────────

class TestLayoutCommands:
    def test_add_court_persists(self, runner):
        result = _run(runner, "layout", "add-court", "--color", "gruen")
        assert result.exit_code == 0, result.output
        assert "court-1" in result.output
        saved = _saved()
        assert saved["elements"][0]["color"] == "#10B981"
        assert saved["next_court_label"] == 2

    def test_unknown_color(self, runner):
        result = _run(runner, "layout", "add-court", "--color", "lila")
        assert result.exit_code != 0

    def test_move_with_zoom(self, facility):
        before = _saved()["elements"][0]
        result = _run(facility, "layout", "move", "court-1", "40", "20", "--zoom", "2")
        assert result.exit_code == 0, result.output
        after = _saved()["elements"][0]
        assert after["x"] == pytest.approx(before["x"] + 20)
        assert after["y"] == pytest.approx(before["y"] + 10)

    def test_resize_zone_clamped(self, facility):
        result = _run(facility, "layout", "resize", "zone-3", "e", "--", "-1000", "0")
        assert result.exit_code == 0, result.output
        zone = _saved()["elements"][2]
        assert zone["width"] == 30.0

    def test_resize_court_rejected(self, facility):
        result = _run(facility, "layout", "resize", "court-1", "e", "10", "0")
        assert result.exit_code == 1

    def test_rotate_by_label(self, facility):
        result = _run(facility, "layout", "rotate", "2")
        assert result.exit_code == 0, result.output
        assert _saved()["elements"][1]["rotation"] == 90.0

    def test_delete_court_cascades(self, facility):
        result = _run(facility, "layout", "delete", "court-1", "--yes")
        assert result.exit_code == 0, result.output
        saved = _saved()
        assert [e["id"] for e in saved["elements"]] == ["court-2", "zone-3"]
        assert saved["reservations"] == []

    def test_delete_unknown(self, facility):
        result = _run(facility, "layout", "delete", "court-99", "--yes")
        assert result.exit_code == 1

    def test_clear(self, facility):
        result = _run(facility, "layout", "clear", "--yes")
        assert result.exit_code == 0
        assert _saved()["elements"] == []

    def test_show(self, facility):
        result = _run(facility, "layout", "show")
        assert result.exit_code == 0
        assert "Empfang" in result.output

    def test_plan(self, facility):
        result = _run(facility, "layout", "plan", "--columns", "40")
        assert result.exit_code == 0
        assert "+" + "-" * 40 + "+" in result.output


# ─── BUCHUNGEN ────────────────────────────────────────────────────────────────

class TestBookingCommands:
    def test_book_persists(self, facility):
        res = _saved()["reservations"]
        assert len(res) == 1
        assert res[0]["resource_id"] == "court-1"
        assert res[0]["client_name"] == "Lucía"

    def test_conflict_exit_code(self, facility):
        result = _run(facility, "book", "court-1", "--date", "2026-10-14", "--time", "19:00",
                      "--duration", "60", "--client", "Martín")
        assert result.exit_code == 1
        assert len(_saved()["reservations"]) == 1

    def test_adjacent_booking(self, facility):
        result = _run(facility, "book", "court-1", "--date", "14.10.2026", "--time", "19:30",
                      "--duration", "60", "--client", "Martín")
        assert result.exit_code == 0, result.output
        assert len(_saved()["reservations"]) == 2

    def test_book_missing_time(self, facility):
        result = _run(facility, "book", "court-1", "--date", "2026-10-14", "--time", "",
                      "--client", "Martín")
        assert result.exit_code == 1

    @pytest.mark.parametrize("duration", ["0", "-30"])
    def test_book_non_positive_duration(self, facility, duration):
        """Dauer 0 oder negativ wird abgelehnt, nicht durch die Standarddauer ersetzt."""
        result = _run(facility, "book", "court-2", "--date", "2026-10-14", "--time", "10:00",
                      f"--duration={duration}", "--client", "Ana")
        assert result.exit_code == 1
        assert "Reservierung res-2" not in result.output
        assert len(_saved()["reservations"]) == 1

    @pytest.mark.parametrize("duration", ["0", "-30"])
    def test_search_non_positive_duration(self, facility, duration):
        result = _run(facility, "search", "--date", "2026-10-14", "--time", "10:00",
                      f"--duration={duration}")
        assert result.exit_code == 1

    def test_cancel(self, facility):
        result = _run(facility, "cancel", "res-1", "--yes")
        assert result.exit_code == 0
        assert _saved()["reservations"] == []

    def test_cancel_unknown(self, facility):
        assert _run(facility, "cancel", "res-9", "--yes").exit_code == 1

    def test_reservations_list(self, facility):
        result = _run(facility, "reservations", "--court", "1")
        assert result.exit_code == 0
        assert "res-1" in result.output

    def test_search(self, facility):
        result = _run(facility, "search", "--date", "2026-10-14", "--time", "18:30",
                      "--duration", "60")
        assert result.exit_code == 0
        assert "court-2" in result.output
        assert "court-1" not in result.output

    def test_status(self, facility):
        result = _run(facility, "status", "--at", "2026-10-14 18:30")
        assert result.exit_code == 0
        assert "Lucía" in result.output
        assert "1/2" in result.output

    def test_agenda(self, facility):
        result = _run(facility, "agenda", "1", "--start", "2026-10-14", "--days", "2")
        assert result.exit_code == 0
        assert "Lucía" in result.output
        assert "Keine" in result.output


# ─── ANALYSE / EXPORT ─────────────────────────────────────────────────────────

class TestAnalysisCommands:
    def test_check_valid(self, facility):
        result = _run(facility, "check")
        assert result.exit_code == 0, result.output

    def test_check_without_data(self, runner):
        assert _run(runner, "check").exit_code == 1

    def test_generate_and_report(self, runner):
        result = _run(runner, "generate", "--seed", "1", "--start", "2026-10-14", "--yes")
        assert result.exit_code == 0, result.output
        assert len(_saved()["elements"]) == 6

        result = _run(runner, "report", "--start", "2026-10-14")
        assert result.exit_code == 0
        assert "Auslastung" in result.output

    def test_export(self, facility):
        result = _run(facility, "export", "-o", "out/anlage.xlsx",
                      "--start", "2026-10-14", "--with-report")
        assert result.exit_code == 0, result.output
        assert Path("out/anlage.xlsx").exists()
