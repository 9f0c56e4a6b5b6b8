"""Tests für FacilityPlanner: Kaskadenlöschung, Buchungsformular, Agenda, Snapshot."""

import random
from datetime import date, datetime, timedelta

import pytest

from config.defaults import COURT_COLORS, default_planner_config
from models.errors import Conflict, InvalidInput, InvalidInterval, NotFound
from models.facility import FacilityData
from models.interval import Interval
from store.planner import FacilityPlanner, parse_date, parse_start


@pytest.fixture
def planner() -> FacilityPlanner:
    return FacilityPlanner(default_planner_config(), rng=random.Random(1))


@pytest.fixture
def booked(planner):
    """Zwei Plätze, eine Zone, drei Buchungen am 14.10.2026."""
    c1 = planner.add_court(COURT_COLORS["blau"])
    c2 = planner.add_court(COURT_COLORS["gruen"])
    planner.add_zone("Empfang")
    planner.book(c1.id, "2026-10-14", "18:00", 90, "Lucía", "20")
    planner.book(c1.id, "2026-10-14", "19:30", 60, "Martín")
    planner.book(c2.id, "2026-10-15", "10:00", 120, "Sofía")
    return planner


# ─── FORMULAR-PARSER ──────────────────────────────────────────────────────────

class TestParsing:
    def test_parse_start_iso(self):
        assert parse_start("2026-10-14", "18:30") == datetime(2026, 10, 14, 18, 30)

    def test_parse_start_german_date(self):
        assert parse_start("14.10.2026", "08:00") == datetime(2026, 10, 14, 8, 0)

    @pytest.mark.parametrize("d,t", [("", "18:00"), ("2026-10-14", ""), ("  ", " ")])
    def test_missing_fields(self, d, t):
        with pytest.raises(InvalidInput, match="Datum und Uhrzeit"):
            parse_start(d, t)

    @pytest.mark.parametrize("d,t", [("2026-13-40", "18:00"), ("2026-10-14", "25:99"),
                                     ("morgen", "18:00")])
    def test_unparseable(self, d, t):
        with pytest.raises(InvalidInput):
            parse_start(d, t)

    def test_parse_date(self):
        assert parse_date("2026-10-14") == date(2026, 10, 14)
        with pytest.raises(InvalidInput):
            parse_date("")


# ─── BUCHEN ───────────────────────────────────────────────────────────────────

class TestBooking:
    def test_book_builds_interval(self, planner):
        c = planner.add_court()
        r = planner.book(c.id, "2026-10-14", "18:00", 90, "Lucía", "")
        assert r.start == datetime(2026, 10, 14, 18, 0)
        assert r.end == datetime(2026, 10, 14, 19, 30)
        assert r.resource_id == c.id
        assert r.deposit == 0

    def test_book_conflict(self, booked):
        c1 = booked.layout.courts()[0]
        with pytest.raises(Conflict):
            booked.book(c1.id, "2026-10-14", "19:00", 60, "Diego")

    def test_book_adjacent(self, booked):
        c1 = booked.layout.courts()[0]
        r = booked.book(c1.id, "2026-10-14", "20:30", 60, "Diego")
        assert r.start == datetime(2026, 10, 14, 20, 30)

    def test_book_unknown_court(self, planner):
        with pytest.raises(NotFound):
            planner.book("court-77", "2026-10-14", "18:00", 60, "Lucía")

    def test_book_zone_rejected(self, planner):
        z = planner.add_zone()
        with pytest.raises(NotFound):
            planner.book(z.id, "2026-10-14", "18:00", 60, "Lucía")

    def test_book_zero_duration(self, planner):
        c = planner.add_court()
        with pytest.raises(InvalidInterval):
            planner.book(c.id, "2026-10-14", "18:00", 0, "Lucía")

    def test_cancel_twice(self, booked):
        r = booked.reservations.list()[0]
        booked.cancel(r.id)
        with pytest.raises(NotFound):
            booked.cancel(r.id)
        assert len(booked.reservations) == 2


# ─── ABFRAGEN ─────────────────────────────────────────────────────────────────

class TestQueries:
    def test_court_status(self, booked):
        c1, c2 = booked.layout.courts()
        status = booked.court_status(datetime(2026, 10, 14, 19, 0))
        assert status[c1.id].client_name == "Lucía"
        assert status[c2.id] is None
        assert len(status) == 2   # Zonen haben keinen Status

    def test_court_status_at_boundary(self, booked):
        c1 = booked.layout.courts()[0]
        status = booked.court_status(datetime(2026, 10, 14, 19, 30))
        assert status[c1.id].client_name == "Martín"

    def test_week_agenda(self, booked):
        c1 = booked.layout.courts()[0]
        agenda = booked.week_agenda(c1.id, date(2026, 10, 13))
        assert len(agenda) == 7
        assert agenda[0] == (date(2026, 10, 13), [])
        day, items = agenda[1]
        assert day == date(2026, 10, 14)
        assert [r.client_name for r in items] == ["Lucía", "Martín"]

    def test_week_agenda_days(self, booked):
        c1 = booked.layout.courts()[0]
        assert len(booked.week_agenda(c1.id, date(2026, 10, 14), days=3)) == 3

    def test_search(self, booked):
        c1, c2 = booked.layout.courts()
        assert booked.search("2026-10-14", "18:30", 60) == [c2]
        assert booked.search("2026-10-14", "20:30", 90) == [c1, c2]

    def test_free_slots(self, booked):
        c1 = booked.layout.courts()[0]
        slots = booked.free_slots(c1.id, date(2026, 10, 14))
        start = datetime(2026, 10, 14)
        assert slots == [
            Interval(start, datetime(2026, 10, 14, 18, 0)),
            Interval(datetime(2026, 10, 14, 20, 30), start + timedelta(days=1)),
        ]


# ─── LAYOUT ÜBER DIE FASSADE ──────────────────────────────────────────────────

class TestLayoutFacade:
    def test_delete_court_cascades(self, booked):
        c1, c2 = booked.layout.courts()
        el, removed = booked.delete_element(c1.id)
        assert el.id == c1.id
        assert len(removed) == 2
        assert all(r.resource_id == c2.id for r in booked.reservations.list())

    def test_delete_zone_keeps_reservations(self, booked):
        zone = booked.layout.zones()[0]
        _, removed = booked.delete_element(zone.id)
        assert removed == []
        assert len(booked.reservations) == 3

    def test_clear_layout(self, booked):
        assert booked.clear_layout() == (3, 3)
        assert len(booked.layout) == 0
        assert len(booked.reservations) == 0

    def test_drag_move_under_zoom(self, planner):
        c = planner.add_court()
        session = planner.begin_move(c.id, zoom=2.0)
        moved = planner.drag(session, 40, -20)
        assert (moved.x, moved.y) == pytest.approx((c.x + 20, c.y - 10))

    def test_drag_uses_current_zoom(self, planner):
        c = planner.add_court()
        planner.zoom_out()
        planner.zoom_out()
        session = planner.begin_move(c.id)
        assert session.zoom == pytest.approx(0.8)

    def test_drag_resize_clamps(self, planner):
        z = planner.add_zone()
        session = planner.begin_resize(z.id, "e")
        resized = planner.drag(session, -1000, 0)
        assert resized.width == planner.config.zones.min_size
        assert resized.x - resized.width / 2 == pytest.approx(z.x - z.width / 2)

    def test_cancel_drag(self, planner):
        z = planner.add_zone()
        session = planner.begin_resize(z.id, "nw")
        planner.drag(session, 30, 30)
        restored = planner.cancel_drag(session)
        assert (restored.x, restored.y, restored.width, restored.height) == (
            z.x, z.y, z.width, z.height
        )

    def test_resize_court_rejected(self, planner):
        c = planner.add_court()
        with pytest.raises(InvalidInput):
            planner.begin_resize(c.id, "e")

    def test_zoom_controls(self, planner):
        assert planner.zoom_in() == pytest.approx(1.1)
        assert planner.zoom_reset() == 1.0


# ─── MOMENTAUFNAHME ───────────────────────────────────────────────────────────

class TestSnapshot:
    def test_roundtrip_keeps_ids_and_counters(self, booked, tmp_path):
        c1 = booked.layout.courts()[0]
        booked.delete_element(booked.layout.zones()[0].id)
        path = tmp_path / "facility.json"
        booked.snapshot().save_json(path)

        restored = FacilityPlanner.from_snapshot(FacilityData.load_json(path))
        assert [e.id for e in restored.layout.list()] == [e.id for e in booked.layout.list()]
        assert [r.id for r in restored.reservations.list()] == [
            r.id for r in booked.reservations.list()
        ]
        assert restored.add_zone().id == "zone-4"
        assert restored.add_court().label == 3
        r = restored.book(c1.id, "2026-10-16", "09:00", 60, "Paula")
        assert r.id == "res-4"

    def test_restored_store_still_checks_conflicts(self, booked):
        restored = FacilityPlanner.from_snapshot(booked.snapshot())
        c1 = restored.layout.courts()[0]
        with pytest.raises(Conflict):
            restored.book(c1.id, "2026-10-14", "18:30", 60, "Paula")

    def test_snapshot_summary(self, booked):
        text = booked.snapshot().summary()
        assert "Plätze: 2" in text
        assert "Reservierungen: 3" in text
