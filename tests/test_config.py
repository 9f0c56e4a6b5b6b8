"""Tests für das Konfigurationssystem und die Persistenz der Anlage."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from config.schema import (
    BookingConfig,
    CanvasConfig,
    CourtConfig,
    EditorConfig,
    PlannerConfig,
    ZoneConfig,
)
from config.defaults import COURT_COLORS, DEMO_CLIENTS, default_planner_config
from config.manager import ConfigManager
from models.element import Court, Zone
from models.facility import FacilityData
from models.reservation import Reservation


def _manager(tmp_path: Path) -> ConfigManager:
    mgr = ConfigManager()
    mgr.CONFIG_DIR = tmp_path
    mgr.DEFAULT_CONFIG = tmp_path / "planner_config.yaml"
    mgr.SCENARIOS_DIR = tmp_path / "scenarios"
    return mgr


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_config_valid(self):
        """Vollständige Default-Config ist valide."""
        config = default_planner_config()
        assert config.facility_name == "Padel-Club"
        assert config.canvas.pixels_per_meter == 15.0

    def test_court_size_px(self):
        """10 m × 20 m bei 15 px/m."""
        assert default_planner_config().court_size_px == (150.0, 300.0)

    def test_zone_size_px(self):
        assert default_planner_config().zone_size_px == (150.0, 75.0)

    def test_canvas_center(self):
        assert CanvasConfig().center == (600.0, 400.0)

    def test_booking_defaults(self):
        bc = default_planner_config().booking
        assert bc.durations == [60, 90, 120]
        assert bc.default_duration == 90
        assert bc.agenda_days == 7

    def test_editor_defaults(self):
        ec = default_planner_config().editor
        assert (ec.zoom_min, ec.zoom_max, ec.zoom_step) == (0.5, 3.0, 0.1)

    def test_palette_covers_court_colors(self):
        palette = default_planner_config().courts.palette
        assert set(COURT_COLORS.values()) == set(palette)

    def test_demo_clients_not_empty(self):
        assert len(DEMO_CLIENTS) >= 5


# ─── PYDANTIC-VALIDIERUNG ─────────────────────────────────────────────────────

class TestPydanticValidation:
    def test_surface_name_known(self):
        config = default_planner_config()
        assert config.surface_name(COURT_COLORS["wpt"]) == "WPT"

    def test_surface_name_case_insensitive(self):
        config = default_planner_config()
        assert config.surface_name("#10b981") == "Grün"

    def test_surface_name_unknown(self):
        assert default_planner_config().surface_name("#000000") == "Standard"

    def test_palette_keys_uppercased(self):
        cc = CourtConfig(palette={"#abcdef": "Test"}, default_color="#abcdef")
        assert cc.palette == {"#ABCDEF": "Test"}
        assert cc.default_color == "#ABCDEF"

    def test_zoom_bounds_must_include_one(self):
        with pytest.raises(ValidationError):
            EditorConfig(zoom_min=1.5, zoom_max=3.0)
        with pytest.raises(ValidationError):
            EditorConfig(zoom_min=0.2, zoom_max=0.8)

    def test_zoom_must_be_positive(self):
        with pytest.raises(ValidationError):
            EditorConfig(zoom_min=0.0)

    def test_default_duration_in_durations(self):
        with pytest.raises(ValidationError):
            BookingConfig(durations=[60, 120], default_duration=90)

    def test_durations_positive(self):
        with pytest.raises(ValidationError):
            BookingConfig(durations=[0, 90], default_duration=90)

    def test_durations_not_empty(self):
        with pytest.raises(ValidationError):
            BookingConfig(durations=[], default_duration=90)

    def test_min_size_positive(self):
        with pytest.raises(ValidationError):
            ZoneConfig(min_size=0)

    def test_default_zone_below_min_size_rejected(self):
        """Neue Zonen (150 × 75 px) dürfen nicht kleiner als min_size sein."""
        with pytest.raises(ValidationError, match="Mindestgröße"):
            PlannerConfig(zones=ZoneConfig(min_size=200))

    def test_default_zone_equal_min_size_allowed(self):
        config = PlannerConfig(zones=ZoneConfig(min_size=75))
        assert min(config.zone_size_px) == config.zones.min_size

    def test_agenda_days_range(self):
        with pytest.raises(ValidationError):
            BookingConfig(agenda_days=0)

    def test_partial_yaml_uses_defaults(self):
        config = PlannerConfig.model_validate({"facility_name": "Club Norte"})
        assert config.facility_name == "Club Norte"
        assert config.booking.durations == [60, 90, 120]


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern und wieder laden ergibt identisches Objekt."""
        mgr = _manager(tmp_path)
        config = default_planner_config().model_copy(update={"facility_name": "Club Sur"})
        mgr.save(config)
        assert mgr.load() == config

    def test_yaml_has_comments(self, tmp_path: Path):
        mgr = _manager(tmp_path)
        mgr.save(default_planner_config())
        text = mgr.DEFAULT_CONFIG.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "Padel-Anlagenplaner" in text

    def test_first_run_check_no_file(self, tmp_path: Path):
        mgr = _manager(tmp_path)
        assert mgr.first_run_check() is True

    def test_first_run_check_with_file(self, tmp_path: Path):
        mgr = _manager(tmp_path)
        mgr.save(default_planner_config())
        assert mgr.first_run_check() is False

    def test_load_or_default_without_file(self, tmp_path: Path):
        mgr = _manager(tmp_path)
        assert mgr.load_or_default() == default_planner_config()

    def test_load_nonexistent_raises(self, tmp_path: Path):
        mgr = ConfigManager()
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_load_invalid_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("booking:\n  durations: []\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigManager().load(path)

    def test_scenario_save_and_load(self, tmp_path: Path):
        """Szenario speichern, auflisten und laden."""
        mgr = _manager(tmp_path)
        config = default_planner_config().model_copy(update={"facility_name": "Turnier"})
        mgr.save_scenario(config, "turnier", "Turnierwochenende")
        scenarios = mgr.list_scenarios()
        assert [s["name"] for s in scenarios] == ["turnier"]
        assert scenarios[0]["description"] == "Turnierwochenende"
        assert mgr.load_scenario("turnier").facility_name == "Turnier"

    def test_load_unknown_scenario(self, tmp_path: Path):
        mgr = _manager(tmp_path)
        with pytest.raises(FileNotFoundError):
            mgr.load_scenario("fehlt")

    def test_list_scenarios_empty(self, tmp_path: Path):
        mgr = _manager(tmp_path)
        assert mgr.list_scenarios() == []


# ─── PERSISTENZ ───────────────────────────────────────────────────────────────

def _facility() -> FacilityData:
    return FacilityData(
        config=default_planner_config(),
        elements=[
            Court(id="court-1", x=300.0, y=200.0, width=150.0, height=300.0,
                  label=1, color=COURT_COLORS["blau"], rotation=90.0),
            Zone(id="zone-2", x=600.0, y=700.0, width=90.0, height=45.0, name="Café"),
        ],
        reservations=[
            Reservation(id="res-1", resource_id="court-1", client_name="Lucía",
                        start=datetime(2026, 10, 14, 18), end=datetime(2026, 10, 14, 19, 30),
                        deposit=Decimal("12.50")),
        ],
        next_element_seq=3, next_court_label=2, next_reservation_seq=2,
    )


class TestFacilityData:
    def test_json_roundtrip(self, tmp_path: Path):
        path = tmp_path / "facility.json"
        _facility().save_json(path)
        loaded = FacilityData.load_json(path)
        assert [type(e) for e in loaded.elements] == [Court, Zone]
        assert loaded.elements[0].rotation == 90.0
        assert loaded.elements[1].name == "Café"
        assert loaded.reservations[0].deposit == Decimal("12.50")
        assert loaded.next_court_label == 2
        assert loaded.created_at is not None

    def test_created_at_kept_on_resave(self, tmp_path: Path):
        path = tmp_path / "facility.json"
        _facility().save_json(path)
        first = FacilityData.load_json(path)
        first.save_json(path)
        assert FacilityData.load_json(path).created_at == first.created_at

    def test_load_missing_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            FacilityData.load_json(tmp_path / "nix.json")

    def test_save_versioned(self, tmp_path: Path):
        path = _facility().save_versioned(tmp_path / "facility.json")
        assert path.exists()
        assert path.name.startswith("facility_")

    def test_summary(self):
        text = _facility().summary()
        assert "Plätze: 1" in text
        assert "Zonen: 1" in text
        assert "1.5h gebucht" in text

    def test_courts_and_zones(self):
        data = _facility()
        assert [c.id for c in data.courts] == ["court-1"]
        assert [z.id for z in data.zones] == ["zone-2"]
