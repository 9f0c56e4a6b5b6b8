"""Tests für den LayoutStore: Anlegen, Ändern, Drehen, Löschen von Elementen."""

import random

import pytest

from config.defaults import COURT_COLORS, default_planner_config
from config.schema import EditorConfig, PlannerConfig
from models.element import Court, Zone
from models.errors import InvalidInput, NotFound
from store.layout_store import LayoutStore


@pytest.fixture
def config() -> PlannerConfig:
    return default_planner_config()


@pytest.fixture
def store(config) -> LayoutStore:
    return LayoutStore(config, rng=random.Random(7))


# ─── ANLEGEN ──────────────────────────────────────────────────────────────────

class TestCreate:
    def test_court_fixed_size_and_color(self, store):
        """Plätze: 10 m × 20 m bei 15 px/m = 150 × 300 px."""
        court = store.create_court(COURT_COLORS["wpt"])
        assert isinstance(court, Court)
        assert (court.width, court.height) == (150.0, 300.0)
        assert court.color == "#EC4899"
        assert court.rotation == 0

    def test_court_default_color(self, store, config):
        assert store.create_court().color == config.courts.default_color

    def test_court_spawn_within_jitter(self, store, config):
        cx, cy = config.canvas.center
        jitter = config.editor.spawn_jitter
        for _ in range(20):
            c = store.create_court()
            assert abs(c.x - cx) <= jitter
            assert abs(c.y - cy) <= jitter

    def test_court_spawn_without_jitter(self, config):
        cfg = config.model_copy(update={"editor": EditorConfig(spawn_jitter=0)})
        c = LayoutStore(cfg).create_court()
        assert (c.x, c.y) == cfg.canvas.center

    def test_spawn_reproducible_with_seed(self, config):
        a = LayoutStore(config, rng=random.Random(3)).create_court()
        b = LayoutStore(config, rng=random.Random(3)).create_court()
        assert (a.x, a.y) == (b.x, b.y)

    def test_zone_default_size_at_center(self, store, config):
        """Zonen: 10 m × 5 m, ohne Versatz in der Bildmitte."""
        zone = store.create_zone("Empfang")
        assert isinstance(zone, Zone)
        assert (zone.width, zone.height) == (150.0, 75.0)
        assert (zone.x, zone.y) == config.canvas.center
        assert zone.name == "Empfang"

    def test_ids_unique_and_shared_counter(self, store):
        a = store.create_court()
        b = store.create_zone()
        c = store.create_court()
        assert [a.id, b.id, c.id] == ["court-1", "zone-2", "court-3"]

    def test_list_insertion_order(self, store):
        ids = [store.create_court().id, store.create_zone().id, store.create_court().id]
        assert [e.id for e in store.list()] == ids
        assert len(store) == 3


# ─── PLATZNUMMERN ─────────────────────────────────────────────────────────────

class TestLabels:
    def test_sequential_labels(self, store):
        assert [store.create_court().label for _ in range(3)] == [1, 2, 3]

    def test_label_not_reused_after_delete(self, store):
        """Drei Plätze, Platz 2 löschen, neuer Platz → Nummer 4."""
        courts = [store.create_court() for _ in range(3)]
        store.delete(courts[1].id)
        assert store.create_court().label == 4

    def test_labels_never_renumbered(self, store):
        courts = [store.create_court() for _ in range(3)]
        store.delete(courts[0].id)
        assert [c.label for c in store.courts()] == [2, 3]

    def test_zones_do_not_count(self, store):
        store.create_zone()
        assert store.create_court().label == 1

    def test_clear_resets_labels_not_ids(self, store):
        store.create_court()
        store.create_court()
        assert store.clear() == 2
        c = store.create_court()
        assert c.label == 1
        assert c.id == "court-3"


# ─── ÄNDERN ───────────────────────────────────────────────────────────────────

class TestUpdate:
    def test_move_replaces_element(self, store):
        c = store.create_court()
        moved = store.update(c.id, x=10.0, y=20.0)
        assert (moved.x, moved.y) == (10.0, 20.0)
        assert store.get(c.id) == moved
        assert c.x != 10.0   # Original unverändert

    def test_zone_resize(self, store):
        z = store.create_zone()
        z2 = store.update(z.id, width=60.0, height=40.0)
        assert (z2.width, z2.height) == (60.0, 40.0)

    def test_zone_below_min_size_rejected(self, store):
        z = store.create_zone()
        with pytest.raises(InvalidInput):
            store.update(z.id, width=10.0)
        assert store.get(z.id).width == 150.0

    @pytest.mark.parametrize("min_size", [30.0, 60.0, 75.0])
    def test_new_zone_respects_min_size(self, config, min_size):
        cfg = config.model_validate(
            {**config.model_dump(), "zones": {**config.zones.model_dump(), "min_size": min_size}}
        )
        store = LayoutStore(cfg)
        zone = store.create_zone()
        assert min(zone.width, zone.height) >= min_size
        # beide Achsen bleiben einzeln skalierbar
        assert store.update(zone.id, width=zone.width + 10).width == zone.width + 10
        assert store.update(zone.id, height=zone.height + 10).height == zone.height + 10

    def test_court_size_change_rejected(self, store):
        c = store.create_court()
        with pytest.raises(InvalidInput):
            store.update(c.id, width=200.0)

    def test_court_same_size_allowed(self, store):
        c = store.create_court()
        assert store.update(c.id, width=c.width).width == c.width

    @pytest.mark.parametrize("field,value", [("id", "zone"), ("kind", "zone"), ("label", 1)])
    def test_identity_fields_locked(self, store, field, value):
        c = store.create_court()
        with pytest.raises(InvalidInput):
            store.update(c.id, **{field: value})

    def test_label_not_reassignable(self, store):
        """Platznummer bleibt bei der Anlage vergeben; kein Duplikat per update."""
        a = store.create_court()
        b = store.create_court()
        with pytest.raises(InvalidInput):
            store.update(b.id, label=a.label)
        assert [c.label for c in store.courts()] == [1, 2]

    def test_unknown_field_rejected(self, store):
        z = store.create_zone()
        with pytest.raises(InvalidInput):
            store.update(z.id, color="#000000")

    def test_invalid_value_rejected(self, store):
        c = store.create_court()
        with pytest.raises(InvalidInput):
            store.update(c.id, x="links")

    def test_update_unknown_id(self, store):
        with pytest.raises(NotFound):
            store.update("court-99", x=1.0)


# ─── DREHEN / LÖSCHEN ─────────────────────────────────────────────────────────

class TestRotateDelete:
    def test_rotate_toggles(self, store):
        c = store.create_court()
        assert store.rotate(c.id).rotation == 90
        assert store.rotate(c.id).rotation == 0

    def test_rotate_unknown_id(self, store):
        with pytest.raises(NotFound):
            store.rotate("zone-5")

    def test_delete_removes(self, store):
        c = store.create_court()
        removed = store.delete(c.id)
        assert removed.id == c.id
        assert c.id not in store
        assert store.list() == []

    def test_delete_unknown_id(self, store):
        store.create_court()
        with pytest.raises(NotFound):
            store.delete("court-42")
        assert len(store) == 1

    def test_ids_not_reused_after_delete(self, store):
        c = store.create_court()
        store.delete(c.id)
        assert store.create_court().id != c.id


# ─── WIEDERHERSTELLEN ─────────────────────────────────────────────────────────

class TestFromElements:
    def test_counters_past_existing(self, config):
        elements = [
            Court(id="court-4", x=0, y=0, width=150, height=300, label=2, color="#2563EB"),
            Zone(id="zone-9", x=0, y=0, width=150, height=75),
        ]
        store = LayoutStore.from_elements(config, elements)
        assert store.next_seq == 10
        assert store.next_court_label == 3
        assert store.create_zone().id == "zone-10"

    def test_keeps_higher_saved_counter(self, config):
        store = LayoutStore.from_elements(config, [], next_seq=17, next_court_label=6)
        c = store.create_court()
        assert (c.id, c.label) == ("court-17", 6)

    def test_duplicate_ids_rejected(self, config):
        z = Zone(id="zone-1", x=0, y=0, width=150, height=75)
        with pytest.raises(InvalidInput):
            LayoutStore.from_elements(config, [z, z])
