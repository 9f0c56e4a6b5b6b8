"""LayoutStore – verwaltet alle platzierten Elemente der Anlage.

Elemente werden immer als Ganzes ersetzt; ein Aufrufer sieht nie einen
halb aktualisierten Zustand. Unbekannte IDs führen bei allen Operationen
einheitlich zu NotFound.
"""

from __future__ import annotations

import logging
import random
from typing import Iterator, Optional

from pydantic import ValidationError

from config.schema import PlannerConfig
from geometry.transform import toggle_rotation
from models.element import Court, Element, Zone
from models.errors import InvalidInput, NotFound

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = {"id", "kind", "label"}
_SIZE_FIELDS = {"width", "height"}


class LayoutStore:
    """Besitzt alle Elemente (Plätze und Zonen) in Einfügereihenfolge."""

    def __init__(
        self,
        config: PlannerConfig,
        rng: Optional[random.Random] = None,
        next_seq: int = 1,
        next_court_label: int = 1,
    ) -> None:
        self.config = config
        self._rng = rng or random.Random()
        self._elements: dict[str, Element] = {}
        self._next_seq = next_seq
        self._next_court_label = next_court_label

    @classmethod
    def from_elements(
        cls,
        config: PlannerConfig,
        elements: list[Element],
        next_seq: int = 1,
        next_court_label: int = 1,
        rng: Optional[random.Random] = None,
    ) -> "LayoutStore":
        """Baut einen Store aus gespeicherten Elementen wieder auf.

        Die Zähler werden mindestens über die höchste vorhandene ID bzw.
        Platznummer gehoben, damit nichts doppelt vergeben wird.
        """
        store = cls(config, rng=rng)
        max_seq = 0
        max_label = 0
        for el in elements:
            if el.id in store._elements:
                raise InvalidInput(f"Doppelte Element-ID: {el.id}")
            store._elements[el.id] = el
            _, _, num = el.id.rpartition("-")
            if num.isdigit():
                max_seq = max(max_seq, int(num))
            if isinstance(el, Court):
                max_label = max(max_label, el.label)
        store._next_seq = max(next_seq, max_seq + 1)
        store._next_court_label = max(next_court_label, max_label + 1)
        return store

    # ─── Zähler ───

    @property
    def next_seq(self) -> int:
        return self._next_seq

    @property
    def next_court_label(self) -> int:
        return self._next_court_label

    def _new_id(self, prefix: str) -> str:
        element_id = f"{prefix}-{self._next_seq}"
        self._next_seq += 1
        return element_id

    def _spawn_point(self, jitter: bool) -> tuple[float, float]:
        cx, cy = self.config.canvas.center
        spread = self.config.editor.spawn_jitter if jitter else 0.0
        if spread > 0:
            cx += self._rng.uniform(-spread, spread)
            cy += self._rng.uniform(-spread, spread)
        return cx, cy

    # ─── Anlegen ───

    def create_court(self, color: Optional[str] = None) -> Court:
        """Legt einen Platz in fester Größe nahe der Bildmitte an.

        Die Platznummer zählt fortlaufend weiter; nach dem Löschen eines
        Platzes wird seine Nummer nicht wieder vergeben.
        """
        width, height = self.config.court_size_px
        x, y = self._spawn_point(jitter=True)
        court = Court(
            id=self._new_id("court"),
            x=x,
            y=y,
            rotation=0.0,
            width=width,
            height=height,
            label=self._next_court_label,
            color=color or self.config.courts.default_color,
        )
        self._next_court_label += 1
        self._elements[court.id] = court
        logger.info(f"Platz {court.label} angelegt ({court.id}, {court.color})")
        return court

    def create_zone(self, name: str = "Zone") -> Zone:
        """Legt eine skalierbare Zone in Standardgröße in der Bildmitte an."""
        width, height = self.config.zone_size_px
        x, y = self._spawn_point(jitter=False)
        zone = Zone(
            id=self._new_id("zone"),
            x=x,
            y=y,
            rotation=0.0,
            width=width,
            height=height,
            name=name,
        )
        self._elements[zone.id] = zone
        logger.info(f"Zone angelegt ({zone.id})")
        return zone

    # ─── Ändern ───

    def get(self, element_id: str) -> Element:
        try:
            return self._elements[element_id]
        except KeyError:
            raise NotFound(f"Element '{element_id}' nicht gefunden.", key=element_id) from None

    def update(self, element_id: str, **changes) -> Element:
        """Flaches Zusammenführen der Änderungen in das bestehende Element.

        id, kind und die Platznummer sind unveränderlich. Plätze haben eine
        feste Größe; Zonen dürfen nicht unter min_size schrumpfen. Ungültige
        Änderungen werden komplett verworfen.
        """
        el = self.get(element_id)
        fields = type(el).model_fields

        locked = _IMMUTABLE_FIELDS & changes.keys()
        if locked:
            raise InvalidInput(f"Felder nicht änderbar: {', '.join(sorted(locked))}")
        unknown = set(changes) - set(fields)
        if unknown:
            raise InvalidInput(
                f"Unbekannte Felder für {el.kind}: {', '.join(sorted(unknown))}"
            )

        size_changes = {k: v for k, v in changes.items() if k in _SIZE_FIELDS}
        if not el.resizable:
            if any(v != getattr(el, k) for k, v in size_changes.items()):
                raise InvalidInput(f"{el.display_name} hat eine feste Größe.")
        else:
            min_size = self.config.zones.min_size
            for k, v in size_changes.items():
                if v < min_size:
                    raise InvalidInput(
                        f"{k} = {v:g} unterschreitet die Mindestgröße {min_size:g}"
                    )

        try:
            updated = type(el).model_validate({**el.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidInput(f"Ungültige Änderung an {element_id}: {e}") from e

        self._elements[element_id] = updated
        logger.debug(f"Element {element_id} aktualisiert: {changes}")
        return updated

    def rotate(self, element_id: str) -> Element:
        """Schaltet die Drehung zwischen 0° und 90° um."""
        el = self.get(element_id)
        return self.update(element_id, rotation=toggle_rotation(el.rotation))

    # ─── Entfernen ───

    def delete(self, element_id: str) -> Element:
        """Entfernt ein Element und gibt es zurück."""
        el = self.get(element_id)
        del self._elements[element_id]
        logger.info(f"Element {element_id} entfernt")
        return el

    def clear(self) -> int:
        """Entfernt alle Elemente. IDs laufen weiter, Platznummern beginnen neu."""
        count = len(self._elements)
        self._elements.clear()
        self._next_court_label = 1
        logger.info(f"Layout geleert ({count} Elemente)")
        return count

    # ─── Lesen ───

    def list(self) -> list[Element]:
        """Alle Elemente in Einfügereihenfolge (Kopie)."""
        return list(self._elements.values())

    def courts(self) -> list[Court]:
        return [e for e in self._elements.values() if isinstance(e, Court)]

    def zones(self) -> list[Zone]:
        return [e for e in self._elements.values() if isinstance(e, Zone)]

    def __iter__(self) -> Iterator[Element]:
        return iter(self.list())

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"LayoutStore({len(self.courts())} Plätze, {len(self.zones())} Zonen)"
