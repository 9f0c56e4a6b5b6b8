"""FacilityPlanner – Fassade über Layout- und Reservierungsspeicher.

Hier liegen die Regeln, die beide Speicher betreffen: Löschen eines Platzes
entfernt auch seine Reservierungen, das Buchungsformular wird in einen
Zeitraum übersetzt, und Zieh-Gesten werden über den LayoutStore geschrieben.
"""

import logging
import random
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Union

from config.schema import PlannerConfig
from geometry.drag import DragSession
from geometry.zoom import ZoomState
from models.element import Court, Element, Zone
from models.errors import InvalidInput, NotFound
from models.facility import FacilityData
from models.interval import Interval
from models.reservation import Reservation
from store.availability import candidate_interval, find_available, free_windows
from store.layout_store import LayoutStore
from store.reservation_store import ReservationStore

logger = logging.getLogger(__name__)

DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y")
TIME_FORMATS = ("%H:%M",)


def _parse_with(value: str, formats: tuple[str, ...]) -> Optional[datetime]:
    for fmt in formats:
        try:
            return datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
    return None


def parse_date(date_str: str) -> date:
    """Datum aus dem Formular: JJJJ-MM-TT oder TT.MM.JJJJ."""
    if not date_str or not date_str.strip():
        raise InvalidInput("Bitte Datum ausfüllen.")
    parsed = _parse_with(date_str, DATE_FORMATS)
    if parsed is None:
        raise InvalidInput(f"Datum '{date_str}' ist ungültig.")
    return parsed.date()


def parse_start(date_str: str, time_str: str) -> datetime:
    """Beginn aus Datum und Uhrzeit (HH:MM), als lokale Zeit ohne Zeitzone."""
    if not date_str or not date_str.strip() or not time_str or not time_str.strip():
        raise InvalidInput("Bitte Datum und Uhrzeit ausfüllen.")
    day = _parse_with(date_str, DATE_FORMATS)
    clock = _parse_with(time_str, TIME_FORMATS)
    if day is None or clock is None:
        raise InvalidInput(
            f"Datum oder Uhrzeit ist ungültig ('{date_str}' '{time_str}')."
        )
    return datetime.combine(day.date(), clock.time())


class FacilityPlanner:
    """Eine Anlage: Layout, Reservierungen und Editor-Zustand (Zoom)."""

    def __init__(
        self,
        config: Optional[PlannerConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or PlannerConfig()
        self.layout = LayoutStore(self.config, rng=rng)
        self.reservations = ReservationStore()
        self.zoom = ZoomState.from_config(self.config.editor)

    # ─── Layout ───

    def add_court(self, color: Optional[str] = None) -> Court:
        return self.layout.create_court(color)

    def add_zone(self, name: str = "Zone") -> Zone:
        return self.layout.create_zone(name)

    def rotate(self, element_id: str) -> Element:
        return self.layout.rotate(element_id)

    def delete_element(self, element_id: str) -> tuple[Element, list[Reservation]]:
        """Entfernt ein Element; bei Plätzen auch dessen Reservierungen."""
        el = self.layout.delete(element_id)
        removed: list[Reservation] = []
        if isinstance(el, Court):
            removed = self.reservations.delete_for_resource(el.id)
        return el, removed

    def clear_layout(self) -> tuple[int, int]:
        """Leert Layout und Reservierungen. Gibt (Elemente, Reservierungen) zurück."""
        n_res = self.reservations.clear()
        n_el = self.layout.clear()
        return n_el, n_res

    def court(self, court_id: str) -> Court:
        """Liefert einen Platz; Zonen oder unbekannte IDs → NotFound."""
        el = self.layout.get(court_id)
        if not isinstance(el, Court):
            raise NotFound(f"'{court_id}' ist kein Platz.", key=court_id)
        return el

    # ─── Zieh-Gesten ───

    def begin_move(self, element_id: str, zoom: Optional[float] = None) -> DragSession:
        el = self.layout.get(element_id)
        return DragSession.for_move(el, zoom if zoom is not None else self.zoom.value)

    def begin_resize(
        self, element_id: str, handle: str, zoom: Optional[float] = None
    ) -> DragSession:
        el = self.layout.get(element_id)
        return DragSession.for_resize(
            el,
            handle,
            zoom if zoom is not None else self.zoom.value,
            min_size=self.config.zones.min_size,
        )

    def drag(self, session: DragSession, dx_screen: float, dy_screen: float) -> Element:
        """Wendet die Gesamtverschiebung seit Beginn der Geste an."""
        return self.layout.update(session.element_id, **session.apply(dx_screen, dy_screen))

    def cancel_drag(self, session: DragSession) -> Element:
        return self.layout.update(session.element_id, **session.cancel())

    # ─── Zoom ───

    def zoom_in(self) -> float:
        self.zoom = self.zoom.zoom_in()
        return self.zoom.value

    def zoom_out(self) -> float:
        self.zoom = self.zoom.zoom_out()
        return self.zoom.value

    def zoom_reset(self) -> float:
        self.zoom = self.zoom.reset()
        return self.zoom.value

    # ─── Buchungen ───

    def book(
        self,
        court_id: str,
        date_str: str,
        time_str: str,
        duration_minutes: int,
        client_name: str,
        deposit: Union[str, Decimal, int, None] = "",
    ) -> Reservation:
        """Bucht einen Platz über die Formularfelder Datum, Uhrzeit und Dauer."""
        start = parse_start(date_str, time_str)
        return self.book_interval(
            court_id, candidate_interval(start, duration_minutes), client_name, deposit
        )

    def book_interval(
        self,
        court_id: str,
        interval: Interval,
        client_name: str,
        deposit: Union[str, Decimal, int, None] = 0,
    ) -> Reservation:
        self.court(court_id)
        return self.reservations.create(court_id, interval, client_name, deposit)

    def cancel(self, reservation_id: str) -> Reservation:
        return self.reservations.delete(reservation_id)

    # ─── Abfragen ───

    def court_status(self, at: datetime) -> dict[str, Optional[Reservation]]:
        """Belegung aller Plätze zum Zeitpunkt ``at`` (None = frei)."""
        return {
            c.id: self.reservations.active_at(c.id, at)
            for c in self.layout.courts()
        }

    def reservations_on(self, court_id: str, day: date) -> list[Reservation]:
        self.court(court_id)
        return self.reservations.on_date(court_id, day)

    def week_agenda(
        self,
        court_id: str,
        start_day: Optional[date] = None,
        days: Optional[int] = None,
    ) -> list[tuple[date, list[Reservation]]]:
        """Reservierungen eines Platzes für die nächsten Tage, je Tag sortiert."""
        self.court(court_id)
        start_day = start_day or date.today()
        days = days or self.config.booking.agenda_days
        return [
            (d, self.reservations.on_date(court_id, d))
            for d in (start_day + timedelta(days=i) for i in range(days))
        ]

    def free_slots(
        self, court_id: str, day: date, min_minutes: float = 0
    ) -> list[Interval]:
        """Freie Zeitfenster eines Platzes an einem ganzen Kalendertag."""
        self.court(court_id)
        start = datetime.combine(day, datetime.min.time())
        window = Interval(start, start + timedelta(days=1))
        return free_windows(self.reservations.for_resource(court_id), window, min_minutes)

    def find_available(self, candidate: Interval) -> list[Court]:
        return find_available(self.layout.courts(), self.reservations.list(), candidate)

    def search(self, date_str: str, time_str: str, duration_minutes: int) -> list[Court]:
        """Freie Plätze für Datum, Uhrzeit und Dauer aus dem Suchformular."""
        start = parse_start(date_str, time_str)
        return self.find_available(candidate_interval(start, duration_minutes))

    # ─── Momentaufnahme ───

    def snapshot(self) -> FacilityData:
        return FacilityData(
            config=self.config,
            elements=self.layout.list(),
            reservations=self.reservations.list(),
            next_element_seq=self.layout.next_seq,
            next_court_label=self.layout.next_court_label,
            next_reservation_seq=self.reservations.next_seq,
        )

    @classmethod
    def from_snapshot(
        cls, data: FacilityData, rng: Optional[random.Random] = None
    ) -> "FacilityPlanner":
        planner = cls(data.config, rng=rng)
        planner.layout = LayoutStore.from_elements(
            data.config,
            data.elements,
            next_seq=data.next_element_seq,
            next_court_label=data.next_court_label,
            rng=rng,
        )
        planner.reservations = ReservationStore.from_reservations(
            data.reservations, next_seq=data.next_reservation_seq
        )
        logger.info(
            f"Anlage geladen: {len(planner.layout)} Elemente, "
            f"{len(planner.reservations)} Reservierungen"
        )
        return planner
