"""ReservationStore – Buchungen mit Konfliktprüfung.

Prüfen auf Überschneidung und Einfügen geschehen unter einer gemeinsamen
Sperre als ein Schritt; pro Platz überschneiden sich nie zwei Buchungen.
"""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, Iterator, Optional, Union

from pydantic import ValidationError

from models.errors import Conflict, InvalidInput, InvalidInterval, NotFound
from models.interval import Interval, intervals_overlap
from models.reservation import Reservation

logger = logging.getLogger(__name__)

IntervalLike = Union[Interval, tuple[datetime, datetime]]


def _coerce_interval(interval: IntervalLike) -> tuple[datetime, datetime]:
    if isinstance(interval, Interval):
        start, end = interval.start, interval.end
    else:
        try:
            start, end = interval
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Kein Zeitraum: {interval!r}") from e
    if not start < end:
        raise InvalidInterval(
            f"Ende ({end:%Y-%m-%d %H:%M}) muss nach Beginn ({start:%Y-%m-%d %H:%M}) liegen."
        )
    return start, end


def parse_deposit(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """Anzahlung als Decimal; leere Eingabe zählt als 0."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip().replace(",", "."))
    except InvalidOperation as e:
        raise InvalidInput(f"Anzahlung '{value}' ist keine Zahl.") from e
    if not amount.is_finite() or amount < 0:
        raise InvalidInput(f"Anzahlung muss ≥ 0 sein (erhalten: {value}).")
    return amount


class ReservationStore:
    """Besitzt alle Reservierungen; Plätze werden nur über ihre ID referenziert."""

    def __init__(self, next_seq: int = 1) -> None:
        self._reservations: dict[str, Reservation] = {}
        self._next_seq = next_seq
        self._lock = threading.RLock()

    @classmethod
    def from_reservations(
        cls, reservations: Iterable[Reservation], next_seq: int = 1
    ) -> "ReservationStore":
        """Baut einen Store aus gespeicherten Reservierungen wieder auf.

        Gespeicherte Daten werden nicht auf Überschneidungen geprüft; dafür
        gibt es den ConsistencyValidator.
        """
        store = cls()
        max_seq = 0
        for r in reservations:
            if r.id in store._reservations:
                raise InvalidInput(f"Doppelte Reservierungs-ID: {r.id}")
            store._reservations[r.id] = r
            _, _, num = r.id.rpartition("-")
            if num.isdigit():
                max_seq = max(max_seq, int(num))
        store._next_seq = max(next_seq, max_seq + 1)
        return store

    @property
    def next_seq(self) -> int:
        return self._next_seq

    # ─── Anlegen ───

    def create(
        self,
        resource_id: str,
        interval: IntervalLike,
        client_name: str,
        deposit: Union[str, int, float, Decimal, None] = 0,
    ) -> Reservation:
        """Legt eine Reservierung an, sofern der Platz im Zeitraum frei ist.

        Reihenfolge der Prüfungen:
        1. Zeitraum gültig (Beginn < Ende)      → sonst InvalidInterval
        2. Kundenname nicht leer, Anzahlung ≥ 0 → sonst InvalidInput
        3. Keine Überschneidung auf dem Platz   → sonst Conflict
        """
        start, end = _coerce_interval(interval)
        if not isinstance(client_name, str) or not client_name.strip():
            raise InvalidInput("Kundenname darf nicht leer sein.")
        amount = parse_deposit(deposit)

        with self._lock:
            for existing in self._reservations.values():
                if existing.resource_id != resource_id:
                    continue
                if intervals_overlap(start, end, existing.start, existing.end):
                    logger.warning(
                        f"Konflikt auf {resource_id}: {start:%d.%m. %H:%M}–{end:%H:%M} "
                        f"überschneidet {existing.id}"
                    )
                    raise Conflict(
                        f"Konflikt! Der Platz ist bereits reserviert "
                        f"({existing.client_name}, {existing.interval}).",
                        existing=existing,
                    )

            try:
                reservation = Reservation(
                    id=f"res-{self._next_seq}",
                    resource_id=resource_id,
                    client_name=client_name,
                    start=start,
                    end=end,
                    deposit=amount,
                )
            except ValidationError as e:
                raise InvalidInput(f"Ungültige Reservierung: {e}") from e

            self._next_seq += 1
            self._reservations[reservation.id] = reservation

        logger.info(
            f"Reservierung {reservation.id} angelegt: {resource_id}, "
            f"{reservation.interval}, {reservation.client_name}"
        )
        return reservation

    # ─── Entfernen ───

    def delete(self, reservation_id: str) -> Reservation:
        """Entfernt eine Reservierung; unbekannte IDs → NotFound."""
        with self._lock:
            try:
                reservation = self._reservations.pop(reservation_id)
            except KeyError:
                raise NotFound(
                    f"Reservierung '{reservation_id}' nicht gefunden.", key=reservation_id
                ) from None
        logger.info(f"Reservierung {reservation_id} storniert")
        return reservation

    def delete_for_resource(self, resource_id: str) -> list[Reservation]:
        """Entfernt alle Reservierungen eines Platzes (z.B. beim Löschen des Platzes)."""
        with self._lock:
            removed = [r for r in self._reservations.values() if r.resource_id == resource_id]
            for r in removed:
                del self._reservations[r.id]
        if removed:
            logger.info(f"{len(removed)} Reservierungen für {resource_id} entfernt")
        return removed

    def clear(self) -> int:
        with self._lock:
            count = len(self._reservations)
            self._reservations.clear()
        return count

    # ─── Abfragen ───

    def get(self, reservation_id: str) -> Reservation:
        try:
            return self._reservations[reservation_id]
        except KeyError:
            raise NotFound(
                f"Reservierung '{reservation_id}' nicht gefunden.", key=reservation_id
            ) from None

    def list(self) -> list[Reservation]:
        """Alle Reservierungen in Anlagereihenfolge (Kopie)."""
        return list(self._reservations.values())

    def for_resource(self, resource_id: str) -> list[Reservation]:
        """Alle Reservierungen eines Platzes, nach Beginn sortiert."""
        return sorted(
            (r for r in self._reservations.values() if r.resource_id == resource_id),
            key=lambda r: r.start,
        )

    def on_date(self, resource_id: str, day: date) -> list[Reservation]:
        """Reservierungen eines Platzes, die am angegebenen Tag beginnen."""
        return [r for r in self.for_resource(resource_id) if r.start.date() == day]

    def in_range(self, resource_id: str, interval: IntervalLike) -> list[Reservation]:
        """Reservierungen eines Platzes, die den Zeitraum überschneiden."""
        start, end = _coerce_interval(interval)
        return [
            r for r in self.for_resource(resource_id)
            if intervals_overlap(start, end, r.start, r.end)
        ]

    def conflicts(self, resource_id: str, interval: IntervalLike) -> list[Reservation]:
        """Alias für in_range – die Buchungen, an denen eine neue scheitern würde."""
        return self.in_range(resource_id, interval)

    def active_at(self, resource_id: str, instant: datetime) -> Optional[Reservation]:
        """Die Reservierung, die zum Zeitpunkt läuft (start ≤ t < end), sonst None."""
        for r in self._reservations.values():
            if r.resource_id == resource_id and r.is_active_at(instant):
                return r
        return None

    def __iter__(self) -> Iterator[Reservation]:
        return iter(self.list())

    def __contains__(self, reservation_id: object) -> bool:
        return reservation_id in self._reservations

    def __len__(self) -> int:
        return len(self._reservations)

    def __repr__(self) -> str:
        return f"ReservationStore({len(self._reservations)} Reservierungen)"
