"""Verfügbarkeitsabfrage: welche Plätze sind in einem Zeitraum frei?

Nutzt dieselbe Überschneidungsregel wie die Konfliktprüfung der
Reservierungen, damit Suche und Buchung nie auseinanderlaufen.
"""

import logging
from datetime import datetime
from typing import Iterable, Sequence, TypeVar

from models.element import Court
from models.interval import Interval, intervals_overlap
from models.reservation import Reservation

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Court)


def candidate_interval(start: datetime, duration_minutes: float) -> Interval:
    """[start, start + Dauer); Dauer ≤ 0 → InvalidInterval."""
    return Interval.from_duration(start, duration_minutes)


def has_conflict(
    resource_id: str, reservations: Iterable[Reservation], candidate: Interval
) -> bool:
    """True wenn eine Reservierung des Platzes den Zeitraum überschneidet."""
    return any(
        r.resource_id == resource_id
        and intervals_overlap(candidate.start, candidate.end, r.start, r.end)
        for r in reservations
    )


def find_available(
    resources: Sequence[R],
    reservations: Iterable[Reservation],
    candidate: Interval,
) -> list[R]:
    """Alle Plätze ohne überschneidende Reservierung, in Eingabereihenfolge.

    Reservierungen für Plätze, die nicht in ``resources`` stehen, werden
    ignoriert. Jede positive Dauer ist erlaubt, nicht nur die im Formular
    angebotenen.
    """
    busy = {
        r.resource_id
        for r in reservations
        if intervals_overlap(candidate.start, candidate.end, r.start, r.end)
    }
    free = [res for res in resources if res.id not in busy]
    logger.debug(f"Verfügbarkeit {candidate}: {len(free)}/{len(resources)} Plätze frei")
    return free


def free_windows(
    reservations: Iterable[Reservation],
    window: Interval,
    min_minutes: float = 0,
) -> list[Interval]:
    """Freie Lücken innerhalb von ``window``, die keine Reservierung abdeckt.

    Die Reservierungen sollten zu genau einem Platz gehören. Lücken kürzer
    als ``min_minutes`` werden weggelassen.
    """
    busy = sorted(
        (r for r in reservations
         if intervals_overlap(window.start, window.end, r.start, r.end)),
        key=lambda r: r.start,
    )
    gaps: list[Interval] = []
    cursor = window.start
    for r in busy:
        if r.start > cursor:
            gaps.append(Interval(cursor, min(r.start, window.end)))
        cursor = max(cursor, r.end)
        if cursor >= window.end:
            break
    if cursor < window.end:
        gaps.append(Interval(cursor, window.end))
    return [g for g in gaps if g.minutes >= min_minutes and g.minutes > 0]
