"""Halboffene Zeiträume [Beginn, Ende) und die Überschneidungsregel."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from models.errors import InvalidInterval


def intervals_overlap(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime
) -> bool:
    """Einzige Überschneidungsregel für Konflikte und Verfügbarkeit.

    [s1, e1) und [s2, e2) überschneiden sich genau dann, wenn
    s1 < e2 und e1 > s2. Berührende Zeiträume (e1 == s2) sind frei.
    """
    return start_a < end_b and end_a > start_b


@dataclass(frozen=True)
class Interval:
    """Ein halboffener Zeitraum [start, end).

    Immutable (frozen=True), damit es als Dict-Key / Set-Element nutzbar ist.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if not self.start < self.end:
            raise InvalidInterval(
                f"Ende ({self.end:%Y-%m-%d %H:%M}) muss nach Beginn "
                f"({self.start:%Y-%m-%d %H:%M}) liegen."
            )

    @classmethod
    def from_duration(cls, start: datetime, minutes: float) -> "Interval":
        """Baut [start, start + minutes)."""
        if minutes <= 0:
            raise InvalidInterval(f"Dauer muss > 0 sein (erhalten: {minutes} min)")
        return cls(start, start + timedelta(minutes=minutes))

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def minutes(self) -> float:
        return self.duration.total_seconds() / 60

    def overlaps(self, other: "Interval") -> bool:
        return intervals_overlap(self.start, self.end, other.start, other.end)

    def contains(self, instant: datetime) -> bool:
        """start ≤ instant < end."""
        return self.start <= instant < self.end

    def __str__(self) -> str:
        if self.start.date() == self.end.date():
            return f"{self.start:%d.%m.%Y %H:%M}–{self.end:%H:%M}"
        return f"{self.start:%d.%m.%Y %H:%M}–{self.end:%d.%m.%Y %H:%M}"
