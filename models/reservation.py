"""Datenmodell für eine Platzreservierung (Pydantic v2)."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from models.interval import Interval


class Reservation(BaseModel):
    """Eine Buchung eines Platzes im halboffenen Zeitraum [start, end).

    resource_id ist nur ein Rückverweis auf den Platz, kein Objekt-Handle.
    """

    id: str                                  # "res-12"
    resource_id: str                         # ID des gebuchten Platzes
    client_name: str
    start: datetime
    end: datetime
    deposit: Decimal = Field(Decimal("0"), ge=0)   # Anzahlung

    @field_validator("client_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Kundenname darf nicht leer sein.")
        return v

    @model_validator(mode='after')
    def _check_order(self):
        if not self.start < self.end:
            raise ValueError(
                f"Reservierung {self.id}: Ende ({self.end}) muss nach Beginn ({self.start}) liegen."
            )
        return self

    @property
    def interval(self) -> Interval:
        return Interval(self.start, self.end)

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def is_active_at(self, instant: datetime) -> bool:
        """True wenn start ≤ instant < end."""
        return self.interval.contains(instant)
