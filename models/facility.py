"""FacilityData: Vollständiger Stand einer Anlage (Layout + Reservierungen, Pydantic v2)."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from config.schema import PlannerConfig
from models.element import Court, Element, Zone
from models.reservation import Reservation


class FacilityData(BaseModel):
    """Momentaufnahme einer Anlage: Elemente, Reservierungen, ID-Zähler.

    Die Zähler werden mitgespeichert, damit nach dem Laden keine bereits
    vergebene ID erneut entsteht.
    """

    config: PlannerConfig
    elements: list[Element] = []
    reservations: list[Reservation] = []
    next_element_seq: int = 1
    next_court_label: int = 1
    next_reservation_seq: int = 1
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Übersicht ───

    @property
    def courts(self) -> list[Court]:
        return [e for e in self.elements if isinstance(e, Court)]

    @property
    def zones(self) -> list[Zone]:
        return [e for e in self.elements if isinstance(e, Zone)]

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        total_deposit = sum((r.deposit for r in self.reservations), start=0)
        booked_min = sum(r.duration_minutes for r in self.reservations)
        lines = [
            f"Anlage: {self.config.facility_name}",
            f"Plätze: {len(self.courts)}",
            f"Zonen: {len(self.zones)}",
            f"Reservierungen: {len(self.reservations)} "
            f"({booked_min / 60:.1f}h gebucht)",
            f"Anzahlungen: {self.config.booking.currency}{total_deposit}"
            if self.reservations else "",
        ]
        return "\n".join(l for l in lines if l)

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    def save_versioned(self, base_path: Path) -> Path:
        """Speichert mit Zeitstempel im Dateinamen."""
        base_path = Path(base_path)
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
        versioned = base_path.parent / f"{base_path.stem}_{ts}{base_path.suffix}"
        self.save_json(versioned)
        return versioned

    @classmethod
    def load_json(cls, path: Path) -> "FacilityData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
