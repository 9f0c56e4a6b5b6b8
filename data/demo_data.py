"""Demo-Daten-Generator für den Anlagenplaner.

Erzeugt eine realistische Anlage: Plätze in einer Reihe, einige Zonen am
unteren Rand und eine Woche Buchungen. Die Buchungen laufen über den
ReservationStore und sind deshalb garantiert überschneidungsfrei.

Absichtliche Eigenheiten:
  1. Platz 1 ist abends fast ausgebucht (Stoßzeit)
  2. Einige Buchungen stoßen direkt aneinander (Ende == Beginn)
  3. Nur ein Teil der Buchungen hat eine Anzahlung
"""

import logging
import random
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional

from config.defaults import COURT_COLORS, DEMO_CLIENTS
from config.schema import PlannerConfig
from models.facility import FacilityData
from models.interval import Interval
from store.planner import FacilityPlanner

logger = logging.getLogger(__name__)

_ZONE_NAMES = ["Empfang", "Bänke", "Lager", "Café"]
_DEPOSITS = [Decimal("0"), Decimal("0"), Decimal("10"), Decimal("20"), Decimal("50")]

# Spielbetrieb der Demo-Anlage
_OPEN_FROM = time(8, 0)
_OPEN_UNTIL = time(23, 0)
_PEAK_FROM = time(18, 0)


class DemoDataGenerator:
    """Generiert eine vollständige Demo-Anlage auf Basis der PlannerConfig."""

    GAP_PX = 30   # Abstand zwischen Plätzen

    def __init__(self, config: PlannerConfig, seed: Optional[int] = None) -> None:
        self.config = config
        self.rng = random.Random(seed)

    # ─── Layout ───────────────────────────────────────────────────────────────

    def _place_courts(self, planner: FacilityPlanner, n_courts: int) -> None:
        """Legt Plätze an und richtet sie zeilenweise nebeneinander aus."""
        colors = list(COURT_COLORS.values())
        w, h = self.config.court_size_px
        canvas = self.config.canvas
        per_row = max(1, int((canvas.width + self.GAP_PX) // (w + self.GAP_PX)))
        n_rows = -(-n_courts // per_row)
        if n_rows * (h + self.GAP_PX) > canvas.height:
            raise ValueError(
                f"{n_courts} Plätze passen nicht auf die Zeichenfläche "
                f"({canvas.width:g} × {canvas.height:g} px)"
            )

        for i in range(n_courts):
            court = planner.add_court(colors[i % len(colors)])
            row, col = divmod(i, per_row)
            in_row = min(per_row, n_courts - row * per_row)
            row_w = in_row * w + (in_row - 1) * self.GAP_PX
            x0 = (canvas.width - row_w) / 2 + w / 2
            planner.layout.update(
                court.id,
                x=x0 + col * (w + self.GAP_PX),
                y=self.GAP_PX + h / 2 + row * (h + self.GAP_PX),
            )

    def _place_zones(self, planner: FacilityPlanner, n_zones: int) -> None:
        """Zonen am unteren Rand, gleichmäßig verteilt."""
        canvas = self.config.canvas
        zw, zh = self.config.zone_size_px
        for i in range(n_zones):
            zone = planner.add_zone(_ZONE_NAMES[i % len(_ZONE_NAMES)])
            planner.layout.update(
                zone.id,
                x=canvas.width * (i + 1) / (n_zones + 1),
                y=canvas.height - self.GAP_PX - zh / 2,
                width=zw,
                height=zh,
            )

    # ─── Buchungen ────────────────────────────────────────────────────────────

    def _book_day(self, planner: FacilityPlanner, court_id: str, day: date, busy: bool) -> int:
        """Füllt einen Tag eines Platzes mit aufeinanderfolgenden Buchungen."""
        durations = self.config.booking.durations
        cursor = datetime.combine(day, _OPEN_FROM)
        closing = datetime.combine(day, _OPEN_UNTIL)
        peak = datetime.combine(day, _PEAK_FROM)
        booked = 0
        while cursor < closing:
            minutes = self.rng.choice(durations)
            slot = Interval(cursor, cursor + timedelta(minutes=minutes))
            if slot.end > closing:
                break
            chance = 0.85 if (busy and cursor >= peak) else 0.35
            if self.rng.random() < chance:
                planner.book_interval(
                    court_id,
                    slot,
                    self.rng.choice(DEMO_CLIENTS),
                    self.rng.choice(_DEPOSITS),
                )
                booked += 1
                cursor = slot.end
            else:
                cursor += timedelta(minutes=30)
        return booked

    # ─── Vollständiger Datensatz ──────────────────────────────────────────────

    def generate(
        self,
        n_courts: int = 4,
        n_zones: int = 2,
        start_day: Optional[date] = None,
        days: Optional[int] = None,
    ) -> FacilityData:
        """Erzeugt den vollständigen Datensatz als FacilityData-Objekt."""
        planner = FacilityPlanner(self.config, rng=self.rng)
        self._place_courts(planner, n_courts)
        self._place_zones(planner, n_zones)

        start_day = start_day or date.today()
        days = days or self.config.booking.agenda_days
        total = 0
        for court in planner.layout.courts():
            for i in range(days):
                total += self._book_day(
                    planner, court.id, start_day + timedelta(days=i), busy=court.label == 1
                )
        logger.info(f"Demo-Anlage erzeugt: {n_courts} Plätze, {n_zones} Zonen, {total} Buchungen")
        return planner.snapshot()

    # ─── Ausgabe ──────────────────────────────────────────────────────────────

    def print_summary(self, data: FacilityData) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugte Demo-Daten", box=box.ROUNDED)
        table.add_column("Kategorie", style="bold cyan")
        table.add_column("Anzahl", justify="right")
        table.add_column("Details")

        surfaces = sorted({data.config.surface_name(c.color) for c in data.courts})
        with_deposit = sum(1 for r in data.reservations if r.deposit > 0)
        table.add_row("Plätze", str(len(data.courts)), ", ".join(surfaces))
        table.add_row("Zonen", str(len(data.zones)), ", ".join(z.name for z in data.zones))
        table.add_row("Reservierungen", str(len(data.reservations)),
                      f"{with_deposit} mit Anzahlung")

        console.print(table)
