"""Auslastungsbericht für die Plätze einer Anlage.

Berechnet pro Platz gebuchte Stunden, Auslastung innerhalb der Öffnungszeit
und die Summe der Anzahlungen.
"""

from collections import defaultdict
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from models.facility import FacilityData
from models.interval import Interval


# ─── Metriken-Modelle ─────────────────────────────────────────────────────────

class CourtOccupancy(BaseModel):
    """Auslastung eines einzelnen Platzes im Berichtszeitraum."""

    court_id: str
    label: int
    surface: str
    reservations: int
    booked_minutes: int
    available_minutes: int
    utilisation: float              # 0.0–1.0
    deposits: Decimal
    minutes_per_day: dict[str, int]


class OccupancyReport(BaseModel):
    """Auslastungsbericht für alle Plätze."""

    period_start: date
    period_end: date                # inklusiv
    opening: str                    # "08:00–23:00"
    courts: list[CourtOccupancy]
    total_reservations: int
    total_booked_minutes: int
    avg_utilisation: float
    total_deposits: Decimal
    busiest_court: Optional[str] = None


# ─── Analyzer ─────────────────────────────────────────────────────────────────

class OccupancyAnalyzer:
    """Berechnet Auslastungsmetriken aus einer FacilityData-Momentaufnahme."""

    def __init__(self, open_from: time = time(8, 0), open_until: time = time(23, 0)):
        if not open_from < open_until:
            raise ValueError(f"Öffnungszeit {open_from}–{open_until} ist leer")
        self.open_from = open_from
        self.open_until = open_until

    def analyze(
        self, data: FacilityData, start_day: date, days: int = 7
    ) -> OccupancyReport:
        """Hauptmethode: berechnet alle Metriken für [start_day, start_day + days)."""
        day_list = [start_day + timedelta(days=i) for i in range(days)]
        open_minutes = int(
            (datetime.combine(start_day, self.open_until)
             - datetime.combine(start_day, self.open_from)).total_seconds() // 60
        )

        by_court = defaultdict(list)
        for r in data.reservations:
            by_court[r.resource_id].append(r)

        metrics: list[CourtOccupancy] = []
        for court in sorted(data.courts, key=lambda c: c.label):
            minutes_per_day: dict[str, int] = {}
            n_res = 0
            deposits = Decimal("0")
            for d in day_list:
                window = Interval(
                    datetime.combine(d, self.open_from),
                    datetime.combine(d, self.open_until),
                )
                booked = 0
                for r in by_court.get(court.id, []):
                    booked += _overlap_minutes(r.interval, window)
                    if r.start.date() == d:
                        n_res += 1
                        deposits += r.deposit
                minutes_per_day[d.isoformat()] = booked

            booked_total = sum(minutes_per_day.values())
            available = open_minutes * days
            metrics.append(CourtOccupancy(
                court_id=court.id,
                label=court.label,
                surface=data.config.surface_name(court.color),
                reservations=n_res,
                booked_minutes=booked_total,
                available_minutes=available,
                utilisation=round(booked_total / available, 4) if available else 0.0,
                deposits=deposits,
                minutes_per_day=minutes_per_day,
            ))

        n = len(metrics)
        busiest = max(metrics, key=lambda m: m.booked_minutes, default=None)
        return OccupancyReport(
            period_start=start_day,
            period_end=day_list[-1] if day_list else start_day,
            opening=f"{self.open_from:%H:%M}–{self.open_until:%H:%M}",
            courts=metrics,
            total_reservations=sum(m.reservations for m in metrics),
            total_booked_minutes=sum(m.booked_minutes for m in metrics),
            avg_utilisation=round(sum(m.utilisation for m in metrics) / n, 4) if n else 0.0,
            total_deposits=sum((m.deposits for m in metrics), Decimal("0")),
            busiest_court=(
                busiest.court_id if busiest and busiest.booked_minutes > 0 else None
            ),
        )

    def print_rich(self, report: OccupancyReport, currency: str = "$") -> None:
        """Gibt den Auslastungsbericht formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()

        util_color = _util_color(report.avg_utilisation)
        console.print(Panel(
            f"Zeitraum: [bold]{report.period_start:%d.%m.%Y}–{report.period_end:%d.%m.%Y}[/bold] | "
            f"Öffnungszeit: {report.opening}\n"
            f"Reservierungen: [bold]{report.total_reservations}[/bold] | "
            f"Gebucht: [bold]{report.total_booked_minutes / 60:.1f}h[/bold]\n"
            f"Ø Auslastung: [{util_color}]{report.avg_utilisation:.1%}[/{util_color}] | "
            f"Anzahlungen: [bold]{currency}{report.total_deposits}[/bold]",
            title="Auslastung – Übersicht",
            border_style="cyan",
        ))

        if not report.courts:
            console.print("[dim]Keine Plätze vorhanden.[/dim]")
            return

        table = Table(title="Plätze", box=box.ROUNDED, show_lines=False)
        table.add_column("Platz", width=8)
        table.add_column("Belag", width=10)
        table.add_column("Buchungen", justify="right", width=10)
        table.add_column("Stunden", justify="right", width=8)
        table.add_column("Auslastung", justify="right", width=11)
        table.add_column("Anzahlungen", justify="right", width=12)

        for m in report.courts:
            color = _util_color(m.utilisation)
            marker = " ★" if m.court_id == report.busiest_court else ""
            table.add_row(
                f"{m.label}{marker}",
                m.surface,
                str(m.reservations),
                f"{m.booked_minutes / 60:.1f}",
                f"[{color}]{m.utilisation:.1%}[/{color}]",
                f"{currency}{m.deposits}",
            )
        console.print(table)


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def _overlap_minutes(a: Interval, b: Interval) -> int:
    """Minuten, in denen sich zwei Zeiträume überschneiden (0 wenn getrennt)."""
    start = max(a.start, b.start)
    end = min(a.end, b.end)
    if start >= end:
        return 0
    return int((end - start).total_seconds() // 60)


def _util_color(value: float) -> str:
    return "green" if value >= 0.6 else "yellow" if value >= 0.3 else "red"
