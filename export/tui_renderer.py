"""Gemeinsamer Renderer für die Terminal-Anzeige der Anlage.

Liefert reine Zeilen/Strings; die Ausgabe über Rich übernimmt main.py.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from datetime import date
    from config.schema import PlannerConfig
    from models.reservation import Reservation


def render_layout_rows(elements: list, config: "PlannerConfig") -> list[list[str]]:
    """Tabellenzeilen für das Layout.

    Jede Zeile: [ID, Art, Name, Mitte (x, y), Größe px, Größe m, Drehung, Details]
    """
    from export.helpers import element_details, element_kind_label, element_size_m

    rows: list[list[str]] = []
    for el in elements:
        rows.append([
            el.id,
            element_kind_label(el),
            el.display_name,
            f"({el.x:.0f}, {el.y:.0f})",
            f"{el.width:g} × {el.height:g}",
            element_size_m(el, config),
            f"{el.rotation:g}°",
            element_details(el, config),
        ])
    return rows


def render_reservation_rows(
    reservations: list["Reservation"], currency: str = "$"
) -> list[list[str]]:
    """Jede Zeile: [ID, Platz-ID, Datum, Zeit, Dauer, Kunde, Anzahlung]"""
    from export.helpers import format_day, format_deposit, format_time_range

    return [
        [
            r.id,
            r.resource_id,
            format_day(r.start.date()),
            format_time_range(r),
            f"{r.duration_minutes} min",
            r.client_name,
            format_deposit(r.deposit, currency),
        ]
        for r in reservations
    ]


def render_agenda_rows(
    agenda: list[tuple["date", list["Reservation"]]],
    currency: str = "$",
    today: Optional["date"] = None,
) -> list[list[str]]:
    """Wochenagenda eines Platzes.

    Pro Tag eine Kopfzeile; Tage ohne Buchung erhalten 'Keine Reservierungen'.
    Jede Zeile: [Tag, Zeit, Dauer, Kunde, Anzahlung, ID]
    """
    from export.helpers import format_day, format_deposit, format_time_range

    rows: list[list[str]] = []
    for day, items in agenda:
        label = format_day(day)
        if today is not None and day == today:
            label += " (heute)"
        if not items:
            rows.append([label, "—", "", "Keine Reservierungen", "", ""])
            continue
        for i, r in enumerate(items):
            rows.append([
                label if i == 0 else "",
                format_time_range(r),
                f"{r.duration_minutes}m",
                r.client_name,
                format_deposit(r.deposit, currency),
                r.id,
            ])
    return rows


def render_status_rows(
    courts: list, status: dict, config: "PlannerConfig"
) -> list[list[str]]:
    """Belegung zum Ansichtszeitpunkt. Jede Zeile: [Platz, Belag, Status, Zeit, Kunde]"""
    rows: list[list[str]] = []
    for c in sorted(courts, key=lambda c: c.label):
        active = status.get(c.id)
        if active is None:
            rows.append([c.display_name, config.surface_name(c.color), "Frei", "", ""])
        else:
            rows.append([
                c.display_name,
                config.surface_name(c.color),
                "Belegt",
                f"{active.start:%H:%M}–{active.end:%H:%M}",
                active.client_name,
            ])
    return rows


def render_floor_plan(
    elements: list, config: "PlannerConfig", columns: int = 72
) -> list[str]:
    """ASCII-Grundriss der Zeichenfläche.

    Eine Zelle ist belegt, wenn ihr Mittelpunkt im (gedrehten) Rechteck
    liegt. Zonen werden mit '░' gefüllt, Plätze mit der letzten Ziffer
    ihrer Nummer und überdecken Zonen.
    """
    from geometry.transform import BodyFrame, Vec2
    from models.element import Court

    cell_w = config.canvas.width / columns
    cell_h = cell_w * 2          # Zeichen sind etwa doppelt so hoch wie breit
    rows = max(1, round(config.canvas.height / cell_h))
    grid = [[" "] * columns for _ in range(rows)]

    ordered = sorted(elements, key=lambda e: isinstance(e, Court))
    for el in ordered:
        frame = BodyFrame.from_rotation(el.rotation)
        char = str(el.label)[-1] if isinstance(el, Court) else "░"
        min_x, min_y, max_x, max_y = el.bounding_box
        c0 = max(0, int(min_x // cell_w))
        c1 = min(columns - 1, int(max_x // cell_w))
        r0 = max(0, int(min_y // cell_h))
        r1 = min(rows - 1, int(max_y // cell_h))
        for r in range(r0, r1 + 1):
            for c in range(c0, c1 + 1):
                p = Vec2((c + 0.5) * cell_w - el.x, (r + 0.5) * cell_h - el.y)
                local = frame.to_local(p)
                if abs(local.x) <= el.width / 2 and abs(local.y) <= el.height / 2:
                    grid[r][c] = char

    border = "+" + "-" * columns + "+"
    return [border] + ["|" + "".join(line) + "|" for line in grid] + [border]
