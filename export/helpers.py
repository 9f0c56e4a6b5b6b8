"""Gemeinsame Hilfsfunktionen für Terminal- und Excel-Export."""

from datetime import date
from decimal import Decimal

from config.schema import PlannerConfig
from models.element import Court, Zone
from models.reservation import Reservation

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "zone":     "CBD5E1",
    "occupied": "FCA5A5",
    "free":     "BBF7D0",
    "empty":    "F5F5F5",
    "header":   "1E293B",
}

WEEKDAYS = ["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"]


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Wandelt RRGGBB-String in (r, g, b)-Tupel um."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def excel_color(hex_color: str) -> str:
    """'#2563eb' → '2563EB' (Format für openpyxl-Füllungen)."""
    return hex_color.lstrip("#").upper()


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


# ─── Formatierung ─────────────────────────────────────────────────────────────

def format_day(d: date) -> str:
    """'Mo 14.10.2026'"""
    return f"{WEEKDAYS[d.weekday()]} {d:%d.%m.%Y}"


def format_time_range(r: Reservation) -> str:
    if r.start.date() == r.end.date():
        return f"{r.start:%H:%M}–{r.end:%H:%M}"
    return f"{r.start:%H:%M}–{r.end:%d.%m. %H:%M}"


def format_deposit(amount: Decimal, currency: str = "$") -> str:
    """Anzahlung nur anzeigen, wenn > 0; sonst leer."""
    return f"{currency}{amount}" if amount > 0 else ""


def element_kind_label(el) -> str:
    return "Platz" if isinstance(el, Court) else "Zone"


def element_size_m(el, config: PlannerConfig) -> str:
    """Größe in Metern, z.B. '10 × 20 m'."""
    ppm = config.canvas.pixels_per_meter
    return f"{el.width / ppm:g} × {el.height / ppm:g} m"


def element_details(el, config: PlannerConfig) -> str:
    if isinstance(el, Court):
        return f"Belag {config.surface_name(el.color)} ({el.color})"
    if isinstance(el, Zone):
        return el.name
    return ""


def status_label(active: "Reservation | None") -> str:
    """'Frei' oder 'Belegt bis HH:MM (Name)'."""
    if active is None:
        return "Frei"
    return f"Belegt bis {active.end:%H:%M} ({active.client_name})"
