from config.schema import (
    BookingConfig,
    CanvasConfig,
    CourtConfig,
    EditorConfig,
    PlannerConfig,
    ZoneConfig,
)


# ─── BELAGSFARBEN ───
# Farbwert → Belagsbezeichnung. Reihenfolge = Reihenfolge in der Werkzeugleiste.

COURT_COLORS: dict[str, str] = {
    "blau":       "#2563EB",
    "gruen":      "#10B981",
    "wpt":        "#EC4899",
    "terrakotta": "#EA580C",
}

# Kundennamen für Demo-Buchungen
DEMO_CLIENTS: list[str] = [
    "Lucía Fernández", "Martín Gómez", "Sofía Ruiz", "Javier Morales",
    "Valentina Díaz", "Mateo Herrera", "Camila Torres", "Diego Romero",
    "Paula Navarro", "Andrés Castro", "Julia Ortega", "Tomás Vega",
]


def default_canvas() -> CanvasConfig:
    """Standard-Zeichenfläche: 1200 × 800 px bei 15 px/m (80 m × 53 m)."""
    return CanvasConfig(pixels_per_meter=15.0, width=1200.0, height=800.0)


def default_courts() -> CourtConfig:
    """Standard-Padelplatz 10 m × 20 m mit vier Belagsfarben."""
    return CourtConfig(
        width_m=10.0,
        height_m=20.0,
        palette={
            COURT_COLORS["blau"]:       "Blau",
            COURT_COLORS["gruen"]:      "Grün",
            COURT_COLORS["wpt"]:        "WPT",
            COURT_COLORS["terrakotta"]: "Standard",
        },
        default_color=COURT_COLORS["blau"],
    )


def default_zones() -> ZoneConfig:
    """Neue Zonen: 10 m × 5 m, minimale Kante 30 px (2 m)."""
    return ZoneConfig(default_width_m=10.0, default_height_m=5.0, min_size=30.0)


def default_editor() -> EditorConfig:
    """Zoom 50 %–300 % in 10-%-Schritten, ±20 px Platzierungsversatz."""
    return EditorConfig(zoom_min=0.5, zoom_max=3.0, zoom_step=0.1, spawn_jitter=20.0)


def default_booking() -> BookingConfig:
    """Spieldauern 60/90/120 min, vorausgewählt 90 min."""
    return BookingConfig(durations=[60, 90, 120], default_duration=90, agenda_days=7)


def default_planner_config() -> PlannerConfig:
    """Komplette Default-Konfiguration für eine Padel-Anlage."""
    return PlannerConfig(
        facility_name="Padel-Club",
        canvas=default_canvas(),
        courts=default_courts(),
        zones=default_zones(),
        editor=default_editor(),
        booking=default_booking(),
    )
