from pydantic import BaseModel, Field, field_validator, model_validator


# ─── ZEICHENFLÄCHE ───

class CanvasConfig(BaseModel):
    """Maßstab und Größe der Zeichenfläche (Szene-Einheiten = Pixel bei Zoom 1)."""
    # Pixel pro Meter (Standard: 15 px/m)
    pixels_per_meter: float = Field(15.0, gt=0,
        description="Pixel pro Meter")
    # Breite der Zeichenfläche in Pixeln
    width: float = Field(1200.0, gt=0,
        description="Breite der Zeichenfläche (px)")
    # Höhe der Zeichenfläche in Pixeln
    height: float = Field(800.0, gt=0,
        description="Höhe der Zeichenfläche (px)")

    @property
    def center(self) -> tuple[float, float]:
        """Mittelpunkt der Zeichenfläche."""
        return self.width / 2, self.height / 2


# ─── PLÄTZE ───

class CourtConfig(BaseModel):
    """Feste Größenklasse der Padel-Plätze."""
    # Platzbreite in Metern
    width_m: float = Field(10.0, gt=0,
        description="Platzbreite (m)")
    # Platzlänge in Metern
    height_m: float = Field(20.0, gt=0,
        description="Platzlänge (m)")
    # Verfügbare Belagsfarben (Farbwert → Belagsbezeichnung)
    palette: dict[str, str] = Field(
        default={
            "#2563EB": "Blau",
            "#10B981": "Grün",
            "#EC4899": "WPT",
            "#EA580C": "Standard",
        },
        description="Belagsfarben (Hex → Bezeichnung)")
    # Farbe, die ohne Angabe verwendet wird
    default_color: str = Field("#2563EB",
        description="Standard-Belagsfarbe")

    @field_validator("palette")
    @classmethod
    def normalize_palette(cls, v: dict[str, str]) -> dict[str, str]:
        return {k.upper(): name for k, name in v.items()}

    @field_validator("default_color")
    @classmethod
    def normalize_color(cls, v: str) -> str:
        return v.upper()


# ─── ZONEN ───

class ZoneConfig(BaseModel):
    """Größen für frei skalierbare Zonen (Bänke, Empfang, Lager, …)."""
    # Standardbreite einer neuen Zone in Metern
    default_width_m: float = Field(10.0, gt=0,
        description="Standardbreite neuer Zonen (m)")
    # Standardhöhe einer neuen Zone in Metern
    default_height_m: float = Field(5.0, gt=0,
        description="Standardhöhe neuer Zonen (m)")
    # Minimale Kantenlänge beim Skalieren in Pixeln
    min_size: float = Field(30.0, gt=0,
        description="Minimale Kantenlänge (px)")


# ─── EDITOR ───

class EditorConfig(BaseModel):
    """Zoom-Grenzen und Platzierungsverhalten des Editors."""
    zoom_min: float = Field(0.5, gt=0, description="Kleinster Zoom")
    zoom_max: float = Field(3.0, gt=0, description="Größter Zoom")
    zoom_step: float = Field(0.1, gt=0, description="Zoom-Schrittweite")
    # Zufälliger Versatz neuer Plätze um den Mittelpunkt (± px)
    spawn_jitter: float = Field(20.0, ge=0,
        description="Zufallsversatz neuer Plätze (± px)")

    @model_validator(mode='after')
    def validate_zoom_bounds(self):
        if self.zoom_min > 1.0 or self.zoom_max < 1.0:
            raise ValueError(
                f"Zoom-Grenzen [{self.zoom_min}, {self.zoom_max}] müssen 1.0 enthalten")
        return self


# ─── BUCHUNGEN ───

class BookingConfig(BaseModel):
    """Buchungsoptionen für Formular und Verfügbarkeitssuche."""
    # Wählbare Spieldauern in Minuten
    durations: list[int] = Field(
        default=[60, 90, 120],
        description="Wählbare Spieldauern (min)")
    # Vorausgewählte Dauer
    default_duration: int = Field(90,
        description="Vorausgewählte Spieldauer (min)")
    # Anzahl Tage der Wochenagenda
    agenda_days: int = Field(7, ge=1, le=31,
        description="Tage in der Wochenagenda")
    # Währungssymbol für Anzahlungen
    currency: str = Field("$", description="Währungssymbol")

    @model_validator(mode='after')
    def validate_durations(self):
        if not self.durations:
            raise ValueError("Mindestens eine Spieldauer erforderlich")
        for d in self.durations:
            if d <= 0:
                raise ValueError(f"Spieldauer {d} muss > 0 sein")
        if self.default_duration not in self.durations:
            raise ValueError(
                f"Standarddauer {self.default_duration} nicht in {self.durations}")
        return self


# ─── GESAMT-CONFIG ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration der Anlage."""
    # Name der Anlage
    facility_name: str = Field("Padel-Club",
        description="Name der Anlage")
    # Zeichenfläche und Maßstab
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    # Platzgröße und Belagsfarben
    courts: CourtConfig = Field(default_factory=CourtConfig)
    # Zonen-Größen
    zones: ZoneConfig = Field(default_factory=ZoneConfig)
    # Zoom und Platzierung
    editor: EditorConfig = Field(default_factory=EditorConfig)
    # Buchungsoptionen
    booking: BookingConfig = Field(default_factory=BookingConfig)

    @property
    def court_size_px(self) -> tuple[float, float]:
        """Platzgröße (Breite, Höhe) in Szene-Einheiten."""
        ppm = self.canvas.pixels_per_meter
        return self.courts.width_m * ppm, self.courts.height_m * ppm

    @property
    def zone_size_px(self) -> tuple[float, float]:
        """Standardgröße neuer Zonen in Szene-Einheiten."""
        ppm = self.canvas.pixels_per_meter
        return self.zones.default_width_m * ppm, self.zones.default_height_m * ppm

    @model_validator(mode='after')
    def validate_zone_size(self):
        zw, zh = self.zone_size_px
        if min(zw, zh) < self.zones.min_size:
            raise ValueError(
                f"Standardgröße neuer Zonen ({zw:g} × {zh:g} px) unterschreitet "
                f"die Mindestgröße {self.zones.min_size:g} px")
        return self

    def surface_name(self, color: str) -> str:
        """Belagsbezeichnung für eine Farbe; unbekannte Farben → "Standard"."""
        return self.courts.palette.get(color.upper(), "Standard")
