"""Datenmodell für platzierte Elemente: Padelplätze und Zonen (Pydantic v2).

Position (x, y) ist immer der Mittelpunkt in Szene-Einheiten.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator


class _PlacedElement(BaseModel):
    """Gemeinsame Felder aller Elemente."""

    id: str                      # "court-3", "zone-7"
    x: float                     # Mittelpunkt, Szene-Einheiten
    y: float
    rotation: float = 0.0        # Grad; der Editor schaltet nur 0 ↔ 90
    width: float = Field(gt=0)
    height: float = Field(gt=0)

    @property
    def corners(self) -> list[tuple[float, float]]:
        """Eckpunkte (nw, ne, se, sw) in Weltkoordinaten."""
        from geometry.transform import corners
        return corners(self.x, self.y, self.width, self.height, self.rotation)

    @property
    def bounding_box(self) -> tuple[float, float, float, float]:
        """Achsparallele Hülle (min_x, min_y, max_x, max_y)."""
        from geometry.transform import bounding_box
        return bounding_box(self.x, self.y, self.width, self.height, self.rotation)


class Court(_PlacedElement):
    """Ein buchbarer Padelplatz mit fester Größe."""

    kind: Literal["court"] = "court"
    label: int = Field(ge=1)     # Laufende Nummer bei Anlage, wird nie neu vergeben
    color: str                   # Belagsfarbe (Hex)

    @field_validator("color")
    @classmethod
    def normalize_color(cls, v: str) -> str:
        return v.upper()

    @property
    def resizable(self) -> bool:
        return False

    @property
    def display_name(self) -> str:
        return f"Platz {self.label}"


class Zone(_PlacedElement):
    """Frei skalierbare Fläche (Empfang, Bänke, Lager, …)."""

    kind: Literal["zone"] = "zone"
    name: str = "Zone"

    @property
    def resizable(self) -> bool:
        return True

    @property
    def display_name(self) -> str:
        return self.name


Element = Annotated[Union[Court, Zone], Field(discriminator="kind")]
