"""Reine Geometrie für Verschieben, Skalieren und Drehen von Rechtecken.

Alle Elemente werden über ihren Mittelpunkt (x, y) in Weltkoordinaten
positioniert. Eingaben vom Zeiger kommen in Bildschirm-Pixeln und werden
durch den Zoom geteilt, bevor sie in die Szene wirken.

Körper-Koordinatensystem eines um θ gedrehten Elements:
    u = ( cos θ, sin θ)   entlang der Breite
    v = (-sin θ, cos θ)   entlang der Höhe
"""

import math
from dataclasses import dataclass
from enum import Enum

from models.errors import InvalidInput


@dataclass(frozen=True)
class Vec2:
    """Zweidimensionaler Vektor (Szene-Einheiten)."""

    x: float
    y: float

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def scale(self, k: float) -> "Vec2":
        return Vec2(self.x * k, self.y * k)

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y


@dataclass(frozen=True)
class BodyFrame:
    """Basisvektoren u (Breite) und v (Höhe) eines gedrehten Elements."""

    u: Vec2
    v: Vec2

    @classmethod
    def from_rotation(cls, degrees: float) -> "BodyFrame":
        rad = math.radians(degrees)
        cos_t, sin_t = math.cos(rad), math.sin(rad)
        return cls(u=Vec2(cos_t, sin_t), v=Vec2(-sin_t, cos_t))

    def to_local(self, world: Vec2) -> Vec2:
        """Projiziert einen Weltvektor auf (u, v)."""
        return Vec2(world.dot(self.u), world.dot(self.v))

    def to_world(self, local: Vec2) -> Vec2:
        """Setzt einen Körpervektor wieder in Weltkoordinaten zusammen."""
        return self.u.scale(local.x) + self.v.scale(local.y)


class ResizeHandle(str, Enum):
    """Die acht Anfasser eines skalierbaren Elements."""

    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"

    @property
    def horizontal(self) -> str:
        """Bewegte Breitenkante: e, w oder leer."""
        for c in ("e", "w"):
            if c in self.value:
                return c
        return ""

    @property
    def vertical(self) -> str:
        """Bewegte Höhenkante: n, s oder leer."""
        for c in ("n", "s"):
            if c in self.value:
                return c
        return ""


@dataclass(frozen=True)
class ResizeResult:
    """Neue Größe und neuer Mittelpunkt nach einem Skalierschritt."""

    x: float
    y: float
    width: float
    height: float

    def as_changes(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def _check_zoom(zoom: float) -> None:
    if not zoom > 0:
        raise InvalidInput(f"Zoom muss > 0 sein (erhalten: {zoom})")


def parse_handle(handle) -> ResizeHandle:
    """Anfasser aus String oder Enum; unbekannte Werte → InvalidInput."""
    try:
        return ResizeHandle(handle)
    except ValueError as e:
        raise InvalidInput(
            f"Unbekannter Anfasser {handle!r} "
            f"(erlaubt: {', '.join(m.value for m in ResizeHandle)})"
        ) from e


def screen_to_world(dx_screen: float, dy_screen: float, zoom: float) -> Vec2:
    """Rechnet eine Bildschirmverschiebung in Szene-Einheiten um."""
    _check_zoom(zoom)
    return Vec2(dx_screen / zoom, dy_screen / zoom)


def move_position(
    x0: float, y0: float, dx_screen: float, dy_screen: float, zoom: float = 1.0
) -> tuple[float, float]:
    """Neuer Mittelpunkt nach einem Zieh-Vorgang.

    Reine Translation entlang der Weltachsen; die Drehung des Elements
    spielt keine Rolle.
    """
    d = screen_to_world(dx_screen, dy_screen, zoom)
    return x0 + d.x, y0 + d.y


def resize_from_handle(
    handle: ResizeHandle,
    x0: float,
    y0: float,
    width0: float,
    height0: float,
    rotation: float,
    dx_screen: float,
    dy_screen: float,
    zoom: float = 1.0,
    min_size: float = 30.0,
) -> ResizeResult:
    """Skaliert ein gedrehtes Rechteck an einem Anfasser.

    Alle Werte mit Index 0 sind der Zustand beim Drücken des Zeigers; die
    Verschiebung (dx_screen, dy_screen) ist die Gesamtstrecke seit dem
    Drücken. Die gegenüberliegende Kante bleibt in Weltkoordinaten fest,
    auch wenn die bewegte Kante an min_size anschlägt.

    Args:
        handle: Aktiver Anfasser (n, s, e, w oder Ecke).
        x0, y0: Mittelpunkt beim Start.
        width0, height0: Größe beim Start.
        rotation: Drehung in Grad (beliebig).
        dx_screen, dy_screen: Zeigerverschiebung in Bildschirm-Pixeln.
        zoom: Zoomfaktor (> 0).
        min_size: Untergrenze für Breite und Höhe.

    Returns:
        ResizeResult mit neuem Mittelpunkt und neuer Größe.
    """
    handle = parse_handle(handle)
    frame = BodyFrame.from_rotation(rotation)
    local = frame.to_local(screen_to_world(dx_screen, dy_screen, zoom))

    new_w, new_h = width0, height0
    shift_u = shift_v = 0.0

    if handle.horizontal == "e":
        new_w = max(min_size, width0 + local.x)
        shift_u = (new_w - width0) / 2
    elif handle.horizontal == "w":
        new_w = max(min_size, width0 - local.x)
        shift_u = -(new_w - width0) / 2

    if handle.vertical == "s":
        new_h = max(min_size, height0 + local.y)
        shift_v = (new_h - height0) / 2
    elif handle.vertical == "n":
        new_h = max(min_size, height0 - local.y)
        shift_v = -(new_h - height0) / 2

    shift = frame.to_world(Vec2(shift_u, shift_v))
    return ResizeResult(x=x0 + shift.x, y=y0 + shift.y, width=new_w, height=new_h)


def toggle_rotation(rotation: float) -> float:
    """Schaltet zwischen 0° und 90° um; jede andere Drehung fällt auf 0° zurück."""
    return 90.0 if rotation == 0 else 0.0


def corners(x: float, y: float, width: float, height: float, rotation: float) -> list[tuple[float, float]]:
    """Eckpunkte (nw, ne, se, sw) eines gedrehten Rechtecks in Weltkoordinaten."""
    frame = BodyFrame.from_rotation(rotation)
    center = Vec2(x, y)
    hw, hh = width / 2, height / 2
    result = []
    for lx, ly in ((-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)):
        p = center + frame.to_world(Vec2(lx, ly))
        result.append((p.x, p.y))
    return result


def bounding_box(
    x: float, y: float, width: float, height: float, rotation: float
) -> tuple[float, float, float, float]:
    """Achsparallele Hülle (min_x, min_y, max_x, max_y) eines gedrehten Rechtecks."""
    pts = corners(x, y, width, height, rotation)
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    return min(xs), min(ys), max(xs), max(ys)
