"""Zieh-Sitzung: Startzustand eines Verschiebe- oder Skaliervorgangs.

Beim Drücken des Zeigers wird der Zustand des Elements einmal festgehalten.
Jede Zeigerbewegung rechnet ab diesem Startzustand neu (nie ab dem letzten
Zwischenergebnis), damit sich Rundungsfehler nicht aufsummieren. Beim
Loslassen wird die Sitzung verworfen.
"""

from dataclasses import dataclass
from typing import Optional

from geometry.transform import ResizeHandle, move_position, parse_handle, resize_from_handle
from models.errors import InvalidInput


@dataclass(frozen=True)
class DragSession:
    """Unveränderlicher Startzustand einer Zieh-Geste."""

    element_id: str
    kind: str                          # "move" oder "resize"
    zoom: float
    start_x: float
    start_y: float
    start_width: float
    start_height: float
    rotation: float
    handle: Optional[ResizeHandle] = None
    min_size: float = 30.0

    def __post_init__(self) -> None:
        if not self.zoom > 0:
            raise InvalidInput(f"Zoom muss > 0 sein (erhalten: {self.zoom})")
        if self.kind not in ("move", "resize"):
            raise InvalidInput(f"Unbekannte Zieh-Art: {self.kind!r}")
        if self.kind == "resize" and self.handle is None:
            raise InvalidInput("Skalieren braucht einen Anfasser (n, s, e, w, ne, nw, se, sw).")

    @classmethod
    def for_move(cls, element, zoom: float = 1.0) -> "DragSession":
        """Startet das Verschieben eines beliebigen Elements."""
        return cls(
            element_id=element.id,
            kind="move",
            zoom=zoom,
            start_x=element.x,
            start_y=element.y,
            start_width=element.width,
            start_height=element.height,
            rotation=element.rotation,
        )

    @classmethod
    def for_resize(
        cls, element, handle: str, zoom: float = 1.0, min_size: float = 30.0
    ) -> "DragSession":
        """Startet das Skalieren; nur für skalierbare Elemente (Zonen)."""
        if not element.resizable:
            raise InvalidInput(f"{element.display_name} hat eine feste Größe.")
        h = parse_handle(handle)
        return cls(
            element_id=element.id,
            kind="resize",
            zoom=zoom,
            start_x=element.x,
            start_y=element.y,
            start_width=element.width,
            start_height=element.height,
            rotation=element.rotation,
            handle=h,
            min_size=min_size,
        )

    def apply(self, dx_screen: float, dy_screen: float) -> dict[str, float]:
        """Änderungen für das Element bei Gesamtverschiebung (dx, dy) seit dem Drücken."""
        if self.kind == "move":
            x, y = move_position(self.start_x, self.start_y, dx_screen, dy_screen, self.zoom)
            return {"x": x, "y": y}
        result = resize_from_handle(
            self.handle,
            self.start_x,
            self.start_y,
            self.start_width,
            self.start_height,
            self.rotation,
            dx_screen,
            dy_screen,
            zoom=self.zoom,
            min_size=self.min_size,
        )
        return result.as_changes()

    def cancel(self) -> dict[str, float]:
        """Änderungen, die den Startzustand wiederherstellen."""
        changes = {"x": self.start_x, "y": self.start_y}
        if self.kind == "resize":
            changes.update(width=self.start_width, height=self.start_height)
        return changes
