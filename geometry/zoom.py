"""Zoom-Stufen des Editors (Vergrößern, Verkleinern, Zurücksetzen)."""

from dataclasses import dataclass, replace

from config.schema import EditorConfig


@dataclass(frozen=True)
class ZoomState:
    """Aktueller Zoomfaktor mit den Grenzen aus der Editor-Konfiguration."""

    value: float = 1.0
    minimum: float = 0.5
    maximum: float = 3.0
    step: float = 0.1

    @classmethod
    def from_config(cls, editor: EditorConfig, value: float = 1.0) -> "ZoomState":
        return cls(
            value=min(max(value, editor.zoom_min), editor.zoom_max),
            minimum=editor.zoom_min,
            maximum=editor.zoom_max,
            step=editor.zoom_step,
        )

    def zoom_in(self) -> "ZoomState":
        return replace(self, value=round(min(self.value + self.step, self.maximum), 6))

    def zoom_out(self) -> "ZoomState":
        return replace(self, value=round(max(self.value - self.step, self.minimum), 6))

    def reset(self) -> "ZoomState":
        return replace(self, value=1.0)

    @property
    def percent(self) -> int:
        """Anzeigewert in Prozent, z.B. 110."""
        return round(self.value * 100)
