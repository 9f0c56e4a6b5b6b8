"""Geometrie-Modul: Verschieben, Skalieren und Drehen im Körper-Koordinatensystem."""

from geometry.transform import (
    BodyFrame,
    ResizeHandle,
    ResizeResult,
    Vec2,
    bounding_box,
    corners,
    move_position,
    parse_handle,
    resize_from_handle,
    screen_to_world,
    toggle_rotation,
)
from geometry.drag import DragSession
from geometry.zoom import ZoomState

__all__ = [
    "BodyFrame",
    "ResizeHandle",
    "ResizeResult",
    "Vec2",
    "bounding_box",
    "corners",
    "move_position",
    "parse_handle",
    "resize_from_handle",
    "screen_to_world",
    "toggle_rotation",
    "DragSession",
    "ZoomState",
]
