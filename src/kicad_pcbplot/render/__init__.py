"""Rendering: thick primitives, pad flashing and per-layer orchestration."""

from .board import DEFAULT_LAYER_MASK, BoardPlotter
from .pads import PadFlasher, roundrect_radius, trapezoid_corners
from .thick import ThickRenderer

__all__ = [
    "DEFAULT_LAYER_MASK",
    "BoardPlotter",
    "PadFlasher",
    "ThickRenderer",
    "roundrect_radius",
    "trapezoid_corners",
]
