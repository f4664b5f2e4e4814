"""Shape tags shared by the board entities."""

from __future__ import annotations

from enum import Enum


class PadShape(Enum):
    CIRCLE = "circle"
    RECT = "rect"
    OVAL = "oval"
    TRAPEZOID = "trapezoid"
    ROUNDRECT = "roundrect"
    CUSTOM = "custom"


class PadDrillShape(Enum):
    CIRCLE = "circle"
    OBLONG = "oblong"


class PadAttribute(Enum):
    STANDARD = "thru_hole"
    SMD = "smd"
    CONN = "connect"
    HOLE_NOT_PLATED = "np_thru_hole"


class Shape(Enum):
    """Graphic item shapes (footprint edges and board drawings)."""

    SEGMENT = "segment"
    RECT = "rect"
    ARC = "arc"
    CIRCLE = "circle"
    POLYGON = "polygon"
    CURVE = "curve"
    LAST = "last"  # sentinel, never drawable


class TargetShape(Enum):
    PLUS = 0
    CROSS = 1
