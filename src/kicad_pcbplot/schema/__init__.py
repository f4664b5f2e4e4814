"""Typed data models for the board snapshot."""

from .board import (
    Board,
    BoardDesignSettings,
    Dimension,
    DrawSegment,
    EdgeModule,
    Module,
    Pad,
    Target,
    Text,
    TextModule,
    Track,
    Via,
    Zone,
    ZoneFillSegment,
)
from .common import PadAttribute, PadDrillShape, PadShape, Shape, TargetShape
from .load import board_from_dict, extract_module

__all__ = [
    "Board",
    "BoardDesignSettings",
    "Dimension",
    "DrawSegment",
    "EdgeModule",
    "Module",
    "Pad",
    "PadAttribute",
    "PadDrillShape",
    "PadShape",
    "Shape",
    "Target",
    "TargetShape",
    "Text",
    "TextModule",
    "Track",
    "Via",
    "Zone",
    "ZoneFillSegment",
    "board_from_dict",
    "extract_module",
]
