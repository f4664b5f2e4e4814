"""kicad-pcbplot: plot KiCad board snapshots into vector drawing commands."""

from .colors import Color, LayerColorPolicy
from .config import DrillMarksType, PlotOptions
from .exceptions import (
    ConfigurationError,
    InvalidTransformError,
    PcbPlotError,
    UnknownLayerError,
    UnsupportedShapeError,
    ValidationError,
)
from .geometry import Point, Rect, Size, Transform
from .layers import LayerSet, PcbLayerId
from .plotter import ElementMeta, Fill, Plotter, RecordingPlotter
from .render import BoardPlotter, PadFlasher, ThickRenderer
from .schema import Board, board_from_dict

__version__ = "0.1.0"

__all__ = [
    "Board",
    "BoardPlotter",
    "Color",
    "ConfigurationError",
    "DrillMarksType",
    "ElementMeta",
    "Fill",
    "InvalidTransformError",
    "LayerColorPolicy",
    "LayerSet",
    "PadFlasher",
    "PcbLayerId",
    "PcbPlotError",
    "PlotOptions",
    "Plotter",
    "Point",
    "RecordingPlotter",
    "Rect",
    "Size",
    "ThickRenderer",
    "Transform",
    "UnknownLayerError",
    "UnsupportedShapeError",
    "ValidationError",
    "board_from_dict",
]
