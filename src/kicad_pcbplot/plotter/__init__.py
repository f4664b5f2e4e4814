"""Plotter backends."""

from .base import ElementMeta, Fill, Plotter, TextHJustify, TextVJustify
from .recording import PlotCommand, RecordingPlotter

__all__ = [
    "ElementMeta",
    "Fill",
    "PlotCommand",
    "Plotter",
    "RecordingPlotter",
    "TextHJustify",
    "TextVJustify",
]
