"""Plot options and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from .constants import DEFAULT_LINE_WIDTH
from .exceptions import ConfigurationError
from .plotter.base import Fill


class DrillMarksType(IntEnum):
    NO_DRILL_SHAPE = 0
    SMALL_DRILL_SHAPE = 1
    FULL_DRILL_SHAPE = 2


_DRILL_MARK_NAMES = {
    "none": DrillMarksType.NO_DRILL_SHAPE,
    "small": DrillMarksType.SMALL_DRILL_SHAPE,
    "full": DrillMarksType.FULL_DRILL_SHAPE,
}

_PLOT_MODE_NAMES = {
    "filled": Fill.FILLED_SHAPE,
    "outline": Fill.NO_FILL,
}


@dataclass
class PlotOptions:
    """Options of one plot call.

    The orchestrator works on a private copy, so layer dispatch side effects
    (skipping NPTH pads, suppressing drill marks) never leak back here.
    """

    drill_marks: DrillMarksType = DrillMarksType.SMALL_DRILL_SHAPE
    skip_npth_pads: bool = True
    diffing: bool = False
    plot_mode: Fill = Fill.FILLED_SHAPE
    default_line_width: float = DEFAULT_LINE_WIDTH

    @classmethod
    def from_env(cls) -> PlotOptions:
        """Build options from ``PCBPLOT_*`` environment variables.

        Raises:
            ConfigurationError: on an unrecognized value.
        """
        opts = cls()
        if "PCBPLOT_DRILL_MARKS" in os.environ:
            opts.drill_marks = parse_drill_marks(os.environ["PCBPLOT_DRILL_MARKS"])
        if "PCBPLOT_PLOT_MODE" in os.environ:
            opts.plot_mode = parse_plot_mode(os.environ["PCBPLOT_PLOT_MODE"])
        if "PCBPLOT_DIFFING" in os.environ:
            opts.diffing = _parse_bool("PCBPLOT_DIFFING", os.environ["PCBPLOT_DIFFING"])
        if "PCBPLOT_SKIP_NPTH" in os.environ:
            opts.skip_npth_pads = _parse_bool("PCBPLOT_SKIP_NPTH", os.environ["PCBPLOT_SKIP_NPTH"])
        return opts

    def to_dict(self) -> dict[str, Any]:
        return {
            "drill_marks": self.drill_marks.name.lower(),
            "skip_npth_pads": self.skip_npth_pads,
            "diffing": self.diffing,
            "plot_mode": "filled" if self.plot_mode == Fill.FILLED_SHAPE else "outline",
            "default_line_width": self.default_line_width,
        }


def parse_drill_marks(value: str) -> DrillMarksType:
    try:
        return _DRILL_MARK_NAMES[value.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Invalid drill mark mode {value!r}; expected one of {sorted(_DRILL_MARK_NAMES)}",
            setting="drill_marks",
        ) from None


def parse_plot_mode(value: str) -> Fill:
    try:
        return _PLOT_MODE_NAMES[value.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Invalid plot mode {value!r}; expected one of {sorted(_PLOT_MODE_NAMES)}",
            setting="plot_mode",
        ) from None


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off", ""):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}", setting=name)
