"""Plotter backend interface.

A plotter turns abstract drawing commands into a concrete output. It is
assumed to support only a default-width stroke and filled versus outlined
closed shapes; everything else is composed on top by the renderers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..colors import Color
    from ..geometry import Point, Size


class Fill(Enum):
    NO_FILL = "N"
    FILLED_SHAPE = "F"
    FILLED_WITH_BG_BODYCOLOR = "f"


class TextHJustify(Enum):
    LEFT = "L"
    CENTER = "C"
    RIGHT = "R"


class TextVJustify(Enum):
    TOP = "T"
    CENTER = "C"
    BOTTOM = "B"


@dataclass(frozen=True)
class ElementMeta:
    """Provenance tag attached to emitted primitives. Never affects geometry."""

    owner_type: str  # "module", "board"
    owner_name: str
    layer: int
    element_kind: str  # "pad", "segment", "text", ...

    def __str__(self) -> str:
        return f"{self.owner_type}-{self.element_kind}-{self.owner_name}-{self.layer}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner_type": self.owner_type,
            "owner_name": self.owner_name,
            "layer": self.layer,
            "element_kind": self.element_kind,
        }


class Plotter(ABC):
    """Drawing backend consumed by the renderers.

    Lengths are board units, angles decidegrees. Call order is significant:
    overlapping strokes are part of the output.
    """

    @abstractmethod
    def set_color(self, color: Color) -> None: ...

    @abstractmethod
    def set_current_line_width(self, width: float) -> None: ...

    @abstractmethod
    def set_fill(self, fill: Fill) -> None: ...

    @abstractmethod
    def move_to(self, p: Point) -> None: ...

    @abstractmethod
    def finish_to(self, p: Point, meta: ElementMeta | None = None) -> None: ...

    @abstractmethod
    def circle(
        self,
        center: Point,
        diameter: float,
        fill: Fill,
        width: float,
        meta: ElementMeta | None = None,
    ) -> None: ...

    @abstractmethod
    def rect(self, p1: Point, p2: Point, fill: Fill, width: float) -> None: ...

    @abstractmethod
    def arc(
        self,
        center: Point,
        start_angle: float,
        end_angle: float,
        radius: float,
        fill: Fill,
        width: float,
        meta: ElementMeta | None = None,
    ) -> None: ...

    @abstractmethod
    def polyline(
        self,
        points: Sequence[Point],
        fill: Fill,
        width: float,
        meta: ElementMeta | None = None,
    ) -> None: ...

    @abstractmethod
    def curve(
        self,
        start: Point,
        end: Point,
        ctrl1: Point,
        ctrl2: Point,
        width: float,
        meta: ElementMeta | None = None,
    ) -> None: ...

    @abstractmethod
    def text(
        self,
        pos: Point,
        color: Color,
        text: str,
        angle: float,
        size: Size,
        h_justify: TextHJustify,
        v_justify: TextVJustify,
        width: float,
        italic: bool,
        bold: bool,
        mirrored: bool = False,
        meta: ElementMeta | None = None,
    ) -> None: ...
