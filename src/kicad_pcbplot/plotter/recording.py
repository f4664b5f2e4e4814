"""Recording plotter: keeps every drawing call as an ordered command list.

Used to inspect and diff plots without a concrete output format: two plots of
the same board are identical exactly when their command lists compare equal.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..colors import Color
from ..geometry import Point, Size
from .base import ElementMeta, Fill, Plotter, TextHJustify, TextVJustify


@dataclass
class PlotCommand:
    """One recorded plotter call."""

    op: str
    args: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op, **{k: _jsonable(v) for k, v in self.args.items()}}


def _jsonable(value: Any) -> Any:
    if isinstance(value, (Point, Size, Color, ElementMeta)):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


class RecordingPlotter(Plotter):
    """Plotter that stores calls instead of drawing them.

    Points are copied on record so later mutation by the caller cannot
    rewrite history.
    """

    def __init__(self) -> None:
        self.commands: list[PlotCommand] = []

    def _record(self, op: str, **args: Any) -> None:
        self.commands.append(PlotCommand(op, args))

    # ── Inspection ─────────────────────────────────────────────────

    def ops(self) -> list[str]:
        """Operation names in call order."""
        return [c.op for c in self.commands]

    def of_type(self, op: str) -> list[PlotCommand]:
        return [c for c in self.commands if c.op == op]

    def clear(self) -> None:
        self.commands.clear()

    def to_dict(self) -> list[dict[str, Any]]:
        return [c.to_dict() for c in self.commands]

    # ── Plotter interface ──────────────────────────────────────────

    def set_color(self, color: Color) -> None:
        self._record("set_color", color=color)

    def set_current_line_width(self, width: float) -> None:
        self._record("set_current_line_width", width=width)

    def set_fill(self, fill: Fill) -> None:
        self._record("set_fill", fill=fill)

    def move_to(self, p: Point) -> None:
        self._record("move_to", p=p.copy())

    def finish_to(self, p: Point, meta: ElementMeta | None = None) -> None:
        self._record("finish_to", p=p.copy(), meta=meta)

    def circle(
        self,
        center: Point,
        diameter: float,
        fill: Fill,
        width: float,
        meta: ElementMeta | None = None,
    ) -> None:
        self._record(
            "circle", center=center.copy(), diameter=diameter, fill=fill, width=width, meta=meta
        )

    def rect(self, p1: Point, p2: Point, fill: Fill, width: float) -> None:
        self._record("rect", p1=p1.copy(), p2=p2.copy(), fill=fill, width=width)

    def arc(
        self,
        center: Point,
        start_angle: float,
        end_angle: float,
        radius: float,
        fill: Fill,
        width: float,
        meta: ElementMeta | None = None,
    ) -> None:
        self._record(
            "arc",
            center=center.copy(),
            start_angle=start_angle,
            end_angle=end_angle,
            radius=radius,
            fill=fill,
            width=width,
            meta=meta,
        )

    def polyline(
        self,
        points: Sequence[Point],
        fill: Fill,
        width: float,
        meta: ElementMeta | None = None,
    ) -> None:
        self._record(
            "polyline", points=[p.copy() for p in points], fill=fill, width=width, meta=meta
        )

    def curve(
        self,
        start: Point,
        end: Point,
        ctrl1: Point,
        ctrl2: Point,
        width: float,
        meta: ElementMeta | None = None,
    ) -> None:
        self._record(
            "curve",
            start=start.copy(),
            end=end.copy(),
            ctrl1=ctrl1.copy(),
            ctrl2=ctrl2.copy(),
            width=width,
            meta=meta,
        )

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
    ) -> None:
        self._record(
            "text",
            pos=pos.copy(),
            color=color,
            text=text,
            angle=angle,
            size=size.copy(),
            h_justify=h_justify,
            v_justify=v_justify,
            width=width,
            italic=italic,
            bold=bold,
            mirrored=mirrored,
            meta=meta,
        )
