"""Pad flashing: turns a pad shape into plotter primitives."""

from __future__ import annotations

import math
from collections.abc import Callable

from ..exceptions import UnsupportedShapeError
from ..geometry import Point, Size, add_angles, rotate_point, rotate_point_with_center
from ..plotter.base import ElementMeta, Fill, Plotter
from ..schema.board import Pad
from ..schema.common import PadShape
from .thick import ThickRenderer


def trapezoid_corners(size: Size, delta: Size) -> list[Point]:
    """Pad-local corners of a trapezoid pad.

    The skew is clamped so the trapezoid never folds over itself: each delta
    stays strictly inside the opposite half dimension.
    """
    sw = int(size.width) >> 1
    sh = int(size.height) >> 1
    dw = int(delta.width) >> 1
    dh = int(delta.height) >> 1

    if dw < 0 and dw <= -sh:
        dw = -sh + 1
    if dw > 0 and dw >= sh:
        dw = sh - 1
    if dh < 0 and dh <= -sw:
        dh = -sw + 1
    if dh > 0 and dh >= sw:
        dh = sw - 1

    return [
        Point(-sw - dh, sh + dw),
        Point(-sw + dh, -sh - dw),
        Point(sw - dh, -sh + dw),
        Point(sw + dh, sh - dw),
    ]


def _inset(value: float, step: float) -> float:
    """Shift ``value`` by ``step`` without crossing zero from its own side."""
    moved = value + step
    if step > 0 and value <= 0:
        return min(moved, 0)
    if step < 0 and value >= 0:
        return max(moved, 0)
    return moved


def roundrect_radius(size: Size, ratio: float) -> int:
    """Corner radius of a round-rect pad: the smaller side times the ratio."""
    return math.floor(min(size.width, size.height) * ratio)


class PadFlasher:
    """Flashes pads, drill marks and via rings."""

    def __init__(self, plotter: Plotter, thick: ThickRenderer) -> None:
        self.plotter = plotter
        self.thick = thick
        self._handlers: dict[PadShape, Callable[[Pad, Fill, ElementMeta | None], None]] = {
            PadShape.CIRCLE: lambda pad, fill, meta: self.flash_pad_circle(
                pad.pos, pad.size.width, fill, meta
            ),
            PadShape.RECT: lambda pad, fill, meta: self.flash_pad_rect(
                pad.pos, pad.size, pad.orientation, fill, meta
            ),
            PadShape.OVAL: lambda pad, fill, meta: self.flash_pad_oval(
                pad.pos, pad.size, pad.orientation, fill, meta
            ),
            PadShape.TRAPEZOID: lambda pad, fill, meta: self.flash_pad_trapezoid(
                pad.pos, trapezoid_corners(pad.size, pad.delta), pad.orientation, fill, meta
            ),
            PadShape.ROUNDRECT: lambda pad, fill, meta: self.flash_pad_roundrect(
                pad.pos,
                pad.size,
                roundrect_radius(pad.size, pad.roundrect_ratio),
                pad.orientation,
                fill,
                meta,
            ),
        }

    @property
    def default_line_width(self) -> float:
        return self.thick.default_line_width

    def flash_pad(self, pad: Pad, fill: Fill, meta: ElementMeta | None = None) -> None:
        """Flash ``pad`` with the handler registered for its shape.

        Raises:
            UnsupportedShapeError: if no handler exists for the pad shape.
        """
        handler = self._handlers.get(pad.shape)
        if handler is None:
            raise UnsupportedShapeError(
                f"Pad {pad.number!r} has unsupported shape {pad.shape.value!r}",
                shape=pad.shape.value,
                owner=str(meta) if meta else pad.number,
            )
        handler(pad, fill, meta)

    def flash_pad_circle(
        self, pos: Point, diameter: float, fill: Fill, meta: ElementMeta | None = None
    ) -> None:
        if fill == Fill.FILLED_SHAPE:
            self.plotter.circle(pos, diameter, fill, 0, meta)
            return

        line_width = self.default_line_width
        self.plotter.set_current_line_width(line_width)
        stroked = max(1, diameter - line_width)
        if line_width > diameter - 2:
            line_width = max(0, diameter - 2)
        self.plotter.circle(pos, stroked, Fill.NO_FILL, line_width, meta)

    def flash_pad_rect(
        self,
        pos: Point,
        size: Size,
        orientation: float,
        fill: Fill,
        meta: ElementMeta | None = None,
    ) -> None:
        line_width = self.default_line_width
        self.plotter.set_current_line_width(0 if fill == Fill.FILLED_SHAPE else line_width)

        dx = max(1, size.width - line_width) / 2
        dy = max(1, size.height - line_width) / 2
        corners = [
            Point(pos.x - dx, pos.y + dy),
            Point(pos.x - dx, pos.y - dy),
            Point(pos.x + dx, pos.y - dy),
            Point(pos.x + dx, pos.y + dy),
        ]
        points = [rotate_point_with_center(c, pos, orientation) for c in corners]
        points.append(points[0])
        self.plotter.polyline(points, fill, line_width, meta)

    def flash_pad_roundrect(
        self,
        pos: Point,
        size: Size,
        corner_radius: float,
        orientation: float,
        fill: Fill,
        meta: ElementMeta | None = None,
    ) -> None:
        """Four corner arcs, then the horizontal and vertical bands.

        The shape is centered on ``pos``; the two bands overlap in the middle.
        """
        size = size.copy()
        line_width: float = self.default_line_width
        if fill == Fill.FILLED_SHAPE:
            line_width = 0
        else:
            size.width = max(0, size.width - line_width)
            size.height = max(0, size.height - line_width)
            corner_radius = max(0, corner_radius - line_width / 2)

        hw = size.width / 2
        hh = size.height / 2
        corner_radius = min(corner_radius, hw, hh)
        inner_x = hw - corner_radius
        inner_y = hh - corner_radius

        def place(x: float, y: float) -> Point:
            return rotate_point(Point(x, y), orientation) + pos

        top_left = place(-inner_x, -hh)
        top_right = place(inner_x, -hh)
        bottom_left = place(-inner_x, hh)
        bottom_right = place(inner_x, hh)
        left_top = place(-hw, -inner_y)
        left_bottom = place(-hw, inner_y)
        right_top = place(hw, -inner_y)
        right_bottom = place(hw, inner_y)

        arcs = [
            (place(-inner_x, -inner_y), 900, 1800),
            (place(-inner_x, inner_y), 1800, 2700),
            (place(inner_x, -inner_y), 0, 900),
            (place(inner_x, inner_y), 2700, 3600),
        ]
        for center, start, end in arcs:
            self.plotter.arc(
                center, orientation + start, orientation + end, corner_radius, fill, line_width
            )

        self.plotter.polyline(
            [top_left, top_right, bottom_right, bottom_left, top_left], fill, line_width, meta
        )
        self.plotter.polyline(
            [left_top, right_top, right_bottom, left_bottom, left_top], fill, line_width, meta
        )

    def flash_pad_trapezoid(
        self,
        pos: Point,
        corners: list[Point],
        orientation: float,
        fill: Fill,
        meta: ElementMeta | None = None,
    ) -> None:
        line_width: float = self.default_line_width
        points = [c.copy() for c in corners]

        if fill == Fill.FILLED_SHAPE:
            line_width = 0
        else:
            # pull every corner inward by one stroke, stopping at the pad axes
            insets = [(1, -1), (1, 1), (-1, 1), (-1, -1)]
            for point, (sx, sy) in zip(points, insets):
                point.x = _inset(point.x, sx * line_width)
                point.y = _inset(point.y, sy * line_width)

        points = [rotate_point(p, orientation) + pos for p in points]
        points.append(points[0])
        self.plotter.polyline(points, fill, line_width, meta)

    def flash_pad_oval(
        self,
        center: Point,
        size: Size,
        orientation: float,
        fill: Fill,
        meta: ElementMeta | None = None,
    ) -> None:
        size = size.copy()
        if size.width > size.height:
            size.width, size.height = size.height, size.width
            orientation = add_angles(orientation, 900)

        if fill != Fill.FILLED_SHAPE:
            self.thick.sketch_oval(center, size, orientation, self.default_line_width, meta)
            return

        delta = size.height - size.width
        p0 = rotate_point(Point(0, -delta / 2), orientation)
        p1 = rotate_point(Point(0, delta / 2), orientation)
        self.thick.thick_segment(center + p0, center + p1, size.width, fill, meta)
