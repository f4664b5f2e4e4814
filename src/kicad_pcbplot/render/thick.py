"""Width-compensated rendering of lines, arcs, rectangles, circles and curves.

The backend strokes at one default width and fills closed shapes. A line
that is conceptually ``width`` wide is drawn either as a single stroke at
that width (filled mode) or as default-width strokes tracing the outline of
the band it would cover (outline mode).
"""

from __future__ import annotations

from ..constants import DEFAULT_LINE_WIDTH
from ..geometry import Point, Size, add_angles, arc_tangente, euclidean_norm, rotate_point
from ..plotter.base import ElementMeta, Fill, Plotter


class ThickRenderer:
    """Draws thick primitives on a plotter."""

    def __init__(self, plotter: Plotter, default_line_width: float = DEFAULT_LINE_WIDTH) -> None:
        self.plotter = plotter
        self.default_line_width = default_line_width

    def thick_segment(
        self,
        start: Point,
        end: Point,
        width: float,
        fill: Fill,
        meta: ElementMeta | None = None,
    ) -> None:
        if fill == Fill.FILLED_SHAPE:
            self.plotter.set_fill(Fill.NO_FILL)
            self.plotter.set_current_line_width(width)
            self.plotter.move_to(start)
            self.plotter.finish_to(end, meta)
        else:
            self.plotter.set_current_line_width(self.default_line_width)
            self.segment_as_oval(start, end, width, meta)

    def segment_as_oval(
        self,
        start: Point,
        end: Point,
        width: float,
        meta: ElementMeta | None = None,
    ) -> None:
        """Outline the capsule a ``width`` wide segment covers."""
        center = Point((start.x + end.x) / 2, (start.y + end.y) / 2)
        delta = Size(end.x - start.x, end.y - start.y)

        if delta.height == 0:
            orientation: float = 0
        elif delta.width == 0:
            orientation = 900
        else:
            orientation = -arc_tangente(delta.height, delta.width)

        size = Size(euclidean_norm(delta) + width, width)
        self.sketch_oval(center, size, orientation, self.default_line_width, meta)

    def sketch_oval(
        self,
        pos: Point,
        size: Size,
        orientation: float,
        line_width: float,
        meta: ElementMeta | None = None,
    ) -> None:
        """Stroke a capsule outline: two straight sides and two half circles.

        The capsule is normalized so its long axis is vertical in local
        coordinates (width <= height), turning it a quarter if needed.
        """
        self.plotter.set_current_line_width(line_width)
        size = size.copy()
        if size.width > size.height:
            size.width, size.height = size.height, size.width
            orientation = add_angles(orientation, 900)

        half_delta = (size.height - size.width) / 2
        radius = max(0, (size.width - line_width) / 2)

        def local(x: float, y: float) -> Point:
            return rotate_point(Point(x, y), orientation) + pos

        self.plotter.move_to(local(-radius, -half_delta))
        self.plotter.finish_to(local(-radius, half_delta))
        self.plotter.move_to(local(radius, -half_delta))
        self.plotter.finish_to(local(radius, half_delta))

        self.plotter.arc(
            local(0, half_delta),
            orientation + 1800,
            orientation + 3600,
            radius,
            Fill.NO_FILL,
            self.default_line_width,
        )
        self.plotter.arc(
            local(0, -half_delta),
            orientation,
            orientation + 1800,
            radius,
            Fill.NO_FILL,
            self.default_line_width,
            meta,
        )

    def thick_arc(
        self,
        center: Point,
        start_angle: float,
        end_angle: float,
        radius: float,
        width: float,
        fill: Fill,
        meta: ElementMeta | None = None,
    ) -> None:
        if fill == Fill.FILLED_SHAPE:
            self.plotter.arc(center, start_angle, end_angle, radius, Fill.NO_FILL, width, meta)
            return

        offset = (width - self.default_line_width) / 2
        self.plotter.set_current_line_width(self.default_line_width)
        self.plotter.arc(
            center, start_angle, end_angle, radius - offset, Fill.NO_FILL, width, meta
        )
        self.plotter.arc(
            center, start_angle, end_angle, radius + offset, Fill.NO_FILL, width, meta
        )

    def thick_rect(self, p1: Point, p2: Point, width: float, fill: Fill) -> None:
        if fill == Fill.FILLED_SHAPE:
            self.plotter.rect(p1, p2, Fill.NO_FILL, width)
            return

        delta = width - self.default_line_width
        self.plotter.set_current_line_width(self.default_line_width)
        outer1 = Point(p1.x - delta / 2, p1.y - delta / 2)
        outer2 = Point(p2.x + delta / 2, p2.y + delta / 2)
        self.plotter.rect(outer1, outer2, Fill.NO_FILL, self.default_line_width)
        inner1 = Point(outer1.x + delta, outer1.y + delta)
        inner2 = Point(outer2.x - delta, outer2.y - delta)
        self.plotter.rect(inner1, inner2, Fill.NO_FILL, self.default_line_width)

    def thick_circle(
        self,
        pos: Point,
        diameter: float,
        width: float,
        fill: Fill,
        meta: ElementMeta | None = None,
    ) -> None:
        if fill == Fill.FILLED_SHAPE:
            self.plotter.circle(pos, diameter, Fill.NO_FILL, width, meta)
            return

        default = self.default_line_width
        self.plotter.set_current_line_width(default)
        self.plotter.circle(pos, diameter - width + default, Fill.NO_FILL, default, meta)
        self.plotter.circle(pos, diameter + width - default, Fill.NO_FILL, default, meta)

    def thick_curve(
        self,
        start: Point,
        end: Point,
        ctrl1: Point,
        ctrl2: Point,
        width: float,
        meta: ElementMeta | None = None,
    ) -> None:
        """Bezier curves have no outline decomposition; always one stroke."""
        width = width or self.default_line_width
        self.plotter.set_current_line_width(width)
        self.plotter.curve(start, end, ctrl1, ctrl2, width, meta)
