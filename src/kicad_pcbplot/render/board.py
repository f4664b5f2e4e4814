"""Per-layer plot orchestration.

``BoardPlotter`` walks a board snapshot and drives the pad flasher and the
thick-primitive renderer for the layers of the current mask. Entity order
inside a pass is part of the output contract: overlapping strokes are drawn
in a fixed order.
"""

from __future__ import annotations

from dataclasses import replace

from ..colors import Color, LayerColorPolicy
from ..config import DrillMarksType, PlotOptions
from ..constants import SMALL_DRILL, VIA_DIAMETER_ADJUST
from ..exceptions import UnsupportedShapeError
from ..geometry import Point, Size, arc_tangente, clamp, get_line_length, rotate_point
from ..layers import LayerCategory, LayerSet, PcbLayerId, layer_category, layer_id
from ..logging_config import create_logger, plot_layer_ctx
from ..plotter.base import ElementMeta, Fill, Plotter
from ..schema.board import (
    Board,
    Dimension,
    DrawSegment,
    EdgeModule,
    Module,
    Pad,
    Target,
    Text,
    TextModule,
    Zone,
)
from ..schema.common import PadAttribute, PadDrillShape, PadShape, Shape, TargetShape
from .pads import PadFlasher
from .thick import ThickRenderer

logger = create_logger(__name__)

DEFAULT_LAYER_MASK = LayerSet.of(PcbLayerId.F_Cu, PcbLayerId.B_Cu)

# Pad shapes drawn by the footprint preview pass.
_PREVIEW_PAD_SHAPES = frozenset({PadShape.CIRCLE, PadShape.RECT, PadShape.OVAL})


class BoardPlotter:
    """Plots board layers onto a :class:`Plotter`.

    Args:
        plotter: Backend receiving the drawing commands.
        options: Caller options. Never mutated; each plot call works on a copy.
        colors: Color policy. Defaults to the standard palettes, in diff mode
            when ``options.diffing`` is set.
    """

    def __init__(
        self,
        plotter: Plotter,
        options: PlotOptions | None = None,
        colors: LayerColorPolicy | None = None,
    ) -> None:
        self.plotter = plotter
        self.options = options or PlotOptions()
        self.colors = colors or LayerColorPolicy(diffing=self.options.diffing)
        self.thick = ThickRenderer(plotter, self.options.default_line_width)
        self.pads = PadFlasher(plotter, self.thick)
        self.layer_mask = DEFAULT_LAYER_MASK
        self._opts = replace(self.options)

    @property
    def plot_mode(self) -> Fill:
        return self._opts.plot_mode

    def _begin(self, layer_mask: LayerSet) -> None:
        self.layer_mask = layer_mask
        self._opts = replace(self.options)

    # ── Entry points ───────────────────────────────────────────────

    def plot_one_board_layer(self, board: Board, layer: str | int) -> None:
        """Plot a single layer, choosing the pass from the layer category."""
        lid = layer_id(layer)
        self._begin(LayerSet.of(lid))
        token = plot_layer_ctx.set(lid.layer_name)
        try:
            category = layer_category(lid)
            logger.info(f"Plotting {lid.layer_name} as {category.value} layer")

            if category is LayerCategory.COPPER:
                self._opts.skip_npth_pads = True
                self.plot_standard_layer(board)
            elif category is LayerCategory.MASK:
                self._opts.skip_npth_pads = False
                self._opts.drill_marks = DrillMarksType.NO_DRILL_SHAPE
                min_width = board.design_settings.solder_mask_min_width
                if min_width == 0:
                    self.plot_standard_layer(board)
                else:
                    self.plot_solder_mask_layer(board, min_width)
            elif category in (LayerCategory.PASTE, LayerCategory.ADHESIVE):
                self._opts.skip_npth_pads = False
                self._opts.drill_marks = DrillMarksType.NO_DRILL_SHAPE
                self.plot_standard_layer(board)
            elif category is LayerCategory.SILKSCREEN:
                self.plot_silkscreen(board)
            else:
                self._opts.skip_npth_pads = False
                self._opts.drill_marks = DrillMarksType.NO_DRILL_SHAPE
                self.plot_silkscreen(board)
        finally:
            plot_layer_ctx.reset(token)

    def plot_board_layers(self, board: Board, layers: LayerSet | None = None) -> None:
        """Plot several layers at once: standard pass, then silkscreen pass."""
        self._begin(layers if layers is not None else DEFAULT_LAYER_MASK)
        token = plot_layer_ctx.set(",".join(self.layer_mask.names()))
        try:
            logger.info(f"Plotting layer mask {self.layer_mask.names()}")
            self.plot_standard_layer(board)
            self.plot_silkscreen(board)
        finally:
            plot_layer_ctx.reset(token)

    def plot_solder_mask_layer(self, board: Board, min_thickness: float) -> None:
        """Mask layers with a minimum web width need swell merging; not supported."""
        logger.warning(
            f"Solder mask minimum width {min_thickness} is set; "
            "mask swell is not computed and the layer is left empty"
        )

    # ── Standard pass ──────────────────────────────────────────────

    def plot_standard_layer(self, board: Board) -> None:
        """Pads, vias, tracks, zones, footprint edges, then drill marks."""
        logger.debug("Standard pass")
        mode = self.plot_mode

        for mod in board.modules:
            for pad in mod.pads:
                if not (self.layer_mask & pad.layers):
                    continue
                if self._opts.skip_npth_pads and self._is_bare_hole(pad):
                    logger.debug(f"Skipping NPTH pad {pad.number} of {mod.name}")
                    continue
                self.plotter.set_color(self.colors.pad_color(pad.layers))
                meta = ElementMeta("module", mod.name, mod.layer, "pad")
                self.pads.flash_pad(pad, mode, meta)

        for via in board.vias:
            if not (self.layer_mask & via.layers):
                continue
            diameter = via.width + VIA_DIAMETER_ADJUST
            if diameter <= 0:
                continue
            self.plotter.set_color(Color.BLACK)
            self.pads.flash_pad_circle(via.start, diameter, mode)

        for track in board.tracks:
            if track.layer not in self.layer_mask:
                continue
            self.plotter.set_color(self.colors.color_for_layer(track.layer))
            self.thick.thick_segment(track.start, track.end, track.width, mode)

        for zone in board.zones:
            if zone.layer not in self.layer_mask:
                continue
            self.plot_filled_areas(zone)

        for mod in board.modules:
            for item in mod.graphics:
                if isinstance(item, EdgeModule) and item.layer in self.layer_mask:
                    self.plot_edge_module(item, mod)

        if self._opts.drill_marks != DrillMarksType.NO_DRILL_SHAPE:
            self.plot_drill_marks(board)

    @staticmethod
    def _is_bare_hole(pad: Pad) -> bool:
        """An NPTH pad whose hole covers the whole pad has no copper to draw."""
        return (
            pad.attribute == PadAttribute.HOLE_NOT_PLATED
            and pad.drill_size.width == pad.size.width
            and pad.drill_size.height == pad.size.height
        )

    def plot_filled_areas(self, zone: Zone) -> None:
        if not zone.filled_polygons:
            return

        self.plotter.set_color(self.colors.color_for_layer(zone.layer))
        mode = self.plot_mode

        for polygon in zone.filled_polygons:
            if not polygon:
                continue
            corners = [p.copy() for p in polygon]
            corners.append(corners[0].copy())

            if mode == Fill.FILLED_SHAPE:
                if zone.fill_mode == 0:
                    self.plotter.polyline(corners, Fill.FILLED_SHAPE, zone.min_thickness)
                    continue
                # segment fills are redrawn for every polygon of the zone
                for segments in zone.fill_segments:
                    for seg in segments:
                        self.thick.thick_segment(seg.start, seg.end, zone.min_thickness, mode)
                if zone.min_thickness > 0:
                    self.plotter.polyline(corners, Fill.NO_FILL, zone.min_thickness)
            elif zone.min_thickness > 0:
                for start, end in zip(corners, corners[1:]):
                    self.thick.thick_segment(start, end, zone.min_thickness, mode)

    # ── Drill marks ────────────────────────────────────────────────

    def plot_drill_marks(self, board: Board) -> None:
        if self.plot_mode == Fill.FILLED_SHAPE:
            self.plotter.set_color(Color.BLACK)

        small_drill = (
            SMALL_DRILL if self._opts.drill_marks == DrillMarksType.SMALL_DRILL_SHAPE else 0
        )

        for via in board.vias:
            self.plot_one_drill_mark(
                PadDrillShape.CIRCLE,
                via.start,
                Size(via.drill or 0, 0),
                Size(via.width, 0),
                0,
                small_drill,
            )

        for mod in board.modules:
            for pad in mod.pads:
                if not pad.drill_size.width:
                    continue
                self.plot_one_drill_mark(
                    pad.drill_shape, pad.pos, pad.drill_size, pad.size, pad.orientation, small_drill
                )

    def plot_one_drill_mark(
        self,
        shape: PadDrillShape,
        pos: Point,
        drill_size: Size,
        pad_size: Size,
        orientation: float,
        small_drill: float,
    ) -> None:
        drill = drill_size.copy()
        if small_drill and shape == PadDrillShape.CIRCLE:
            drill.width = min(small_drill, drill.width)

        drill.width = clamp(1, drill.width, pad_size.width - 1)
        drill.height = clamp(1, drill.height, pad_size.height - 1)

        if shape == PadDrillShape.OBLONG:
            self.pads.flash_pad_oval(pos, drill, orientation, self.plot_mode)
        else:
            self.pads.flash_pad_circle(pos, drill.width, self.plot_mode)

    # ── Footprints ─────────────────────────────────────────────────

    def plot_module(self, mod: Module) -> None:
        """Footprint preview: graphic edges, then pad outlines."""
        for item in mod.graphics:
            if isinstance(item, EdgeModule):
                self.plot_edge_module(item, mod)

        for pad in mod.pads:
            if pad.shape in _PREVIEW_PAD_SHAPES:
                self.pads.flash_pad(pad, Fill.NO_FILL)
            elif pad.shape in (PadShape.TRAPEZOID, PadShape.ROUNDRECT):
                logger.debug(f"Pad {pad.number} of {mod.name}: {pad.shape.value} not previewed")
            else:
                raise UnsupportedShapeError(
                    f"Pad {pad.number!r} of {mod.name} has unsupported shape {pad.shape.value!r}",
                    shape=pad.shape.value,
                    owner=mod.name,
                )

    def _to_board(self, p: Point, mod: Module) -> Point:
        return rotate_point(p, mod.orientation) + mod.pos

    def plot_edge_module(self, edge: EdgeModule, mod: Module) -> None:
        if edge.start is None or edge.end is None:
            return

        self.plotter.set_color(self.colors.color_for_layer(edge.layer))
        width = edge.line_width
        mode = self.plot_mode
        pos = self._to_board(edge.start, mod)
        end = self._to_board(edge.end, mod)

        if edge.shape == Shape.SEGMENT:
            meta = ElementMeta("module", mod.name, edge.layer, "segment")
            self.thick.thick_segment(pos, end, width, mode, meta)
        elif edge.shape == Shape.RECT:
            self.thick.thick_rect(pos, end, width, mode)
        elif edge.shape == Shape.ARC:
            radius = get_line_length(pos, end)
            start_angle = arc_tangente(end.y - pos.y, end.x - pos.x)
            end_angle = start_angle + edge.angle
            meta = ElementMeta("module", mod.name, edge.layer, "arc")
            self.thick.thick_arc(pos, end_angle, start_angle, radius, width, mode, meta)
        elif edge.shape == Shape.CIRCLE:
            radius = get_line_length(pos, end)
            meta = ElementMeta("module", mod.name, edge.layer, "circle")
            self.thick.thick_circle(pos, radius * 2, width, mode, meta)
        elif edge.shape == Shape.POLYGON:
            if len(edge.poly_points) <= 1:
                return
            corners = [self._to_board(p, mod) for p in edge.poly_points]
            meta = ElementMeta("module", mod.name, edge.layer, "polygon")
            self.plotter.polyline(corners, Fill.FILLED_SHAPE, width, meta)
        elif edge.shape == Shape.CURVE:
            c1 = self._to_board(edge.bezier_c1 or Point(), mod)
            c2 = self._to_board(edge.bezier_c2 or Point(), mod)
            meta = ElementMeta("module", mod.name, edge.layer, "curve")
            self.thick.thick_curve(pos, end, c1, c2, width, meta)
        else:
            raise UnsupportedShapeError(
                f"Footprint {mod.name} has an edge with unsupported shape {edge.shape.value!r}",
                shape=edge.shape.value,
                owner=mod.name,
            )

    def plot_text_module(self, mod: Module, text: TextModule, color: Color) -> None:
        pos = self._to_board(text.pos, mod)
        size = text.size.copy()
        if text.mirror:
            size.width = -size.width

        self.plotter.text(
            pos,
            color,
            text.text,
            text.angle,
            size,
            text.h_justify,
            text.v_justify,
            text.line_width,
            text.italic,
            text.bold,
            False,
            ElementMeta("module", mod.name, text.layer, "text"),
        )

    def plot_all_text_module(self, mod: Module) -> None:
        texts = [mod.reference, mod.value]
        texts.extend(item for item in mod.graphics if isinstance(item, TextModule))
        for text in texts:
            if text.layer in self.layer_mask and text.visible:
                self.plot_text_module(mod, text, self.colors.color_for_layer(text.layer))

    # ── Silkscreen pass ────────────────────────────────────────────

    def plot_silkscreen(self, board: Board) -> None:
        """Board drawings, dimensions, texts and targets, then footprint texts."""
        logger.debug("Silkscreen pass")
        self.plot_board_graphic_items(board)
        for mod in board.modules:
            self.plot_all_text_module(mod)

    def plot_board_graphic_items(self, board: Board) -> None:
        for seg in board.draw_segments:
            self.plot_draw_segment(seg)
        for dim in board.dimensions:
            self.plot_dimension(dim)
        for text in board.texts:
            self.plot_board_text(text)
        for target in board.targets:
            self.plot_target(target)

    def plot_board_text(self, text: Text) -> None:
        if text.layer not in self.layer_mask:
            return
        size = text.size.copy()
        if text.mirror:
            size.width = -size.width
        self.plotter.text(
            text.pos,
            self.colors.color_for_layer(text.layer),
            text.text.replace("\\n", "\n"),
            text.angle,
            size,
            text.h_justify,
            text.v_justify,
            text.line_width,
            text.italic,
            text.bold,
        )

    def plot_draw_segment(self, seg: DrawSegment) -> None:
        if seg.layer not in self.layer_mask:
            return
        self._draw_segment(seg)

    def _draw_segment(self, seg: DrawSegment) -> None:
        start = seg.start.copy()
        end = seg.end.copy()
        width = seg.line_width
        mode = self.plot_mode

        self.plotter.set_color(self.colors.color_for_layer(seg.layer))
        self.plotter.set_current_line_width(width)

        if seg.shape == Shape.CIRCLE:
            radius = get_line_length(end, start)
            self.thick.thick_circle(start, radius * 2, width, mode)
        elif seg.shape == Shape.ARC:
            radius = get_line_length(end, start)
            start_angle = arc_tangente(end.y - start.y, end.x - start.x)
            end_angle = start_angle + seg.angle
            self.thick.thick_arc(start, end_angle, start_angle, radius, width, mode)
        elif seg.shape == Shape.CURVE:
            for p0, p1 in zip(seg.bezier_points, seg.bezier_points[1:]):
                self.thick.thick_segment(p0, p1, width, mode)
        elif seg.shape == Shape.RECT:
            self.thick.thick_rect(start, end, width, mode)
        elif seg.shape == Shape.POLYGON:
            if len(seg.poly_points) > 1:
                self.plotter.polyline(
                    [p.copy() for p in seg.poly_points], Fill.FILLED_SHAPE, width
                )
        elif seg.shape == Shape.SEGMENT:
            self.thick.thick_segment(start, end, width, mode)
        else:
            raise UnsupportedShapeError(
                f"Board drawing has unsupported shape {seg.shape.value!r}",
                shape=seg.shape.value,
                owner="board",
            )

    def plot_dimension(self, dim: Dimension) -> None:
        """Text, crossbar, both feature lines, then the four arrow strokes."""
        if dim.layer not in self.layer_mask:
            return

        self.plotter.set_color(self.colors.color_for_layer(dim.layer))
        self.plot_board_text(dim.text)

        strokes = [
            (dim.crossbar_o, dim.crossbar_f),
            (dim.feature_line_go, dim.feature_line_gf),
            (dim.feature_line_do, dim.feature_line_df),
            (dim.crossbar_f, dim.arrow_d1f),
            (dim.crossbar_f, dim.arrow_d2f),
            (dim.crossbar_o, dim.arrow_g1f),
            (dim.crossbar_o, dim.arrow_g2f),
        ]
        for start, end in strokes:
            self._draw_segment(
                DrawSegment(layer=dim.layer, line_width=dim.line_width, start=start, end=end)
            )

    def plot_target(self, target: Target) -> None:
        """Alignment target: a circle crossed by a ``+`` or an ``X``."""
        if target.layer not in self.layer_mask:
            return

        pos = target.pos
        is_cross = target.shape == TargetShape.CROSS
        radius = target.size // 2 if is_cross else target.size // 3
        self._draw_segment(
            DrawSegment(
                layer=target.layer,
                line_width=target.line_width,
                shape=Shape.CIRCLE,
                start=pos.copy(),
                end=Point(pos.x + radius, pos.y),
            )
        )

        radius = target.size // 2
        if is_cross:
            dx1, dy1, dx2, dy2 = radius, radius, radius, -radius
        else:
            dx1, dy1, dx2, dy2 = radius, 0, 0, radius

        for dx, dy in ((dx1, dy1), (dx2, dy2)):
            self._draw_segment(
                DrawSegment(
                    layer=target.layer,
                    line_width=target.line_width,
                    start=Point(pos.x - dx, pos.y - dy),
                    end=Point(pos.x + dx, pos.y + dy),
                )
            )
