"""Tests for per-layer plot orchestration."""

from __future__ import annotations

import logging

import pytest

from kicad_pcbplot.colors import Color, LayerColorPolicy
from kicad_pcbplot.config import DrillMarksType, PlotOptions
from kicad_pcbplot.exceptions import UnsupportedShapeError
from kicad_pcbplot.geometry import Point, Size
from kicad_pcbplot.layers import LayerSet, PcbLayerId
from kicad_pcbplot.logging_config import get_plot_layer
from kicad_pcbplot.plotter import ElementMeta, Fill, RecordingPlotter
from kicad_pcbplot.render.board import BoardPlotter
from kicad_pcbplot.schema import (
    Board,
    BoardDesignSettings,
    Dimension,
    DrawSegment,
    EdgeModule,
    Module,
    Pad,
    PadAttribute,
    PadDrillShape,
    PadShape,
    Shape,
    Target,
    TargetShape,
    Text,
    TextModule,
    Track,
    Via,
    Zone,
    ZoneFillSegment,
)

FILLED = PlotOptions()
OUTLINE = PlotOptions(plot_mode=Fill.NO_FILL)
NO_DRILLS = PlotOptions(drill_marks=DrillMarksType.NO_DRILL_SHAPE)


def _text(text: str, layer: int = PcbLayerId.F_SilkS, **kwargs) -> TextModule:
    return TextModule(text=text, pos=kwargs.pop("pos", Point(0, 0)), layer=layer, **kwargs)


def _module(pads: list[Pad] | None = None, graphics: list | None = None, **kwargs) -> Module:
    return Module(
        name="Lib:FP",
        reference=_text("R1"),
        value=_text("10k", layer=PcbLayerId.F_Fab),
        pads=pads or [],
        graphics=graphics or [],
        **kwargs,
    )


def _pad(
    shape: PadShape = PadShape.CIRCLE,
    size: Size | None = None,
    layers: tuple[str, ...] = ("F.Cu",),
    **kwargs,
) -> Pad:
    return Pad(
        number=kwargs.pop("number", "1"),
        shape=shape,
        pos=kwargs.pop("pos", Point(0, 0)),
        size=size or Size(40, 40),
        layers=LayerSet(layers),
        **kwargs,
    )


def _npth_pad() -> Pad:
    return _pad(
        size=Size(30, 30),
        layers=("F.Cu", "B.Cu", "F.Mask", "B.Mask"),
        attribute=PadAttribute.HOLE_NOT_PLATED,
        drill_size=Size(30, 30),
    )


def _plot(board: Board, layer: str, options: PlotOptions = FILLED) -> RecordingPlotter:
    recorder = RecordingPlotter()
    BoardPlotter(recorder, options).plot_one_board_layer(board, layer)
    return recorder


class TestEndToEnd:
    def test_through_pad_outline_on_default_mask(self) -> None:
        pad = _pad(size=Size(40, 40), layers=("F.Cu", "B.Cu"), attribute=PadAttribute.STANDARD)
        board = Board(modules=[_module(pads=[pad])])
        recorder = RecordingPlotter()
        BoardPlotter(recorder, OUTLINE).plot_board_layers(board)

        assert recorder.ops() == ["set_color", "set_current_line_width", "circle"]
        assert recorder.commands[0].args["color"] == Color.GREEN.mix(Color.RED)
        circle = recorder.commands[2].args
        assert circle["diameter"] == 39
        assert circle["width"] == 1
        assert circle["fill"] is Fill.NO_FILL
        assert circle["meta"] == ElementMeta("module", "Lib:FP", PcbLayerId.F_Cu, "pad")

    def test_plot_is_deterministic(self) -> None:
        board = Board(
            modules=[_module(pads=[_pad(), _pad(PadShape.ROUNDRECT, Size(60, 30))])],
            tracks=[Track(Point(0, 0), Point(50, 50), 10, PcbLayerId.F_Cu)],
        )
        first = _plot(board, "F.Cu", OUTLINE).to_dict()
        second = _plot(board, "F.Cu", OUTLINE).to_dict()
        assert first == second


class TestStandardPassOrder:
    def test_entity_order(self) -> None:
        board = Board(
            modules=[
                _module(
                    pads=[_pad()],
                    graphics=[
                        EdgeModule(Shape.SEGMENT, PcbLayerId.F_Cu, 5, Point(0, 0), Point(10, 0))
                    ],
                )
            ],
            vias=[Via(Point(100, 100), width=30, drill=12)],
            tracks=[Track(Point(0, 0), Point(100, 100), 10, PcbLayerId.F_Cu)],
            zones=[
                Zone(
                    PcbLayerId.F_Cu,
                    filled_polygons=[[Point(0, 0), Point(10, 0), Point(10, 10)]],
                )
            ],
        )
        recorder = _plot(board, "F.Cu")
        segment_ops = ["set_fill", "set_current_line_width", "move_to", "finish_to"]
        assert recorder.ops() == [
            "set_color", "circle",                 # pad
            "set_color", "circle",                 # via
            "set_color", *segment_ops,             # track
            "set_color", "polyline",               # zone
            "set_color", *segment_ops,             # footprint edge
            "set_color", "circle",                 # via drill mark
        ]  # fmt: skip
        colors = [c.args["color"] for c in recorder.of_type("set_color")]
        assert colors == [Color.RED, Color.BLACK, Color.RED, Color.RED, Color.RED, Color.BLACK]


class TestLayerDispatch:
    def test_copper_skips_bare_npth_pads(self) -> None:
        board = Board(modules=[_module(pads=[_npth_pad()])])
        recorder = _plot(board, "F.Cu")
        # only the drill mark remains
        assert recorder.ops() == ["set_color", "circle"]
        assert recorder.commands[0].args["color"] == Color.BLACK
        assert recorder.commands[1].args["diameter"] == 14

    def test_copper_keeps_npth_with_copper_ring(self) -> None:
        pad = _npth_pad()
        pad.drill_size = Size(20, 20)
        board = Board(modules=[_module(pads=[pad])])
        recorder = _plot(board, "F.Cu")
        # pad, then its drill mark
        assert recorder.ops() == ["set_color", "circle", "set_color", "circle"]

    def test_mask_plots_npth_without_drill_marks(self) -> None:
        board = Board(modules=[_module(pads=[_npth_pad()])])
        recorder = _plot(board, "F.Mask")
        assert recorder.ops() == ["set_color", "circle"]
        assert recorder.commands[1].args["diameter"] == 30

    def test_mask_with_min_width_goes_to_mask_pass(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        board = Board(
            modules=[_module(pads=[_pad(layers=("F.Cu", "F.Mask"))])],
            design_settings=BoardDesignSettings(solder_mask_min_width=4),
        )
        with caplog.at_level(logging.WARNING):
            recorder = _plot(board, "F.Mask")
        assert recorder.commands == []
        assert "mask swell" in caplog.text
        assert caplog.records[-1].plot_layer == "F.Mask"

    @pytest.mark.parametrize("layer", ["F.Paste", "B.Adhes"])
    def test_paste_and_adhesive_standard_pass_without_drills(self, layer: str) -> None:
        pad = _pad(layers=("F.Cu", layer), drill_size=Size(10, 10))
        board = Board(modules=[_module(pads=[pad])])
        recorder = _plot(board, layer)
        assert recorder.ops() == ["set_color", "circle"]

    def test_silkscreen_pass(self) -> None:
        board = Board(
            modules=[_module(pads=[_pad(layers=("F.Cu", "F.SilkS"))])],
            texts=[Text("REV A", Point(5, 5), PcbLayerId.F_SilkS)],
        )
        recorder = _plot(board, "F.SilkS")
        assert recorder.ops() == ["text", "text"]
        assert [c.args["text"] for c in recorder.commands] == ["REV A", "R1"]

    @pytest.mark.parametrize("layer", ["Edge.Cuts", "Dwgs.User", "F.CrtYd", "F.Fab", "Margin"])
    def test_technical_layers_use_silkscreen_pass(self, layer: str) -> None:
        board = Board(
            modules=[_module(pads=[_pad(layers=("F.Cu", layer))])],
            draw_segments=[DrawSegment(layer=PcbLayerId[layer.replace(".", "_")], line_width=5)],
        )
        recorder = _plot(board, layer)
        assert "circle" not in recorder.ops()
        assert recorder.ops()[:2] == ["set_color", "set_current_line_width"]

    def test_fab_layer_draws_value_text(self) -> None:
        board = Board(modules=[_module()])
        recorder = _plot(board, "F.Fab")
        assert [c.args["text"] for c in recorder.of_type("text")] == ["10k"]
        assert recorder.of_type("text")[0].args["color"] == Color.LIGHTGRAY

    def test_caller_options_not_mutated(self) -> None:
        options = PlotOptions()
        plotter = BoardPlotter(RecordingPlotter(), options)
        plotter.plot_one_board_layer(Board(), "F.Mask")
        assert options.skip_npth_pads is True
        assert options.drill_marks is DrillMarksType.SMALL_DRILL_SHAPE

    def test_dispatch_state_does_not_leak_between_calls(self) -> None:
        board = Board(modules=[_module(pads=[_pad(drill_size=Size(10, 10))])])
        recorder = RecordingPlotter()
        plotter = BoardPlotter(recorder, FILLED)
        plotter.plot_one_board_layer(board, "F.Mask")
        recorder.clear()
        plotter.plot_one_board_layer(board, "F.Cu")
        # drill marks are back on for copper
        assert recorder.ops() == ["set_color", "circle", "set_color", "circle"]

    def test_layer_context_reset_after_call(self) -> None:
        _plot(Board(), "B.Cu")
        assert get_plot_layer() is None

    def test_layer_mask_tags_log_records(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="kicad_pcbplot.render.board"):
            BoardPlotter(RecordingPlotter(), NO_DRILLS).plot_board_layers(Board())
        assert caplog.records[0].plot_layer == "F.Cu,B.Cu"
        assert get_plot_layer() is None

    def test_layer_by_id(self) -> None:
        board = Board(tracks=[Track(Point(0, 0), Point(1, 1), 5, PcbLayerId.B_Cu)])
        assert _plot(board, PcbLayerId.B_Cu).ops()[0] == "set_color"


class TestVias:
    def test_via_drawn_on_every_spanned_copper_layer(self) -> None:
        board = Board(vias=[Via(Point(0, 0), width=30, drill=0)])
        recorder = _plot(board, "In5.Cu")
        circles = recorder.of_type("circle")
        assert circles[0].args["diameter"] == 32
        assert recorder.commands[0].args["color"] == Color.BLACK

    def test_blind_via_skipped_outside_span(self) -> None:
        via = Via(Point(0, 0), width=30, layer1=PcbLayerId.F_Cu, layer2=PcbLayerId.In2_Cu)
        assert _plot(Board(vias=[via]), "B.Cu", NO_DRILLS).commands == []
        assert _plot(Board(vias=[via]), "In1.Cu", NO_DRILLS).commands != []

    def test_nonpositive_diameter_skipped(self) -> None:
        board = Board(vias=[Via(Point(0, 0), width=-2)])
        assert _plot(board, "F.Cu", NO_DRILLS).commands == []


class TestZones:
    TRIANGLE = [Point(0, 0), Point(100, 0), Point(100, 100)]

    def test_filled_polygon_mode(self) -> None:
        zone = Zone(PcbLayerId.F_Cu, filled_polygons=[self.TRIANGLE], min_thickness=8)
        recorder = _plot(Board(zones=[zone]), "F.Cu", NO_DRILLS)
        assert recorder.ops() == ["set_color", "polyline"]
        poly = recorder.commands[1].args
        assert poly["points"] == [*self.TRIANGLE, Point(0, 0)]
        assert poly["fill"] is Fill.FILLED_SHAPE
        assert poly["width"] == 8

    def test_segment_mode_redraws_segments_per_polygon(self) -> None:
        zone = Zone(
            PcbLayerId.F_Cu,
            filled_polygons=[self.TRIANGLE, self.TRIANGLE],
            fill_segments=[[ZoneFillSegment(Point(10, 5), Point(90, 5))]],
            min_thickness=8,
            fill_mode=1,
        )
        recorder = _plot(Board(zones=[zone]), "F.Cu", NO_DRILLS)
        segment_ops = ["set_fill", "set_current_line_width", "move_to", "finish_to"]
        assert recorder.ops() == ["set_color", *segment_ops, "polyline", *segment_ops, "polyline"]
        assert all(p.args["fill"] is Fill.NO_FILL for p in recorder.of_type("polyline"))

    def test_segment_mode_without_thickness_has_no_outline(self) -> None:
        zone = Zone(
            PcbLayerId.F_Cu,
            filled_polygons=[self.TRIANGLE],
            fill_segments=[[ZoneFillSegment(Point(10, 5), Point(90, 5))]],
            fill_mode=1,
        )
        assert "polyline" not in _plot(Board(zones=[zone]), "F.Cu").ops()

    def test_outline_zero_thickness_draws_no_boundary(self) -> None:
        zone = Zone(PcbLayerId.F_Cu, filled_polygons=[self.TRIANGLE], min_thickness=0)
        assert _plot(Board(zones=[zone]), "F.Cu", OUTLINE).ops() == ["set_color"]

    def test_outline_with_thickness_strokes_edges(self) -> None:
        zone = Zone(PcbLayerId.F_Cu, filled_polygons=[self.TRIANGLE], min_thickness=8)
        recorder = _plot(Board(zones=[zone]), "F.Cu", OUTLINE)
        # one capsule (two caps) per edge, closing edge included
        assert len(recorder.of_type("arc")) == 6

    def test_empty_zone_sets_no_color(self) -> None:
        assert _plot(Board(zones=[Zone(PcbLayerId.F_Cu)]), "F.Cu", NO_DRILLS).commands == []

    def test_zone_on_other_layer_ignored(self) -> None:
        zone = Zone(PcbLayerId.B_Cu, filled_polygons=[self.TRIANGLE])
        assert _plot(Board(zones=[zone]), "F.Cu", NO_DRILLS).commands == []


class TestDrillMarks:
    def _drilled(self, **kwargs) -> Board:
        pad = _pad(
            size=kwargs.pop("size", Size(60, 60)),
            drill_size=kwargs.pop("drill_size", Size(30, 30)),
            **kwargs,
        )
        return Board(modules=[_module(pads=[pad])])

    def _marks(self, board: Board, options: PlotOptions) -> list[dict]:
        commands = _plot(board, "F.Cu", options).commands
        # marks start at the switch to black
        start = next(
            i
            for i, c in enumerate(commands)
            if c.op == "set_color" and c.args["color"] == Color.BLACK
        )
        return [c.args for c in commands[start:]]

    def test_small_drill_caps_circular_marks(self) -> None:
        marks = self._marks(self._drilled(), FILLED)
        assert marks[0] == {"color": Color.BLACK}
        assert marks[1]["diameter"] == 14

    def test_full_drill_keeps_size(self) -> None:
        marks = self._marks(
            self._drilled(), PlotOptions(drill_marks=DrillMarksType.FULL_DRILL_SHAPE)
        )
        assert marks[1]["diameter"] == 30

    def test_drill_clamped_inside_pad(self) -> None:
        board = self._drilled(size=Size(20, 20), drill_size=Size(40, 40))
        marks = self._marks(board, PlotOptions(drill_marks=DrillMarksType.FULL_DRILL_SHAPE))
        assert marks[1]["diameter"] == 19

    def test_no_drill_shape(self) -> None:
        recorder = _plot(
            self._drilled(), "F.Cu", PlotOptions(drill_marks=DrillMarksType.NO_DRILL_SHAPE)
        )
        assert recorder.ops() == ["set_color", "circle"]

    def test_oblong_drill_is_oval(self) -> None:
        board = self._drilled(
            shape=PadShape.OVAL,
            size=Size(60, 30),
            drill_shape=PadDrillShape.OBLONG,
            drill_size=Size(40, 20),
        )
        marks = self._marks(board, FILLED)
        # oblong drills are not capped by the small drill size
        assert marks[0] == {"color": Color.BLACK}
        assert marks[2]["width"] == 20

    def test_outline_mode_keeps_current_color(self) -> None:
        recorder = _plot(self._drilled(), "F.Cu", OUTLINE)
        assert len(recorder.of_type("set_color")) == 1
        assert recorder.of_type("circle")[1].args["diameter"] == 13

    def test_via_drill_mark(self) -> None:
        board = Board(vias=[Via(Point(0, 0), width=30, drill=12)])
        circles = _plot(board, "F.Cu").of_type("circle")
        assert [c.args["diameter"] for c in circles] == [32, 12]


class TestFootprintEdges:
    def test_segment_rotated_into_board_space(self) -> None:
        edge = EdgeModule(Shape.SEGMENT, PcbLayerId.F_Cu, 5, Point(10, 0), Point(20, 0))
        mod = _module(graphics=[edge], pos=Point(1000, 1000), orientation=900)
        recorder = _plot(Board(modules=[mod]), "F.Cu")
        assert recorder.of_type("move_to")[0].args["p"] == Point(1000, 990)
        finish = recorder.of_type("finish_to")[0].args
        assert finish["p"] == Point(1000, 980)
        assert finish["meta"] == ElementMeta("module", "Lib:FP", PcbLayerId.F_Cu, "segment")
        assert edge.start == Point(10, 0)

    def test_arc_uses_end_then_start_angle(self) -> None:
        edge = EdgeModule(Shape.ARC, PcbLayerId.F_SilkS, 5, Point(0, 0), Point(10, 0), angle=900)
        recorder = RecordingPlotter()
        BoardPlotter(recorder).plot_edge_module(edge, _module())
        arc = recorder.of_type("arc")[0].args
        assert (arc["start_angle"], arc["end_angle"]) == (900, 0)
        assert arc["radius"] == 10

    def test_circle(self) -> None:
        edge = EdgeModule(Shape.CIRCLE, PcbLayerId.F_SilkS, 5, Point(0, 0), Point(3, 4))
        recorder = RecordingPlotter()
        BoardPlotter(recorder).plot_edge_module(edge, _module())
        assert recorder.of_type("circle")[0].args["diameter"] == 10

    def test_rect(self) -> None:
        edge = EdgeModule(Shape.RECT, PcbLayerId.F_SilkS, 5, Point(0, 0), Point(30, 20))
        recorder = RecordingPlotter()
        BoardPlotter(recorder).plot_edge_module(edge, _module(pos=Point(100, 0)))
        rect = recorder.of_type("rect")[0].args
        assert (rect["p1"], rect["p2"]) == (Point(100, 0), Point(130, 20))

    def test_polygon_filled(self) -> None:
        points = [Point(0, 0), Point(10, 0), Point(10, 10)]
        edge = EdgeModule(
            Shape.POLYGON, PcbLayerId.F_SilkS, 2, Point(0, 0), Point(0, 0), poly_points=points
        )
        recorder = RecordingPlotter()
        BoardPlotter(recorder).plot_edge_module(edge, _module(pos=Point(5, 5)))
        poly = recorder.of_type("polyline")[0].args
        assert poly["points"] == [Point(5, 5), Point(15, 5), Point(15, 15)]
        assert poly["fill"] is Fill.FILLED_SHAPE

    def test_polygon_needs_two_points(self) -> None:
        edge = EdgeModule(
            Shape.POLYGON, PcbLayerId.F_SilkS, 2, Point(0, 0), Point(0, 0), poly_points=[Point()]
        )
        recorder = RecordingPlotter()
        BoardPlotter(recorder).plot_edge_module(edge, _module())
        assert "polyline" not in recorder.ops()

    def test_curve(self) -> None:
        edge = EdgeModule(
            Shape.CURVE,
            PcbLayerId.F_SilkS,
            0,
            Point(0, 0),
            Point(10, 0),
            bezier_c1=Point(3, 5),
            bezier_c2=Point(7, 5),
        )
        recorder = RecordingPlotter()
        BoardPlotter(recorder).plot_edge_module(edge, _module(pos=Point(1, 1)))
        curve = recorder.of_type("curve")[0].args
        assert curve["ctrl1"] == Point(4, 6)
        assert curve["width"] == 1

    def test_missing_endpoint_draws_nothing(self) -> None:
        edge = EdgeModule(Shape.SEGMENT, PcbLayerId.F_SilkS, 5, Point(0, 0), None)
        recorder = RecordingPlotter()
        BoardPlotter(recorder).plot_edge_module(edge, _module())
        assert recorder.commands == []

    def test_unknown_shape_fails(self) -> None:
        edge = EdgeModule(Shape.LAST, PcbLayerId.F_SilkS, 5, Point(0, 0), Point(1, 1))
        with pytest.raises(UnsupportedShapeError):
            BoardPlotter(RecordingPlotter()).plot_edge_module(edge, _module())


class TestFootprintPreview:
    def test_edges_then_outline_pads(self) -> None:
        edge = EdgeModule(Shape.SEGMENT, PcbLayerId.F_SilkS, 5, Point(0, 0), Point(10, 0))
        pads = [
            _pad(PadShape.CIRCLE, number="1"),
            _pad(PadShape.TRAPEZOID, number="2"),
            _pad(PadShape.ROUNDRECT, number="3"),
            _pad(PadShape.RECT, number="4"),
        ]
        recorder = RecordingPlotter()
        BoardPlotter(recorder).plot_module(_module(pads=pads, graphics=[edge]))
        assert recorder.ops()[-4:] == [
            "set_current_line_width",
            "circle",
            "set_current_line_width",
            "polyline",
        ]
        assert recorder.of_type("circle")[0].args["fill"] is Fill.NO_FILL
        # trapezoid and round-rect pads are not previewed
        assert len(recorder.of_type("polyline")) == 1

    def test_custom_pad_fails(self) -> None:
        with pytest.raises(UnsupportedShapeError):
            BoardPlotter(RecordingPlotter()).plot_module(
                _module(pads=[_pad(PadShape.CUSTOM)])
            )


class TestFootprintTexts:
    def test_text_position_and_mirror(self) -> None:
        ref = _text("R1", pos=Point(10, 0), size=Size(60, 50), mirror=True, italic=True)
        mod = _module(pos=Point(100, 200), orientation=900)
        mod.reference = ref
        recorder = RecordingPlotter()
        plotter = BoardPlotter(recorder)
        plotter.layer_mask = LayerSet.of("F.SilkS")
        plotter.plot_all_text_module(mod)

        args = recorder.of_type("text")[0].args
        assert args["pos"] == Point(100, 190)
        assert args["size"] == Size(-60, 50)
        assert args["italic"] is True
        assert args["bold"] is False
        assert args["mirrored"] is False
        assert args["meta"] == ElementMeta("module", "Lib:FP", PcbLayerId.F_SilkS, "text")
        assert ref.size == Size(60, 50)

    def test_hidden_and_off_layer_texts_skipped(self) -> None:
        mod = _module(
            graphics=[
                _text("hidden", visible=False),
                _text("back", layer=PcbLayerId.B_SilkS),
                _text("shown"),
            ]
        )
        recorder = _plot(Board(modules=[mod]), "F.SilkS")
        assert [c.args["text"] for c in recorder.of_type("text")] == ["R1", "shown"]


class TestBoardGraphics:
    def test_board_text_newlines_and_flags(self) -> None:
        text = Text("A\\nB", Point(1, 2), PcbLayerId.F_SilkS, italic=True)
        recorder = _plot(Board(texts=[text]), "F.SilkS")
        args = recorder.commands[0].args
        assert args["text"] == "A\nB"
        assert args["italic"] is True
        assert args["bold"] is False
        assert args["color"] == Color.CYAN

    def test_draw_segment_filtered_by_layer(self) -> None:
        seg = DrawSegment(layer=PcbLayerId.Edge_Cuts, line_width=5)
        assert _plot(Board(draw_segments=[seg]), "F.SilkS").commands == []

    def test_draw_segment_shapes(self) -> None:
        segs = [
            DrawSegment(PcbLayerId.F_SilkS, 4, Shape.CIRCLE, Point(0, 0), Point(0, 5)),
            DrawSegment(PcbLayerId.F_SilkS, 4, Shape.ARC, Point(0, 0), Point(0, 5), angle=-900),
            DrawSegment(
                PcbLayerId.F_SilkS,
                4,
                Shape.CURVE,
                bezier_points=[Point(0, 0), Point(5, 5), Point(10, 0)],
            ),
            DrawSegment(PcbLayerId.F_SilkS, 4, Shape.RECT, Point(0, 0), Point(5, 5)),
        ]
        recorder = _plot(Board(draw_segments=segs), "F.SilkS")
        assert recorder.of_type("circle")[0].args["diameter"] == 10
        arc = recorder.of_type("arc")[0].args
        assert (arc["start_angle"], arc["end_angle"]) == (0, 900)
        assert len(recorder.of_type("finish_to")) == 2
        assert len(recorder.of_type("rect")) == 1

    def test_dimension_stroke_order(self) -> None:
        dim = Dimension(
            layer=PcbLayerId.Cmts_User,
            line_width=2,
            text=Text("10mm", Point(50, -10), PcbLayerId.Cmts_User),
            crossbar_o=Point(0, 0),
            crossbar_f=Point(100, 0),
            feature_line_go=Point(0, 20),
            feature_line_gf=Point(0, -5),
            feature_line_do=Point(100, 20),
            feature_line_df=Point(100, -5),
            arrow_d1f=Point(90, -3),
            arrow_d2f=Point(90, 3),
            arrow_g1f=Point(10, -3),
            arrow_g2f=Point(10, 3),
        )
        recorder = _plot(Board(dimensions=[dim]), "Cmts.User")
        assert recorder.ops()[:3] == ["set_color", "text", "set_color"]
        strokes = [
            (m.args["p"], f.args["p"])
            for m, f in zip(recorder.of_type("move_to"), recorder.of_type("finish_to"))
        ]
        assert strokes == [
            (Point(0, 0), Point(100, 0)),
            (Point(0, 20), Point(0, -5)),
            (Point(100, 20), Point(100, -5)),
            (Point(100, 0), Point(90, -3)),
            (Point(100, 0), Point(90, 3)),
            (Point(0, 0), Point(10, -3)),
            (Point(0, 0), Point(10, 3)),
        ]

    def test_dimension_off_layer(self) -> None:
        dim = Dimension(
            PcbLayerId.Cmts_User,
            2,
            Text("x", Point(), PcbLayerId.Cmts_User),
            *[Point() for _ in range(10)],
        )
        assert _plot(Board(dimensions=[dim]), "F.SilkS").commands == []


class TestTargets:
    def test_plus_target(self) -> None:
        target = Target(Point(0, 0), size=30, line_width=2, layer=PcbLayerId.Edge_Cuts)
        recorder = _plot(Board(targets=[target]), "Edge.Cuts")
        assert recorder.of_type("circle")[0].args["diameter"] == 20
        strokes = [
            (m.args["p"], f.args["p"])
            for m, f in zip(recorder.of_type("move_to"), recorder.of_type("finish_to"))
        ]
        assert strokes == [
            (Point(-15, 0), Point(15, 0)),
            (Point(0, -15), Point(0, 15)),
        ]

    def test_cross_target(self) -> None:
        target = Target(
            Point(0, 0), size=30, line_width=2, layer=PcbLayerId.Edge_Cuts, shape=TargetShape.CROSS
        )
        recorder = _plot(Board(targets=[target]), "Edge.Cuts")
        assert recorder.of_type("circle")[0].args["diameter"] == 30
        strokes = [
            (m.args["p"], f.args["p"])
            for m, f in zip(recorder.of_type("move_to"), recorder.of_type("finish_to"))
        ]
        assert strokes == [
            (Point(-15, -15), Point(15, 15)),
            (Point(-15, 15), Point(15, -15)),
        ]


class TestColorInjection:
    def test_custom_policy(self) -> None:
        palette = tuple(Color.PUREBLUE for _ in range(48))
        track = Track(Point(0, 0), Point(1, 0), 5, PcbLayerId.F_Cu)
        recorder = RecordingPlotter()
        BoardPlotter(recorder, colors=LayerColorPolicy(layer_colors=palette)).plot_one_board_layer(
            Board(tracks=[track]), "F.Cu"
        )
        assert recorder.commands[0].args["color"] == Color.PUREBLUE

    def test_diffing_option_selects_diff_palette(self) -> None:
        track = Track(Point(0, 0), Point(1, 0), 5, PcbLayerId.F_Cu)
        recorder = _plot(Board(tracks=[track]), "F.Cu", PlotOptions(diffing=True))
        assert recorder.commands[0].args["color"] == Color(33, 33, 33)
