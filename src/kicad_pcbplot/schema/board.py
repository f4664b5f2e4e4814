"""Typed data models for the board snapshot consumed by the plotter.

Pads carry absolute board coordinates. Footprint edges and footprint texts
are footprint-local and get rotated by the footprint orientation at plot
time. The plotter treats every model as read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..geometry import Point, Size
from ..layers import LayerSet, PcbLayerId, copper_layers_between
from ..plotter.base import TextHJustify, TextVJustify
from .common import PadAttribute, PadDrillShape, PadShape, Shape, TargetShape


def _layer_name(layer: int) -> str:
    return PcbLayerId(layer).layer_name


def _points(points: list[Point]) -> list[dict[str, Any]]:
    return [p.to_dict() for p in points]


@dataclass
class TextModule:
    """A footprint text (reference, value or user text)."""

    text: str
    pos: Point  # footprint-local
    layer: int
    size: Size = field(default_factory=lambda: Size(60, 60))
    angle: float = 0  # absolute, decidegrees
    line_width: float = 10
    h_justify: TextHJustify = TextHJustify.CENTER
    v_justify: TextVJustify = TextVJustify.CENTER
    italic: bool = False
    bold: bool = False
    mirror: bool = False
    visible: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "pos": self.pos.to_dict(),
            "layer": _layer_name(self.layer),
            "size": self.size.to_dict(),
            "angle": self.angle,
            "line_width": self.line_width,
            "visible": self.visible,
        }


@dataclass
class EdgeModule:
    """A graphic item of a footprint. Coordinates are footprint-local.

    For arcs ``start`` is the center and ``end`` the arc start point; for
    circles ``end`` is a point on the circumference.
    """

    shape: Shape
    layer: int
    line_width: float
    start: Point | None = None
    end: Point | None = None
    angle: float = 0
    poly_points: list[Point] = field(default_factory=list)
    bezier_c1: Point | None = None
    bezier_c2: Point | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "shape": self.shape.value,
            "layer": _layer_name(self.layer),
            "line_width": self.line_width,
        }
        if self.start is not None:
            d["start"] = self.start.to_dict()
        if self.end is not None:
            d["end"] = self.end.to_dict()
        if self.angle:
            d["angle"] = self.angle
        if self.poly_points:
            d["poly_points"] = _points(self.poly_points)
        return d


@dataclass
class Pad:
    """A footprint pad, positioned in absolute board coordinates."""

    number: str
    shape: PadShape
    pos: Point
    size: Size
    layers: LayerSet
    orientation: float = 0
    attribute: PadAttribute = PadAttribute.SMD
    drill_shape: PadDrillShape = PadDrillShape.CIRCLE
    drill_size: Size = field(default_factory=Size)
    delta: Size = field(default_factory=Size)  # trapezoid skew
    roundrect_ratio: float = 0.25

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "number": self.number,
            "shape": self.shape.value,
            "pos": self.pos.to_dict(),
            "size": self.size.to_dict(),
            "layers": self.layers.names(),
            "orientation": self.orientation,
            "attribute": self.attribute.value,
        }
        if self.drill_size.width:
            d["drill"] = {"shape": self.drill_shape.value, **self.drill_size.to_dict()}
        return d


@dataclass
class Module:
    """A footprint placed on the board."""

    name: str  # e.g. "Resistor_SMD:R_0805"
    reference: TextModule
    value: TextModule
    pos: Point = field(default_factory=Point)
    orientation: float = 0
    layer: int = PcbLayerId.F_Cu
    pads: list[Pad] = field(default_factory=list)
    graphics: list[EdgeModule | TextModule] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "reference": self.reference.text,
            "value": self.value.text,
            "pos": self.pos.to_dict(),
            "orientation": self.orientation,
            "layer": _layer_name(self.layer),
            "pads": [p.to_dict() for p in self.pads],
        }


@dataclass
class Track:
    """A copper track segment."""

    start: Point
    end: Point
    width: float
    layer: int
    net: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "width": self.width,
            "layer": _layer_name(self.layer),
            "net": self.net,
        }


@dataclass
class Via:
    """A via between two copper layers."""

    start: Point
    width: float
    drill: float = 0
    layer1: int = PcbLayerId.F_Cu
    layer2: int = PcbLayerId.B_Cu
    net: int = 0

    @property
    def layers(self) -> LayerSet:
        """Every copper layer the via passes through."""
        return copper_layers_between(self.layer1, self.layer2)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.to_dict(),
            "width": self.width,
            "drill": self.drill,
            "layers": [_layer_name(self.layer1), _layer_name(self.layer2)],
            "net": self.net,
        }


@dataclass
class ZoneFillSegment:
    start: Point
    end: Point


@dataclass
class Zone:
    """A copper zone with its fill already computed."""

    layer: int
    filled_polygons: list[list[Point]] = field(default_factory=list)
    fill_segments: list[list[ZoneFillSegment]] = field(default_factory=list)
    min_thickness: float = 0
    fill_mode: int = 0  # 0 = polygons, otherwise segments
    net: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "layer": _layer_name(self.layer),
            "polygon_count": len(self.filled_polygons),
            "min_thickness": self.min_thickness,
            "fill_mode": self.fill_mode,
            "net": self.net,
        }


@dataclass
class Text:
    """A free text on the board."""

    text: str
    pos: Point
    layer: int
    size: Size = field(default_factory=lambda: Size(60, 60))
    angle: float = 0
    line_width: float = 10
    h_justify: TextHJustify = TextHJustify.CENTER
    v_justify: TextVJustify = TextVJustify.CENTER
    italic: bool = False
    bold: bool = False
    mirror: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "pos": self.pos.to_dict(),
            "layer": _layer_name(self.layer),
            "size": self.size.to_dict(),
            "angle": self.angle,
        }


@dataclass
class DrawSegment:
    """A board graphic item (line, arc, circle, ...)."""

    layer: int
    line_width: float
    shape: Shape = Shape.SEGMENT
    start: Point = field(default_factory=Point)
    end: Point = field(default_factory=Point)
    angle: float = 0
    bezier_points: list[Point] = field(default_factory=list)
    poly_points: list[Point] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "shape": self.shape.value,
            "layer": _layer_name(self.layer),
            "line_width": self.line_width,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
        }


@dataclass
class Dimension:
    """A dimension annotation, with its construction lines precomputed."""

    layer: int
    line_width: float
    text: Text
    crossbar_o: Point
    crossbar_f: Point
    feature_line_go: Point
    feature_line_gf: Point
    feature_line_do: Point
    feature_line_df: Point
    arrow_d1f: Point
    arrow_d2f: Point
    arrow_g1f: Point
    arrow_g2f: Point

    def to_dict(self) -> dict[str, Any]:
        return {
            "layer": _layer_name(self.layer),
            "line_width": self.line_width,
            "text": self.text.text,
        }


@dataclass
class Target:
    """A layer alignment target."""

    pos: Point
    size: float
    line_width: float
    layer: int
    shape: TargetShape = TargetShape.PLUS

    def to_dict(self) -> dict[str, Any]:
        return {
            "pos": self.pos.to_dict(),
            "size": self.size,
            "line_width": self.line_width,
            "layer": _layer_name(self.layer),
            "shape": self.shape.name.lower(),
        }


@dataclass
class BoardDesignSettings:
    solder_mask_min_width: float = 0


@dataclass
class Board:
    """Snapshot of a board: everything a plot pass can traverse."""

    modules: list[Module] = field(default_factory=list)
    tracks: list[Track] = field(default_factory=list)
    vias: list[Via] = field(default_factory=list)
    zones: list[Zone] = field(default_factory=list)
    draw_segments: list[DrawSegment] = field(default_factory=list)
    dimensions: list[Dimension] = field(default_factory=list)
    texts: list[Text] = field(default_factory=list)
    targets: list[Target] = field(default_factory=list)
    design_settings: BoardDesignSettings = field(default_factory=BoardDesignSettings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "module_count": len(self.modules),
            "pad_count": sum(len(m.pads) for m in self.modules),
            "track_count": len(self.tracks),
            "via_count": len(self.vias),
            "zone_count": len(self.zones),
            "drawing_count": len(self.draw_segments) + len(self.dimensions) + len(self.texts),
            "target_count": len(self.targets),
            "solder_mask_min_width": self.design_settings.solder_mask_min_width,
        }
