"""Build board models from JSON-compatible snapshots.

The snapshot format mirrors the models' fields: points are ``{"x", "y"}``
objects, sizes ``{"width", "height"}``, layers are KiCad names or ids. This is
the input format of the tool surface, not a KiCad file parser.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from ..exceptions import UnknownLayerError, UnsupportedShapeError, ValidationError
from ..geometry import Point, Size
from ..layers import LayerSet, layer_id
from ..plotter.base import TextHJustify, TextVJustify
from .board import (
    Board,
    BoardDesignSettings,
    Dimension,
    DrawSegment,
    EdgeModule,
    Module,
    Pad,
    Target,
    Text,
    TextModule,
    Track,
    Via,
    Zone,
    ZoneFillSegment,
)
from .common import PadAttribute, PadDrillShape, PadShape, Shape, TargetShape

E = TypeVar("E", bound=Enum)


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if not isinstance(data, dict):
        raise ValidationError(f"{path} must be an object", field=path)
    if key not in data:
        raise ValidationError(f"Missing field {path}.{key}", field=f"{path}.{key}")
    return data[key]


def _float(val: Any, path: str) -> float:
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise ValidationError(f"{path} must be a number, got {val!r}", field=path)
    return val


def _point(val: Any, path: str) -> Point:
    if not isinstance(val, dict):
        raise ValidationError(f"{path} must be a point object", field=path)
    return Point(
        _float(_require(val, "x", path), f"{path}.x"),
        _float(_require(val, "y", path), f"{path}.y"),
    )


def _optional_point(data: dict[str, Any], key: str, path: str) -> Point | None:
    val = data.get(key)
    if val is None:
        return None
    return _point(val, f"{path}.{key}")


def _size(val: Any, path: str) -> Size:
    if not isinstance(val, dict):
        raise ValidationError(f"{path} must be a size object", field=path)
    return Size(
        _float(_require(val, "width", path), f"{path}.width"),
        _float(_require(val, "height", path), f"{path}.height"),
    )


def _layer(val: Any, path: str) -> int:
    try:
        return layer_id(val)
    except UnknownLayerError as exc:
        raise ValidationError(exc.message, field=path) from None


def _enum(enum_type: type[E], val: Any, path: str) -> E:
    try:
        return enum_type(val)
    except ValueError:
        raise ValidationError(f"{path}: invalid value {val!r}", field=path) from None


def _shape_tag(enum_type: type[E], val: Any, path: str) -> E:
    """Shape tags fail as unsupported shapes rather than as bad input."""
    try:
        return enum_type(val)
    except ValueError:
        raise UnsupportedShapeError(
            f"Unsupported shape {val!r} at {path}", shape=str(val), owner=path
        ) from None


def _list(
    data: dict[str, Any], key: str, path: str, build: Callable[[Any, str], Any]
) -> list[Any]:
    items = data.get(key, [])
    if not isinstance(items, list):
        raise ValidationError(f"{path}.{key} must be a list", field=f"{path}.{key}")
    return [build(item, f"{path}.{key}[{i}]") for i, item in enumerate(items)]


# ── Entities ───────────────────────────────────────────────────────


def _text_fields(data: dict[str, Any], path: str) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "text": str(_require(data, "text", path)),
        "pos": _point(_require(data, "pos", path), f"{path}.pos"),
        "layer": _layer(_require(data, "layer", path), f"{path}.layer"),
        "angle": _float(data.get("angle", 0), f"{path}.angle"),
        "line_width": _float(data.get("line_width", 10), f"{path}.line_width"),
        "h_justify": _enum(TextHJustify, data.get("h_justify", "C"), f"{path}.h_justify"),
        "v_justify": _enum(TextVJustify, data.get("v_justify", "C"), f"{path}.v_justify"),
        "italic": bool(data.get("italic", False)),
        "bold": bool(data.get("bold", False)),
        "mirror": bool(data.get("mirror", False)),
    }
    if "size" in data:
        fields["size"] = _size(data["size"], f"{path}.size")
    return fields


def extract_text(data: dict[str, Any], path: str = "text") -> Text:
    return Text(**_text_fields(data, path))


def extract_text_module(data: dict[str, Any], path: str = "text") -> TextModule:
    return TextModule(**_text_fields(data, path), visible=bool(data.get("visible", True)))


def extract_edge_module(data: dict[str, Any], path: str = "edge") -> EdgeModule:
    return EdgeModule(
        shape=_shape_tag(Shape, _require(data, "shape", path), f"{path}.shape"),
        layer=_layer(_require(data, "layer", path), f"{path}.layer"),
        line_width=_float(data.get("line_width", 0), f"{path}.line_width"),
        start=_optional_point(data, "start", path),
        end=_optional_point(data, "end", path),
        angle=_float(data.get("angle", 0), f"{path}.angle"),
        poly_points=_list(data, "poly_points", path, _point),
        bezier_c1=_optional_point(data, "bezier_c1", path),
        bezier_c2=_optional_point(data, "bezier_c2", path),
    )


def _graphic(data: Any, path: str) -> EdgeModule | TextModule:
    if isinstance(data, dict) and "text" in data:
        return extract_text_module(data, path)
    return extract_edge_module(data, path)


def extract_pad(data: dict[str, Any], path: str = "pad") -> Pad:
    layers = _require(data, "layers", path)
    if not isinstance(layers, list):
        raise ValidationError(f"{path}.layers must be a list", field=f"{path}.layers")
    drill = data.get("drill") or {}
    if not isinstance(drill, dict):
        raise ValidationError(f"{path}.drill must be an object", field=f"{path}.drill")
    return Pad(
        number=str(data.get("number", "")),
        shape=_shape_tag(PadShape, _require(data, "shape", path), f"{path}.shape"),
        pos=_point(_require(data, "pos", path), f"{path}.pos"),
        size=_size(_require(data, "size", path), f"{path}.size"),
        layers=LayerSet(_layer(lyr, f"{path}.layers[{i}]") for i, lyr in enumerate(layers)),
        orientation=_float(data.get("orientation", 0), f"{path}.orientation"),
        attribute=_enum(PadAttribute, data.get("attribute", "smd"), f"{path}.attribute"),
        drill_shape=_enum(PadDrillShape, drill.get("shape", "circle"), f"{path}.drill.shape"),
        drill_size=Size(
            _float(drill.get("width", 0), f"{path}.drill.width"),
            _float(drill.get("height", drill.get("width", 0)), f"{path}.drill.height"),
        ),
        delta=_size(data["delta"], f"{path}.delta") if "delta" in data else Size(),
        roundrect_ratio=_float(data.get("roundrect_ratio", 0.25), f"{path}.roundrect_ratio"),
    )


def extract_module(data: dict[str, Any], path: str = "module") -> Module:
    return Module(
        name=str(_require(data, "name", path)),
        reference=extract_text_module(_require(data, "reference", path), f"{path}.reference"),
        value=extract_text_module(_require(data, "value", path), f"{path}.value"),
        pos=_point(data.get("pos", {"x": 0, "y": 0}), f"{path}.pos"),
        orientation=_float(data.get("orientation", 0), f"{path}.orientation"),
        layer=_layer(data.get("layer", "F.Cu"), f"{path}.layer"),
        pads=_list(data, "pads", path, extract_pad),
        graphics=_list(data, "graphics", path, _graphic),
    )


def extract_track(data: dict[str, Any], path: str = "track") -> Track:
    return Track(
        start=_point(_require(data, "start", path), f"{path}.start"),
        end=_point(_require(data, "end", path), f"{path}.end"),
        width=_float(_require(data, "width", path), f"{path}.width"),
        layer=_layer(_require(data, "layer", path), f"{path}.layer"),
        net=int(data.get("net", 0)),
    )


def extract_via(data: dict[str, Any], path: str = "via") -> Via:
    layers = data.get("layers", ["F.Cu", "B.Cu"])
    if not isinstance(layers, list) or len(layers) != 2:
        raise ValidationError(f"{path}.layers must name two layers", field=f"{path}.layers")
    return Via(
        start=_point(_require(data, "start", path), f"{path}.start"),
        width=_float(_require(data, "width", path), f"{path}.width"),
        drill=_float(data.get("drill", 0), f"{path}.drill"),
        layer1=_layer(layers[0], f"{path}.layers[0]"),
        layer2=_layer(layers[1], f"{path}.layers[1]"),
        net=int(data.get("net", 0)),
    )


def _polygon(data: Any, path: str) -> list[Point]:
    if not isinstance(data, list):
        raise ValidationError(f"{path} must be a list of points", field=path)
    return [_point(p, f"{path}[{i}]") for i, p in enumerate(data)]


def _fill_segments(data: Any, path: str) -> list[ZoneFillSegment]:
    if not isinstance(data, list):
        raise ValidationError(f"{path} must be a list of segments", field=path)
    return [
        ZoneFillSegment(
            _point(_require(seg, "start", f"{path}[{i}]"), f"{path}[{i}].start"),
            _point(_require(seg, "end", f"{path}[{i}]"), f"{path}[{i}].end"),
        )
        for i, seg in enumerate(data)
    ]


def extract_zone(data: dict[str, Any], path: str = "zone") -> Zone:
    return Zone(
        layer=_layer(_require(data, "layer", path), f"{path}.layer"),
        filled_polygons=_list(data, "filled_polygons", path, _polygon),
        fill_segments=_list(data, "fill_segments", path, _fill_segments),
        min_thickness=_float(data.get("min_thickness", 0), f"{path}.min_thickness"),
        fill_mode=int(data.get("fill_mode", 0)),
        net=int(data.get("net", 0)),
    )


def extract_draw_segment(data: dict[str, Any], path: str = "drawing") -> DrawSegment:
    return DrawSegment(
        layer=_layer(_require(data, "layer", path), f"{path}.layer"),
        line_width=_float(data.get("line_width", 0), f"{path}.line_width"),
        shape=_shape_tag(Shape, data.get("shape", "segment"), f"{path}.shape"),
        start=_point(data.get("start", {"x": 0, "y": 0}), f"{path}.start"),
        end=_point(data.get("end", {"x": 0, "y": 0}), f"{path}.end"),
        angle=_float(data.get("angle", 0), f"{path}.angle"),
        bezier_points=_list(data, "bezier_points", path, _point),
        poly_points=_list(data, "poly_points", path, _point),
    )


_DIMENSION_POINTS = (
    "crossbar_o",
    "crossbar_f",
    "feature_line_go",
    "feature_line_gf",
    "feature_line_do",
    "feature_line_df",
    "arrow_d1f",
    "arrow_d2f",
    "arrow_g1f",
    "arrow_g2f",
)


def extract_dimension(data: dict[str, Any], path: str = "dimension") -> Dimension:
    points = {key: _point(_require(data, key, path), f"{path}.{key}") for key in _DIMENSION_POINTS}
    return Dimension(
        layer=_layer(_require(data, "layer", path), f"{path}.layer"),
        line_width=_float(data.get("line_width", 0), f"{path}.line_width"),
        text=extract_text(_require(data, "text", path), f"{path}.text"),
        **points,
    )


def extract_target(data: dict[str, Any], path: str = "target") -> Target:
    shape = data.get("shape", "plus")
    return Target(
        pos=_point(_require(data, "pos", path), f"{path}.pos"),
        size=_float(_require(data, "size", path), f"{path}.size"),
        line_width=_float(data.get("line_width", 0), f"{path}.line_width"),
        layer=_layer(_require(data, "layer", path), f"{path}.layer"),
        shape=_enum(TargetShape, 1 if shape in ("x", "cross", 1) else 0, f"{path}.shape"),
    )


def board_from_dict(data: dict[str, Any]) -> Board:
    """Build a ``Board`` from a snapshot dict.

    Raises:
        ValidationError: on a missing or mistyped field (``field`` names it).
        UnsupportedShapeError: on a pad or graphic shape tag with no handler.
    """
    if not isinstance(data, dict):
        raise ValidationError("Board snapshot must be an object", field="board")
    settings = data.get("design_settings") or {}
    return Board(
        modules=_list(data, "modules", "board", extract_module),
        tracks=_list(data, "tracks", "board", extract_track),
        vias=_list(data, "vias", "board", extract_via),
        zones=_list(data, "zones", "board", extract_zone),
        draw_segments=_list(data, "draw_segments", "board", extract_draw_segment),
        dimensions=_list(data, "dimensions", "board", extract_dimension),
        texts=_list(data, "texts", "board", extract_text),
        targets=_list(data, "targets", "board", extract_target),
        design_settings=BoardDesignSettings(
            solder_mask_min_width=_float(
                settings.get("solder_mask_min_width", 0),
                "board.design_settings.solder_mask_min_width",
            )
        ),
    )
