"""Plot tools: render board snapshots into recorded drawing commands."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from ..colors import LayerColorPolicy
from ..config import PlotOptions, parse_drill_marks, parse_plot_mode
from ..exceptions import PcbPlotError
from ..layers import LayerSet, PcbLayerId, layer_category
from ..logging_config import create_logger
from ..plotter.recording import RecordingPlotter
from ..render.board import DEFAULT_LAYER_MASK, BoardPlotter
from ..schema.load import board_from_dict, extract_module
from .registry import register_tool

logger = create_logger(__name__)


def _options(
    plot_mode: str | None = None,
    drill_marks: str | None = None,
    diffing: bool | None = None,
) -> PlotOptions:
    """Environment defaults, overridden by explicit tool arguments."""
    opts = PlotOptions.from_env()
    if plot_mode is not None:
        opts = replace(opts, plot_mode=parse_plot_mode(plot_mode))
    if drill_marks is not None:
        opts = replace(opts, drill_marks=parse_drill_marks(drill_marks))
    if diffing is not None:
        opts = replace(opts, diffing=diffing)
    return opts


def _result(recorder: RecordingPlotter, opts: PlotOptions, **extra: Any) -> dict[str, Any]:
    return {
        **extra,
        "options": opts.to_dict(),
        "command_count": len(recorder.commands),
        "commands": recorder.to_dict(),
    }


def _list_layers_handler(diffing: bool = False) -> dict[str, Any]:
    """List every plottable layer with its category and plot color.

    Args:
        diffing: Report the diff-mode palette instead of the standard one.
    """
    colors = LayerColorPolicy(diffing=diffing)
    layers = [
        {
            "id": int(lid),
            "name": lid.layer_name,
            "category": layer_category(lid).value,
            "color": colors.color_for_layer(lid).to_css(),
        }
        for lid in PcbLayerId
    ]
    return {"count": len(layers), "layers": layers}


def _plot_layer_handler(
    board: dict[str, Any],
    layer: str,
    plot_mode: str | None = None,
    drill_marks: str | None = None,
    diffing: bool | None = None,
) -> dict[str, Any]:
    """Plot one board layer and return the ordered drawing commands.

    Args:
        board: Board snapshot (modules, tracks, vias, zones, drawings).
        layer: Layer name such as 'F.Cu' or 'F.SilkS'.
        plot_mode: 'filled' or 'outline'.
        drill_marks: 'none', 'small' or 'full'.
        diffing: Use the greyscale diff palette.
    """
    try:
        opts = _options(plot_mode, drill_marks, diffing)
        model = board_from_dict(board)
        recorder = RecordingPlotter()
        BoardPlotter(recorder, opts).plot_one_board_layer(model, layer)
    except PcbPlotError as e:
        logger.warning(f"plot_layer failed: {e.message}")
        return e.to_dict()

    return _result(recorder, opts, layer=layer, board=model.to_dict())


def _plot_layers_handler(
    board: dict[str, Any],
    layers: list[str] | None = None,
    plot_mode: str | None = None,
    drill_marks: str | None = None,
    diffing: bool | None = None,
) -> dict[str, Any]:
    """Plot several layers in one pass: pads, tracks and zones, then drawings and texts.

    Args:
        board: Board snapshot.
        layers: Layer names; defaults to front and back copper.
        plot_mode: 'filled' or 'outline'.
        drill_marks: 'none', 'small' or 'full'.
        diffing: Use the greyscale diff palette.
    """
    try:
        opts = _options(plot_mode, drill_marks, diffing)
        mask = LayerSet(layers) if layers else DEFAULT_LAYER_MASK
        model = board_from_dict(board)
        recorder = RecordingPlotter()
        BoardPlotter(recorder, opts).plot_board_layers(model, mask)
    except PcbPlotError as e:
        logger.warning(f"plot_layers failed: {e.message}")
        return e.to_dict()

    return _result(recorder, opts, layers=mask.names(), board=model.to_dict())


def _plot_footprint_handler(
    footprint: dict[str, Any],
    plot_mode: str | None = None,
) -> dict[str, Any]:
    """Preview a single footprint: its graphic edges and pad outlines.

    Args:
        footprint: Footprint snapshot (name, reference, value, pads, graphics).
        plot_mode: 'filled' or 'outline' for the graphic edges.
    """
    try:
        opts = _options(plot_mode)
        module = extract_module(footprint, "footprint")
        recorder = RecordingPlotter()
        BoardPlotter(recorder, opts).plot_module(module)
    except PcbPlotError as e:
        logger.warning(f"plot_footprint failed: {e.message}")
        return e.to_dict()

    return _result(recorder, opts, footprint=module.to_dict())


register_tool(
    name="list_layers",
    description="List every plottable layer with its category and plot color.",
    handler=_list_layers_handler,
)

register_tool(
    name="plot_layer",
    description=(
        "Plot one layer of a board snapshot."
        " Returns the ordered vector drawing commands for that layer."
    ),
    handler=_plot_layer_handler,
)

register_tool(
    name="plot_layers",
    description="Plot several layers of a board snapshot in one pass.",
    handler=_plot_layers_handler,
)

register_tool(
    name="plot_footprint",
    description="Preview a footprint: graphic edges followed by pad outlines.",
    handler=_plot_footprint_handler,
)
