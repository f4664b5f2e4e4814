"""MCP Resources: read-only layer tables.

The layer palette is static for the life of the server, so it is served as a
resource instead of a tool call.
"""

from __future__ import annotations

import json

from fastmcp import FastMCP

from ..colors import LayerColorPolicy
from ..layers import PcbLayerId


def layer_color_table(diffing: bool = False) -> dict[str, dict[str, int | float]]:
    """Plot color of every layer, keyed by layer name."""
    colors = LayerColorPolicy(diffing=diffing)
    return {lid.layer_name: colors.color_for_layer(lid).to_dict() for lid in PcbLayerId}


def register_layer_resources(mcp: FastMCP) -> None:
    """Register layer-related MCP resources."""

    @mcp.resource("pcbplot://layers/colors")
    def layer_colors() -> str:
        """Standard and diff-mode plot colors for every layer."""
        return json.dumps(
            {
                "standard": layer_color_table(),
                "diffing": layer_color_table(diffing=True),
            },
            indent=2,
        )
