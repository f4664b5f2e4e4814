"""KiCad PCB plot server: entry point."""

from __future__ import annotations

from fastmcp import FastMCP

from .logging_config import setup_logging
from .resources import register_layer_resources
from .tools import TOOL_REGISTRY


def create_server() -> FastMCP:
    """Create and configure the plot MCP server."""
    mcp = FastMCP("kicad-pcbplot")

    for spec in TOOL_REGISTRY.values():
        mcp.tool(spec.handler, name=spec.name, description=spec.description)

    register_layer_resources(mcp)

    return mcp


def main() -> None:
    """CLI entry point."""
    setup_logging()
    server = create_server()
    server.run()


if __name__ == "__main__":
    main()
