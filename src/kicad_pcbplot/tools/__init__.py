"""Plot tools exposed over MCP."""

# Import modules to trigger tool registration via register_tool() calls
from . import plot  # noqa: F401
from .registry import TOOL_REGISTRY, ToolSpec, register_tool

__all__ = [
    "TOOL_REGISTRY",
    "ToolSpec",
    "register_tool",
]
