"""Tool registry: every plot tool is declared here before the server exposes it.

The server derives each tool's input schema from the handler signature, so a
spec only carries the exposed name and description.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class ToolSpec:
    """A handler plus the name and description it is exposed under."""

    name: str
    description: str
    handler: Callable[..., Any]


TOOL_REGISTRY: dict[str, ToolSpec] = {}


def register_tool(name: str, description: str, handler: Callable[..., Any]) -> None:
    """Register a tool in the global registry."""
    TOOL_REGISTRY[name] = ToolSpec(name=name, description=description, handler=handler)
