"""MCP resources."""

from .layers import layer_color_table, register_layer_resources

__all__ = ["layer_color_table", "register_layer_resources"]
