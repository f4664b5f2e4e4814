"""Logging infrastructure for the board plotter.

Provides structured logging with configurable levels and per-plot layer
tracking so that log lines from nested rendering calls can be correlated
with the layer pass that produced them.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

# Name of the layer currently being plotted, for log correlation
plot_layer_ctx: ContextVar[str | None] = ContextVar("plot_layer", default=None)


def get_plot_layer() -> str | None:
    """Get the layer of the in-flight plot call if available."""
    return plot_layer_ctx.get()


class _PlotLayerFilter(logging.Filter):
    """Make sure every record carries a ``plot_layer`` attribute."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "plot_layer"):
            record.plot_layer = get_plot_layer() or "-"
        return True


def setup_logging(
    level: int | str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure logging for the application.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO', 'ERROR').
               Defaults to LOGGING_LEVEL env var or 'INFO'.
        format_string: Custom log format string. Defaults to a structured format.

    Returns:
        The root logger configured for the application.
    """
    if level is None:
        level = os.environ.get("LOGGING_LEVEL", "INFO")

    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] [%(name)s] [layer=%(plot_layer)s] %(message)s"

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    # stdout carries the MCP stdio transport
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    console_handler.addFilter(_PlotLayerFilter())
    logger.addHandler(console_handler)

    # FastMCP and its transports are chatty at INFO
    logging.getLogger("fastmcp").setLevel("WARNING")
    logging.getLogger("asyncio").setLevel("WARNING")
    logging.getLogger("asyncio").propagate = False

    return logger


class PlotLoggerAdapter(logging.LoggerAdapter[Any]):
    """Logger adapter that adds the current plot layer to log records."""

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        extra = kwargs.get("extra")
        if extra is None:
            extra = {}
        extra["plot_layer"] = get_plot_layer() or "-"
        kwargs["extra"] = extra
        return msg, kwargs


def create_logger(name: str) -> PlotLoggerAdapter:
    """Create and return a logger for a module.

    Args:
        name: The module name (typically __name__).

    Returns:
        A configured logger instance.
    """
    return PlotLoggerAdapter(logging.getLogger(name), {})
