"""Exception hierarchy for plot errors.

Defines typed exceptions for the failure modes of a plot run so that
callers (and the tool surface) can tell configuration mistakes apart from
malformed board data.
"""

from __future__ import annotations

from typing import Any


class PcbPlotError(Exception):
    """Base exception for all plotting errors."""

    error_code: str = ""

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.__dict__.update(kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a serializable dict."""
        result: dict[str, Any] = {
            "error": True,
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
        }
        # Add any additional attributes
        result.update(
            {k: v for k, v in self.__dict__.items() if k not in ["message", "error_code"]}
        )
        return result


class ConfigurationError(PcbPlotError):
    """Raised for invalid plot configuration. Not recoverable mid-plot."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, setting: str | None = None, **kwargs: Any):
        super().__init__(message, "CONFIGURATION_ERROR", setting=setting, **kwargs)


class InvalidTransformError(ConfigurationError):
    """Raised when a transform would scale x and y differently."""

    error_code = "INVALID_TRANSFORM"

    def __init__(self, message: str, sx: float | None = None, sy: float | None = None):
        super().__init__(message, "transform.scale", sx=sx, sy=sy)
        self.error_code = "INVALID_TRANSFORM"


class UnsupportedShapeError(PcbPlotError):
    """Raised when a pad or graphic item carries a shape tag with no handler."""

    error_code = "UNSUPPORTED_SHAPE"

    def __init__(self, message: str, shape: str | None = None, owner: str | None = None):
        super().__init__(message, "UNSUPPORTED_SHAPE", shape=shape, owner=owner)


class UnknownLayerError(PcbPlotError):
    """Raised when a layer name or id is outside the known layer table."""

    error_code = "UNKNOWN_LAYER"

    def __init__(self, message: str, layer: str | int | None = None):
        super().__init__(message, "UNKNOWN_LAYER", layer=layer)


class ValidationError(PcbPlotError):
    """Raised when a board snapshot fails validation."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, **kwargs: Any):
        super().__init__(message, "VALIDATION_ERROR", field=field, **kwargs)


__all__ = [
    "PcbPlotError",
    "ConfigurationError",
    "InvalidTransformError",
    "UnsupportedShapeError",
    "UnknownLayerError",
    "ValidationError",
]
