"""Exception hierarchy for record conversion.

Every hard failure raised while converting a record derives from
``ConversionError`` so batch callers can catch one type and keep going.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base exception for a record that cannot be converted."""

    def __init__(self, message: str, record_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.record_id = record_id


class MissingLayerError(ConversionError):
    """Raised when a record references a layer id absent from the layer table."""

    def __init__(self, layer_id: str):
        super().__init__(f"Missing layer id: {layer_id}")
        self.layer_id = layer_id


class PathSyntaxError(ConversionError):
    """Raised when a path string cannot be tokenized or has bad arguments."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class ArcGeometryError(ConversionError):
    """Raised when an arc has no circular solution."""


class RecordError(ConversionError):
    """Raised when a record field is malformed."""
