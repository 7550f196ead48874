"""Custom exception hierarchy for roomgraph.

The graph core never raises for malformed geometry; it excludes it and counts
the exclusion. These exceptions cover the layers around it.
"""

from __future__ import annotations


class RoomGraphError(Exception):
    """Base exception for all roomgraph-specific errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(RoomGraphError):
    """Raised when graph parameters or the settings file are invalid."""
    pass


class ValidationError(RoomGraphError):
    """Base class for input validation errors."""
    pass


class SegmentValidationError(ValidationError):
    """Raised when a segment payload is malformed or has non-finite coordinates."""
    pass


class SegmentSourceError(RoomGraphError):
    """Raised when segments cannot be read from a drawing or file."""
    pass


class ExportError(RoomGraphError):
    """Base class for export-related errors."""
    pass


class LabelExportError(ExportError):
    """Raised when room labels cannot be written back into a drawing."""
    pass
