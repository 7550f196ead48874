"""FastAPI exception handlers for custom exceptions."""

from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from roomgraph.exceptions import (
    RoomGraphError,
    ConfigurationError,
    ValidationError,
    SegmentSourceError,
    ExportError,
)


async def roomgraph_exception_handler(request: Request, exc: RoomGraphError) -> JSONResponse:
    """Handle roomgraph-specific exceptions."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    # Map exception types to HTTP status codes
    if isinstance(exc, (ConfigurationError, ValidationError)):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, SegmentSourceError):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(exc, ExportError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    logger.error(
        "roomgraph exception: {type} - {message}",
        type=type(exc).__name__,
        message=str(exc),
        details=exc.details,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )
