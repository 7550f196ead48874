import os
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from roomgraph import __version__
from roomgraph.exceptions import RoomGraphError
from roomgraph.logging_config import setup_logging
from roomgraph.settings import get_settings
from services.api.exception_handlers import roomgraph_exception_handler
from services.api.routes import router as v1_router


def create_app() -> FastAPI:
    # Setup structured logging
    settings = get_settings()
    json_logging = os.getenv("JSON_LOGGING", str(settings.logging.json_format)).lower() in {"true", "1", "yes"}
    log_level = os.getenv("LOG_LEVEL", settings.logging.level)
    log_file = os.getenv("LOG_FILE") or settings.logging.log_file
    setup_logging(
        level=log_level,
        json_format=json_logging,
        log_file=Path(log_file) if log_file else None,
    )

    app = FastAPI(
        title="roomgraph API",
        version=__version__,
        description="Closed room polygons from unordered wall segments",
    )

    logger.info(
        "API initialised with snap_size={snap_size} area_epsilon={area_epsilon}",
        snap_size=settings.graph.snap_size,
        area_epsilon=settings.graph.area_epsilon,
    )

    @app.get("/healthz", tags=["meta"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    # Register exception handlers
    app.add_exception_handler(RoomGraphError, roomgraph_exception_handler)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with a JSON body."""
        logger.opt(exception=exc).error("Unhandled exception")
        return JSONResponse(
            status_code=500,
            content={
                "error": type(exc).__name__,
                "message": str(exc),
            },
        )

    app.include_router(v1_router)

    return app


app = create_app()


__all__ = ["app", "create_app"]
