"""
Main entrypoint for the Tourism Flow Records API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``::

    uvicorn turismo_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from .core.config import settings
from .core.logging_config import setup_logging
from .core.store import get_store
from .api.router import router as api_router

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Flatten FastAPI's validation error list into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Invalid payload: " + "; ".join(parts)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that the startup hook and handlers below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.include_router(api_router, prefix="/api")

    # Malformed bodies and query parameters are client errors (400), not
    # FastAPI's default 422.
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
        message = _describe_validation_error(exc)
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
        return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.on_event("startup")
    async def startup_event() -> None:
        store = get_store()
        logger.info("Serving records from %s (grouped index %s)", store.data_path, store.grouped_path)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
