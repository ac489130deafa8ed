"""FastAPI application factory and entry point.

Creates the application instance, registers middleware and error handlers,
and mounts the catalog, scraping and health routers.

Usage::

    # Development server (from project root)
    uvicorn product_pulse.api.main:app --reload --port 4000
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from product_pulse import __version__
from product_pulse.config.settings import get_settings
from product_pulse.core.exceptions import InvalidReferenceError
from product_pulse.core.logging_config import configure_logging, request_id_var

# Applied at import time so records emitted while the app is built are
# captured; create_app() re-applies it with the configured level.
configure_logging("INFO")

logger = structlog.get_logger(__name__)


def create_app() -> FastAPI:
    """Build and configure the FastAPI application.

    Separated from the module-level ``app`` singleton so that tests can
    call ``create_app()`` with a patched settings environment.

    Returns:
        A fully configured ``FastAPI`` instance.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(
        title=settings.app_name,
        description=(
            "Collects product listings and reviews from third-party pages and "
            "serves them next to first-party user feedback."
        ),
        version=__version__,
        debug=settings.debug,
        redirect_slashes=False,
    )

    # ---- Middleware --------------------------------------------------------

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def request_logging_middleware(
        request: Request, call_next: Callable
    ) -> Response:
        """Log every request with its status and duration under a request ID."""
        request_id = str(uuid.uuid4())
        request_id_var.set(request_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("unhandled_exception", exc_info=exc)
            raise
        finally:
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = getattr(response, "status_code", 500)
            log_fn = logger.warning if status_code >= 400 else logger.info
            log_fn(
                "request_complete",
                status_code=status_code,
                elapsed_ms=elapsed_ms,
            )

        response.headers["X-Request-ID"] = request_id
        return response

    # ---- Error handlers ----------------------------------------------------

    @application.exception_handler(InvalidReferenceError)
    async def invalid_reference_handler(
        request: Request, exc: InvalidReferenceError
    ) -> JSONResponse:
        logger.info("invalid_reference", kind=exc.kind, ref_id=exc.ref_id)
        return JSONResponse(
            status_code=404,
            content={"detail": str(exc), "kind": exc.kind, "id": exc.ref_id},
        )

    # ---- Routers -----------------------------------------------------------

    from product_pulse.api.routes import (  # noqa: PLC0415
        catalog,
        health as health_routes,
        scraping,
    )

    application.include_router(health_routes.router)
    application.include_router(catalog.router, prefix="/api", tags=["catalog"])
    application.include_router(scraping.router, prefix="/api/scraping", tags=["scraping"])

    logger.info(
        "application_configured",
        app_name=settings.app_name,
        debug=settings.debug,
        log_level=settings.log_level,
    )
    return application


app = create_app()
"""The FastAPI application instance (ASGI callable passed to Uvicorn)."""
