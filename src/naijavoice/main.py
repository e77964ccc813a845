"""
FastAPI Application Entry Point.

Creates and configures the FastAPI application for naijavoice: logging,
CORS, the /api router and the JSON error handlers.

Usage:
    # Run with uvicorn
    uvicorn naijavoice.main:app --host 0.0.0.0 --port 5000

    # Or through the CLI
    naijavoice serve
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from naijavoice import __version__
from naijavoice.api.dependencies import get_settings
from naijavoice.api.routes import router
from naijavoice.core.config import ServiceConfig
from naijavoice.core.logging import configure_logging, error, get_logger, info
from naijavoice.services.synthesis_service import ErrorCode

_LOG = get_logger("naijavoice.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg = ServiceConfig.from_settings(get_settings())
    info(_LOG, "startup", version=__version__, port=cfg.server.port,
         default_voice=cfg.default_voice)
    yield
    info(_LOG, "shutdown")


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unknown paths get the JSON error shape; other HTTP errors keep FastAPI's."""
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={"ok": False, "error": "Endpoint not found", "code": ErrorCode.NOT_FOUND},
        )
    return await http_exception_handler(request, exc)


async def unhandled_error_handler(request: Request, exc: Exception):
    error(_LOG, "unhandled_error", exc_info=exc, path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={"ok": False, "error": "Something went wrong!", "code": ErrorCode.INTERNAL_ERROR},
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    This factory function:
        1. Configures logging from env vars and settings.yaml
        2. Creates the FastAPI instance with a startup/shutdown lifespan
        3. Allows cross-origin requests from the configured origins
        4. Registers the router and JSON error handlers

    Returns:
        FastAPI: Configured application instance ready to serve requests.
    """
    configure_logging()

    cfg = ServiceConfig.from_settings(get_settings())

    app = FastAPI(title="naijavoice", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    return app


# Global application instance for ASGI servers
app = create_app()
