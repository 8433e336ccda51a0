"""
Hub Foundation: FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn hub_foundation.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────────┐ ┌──────┐ ┌────────┐  │
    │  │  Req ID  │→│  Access Log  │→│ GZip │→│  CORS  │  │
    │  └──────────┘ └──────────────┘ └──────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────┐ ┌──────────────┐ ┌────────────┐  │
    │  │ GET artworks  │ │ GET artists  │ │ GET health │  │
    │  └───────────────┘ └──────────────┘ └────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ HubFoundationError → ERROR_STATUS[kind]      │   │
    │  │ Exception          → 500                     │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from hub_foundation import __version__
from hub_foundation.config import settings
from hub_foundation.database import dispose_engine
from hub_foundation.exceptions import ErrorKind, HubFoundationError
from hub_foundation.middleware.logging import RequestLoggingMiddleware
from hub_foundation.middleware.request_id import RequestIDMiddleware, request_id_var
from hub_foundation.routes import artists, artworks, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Third-party libraries log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Set up logging on startup; dispose the connection pool on shutdown."""
    setup_logging()
    logger.info("Hub Foundation %s starting up", __version__)
    logger.info(
        "Resource API at %s (limit default=%d, max=%d)",
        settings.api_prefix or "/", settings.limit_default, settings.limit_max,
    )

    yield

    logger.info("Hub Foundation shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(exc: HubFoundationError, rid: str) -> dict:
    """
    JSON body for an application error.

    Server-side faults get a generic message; their detail goes to the log.
    """
    if exc.is_client_error:
        return {
            "status": exc.status_code,
            "error": exc.kind.value,
            "message": exc.message,
            "details": exc.context,
            "request_id": rid,
        }
    return {
        "status": exc.status_code,
        "error": exc.kind.value,
        "message": "An internal error occurred. Please try again later.",
        "request_id": rid,
    }


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Every HubFoundationError is mapped through ERROR_STATUS by its kind:
        INVALID_SYNTAX      → 400
        BIG_LIMIT           → 403
        TOO_MANY_IDS        → 403
        ITEM_NOT_FOUND      → 404
        METHOD_NOT_ALLOWED  → 405
        CONFIGURATION       → 500
        DATABASE            → 500
    Anything else is an unexpected error → 500 with a generic message.
    """

    @app.exception_handler(HubFoundationError)
    async def handle_hub_error(request: Request, exc: HubFoundationError):
        rid = request_id_var.get("")
        if exc.is_client_error:
            logger.warning("[%s] %s: %s", rid, exc.kind.value, exc.message)
        else:
            logger.error(
                "[%s] %s: %s | Context: %s", rid, exc.kind.value, exc.message, exc.context
            )
        headers = {"Allow": "GET"} if exc.kind is ErrorKind.METHOD_NOT_ALLOWED else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc, rid),
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, never to the client."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "status": 500,
                "error": ErrorKind.INTERNAL.value,
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Hub Foundation API",
        description=(
            "Read-only resource API. Every collection supports ?ids=, ?limit=, "
            "?page= and ?fields=; scoped listings are exposed as sub-paths."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition: the last one added
    # (RequestID) sees the request first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(artworks.router)
    app.include_router(artists.router)
    app.include_router(health.router)

    return app


# uvicorn expects `hub_foundation.main:app` to be importable
app = create_app()
