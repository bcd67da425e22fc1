"""
QuickPaste Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn quickpaste.main:app),
       and by tests with a ready-made AppContext.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────┐      │
    │  │  Req ID  │→│  Access Logging │→│   GZip   │      │
    │  └──────────┘ └─────────────────┘ └──────────┘      │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌─────────────┐   │
    │  │ GET/POST /  GET/DELETE /{id} │ │ GET /health │   │
    │  │ GET /{id}/{lang}             │ └─────────────┘   │
    │  └──────────────────────────────┘                   │
    │                                                     │
    │  Exception Handlers (text/plain):                   │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ NotFound→404 │ Malformed→400 │ Storage→500   │   │
    │  └──────────────────────────────────────────────┘   │
    │                                                     │
    │  app.state.context: AppContext(store, highlighter)  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Construction: build engine (database backend), load highlight tables,
                  build the AppContext.
    Startup:      configure logging, optionally create the schema.
    Shutdown:     dispose the engine (close all pooled connections).
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse

from quickpaste import __version__
from quickpaste.config import settings
from quickpaste.context import AppContext, build_context
from quickpaste.database import create_engine_from_settings, create_schema, dispose_engine
from quickpaste.exceptions import (
    MalformedInputError,
    NotFoundError,
    QuickPasteError,
    StorageUnavailableError,
)
from quickpaste.middleware.logging import RequestLoggingMiddleware
from quickpaste.middleware.request_id import RequestIDMiddleware, request_id_var
from quickpaste.routes import health, pastes

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Paste not found"
MALFORMED_ID_MESSAGE = "Malformed paste id"
INTERNAL_ERROR_MESSAGE = "Internal server error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (captured by Docker / systemd)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, optional schema creation.
    Shutdown: dispose the database engine, if this app owns one.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("QuickPaste %s starting up...", __version__)

    engine = app.state.engine
    if engine is not None and settings.auto_create_schema:
        await create_schema(engine)
        logger.info("Database schema ensured (AUTO_CREATE_SCHEMA=true)")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("QuickPaste shutting down...")
    if engine is not None:
        await dispose_engine(engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to terse plain-text responses.

        NotFoundError           → 404 "Paste not found"
        RequestValidationError  → 400 "Malformed paste id"
        MalformedInputError     → 400 exc.message
        StorageUnavailableError → 500 "Internal server error"
        QuickPasteError (base)  → 500 "Internal server error"
        Exception (fallback)    → 500 "Internal server error"

    Details (context dicts, stack traces) go to the server log only.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        # The only validated inputs are the UUID path parameters
        rid = request_id_var.get("")
        logger.warning("[%s] Rejected malformed id in %s", rid, request.url.path)
        return PlainTextResponse(MALFORMED_ID_MESSAGE, status_code=400)

    @app.exception_handler(MalformedInputError)
    async def handle_malformed_input(request: Request, exc: MalformedInputError):
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed input: %s", rid, exc.message)
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(StorageUnavailableError)
    async def handle_storage_unavailable(request: Request, exc: StorageUnavailableError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage unavailable: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)

    @app.exception_handler(QuickPasteError)
    async def handle_app_error(request: Request, exc: QuickPasteError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        context: A ready AppContext (tests pass one with an in-memory or
                 SQLite store). When omitted, the context is built from
                 `settings`, including the database engine when
                 STORE_BACKEND=database; the app then owns and disposes
                 that engine.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    engine = None
    if context is None:
        if settings.store_backend == "database":
            engine = create_engine_from_settings(settings)
        context = build_context(settings, engine=engine)

    app = FastAPI(
        title="QuickPaste API",
        description=(
            "Minimal text-sharing service. POST raw text, get a URL back; "
            "GET it plain or syntax highlighted; DELETE it when done."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # The context is set here rather than in the lifespan so that apps
    # driven without lifespan events (httpx ASGITransport) still have it.
    app.state.context = context
    app.state.engine = engine

    # ── Register Middleware ───────────────────────────────────────────────
    # Execution order is the reverse of addition: RequestID → Logging → GZip
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Health first: "/health" must not be captured by "/{paste_id}"
    app.include_router(health.router)
    app.include_router(pastes.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "quickpaste.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `quickpaste.main:app` to be importable
app = create_app()
