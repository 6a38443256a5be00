"""
Notes API - FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn notes_api.main:app) and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌────────────┐  │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│    CORS    │  │
    │  └──────────┘ └──────────┘ └──────┘ └────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────────────────┐ ┌────────────────┐  │
    │  │ /api/{version}/note (CRUD) │ │  GET /health   │  │
    │  └────────────────────────────┘ └────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Auth→401 │ NotFound→404 │ *→500│ │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging setup, configuration check (logged, not fatal)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from notes_api import __version__
from notes_api.config import settings
from notes_api.database import dispose_engine
from notes_api.exceptions import (
    AuthenticationError,
    NotFoundError,
    UnsupportedApiVersionError,
    ValidationError,
)
from notes_api.middleware.logging import RequestLoggingMiddleware
from notes_api.middleware.request_id import RequestIDMiddleware, request_id_var
from notes_api.routes import health, notes
from notes_api.schemas.note import ValidationFailure

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access logger replaces uvicorn's; SQL echo is only wanted in DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if settings.log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Notes API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /health still answers and note routes return 401
        logger.error("Configuration error: %s", str(e))

    logger.info("API versions: %s", ", ".join(settings.api_versions_list))
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Notes API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _failure_field(loc) -> str:
    # ("body", "title") -> "title"; ("path", "id") -> "id"; ("body", 10) -> "body"
    # An int right after "body" is a JSON decode offset, not a field.
    if len(loc) >= 2 and loc[0] == "body" and isinstance(loc[1], int):
        return "body"
    parts = [str(p) for p in loc if p not in ("body", "path", "query")]
    return ".".join(parts) if parts else str(loc[0]) if loc else ""


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the single boundary where exceptions become HTTP responses.

    Handler hierarchy:
        ValidationError             → 400, [{"field", "message"}, ...]
        RequestValidationError      → 400, same shape (malformed body / path)
        UnsupportedApiVersionError  → 400, {"error": ...}
        AuthenticationError         → 401, {"error": ...} + WWW-Authenticate
        NotFoundError               → 404, {"error": ...}
        Exception (fallback)        → 500, {"error": str(exc)}

    Validators, handlers and routes never catch their own errors; this is the
    only place that translates them.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content=[failure.model_dump() for failure in exc.failures],
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body or path could not be parsed at all (bad JSON, non-UUID id, wrong types)."""
        rid = request_id_var.get("")
        failures = [
            ValidationFailure(field=_failure_field(error.get("loc", ())), message=error.get("msg", ""))
            for error in exc.errors()
        ]
        logger.warning("[%s] Malformed request: %d error(s)", rid, len(failures))
        return JSONResponse(
            status_code=400,
            content=[failure.model_dump() for failure in failures],
        )

    @app.exception_handler(UnsupportedApiVersionError)
    async def handle_unsupported_version(request: Request, exc: UnsupportedApiVersionError):
        rid = request_id_var.get("")
        logger.warning("[%s] Unsupported API version: %s", rid, exc.version)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        rid = request_id_var.get("")
        logger.info("[%s] Unauthenticated request: %s", rid, exc.message)
        return JSONResponse(
            status_code=401,
            content={"error": exc.message},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] %s", rid, exc.message)
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for everything else (database down, misconfigured mapping...).

        The body carries the raw exception message. Clients must treat it as
        opaque text. The full traceback is logged server-side.

        Starlette runs this outside the app middleware, so the access log and
        RequestIDMiddleware never see the response. The id is re-attached
        from request.state and the request is logged here instead.
        """
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error(
            "[%s] Unexpected error on %s %s: %s",
            rid, request.method, request.url.path, str(exc),
            exc_info=True,
        )
        headers = {"X-Request-ID": rid} if rid else None
        return JSONResponse(status_code=500, content={"error": str(exc)}, headers=headers)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Notes API",
        description=(
            "Create, read, update and delete your notes. "
            "Every endpoint requires a bearer token from the identity service."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → routes

    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers refuse credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
