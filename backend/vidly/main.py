"""
Vidly Backend — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn vidly.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware Chain:                                      │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐                  │
    │  │  Req ID  │→│   Logging   │→│ CORS │                  │
    │  └──────────┘ └─────────────┘ └──────┘                  │
    │                                                         │
    │  Routes:                                                │
    │  /api/genres  /api/movies  /api/customers  /api/rentals │
    │  /api/returns /api/users   /api/auth       /health      │
    │                                                         │
    │  Exception Handlers:                                    │
    │  ValidationError→400  InvalidToken→400  Auth→401        │
    │  PermissionDenied→403 NotFound→404      DB/other→500    │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration; missing JWT_PRIVATE_KEY or MONGODB_URI
       aborts startup (the exception propagates out of the lifespan)
    3. Connect to MongoDB, ensure indexes, build the AppContext

    Shutdown:
    1. Close the MongoDB client

Tests skip the lifespan entirely by passing a ready AppContext to create_app().
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vidly import __version__
from vidly.config import settings
from vidly.context import AppContext
from vidly.database import create_client, ensure_indexes, get_database
from vidly.exceptions import (
    AuthenticationError,
    DatabaseError,
    InvalidTokenError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    VidlyError,
)
from vidly.middleware.auth import AUTH_HEADER
from vidly.middleware.logging import RequestLoggingMiddleware
from vidly.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from vidly.routes import customers, genres, health, movies, rentals, users
from vidly.validation import format_error

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s
    The request ID comes from RequestIDLogFilter ("-" outside a request).
    """
    handler = logging.StreamHandler(sys.stdout)  # Docker captures stdout
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,  # Override any existing logging config
    )

    # Third-party libraries log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the AppContext on startup and release it on shutdown.

    If create_app() was given a context, it is used as-is and not closed
    here: whoever built it owns it.
    """
    if getattr(app.state, "context", None) is not None:
        yield
        return

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("Vidly Backend %s starting up...", __version__)

    try:
        settings.validate_required()
    except ValueError as e:
        logger.critical("Configuration error: %s", str(e))
        raise

    client = create_client(settings)
    db = get_database(client, settings)
    await ensure_indexes(db)
    app.state.context = AppContext.build(settings, db, client=client)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Vidly Backend shutting down...")
    await app.state.context.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, exc: VidlyError, details: bool = False) -> JSONResponse:
    content = {
        "error": error,
        "message": exc.message,
        "request_id": request_id_var.get(""),
    }
    if details and exc.context:
        content["details"] = exc.context
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and a uniform JSON body.

    Handler hierarchy:
        ValidationError         → 400 (payload, reference, stock, credentials)
        RequestValidationError  → 400 (body is not JSON at all)
        InvalidTokenError       → 400
        AuthenticationError     → 401
        PermissionDeniedError   → 403
        NotFoundError           → 404
        DatabaseError           → 500 (generic message; context logged only)
        VidlyError (base)       → 500
        Exception (fallback)    → 500 (stack trace logged only)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return _error_response(400, "validation_error", exc, details=True)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = format_error(errors[0]) if errors else "Invalid request"
        return _error_response(400, "validation_error", ValidationError(message=message))

    @app.exception_handler(InvalidTokenError)
    async def handle_invalid_token(request: Request, exc: InvalidTokenError):
        return _error_response(400, "invalid_token", exc)

    @app.exception_handler(AuthenticationError)
    async def handle_unauthenticated(request: Request, exc: AuthenticationError):
        return _error_response(401, "unauthenticated", exc)

    @app.exception_handler(PermissionDeniedError)
    async def handle_forbidden(request: Request, exc: PermissionDeniedError):
        logger.warning("Forbidden: %s %s", request.method, request.url.path)
        return _error_response(403, "forbidden", exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        # Full context server-side only
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": request_id_var.get(""),
            },
        )

    @app.exception_handler(VidlyError)
    async def handle_app_error(request: Request, exc: VidlyError):
        logger.error("Unhandled application error: %s | Context: %s", exc.message, exc.context)
        return _error_response(500, "server_error", exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": request_id_var.get(""),
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        context: A ready AppContext. When given, the lifespan does not
                 connect to MongoDB (tests pass one backed by memory).
    """
    app = FastAPI(
        title="Vidly API",
        description="Movie rental backend: genres, movies, customers, rentals and users.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.context = context

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → routes
    cors_origins = (context.settings if context else settings).cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        # Browsers may only read these response headers when listed
        expose_headers=[AUTH_HEADER, REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(genres.router)
    app.include_router(movies.router)
    app.include_router(customers.router)
    app.include_router(rentals.router)
    app.include_router(rentals.returns_router)
    app.include_router(users.router)
    app.include_router(users.auth_router)
    app.include_router(health.router)

    return app


# uvicorn expects `vidly.main:app` to be importable
app = create_app()
