"""
Notes API — FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, exception handlers, route
       mounting and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`notes_api.main:app`, or `python -m notes_api`) and tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────────────┐
    │                        FastAPI App                          │
    │                                                             │
    │  Middleware Chain:                                          │
    │  Request ID → Timing/Log → Rate Limit → Payload Size        │
    │             → Security Headers → GZip → CORS                │
    │                                                             │
    │  Routes:                                                    │
    │  /health  /ping  /api/v1  /api/v1/users  /api/v1/notes      │
    │                                                             │
    │  Exception Handlers:                                        │
    │  NotesApiError→own status │ RequestValidationError→400      │
    │  HTTPException→404 "Route not found" │ Exception→500        │
    └─────────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   configure logging, log the mount points
    Shutdown:  dispose the database engine (close pooled connections)
"""

import logging
import sys
import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from notes_api import __version__
from notes_api.config import settings
from notes_api.database import dispose_engine
from notes_api.envelope import current_request_id, error_response
from notes_api.exceptions import NotesApiError, RateLimitExceededError
from notes_api.middleware.logging import (
    RESPONSE_TIME_HEADER,
    RequestLoggingMiddleware,
    format_response_time,
)
from notes_api.middleware.rate_limit import RateLimitMiddleware
from notes_api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from notes_api.middleware.security import (
    PayloadSizeMiddleware,
    SecurityHeadersMiddleware,
    security_headers,
)
from notes_api.middleware.validation import format_validation_errors
from notes_api.routes import health, notes, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    What:    One stdout handler with a consistent format across all modules.
    When:    Called once during app startup, before anything logs.

    Format: 2024-01-15T12:00:00 [INFO] notes_api.access: GET /api/v1/users 200 ...
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Our access log replaces uvicorn's; the rest log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Notes API %s starting up (%s)", __version__, settings.node_env)
    logger.info("API base: http://%s:%d%s", settings.host, settings.port, settings.api_base_path)
    logger.info("API docs: http://%s:%d/api-docs", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Notes API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers rendering the error envelope.

    Handler hierarchy:
        NotesApiError           → its own status (400/404/409/413/429/5xx)
        RequestValidationError  → 400, same message format as the validate() dependency
        HTTPException 404/405   → 404 "Route not found", error "Cannot METHOD /path"
        HTTPException (other)   → its status and detail
        Exception (fallback)    → 500 "Internal Server Error"

    Security: the stack trace is returned only outside production; it is
    always logged server-side.
    """

    @app.exception_handler(NotesApiError)
    async def handle_app_error(request: Request, exc: NotesApiError):
        rid = current_request_id(request)
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)

        headers = {}
        if isinstance(exc, RateLimitExceededError):
            headers["Retry-After"] = str(exc.retry_after)

        return error_response(
            exc.message,
            exc.status_code,
            error=exc.error_code,
            headers=headers,
            request=request,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        error = format_validation_errors(exc.errors(), segment="request")
        logger.warning("[%s] Validation error: %s", current_request_id(request), error.message)
        return error_response(error.message, 400, error=error.error_code, request=request)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return error_response(
                "Route not found",
                404,
                error=f"Cannot {request.method} {request.url.path}",
                request=request,
            )
        return error_response(
            str(exc.detail),
            exc.status_code,
            headers=dict(exc.headers or {}),
            request=request,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Runs outside the middleware stack, so the request ID is read from
        request.state and error_response sets the X-Request-ID header. The
        response time and security headers are added here for the same reason.
        """
        rid = current_request_id(request)
        logger.error(
            "[%s] Unexpected error: %s | %s %s | ip=%s | user-agent=%s",
            rid,
            exc,
            request.method,
            request.url,
            request.client.host if request.client else "unknown",
            request.headers.get("user-agent", "unknown"),
            exc_info=exc,
        )

        stack = None
        if not settings.is_production:
            stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

        headers = security_headers()
        start_time = getattr(request.state, "start_time", None)
        if start_time is not None:
            headers[RESPONSE_TIME_HEADER] = format_response_time(start_time)

        return error_response(
            "Internal Server Error",
            500,
            error="internal_server_error",
            stack=stack,
            headers=headers,
            request=request,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Why factory (not only a module-level app):
        Tests build a fresh instance per test, each with its own
        rate-limit state and dependency overrides.
    """
    app = FastAPI(
        title="Notes API",
        description=(
            "CRUD service for users and their notes. Every response uses the same "
            "envelope: success, message, data, timestamp and requestId."
        ),
        version=__version__,
        docs_url="/api-docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = first
    # to execute). Execution order:
    #   RequestID → Logging → RateLimit → PayloadSize → SecurityHeaders → GZip → CORS

    app.add_middleware(
        CORSMiddleware,
        # Development accepts any origin
        allow_origins=["*"] if settings.is_development else settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", REQUEST_ID_HEADER],
        expose_headers=[
            REQUEST_ID_HEADER,
            "X-Response-Time",
            "Retry-After",
        ],
    )

    # Don't compress small responses (overhead > savings)
    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(PayloadSizeMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(notes.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `notes_api.main:app` to be importable
app = create_app()
