"""
EasyBuild Content API - FastAPI Application Factory
=====================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance that owns one
       ConnectionCache on `app.state.connections`.
Who:   uvicorn (uvicorn easybuild.main:app) and the test suite, which passes
       its own connection cache.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Rate Limit  │→│ Req ID   │→│  Logging        │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────┐ ┌─────────────────┐   │
    │  │ /content/{type}[/{id}]   │ │ GET /health     │   │
    │  └──────────────────────────┘ └─────────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Storage→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, never fatal)
    3. Warm up the MongoDB connection with bounded retries
    4. Create indexes when connected

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from easybuild import __version__
from easybuild.config import settings
from easybuild.database import ConnectionCache
from easybuild.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    EasyBuildError,
    NotFoundError,
    OperationNotSupportedError,
    RateLimitExceededError,
    StorageError,
    ValidationError,
)
from easybuild.indexes import ensure_indexes
from easybuild.middleware.logging import RequestLoggingMiddleware
from easybuild.middleware.rate_limit import RateLimitMiddleware
from easybuild.middleware.request_id import RequestIDMiddleware, request_id_var
from easybuild.routes import content, health
from easybuild.schemas.common import Envelope

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Level comes from LOG_LEVEL. The request ID is written into the message
    by the access logger and the exception handlers.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Third-party loggers that are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

async def warm_up_database(connections: ConnectionCache) -> bool:
    """
    Opens the shared connection before the first request arrives.

    Connection failures are retried with exponential backoff and jitter
    (WARMUP_MAX_ATTEMPTS attempts). A missing URI is not retried.

    Returns:
        True when connected. False otherwise; the app keeps running and the
        next request starts a fresh attempt.
    """
    try:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(DatabaseConnectionError),
            stop=stop_after_attempt(settings.warmup_max_attempts),
            wait=wait_exponential_jitter(
                initial=settings.warmup_min_wait,
                max=settings.warmup_max_wait,
                jitter=1,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                await connections.acquire()
    except ConfigurationError as e:
        logger.error("Database warm-up skipped: %s", e.message)
        return False
    except DatabaseConnectionError as e:
        logger.error(
            "Database warm-up failed after %d attempt(s): %s",
            settings.warmup_max_attempts,
            e.message,
        )
        return False
    return True


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("EasyBuild Content API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Content requests will fail until the configuration is fixed.")

    connections: ConnectionCache = app.state.connections
    if await warm_up_database(connections):
        await ensure_indexes(await connections.acquire())

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("EasyBuild Content API shutting down...")
    await connections.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(status_code: int, message: str, error: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=Envelope(success=False, message=message, error=error).to_content(),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Maps exception types to HTTP status codes and the error envelope.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        NotFoundError                            → 404
        OperationNotSupportedError               → 405
        RateLimitExceededError                   → 429
        ConfigurationError                       → 500
        StorageError (and subclasses)            → 500
        EasyBuildError (base)                    → 500
        Exception (fallback)                     → 500

    Messages of application errors are written to be user-safe. The context
    dict is logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return error_response(400, exc.message, exc.error_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body missing or not valid JSON."""
        rid = request_id_var.get("")
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ())) or "body"
        message = f"{location}: {first.get('msg', 'invalid request')}"
        logger.warning("[%s] Request validation error: %s", rid, message)
        return error_response(400, message, ValidationError.error_code)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, exc.message, exc.error_code)

    @app.exception_handler(OperationNotSupportedError)
    async def handle_not_supported(request: Request, exc: OperationNotSupportedError):
        return error_response(405, exc.message, exc.error_code)

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return error_response(
            429,
            exc.message,
            exc.error_code,
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(ConfigurationError)
    async def handle_configuration_error(request: Request, exc: ConfigurationError):
        rid = request_id_var.get("")
        logger.error("[%s] Configuration error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(500, exc.message, exc.error_code)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        """Covers DatabaseConnectionError and SiblingDeactivationError."""
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(500, exc.message, exc.error_code)

    @app.exception_handler(EasyBuildError)
    async def handle_application_error(request: Request, exc: EasyBuildError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(500, exc.message, exc.error_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace goes to the log only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(
            500,
            "An unexpected error occurred. Please try again or contact support.",
            "internal_server_error",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(connections: Optional[ConnectionCache] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        connections: connection cache to use; built from settings when
                     omitted. Tests pass one backed by an in-memory database.
    """
    app = FastAPI(
        title="EasyBuild Content API",
        description=(
            "Content backend of the EasyBuild marketing site. Serves banners, "
            "team and company sections, projects, services, social media links "
            "and wood catalog entries in English, German and Albanian."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.connections = connections or ConnectionCache.from_settings(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RateLimit → RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(content.router)
    app.include_router(health.router)

    return app


# uvicorn expects `easybuild.main:app` to be importable
app = create_app()
