"""
Catalog Backend - FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌───────┐            │
    │  │ Req ID   │→│ Logging  │→│ CORS │→│ Slash │            │
    │  └──────────┘ └──────────┘ └──────┘ └───────┘            │
    │                                                          │
    │  Routes:                                                 │
    │  /api/services  /api/versions  /api/auth                 │
    │  /api/secure-resources  /health                          │
    │                                                          │
    │  Exception Handlers:                                     │
    │  validation→400 │ auth→401 │ not found→404 │ dup→409     │
    │  database / unexpected→500                               │
    └──────────────────────────────────────────────────────────┘

Error body (every failing endpoint):
    {"statusCode": 404, "message": "Service with ID ... not found", "error": "Not Found"}
    `message` is a list of strings for 400 validation failures.

Lifecycle:
    Startup:  configure logging, warn about insecure settings
    Shutdown: dispose database engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator, List, Optional, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.exceptions import CatalogError, DatabaseError, ValidationError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from app.middleware.trailing_slash import TrailingSlashMiddleware
from app.routes import auth, health, secure_resources, services, versions
from app.schemas.common import ErrorResponse, describe_validation_errors

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole application.

    Format: 2024-01-15T12:00:00 [INFO] app.dao.service_dao: Service created: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's; SQL echo only when explicitly wanted
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.log_level == "DEBUG" else logging.WARNING
    )


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Catalog Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Still start: local development runs with the defaults
        logger.warning("Configuration warning: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Catalog Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    message: Union[str, List[str]],
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Build the `{statusCode, message, error}` body shared by every failure."""
    body = ErrorResponse(
        statusCode=status_code,
        message=message,
        error=HTTPStatus(status_code).phrase,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError          → 400, message is the list of violations
        RequestValidationError   → 400, same format (FastAPI would say 422)
        AuthenticationError      → 401
        NotFoundError            → 404
        ConflictError            → 409
        DatabaseError            → 500 "Internal server error"
        unknown route / method   → 404 "Cannot <METHOD> <path>"
        Exception (fallback)     → 500 "Internal server error"

    Security: responses never carry stack traces, SQL or driver messages.
    Those are logged server-side with the request ID.
    """

    @app.exception_handler(CatalogError)
    async def handle_catalog_error(request: Request, exc: CatalogError):
        rid = request_id_var.get("")
        if isinstance(exc, ValidationError):
            logger.warning("[%s] Validation error: %s", rid, exc.message)
            return error_response(exc.status_code, exc.messages)
        if isinstance(exc, DatabaseError) or exc.status_code >= 500:
            # Full context server-side only
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            return error_response(exc.status_code, INTERNAL_ERROR_MESSAGE)
        if exc.status_code == 401:
            return error_response(exc.status_code, exc.message, headers={"WWW-Authenticate": "Bearer"})
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        messages = describe_validation_errors(exc.errors())
        logger.warning("[%s] Invalid request: %s", request_id_var.get(""), "; ".join(messages))
        return error_response(400, messages)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # No route matched (404), or the path exists with other methods (405)
        if exc.status_code in (404, 405):
            return error_response(404, f"Cannot {request.method} {request.url.path}")
        message = exc.detail if isinstance(exc.detail, (str, list)) else HTTPStatus(exc.status_code).phrase
        return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return error_response(500, INTERNAL_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Tests build their own instance and override get_db_session; uvicorn
    uses the module-level `app` below.
    """
    app = FastAPI(
        title="Service Catalog API",
        description=(
            "Registry of services and their versions, with paginated search "
            "and token-protected resources."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → TrailingSlash → routes
    app.add_middleware(TrailingSlashMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(services.router)
    app.include_router(versions.router)
    app.include_router(auth.router)
    app.include_router(secure_resources.router)
    app.include_router(health.router)

    return app


app = create_app()
