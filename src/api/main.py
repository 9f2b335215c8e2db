"""
FastAPI Application Setup

Main entry point for the SnapShop signup API.

Responsibility:
    - FastAPI app initialization
    - Router registration (submissions, admin)
    - Origin allow-list (CORS plus 403 guard) and security headers
    - General rate limit for every /api/ path
    - Global exception handlers
    - Request logging middleware
    - Health check endpoint

Architecture Notes:
    - Part of API Layer (Presentation)
    - Entry point for HTTP server (uvicorn)
    - Centralizes cross-cutting concerns (logging, CORS, error handling)
    - No business logic - pure HTTP orchestration

Contains:
    - create_app() factory function
    - Global exception handlers
    - HTTP middleware
    - Health check endpoint: GET /api/health
    - run() console entry point

Does NOT contain:
    - Business logic (delegated to Application Layer)
    - Direct storage access (uses Infrastructure Layer)
    - Celery configuration (separate module)
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.dependencies import apply_rate_limit_headers, client_key
from src.api.errors import MalformedRequestBodyError, RequestBodyTooLargeError
from src.api.routers import admin_router, submissions_router
from src.api.schemas.common import ErrorResponse, HealthResponse
from src.application.exceptions import UnauthorizedError
from src.application.ports.notifier import NotifierProtocol
from src.application.services import AdminAccessGate, NotificationDispatcher
from src.domain.shared.exceptions import (
    DomainException,
    DuplicateSubmissionError,
    SubmissionNotFoundError,
    SubmissionValidationError,
)
from src.domain.signup.repositories import SubmissionRepositoryProtocol
from src.infrastructure.exceptions import RateLimitExceededError, StorageError
from src.infrastructure.notifications import build_notifier
from src.infrastructure.persistence import build_submission_repository
from src.infrastructure.persistence.redis import close_connections
from src.infrastructure.rate_limiting import SlidingWindowRateLimiter
from src.shared.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)

GENERAL_LIMIT_MESSAGE = "Too many requests, please try again later."
SUBMIT_LIMIT_MESSAGE = "Too many submissions. Please try again in 15 minutes."
DUPLICATE_SIGNUP_MESSAGE = "You have already signed up with this email address."
INTERNAL_ERROR_MESSAGE = "Internal server error"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "cross-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def _error_response(
    status_code: int, error_response: ErrorResponse, headers: Optional[dict] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(exclude_none=True),
        headers=headers,
    )


def _rate_limited_response(exc: RateLimitExceededError) -> JSONResponse:
    return _error_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        ErrorResponse(error=exc.message),
        headers={
            "Retry-After": str(exc.retry_after),
            "RateLimit-Limit": str(exc.limit),
            "RateLimit-Remaining": "0",
            "RateLimit-Reset": str(exc.retry_after),
        },
    )


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def request_logging_middleware(request: Request, call_next):
    """
    Request logging middleware.

    Logging Format:
        INFO: "Incoming request: POST /api/submit"
        INFO: "Request completed: POST /api/submit - 201 - 0.012s"
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} - "
        f"{response.status_code} - {duration:.3f}s"
    )

    return response


async def security_headers_middleware(request: Request, call_next):
    """Attach browser hardening headers to every response."""
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


async def origin_guard_middleware(request: Request, call_next):
    """
    Reject cross-origin requests from origins outside ALLOWED_ORIGINS.

    Requests without an Origin header (curl, server-to-server, same-origin
    navigation) pass through.
    """
    origin = request.headers.get("origin")
    if origin and origin not in request.app.state.settings.allowed_origins:
        logger.warning(
            f"Origin not allowed: {origin} - Request: {request.method} {request.url.path}"
        )
        return _error_response(
            status.HTTP_403_FORBIDDEN, ErrorResponse(error="Origin not allowed")
        )
    return await call_next(request)


async def general_rate_limit_middleware(request: Request, call_next):
    """
    Count every /api/ request against the general per-client budget.

    Exceptions raised in middleware bypass the exception handlers, so the
    429 response is built here.
    """
    if not request.url.path.startswith("/api/"):
        return await call_next(request)

    limiter: SlidingWindowRateLimiter = request.app.state.general_limiter
    try:
        limit_status = limiter.hit(client_key(request))
    except RateLimitExceededError as exc:
        return _rate_limited_response(exc)

    response = await call_next(request)
    apply_rate_limit_headers(response.headers, limit_status)
    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


async def domain_exception_handler(request: Request, exc: DomainException):
    """
    Global exception handler for domain layer exceptions.

    Mapping:
        - SubmissionValidationError -> 400 {"error", "details"}
        - DuplicateSubmissionError -> 409 {"error", "message"}
        - SubmissionNotFoundError -> 404 {"error"}
        - Other DomainException -> 400 {"error"}
    """
    if isinstance(exc, SubmissionValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_response = ErrorResponse(error=exc.message, details=exc.errors or None)
    elif isinstance(exc, DuplicateSubmissionError):
        status_code = status.HTTP_409_CONFLICT
        error_response = ErrorResponse(error=exc.message, message=DUPLICATE_SIGNUP_MESSAGE)
    elif isinstance(exc, SubmissionNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
        error_response = ErrorResponse(error=exc.message)
    else:
        status_code = status.HTTP_400_BAD_REQUEST
        error_response = ErrorResponse(error=exc.message)

    logger.warning(
        f"Domain exception: {exc.__class__.__name__} - {exc.message} - "
        f"Request: {request.method} {request.url.path}"
    )

    return _error_response(status_code, error_response)


async def unauthorized_exception_handler(request: Request, exc: UnauthorizedError):
    logger.warning(f"Unauthorized: {request.method} {request.url.path}")
    return _error_response(status.HTTP_401_UNAUTHORIZED, ErrorResponse(error=exc.message))


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceededError):
    return _rate_limited_response(exc)


async def request_body_too_large_handler(request: Request, exc: RequestBodyTooLargeError):
    logger.warning(
        f"Request body over {exc.limit} bytes - Request: {request.method} {request.url.path}"
    )
    return _error_response(
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        ErrorResponse(error="Request body too large"),
    )


async def malformed_body_handler(request: Request, exc: MalformedRequestBodyError):
    return _error_response(status.HTTP_400_BAD_REQUEST, ErrorResponse(error=exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Map FastAPI's own parameter validation to the shared 400 shape."""
    details = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(error="Validation failed", details=details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes and disallowed methods, in the shared error shape."""
    return _error_response(
        exc.status_code,
        ErrorResponse(error=str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def storage_exception_handler(request: Request, exc: StorageError):
    """
    Persistence failures become a generic 500.

    Detail (paths, library errors) is logged only, never returned.
    """
    logger.error(
        f"Storage error: {exc} - Request: {request.method} {request.url.path}",
        exc_info=True,
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(error=INTERNAL_ERROR_MESSAGE)
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unexpected exceptions.

    Note:
        This is a catch-all handler. Should only trigger for truly unexpected errors.
    """
    logger.error(
        f"Unexpected error: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}",
        exc_info=True,
    )
    # Runs in the outermost error middleware, past security_headers_middleware
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(error=INTERNAL_ERROR_MESSAGE),
        headers=SECURITY_HEADERS,
    )


# ============================================================================
# APP FACTORY
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info(
        f"SnapShop API starting: storage={settings.storage_backend}, "
        f"notifier={settings.notifier_mode}, admin={'on' if app.state.admin_gate.enabled else 'off'}"
    )
    yield
    if settings.storage_backend == "redis":
        close_connections()
    logger.info("SnapShop API stopped")


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[SubmissionRepositoryProtocol] = None,
    notifier: Optional[NotifierProtocol] = None,
) -> FastAPI:
    """
    FastAPI application factory.

    Every call builds fresh collaborators (repository, rate limiters,
    admin gate, notification dispatcher) and stores them on app.state,
    so tests get isolated counters and storage.

    Args:
        settings: Configuration (default: get_settings(), read from environment)
        repository: Storage override (default: built from settings)
        notifier: Notifier override (default: built from settings)

    Returns:
        Configured FastAPI application instance

    Usage:
        >>> app = create_app(Settings(data_dir="/tmp/snapshop"))
        >>> # Run with uvicorn:
        >>> # uvicorn src.api.main:app --reload
    """
    settings = settings or get_settings()

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    app = FastAPI(
        title="SnapShop API",
        version="1.0.0",
        description="Signup intake for SnapShop customers and merchants.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.repository = repository or build_submission_repository(settings)
    app.state.admin_gate = AdminAccessGate(settings.admin_password)
    app.state.notification_dispatcher = NotificationDispatcher(
        notifier or build_notifier(settings), mode=settings.notifier_mode
    )
    app.state.general_limiter = SlidingWindowRateLimiter(
        settings.rate_limit_general_max,
        settings.rate_limit_window_seconds,
        message=GENERAL_LIMIT_MESSAGE,
    )
    app.state.submit_limiter = SlidingWindowRateLimiter(
        settings.rate_limit_submit_max,
        settings.rate_limit_window_seconds,
        message=SUBMIT_LIMIT_MESSAGE,
    )

    # Last added runs first: logging -> security headers -> origin guard -> CORS -> rate limit
    app.middleware("http")(general_rate_limit_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["RateLimit-Limit", "RateLimit-Remaining", "RateLimit-Reset", "Retry-After"],
    )
    app.middleware("http")(origin_guard_middleware)
    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(request_logging_middleware)

    # Register global exception handlers
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(UnauthorizedError, unauthorized_exception_handler)
    app.add_exception_handler(RateLimitExceededError, rate_limit_exception_handler)
    app.add_exception_handler(RequestBodyTooLargeError, request_body_too_large_handler)
    app.add_exception_handler(MalformedRequestBodyError, malformed_body_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(StorageError, storage_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Register routers with /api prefix
    app.include_router(submissions_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")

    @app.get(
        "/api/health",
        response_model=HealthResponse,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint",
        tags=["health"],
    )
    def health_check(request: Request) -> HealthResponse:
        """
        Liveness plus storage reachability.

        Examples:
            >>> curl http://localhost:3000/api/health
            {
              "status": "ok",
              "storage": "connected",
              "backend": "json",
              "timestamp": "2026-03-01T10:30:00.000Z",
              "uptime": 12.5
            }
        """
        connected = request.app.state.repository.ping()
        now = datetime.now(timezone.utc)
        return HealthResponse(
            storage="connected" if connected else "disconnected",
            backend=settings.storage_backend,
            timestamp=now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            uptime=round(time.monotonic() - request.app.state.started_at, 3),
        )

    logger.info("FastAPI application created successfully")

    return app


def run() -> None:
    """Console entry point: serve the API with uvicorn on HOST:PORT."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("src.api.main:app", host=settings.host, port=settings.port)


# ============================================================================
# APP INSTANCE (for uvicorn)
# ============================================================================

# Usage: uvicorn src.api.main:app --reload
app = create_app()
