"""
API Dependency Injection

FastAPI dependencies shared by the routers.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Long-lived collaborators (repository, limiters, admin gate, notification
      dispatcher) are created once in create_app() and kept on app.state;
      these functions only look them up
    - Command/query handlers are cheap and built per request
"""

import json
import logging
from typing import Any, Optional

from fastapi import Depends, Header, Request, Response

from src.api.errors import MalformedRequestBodyError, RequestBodyTooLargeError
from src.application.commands import (
    DeleteSubmissionCommandHandler,
    SubmitFormCommandHandler,
)
from src.application.queries import ListSubmissionsQueryHandler
from src.application.services import AdminAccessGate, NotificationDispatcher
from src.domain.signup.repositories import SubmissionRepositoryProtocol
from src.infrastructure.rate_limiting import RateLimitStatus, SlidingWindowRateLimiter
from src.shared.config import Settings

logger = logging.getLogger(__name__)


# ============================================================================
# APP STATE LOOKUPS
# ============================================================================


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_repository(request: Request) -> SubmissionRepositoryProtocol:
    return request.app.state.repository


def get_admin_gate(request: Request) -> AdminAccessGate:
    return request.app.state.admin_gate


def get_notification_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.notification_dispatcher


def get_submit_form_handler(
    repository: SubmissionRepositoryProtocol = Depends(get_repository),
) -> SubmitFormCommandHandler:
    return SubmitFormCommandHandler(repository)


def get_list_submissions_handler(
    repository: SubmissionRepositoryProtocol = Depends(get_repository),
) -> ListSubmissionsQueryHandler:
    return ListSubmissionsQueryHandler(repository)


def get_delete_submission_handler(
    repository: SubmissionRepositoryProtocol = Depends(get_repository),
) -> DeleteSubmissionCommandHandler:
    return DeleteSubmissionCommandHandler(repository)


# ============================================================================
# RATE LIMITING
# ============================================================================


def client_key(request: Request) -> str:
    """Rate-limit key: the peer address of the connection."""
    return request.client.host if request.client else "unknown"


def apply_rate_limit_headers(headers, status: RateLimitStatus) -> None:
    """Set RateLimit-* headers unless an inner limiter already set them."""
    headers.setdefault("RateLimit-Limit", str(status.limit))
    headers.setdefault("RateLimit-Remaining", str(status.remaining))
    headers.setdefault("RateLimit-Reset", str(status.reset_after))


def enforce_submit_rate_limit(request: Request, response: Response) -> None:
    """
    Count one POST /api/submit for the calling client.

    Runs before the body is parsed, so invalid payloads count too.

    Raises:
        RateLimitExceededError: Submit budget exhausted (mapped to 429)
    """
    limiter: SlidingWindowRateLimiter = request.app.state.submit_limiter
    status = limiter.hit(client_key(request))
    apply_rate_limit_headers(response.headers, status)


# ============================================================================
# REQUEST BODY
# ============================================================================


async def read_json_body(request: Request) -> dict[str, Any]:
    """
    Read and parse the JSON request body with a size bound.

    The body is read chunk by chunk and rejected as soon as it passes the
    limit, so a chunked upload without Content-Length is never fully buffered.
    An empty body, or a JSON value that is not an object, yields an empty
    dict so the validator reports the missing fields.

    Raises:
        RequestBodyTooLargeError: Body larger than MAX_BODY_BYTES
        MalformedRequestBodyError: Body is not valid JSON or nests too deeply
    """
    limit = request.app.state.settings.max_body_bytes

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise RequestBodyTooLargeError(limit)

    raw = bytearray()
    async for chunk in request.stream():
        raw.extend(chunk)
        if len(raw) > limit:
            raise RequestBodyTooLargeError(limit)
    if not raw.strip():
        return {}

    try:
        payload = json.loads(bytes(raw))
    except (ValueError, UnicodeDecodeError, RecursionError):
        raise MalformedRequestBodyError() from None

    return payload if isinstance(payload, dict) else {}


# ============================================================================
# ADMIN ACCESS
# ============================================================================


def require_admin(
    authorization: Optional[str] = Header(default=None),
    gate: AdminAccessGate = Depends(get_admin_gate),
) -> None:
    """
    Raises:
        UnauthorizedError: Missing or wrong "Authorization: Bearer <secret>"
    """
    gate.verify_bearer(authorization)


def require_list_access(
    authorization: Optional[str] = Header(default=None),
    gate: AdminAccessGate = Depends(get_admin_gate),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """Admin check for listing, skipped when REQUIRE_ADMIN_FOR_LIST is false."""
    if settings.require_admin_for_list:
        gate.verify_bearer(authorization)
