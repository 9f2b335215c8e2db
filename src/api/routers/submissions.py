"""
API Router for Signup Submissions

Responsibility:
    HTTP interface for the public signup form and for administrative
    review (list, delete) of the stored customer and merchant records.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Depends on Application Layer (SubmitFormCommandHandler,
      ListSubmissionsQueryHandler, DeleteSubmissionCommandHandler)
    - Handlers are plain def: FastAPI runs them in its threadpool
    - Errors propagate as exceptions; global handlers in main.py map them

Contains:
    - POST   /submit                 - Validate, de-duplicate and store a signup
    - GET    /customers, /merchants  - List records, newest first
    - DELETE /customers/{id}, /merchants/{id} - Admin delete
"""

import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, status

from src.api.dependencies import (
    enforce_submit_rate_limit,
    get_delete_submission_handler,
    get_list_submissions_handler,
    get_notification_dispatcher,
    get_submit_form_handler,
    read_json_body,
    require_admin,
    require_list_access,
)
from src.api.schemas.common import ErrorResponse, SubmitResponse, SuccessResponse
from src.application.commands import (
    DeleteSubmissionCommand,
    DeleteSubmissionCommandHandler,
    SubmitFormCommand,
    SubmitFormCommandHandler,
)
from src.application.queries import ListSubmissionsQuery, ListSubmissionsQueryHandler
from src.application.services import NotificationDispatcher
from src.domain.signup.entities import SubmissionKind
from src.domain.signup.services import parse_kind

# Configure logger
logger = logging.getLogger(__name__)


router = APIRouter(
    tags=["submissions"],
    responses={
        429: {"model": ErrorResponse, "description": "Too Many Requests"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


# ============================================================================
# PUBLIC SIGNUP
# ============================================================================


@router.post(
    "/submit",
    status_code=status.HTTP_201_CREATED,
    response_model=SubmitResponse,
    summary="Submit a customer or merchant signup",
    dependencies=[Depends(enforce_submit_rate_limit)],
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        413: {"model": ErrorResponse, "description": "Request body too large"},
    },
)
def submit_form(
    background_tasks: BackgroundTasks,
    payload: dict[str, Any] = Depends(read_json_body),
    handler: SubmitFormCommandHandler = Depends(get_submit_form_handler),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> SubmitResponse:
    """
    Accept one signup.

    Process Flow:
        1. Submit rate limit is counted (route dependency, before parsing)
        2. Body is read with the size bound and parsed as JSON
        3. "type" selects the form kind ("Invalid form type" otherwise)
        4. Handler validates, checks for a duplicate email and stores the record
        5. Notification is scheduled to run after the response is sent
    """
    kind = parse_kind(payload.get("type"))
    record = handler.handle(SubmitFormCommand(kind=kind, payload=payload))

    background_tasks.add_task(dispatcher.dispatch, record)

    return SubmitResponse(id=record.id)


# ============================================================================
# ADMIN REVIEW
# ============================================================================


def _list(kind: SubmissionKind, handler: ListSubmissionsQueryHandler) -> list[dict[str, Any]]:
    records = handler.handle(ListSubmissionsQuery(kind=kind))
    return [record.to_dict() for record in records]


def _delete(
    kind: SubmissionKind, submission_id: str, handler: DeleteSubmissionCommandHandler
) -> SuccessResponse:
    handler.handle(DeleteSubmissionCommand(kind=kind, submission_id=submission_id))
    return SuccessResponse(message=f"{kind.label} deleted")


@router.get(
    "/customers",
    summary="List customer signups, newest first",
    dependencies=[Depends(require_list_access)],
    responses={401: {"model": ErrorResponse, "description": "Unauthorized"}},
)
def list_customers(
    handler: ListSubmissionsQueryHandler = Depends(get_list_submissions_handler),
) -> list[dict[str, Any]]:
    return _list(SubmissionKind.CUSTOMER, handler)


@router.get(
    "/merchants",
    summary="List merchant applications, newest first",
    dependencies=[Depends(require_list_access)],
    responses={401: {"model": ErrorResponse, "description": "Unauthorized"}},
)
def list_merchants(
    handler: ListSubmissionsQueryHandler = Depends(get_list_submissions_handler),
) -> list[dict[str, Any]]:
    return _list(SubmissionKind.MERCHANT, handler)


@router.delete(
    "/customers/{submission_id}",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    summary="Delete a customer record",
    dependencies=[Depends(require_admin)],
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized"},
        404: {"model": ErrorResponse, "description": "Customer not found"},
    },
)
def delete_customer(
    submission_id: str,
    handler: DeleteSubmissionCommandHandler = Depends(get_delete_submission_handler),
) -> SuccessResponse:
    return _delete(SubmissionKind.CUSTOMER, submission_id, handler)


@router.delete(
    "/merchants/{submission_id}",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    summary="Delete a merchant record",
    dependencies=[Depends(require_admin)],
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized"},
        404: {"model": ErrorResponse, "description": "Merchant not found"},
    },
)
def delete_merchant(
    submission_id: str,
    handler: DeleteSubmissionCommandHandler = Depends(get_delete_submission_handler),
) -> SuccessResponse:
    return _delete(SubmissionKind.MERCHANT, submission_id, handler)
