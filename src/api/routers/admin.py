"""
API Router for Admin Login

The admin client posts the shared secret once to check it, then sends it
as "Authorization: Bearer <secret>" on list and delete calls. There is no
session or token issuance.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from src.api.dependencies import get_admin_gate, read_json_body
from src.api.schemas.common import ErrorResponse, SuccessResponse
from src.application.services import AdminAccessGate

# Configure logger
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/login",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    summary="Check the admin password",
    responses={401: {"model": ErrorResponse, "description": "Invalid password"}},
)
def admin_login(
    payload: dict[str, Any] = Depends(read_json_body),
    gate: AdminAccessGate = Depends(get_admin_gate),
) -> SuccessResponse:
    gate.verify_password(payload.get("password"))
    logger.info("Admin login accepted")
    return SuccessResponse()
