"""
Common API Schemas

Shared Pydantic models used across all API routers.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """
    Standard error response model for all API errors.

    Serialized with exclude_none, so clients only see the keys that apply.

    Attributes:
        error: Human-readable error summary (always present)
        message: Secondary explanation (duplicate signups)
        details: Ordered list of validation messages (validation failures)
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Validation failed",
                "details": ["Valid email is required", "Invalid budget selection"],
            }
        }
    )

    error: str = Field(description="Human-readable error summary")
    message: Optional[str] = Field(default=None, description="Additional explanation")
    details: Optional[list[str]] = Field(
        default=None, description="Validation messages in field order"
    )


class SubmitResponse(BaseModel):
    """Response for an accepted signup."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Form submitted successfully",
                "id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
            }
        }
    )

    success: bool = True
    message: str = "Form submitted successfully"
    id: str = Field(description="Server-assigned record id")


class SuccessResponse(BaseModel):
    """Generic acknowledgement (admin login, delete)."""

    success: bool = True
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """
    Liveness and storage reachability.

    Attributes:
        status: Always "ok" if the endpoint responds
        storage: "connected" if the persistence backend answered a ping
        backend: Configured storage backend ("json" or "redis")
        timestamp: ISO 8601 UTC time of the check
        uptime: Seconds since the application was created
    """

    status: str = "ok"
    storage: Literal["connected", "disconnected"]
    backend: str
    timestamp: str
    uptime: float
