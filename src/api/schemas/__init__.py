"""
API Schemas Package

Contains shared Pydantic models for API Layer.
"""

from src.api.schemas.common import (
    ErrorResponse,
    HealthResponse,
    SubmitResponse,
    SuccessResponse,
)

__all__ = ["ErrorResponse", "HealthResponse", "SubmitResponse", "SuccessResponse"]
