"""
Application Queries (CQRS read side).
"""

from src.application.queries.list_submissions import (
    ListSubmissionsQuery,
    ListSubmissionsQueryHandler,
)

__all__ = ["ListSubmissionsQuery", "ListSubmissionsQueryHandler"]
