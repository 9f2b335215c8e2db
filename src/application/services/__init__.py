"""
Application Services

Responsibility:
    Orchestration services shared by commands, queries and the API Layer.

Contains:
    - AdminAccessGate: Shared-secret check for admin operations
    - NotificationDispatcher: Fire-and-forget signup notifications

Does NOT contain:
    - Domain business logic (use Domain services)
    - Direct infrastructure construction (use dependency injection)
"""

from src.application.services.admin_access import AdminAccessGate
from src.application.services.notification_dispatcher import (
    NotificationDispatcher,
    deliver,
)

__all__ = ["AdminAccessGate", "NotificationDispatcher", "deliver"]
