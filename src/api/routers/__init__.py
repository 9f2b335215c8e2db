"""
API Routers Package

Contains all FastAPI routers grouped by functionality.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Routers are thin wrappers around Application Layer handlers
    - All routers follow dependency injection pattern

Available Routers:
    - submissions_router: Public signup plus admin list/delete
    - admin_router: Admin password check
"""

from .admin import router as admin_router
from .submissions import router as submissions_router

__all__ = ["submissions_router", "admin_router"]
