"""
Shared Utilities

Responsibility:
    Cross-cutting concerns used across all layers.

Contains:
    - config: Environment-based Settings (python-dotenv)

Does NOT contain:
    - Layer-specific code
    - Business logic
    - Infrastructure implementations
"""

from src.shared.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
