"""
Infrastructure Layer - External Dependencies

Implements technical capabilities that support the Domain Layer.
Handles all external dependencies: file system, Redis, SMTP.

Architecture:
    - Implements Domain repository interfaces (Dependency Inversion)
    - Implements Application Layer protocols (NotifierProtocol)
    - No Domain business logic (only technical implementations)

Modules:
    - persistence: JSON file and Redis submission repositories
    - rate_limiting: Per-client sliding window limiter
    - notifications: SMTP email notifier

Usage:
    >>> from src.infrastructure import build_submission_repository, SlidingWindowRateLimiter
"""

from .exceptions import (
    InfrastructureException,
    RateLimitExceededError,
    StorageError,
    UpstreamNotifyError,
)

# Persistence
from .persistence import (
    JsonFileSubmissionRepository,
    RedisSubmissionRepository,
    build_submission_repository,
)

# Rate limiting
from .rate_limiting import RateLimitStatus, SlidingWindowRateLimiter

# Notifications
from .notifications import NullNotifier, SmtpEmailNotifier, build_notifier

__all__ = [
    # Exceptions
    "InfrastructureException",
    "StorageError",
    "UpstreamNotifyError",
    "RateLimitExceededError",
    # Persistence
    "JsonFileSubmissionRepository",
    "RedisSubmissionRepository",
    "build_submission_repository",
    # Rate limiting
    "SlidingWindowRateLimiter",
    "RateLimitStatus",
    # Notifications
    "SmtpEmailNotifier",
    "NullNotifier",
    "build_notifier",
]
