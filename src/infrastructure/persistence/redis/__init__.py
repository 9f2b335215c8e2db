"""
Redis Infrastructure Module

Redis-based document store for submissions.

Exports:
    - RedisSubmissionRepository: Submissions with a unique email index
    - get_redis_client: Get Redis client with connection pooling
    - close_connections: Close all Redis connections
"""

from .connection import close_connections, get_redis_client
from .submission_repository import RedisSubmissionRepository

__all__ = [
    "RedisSubmissionRepository",
    "get_redis_client",
    "close_connections",
]
