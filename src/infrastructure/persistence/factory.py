"""
Submission Repository Factory

Selects the persistence backend from Settings.storage_backend.
"""

import logging

from src.domain.signup.repositories import SubmissionRepositoryProtocol
from src.shared.config import Settings

from .json_file import JsonFileSubmissionRepository
from .redis import RedisSubmissionRepository

logger = logging.getLogger(__name__)


def build_submission_repository(settings: Settings) -> SubmissionRepositoryProtocol:
    """
    Build the repository configured for this deployment.

    Args:
        settings: Application settings

    Returns:
        JsonFileSubmissionRepository ("json") or RedisSubmissionRepository ("redis")

    Raises:
        StorageError: If the data directory cannot be prepared (json)
        RedisError: If Redis is unreachable after retries (redis)
    """
    if settings.storage_backend == "redis":
        logger.info("Using Redis document store for submissions")
        return RedisSubmissionRepository(redis_url=settings.redis_url)

    logger.info(f"Using JSON file store for submissions: {settings.data_dir}")
    return JsonFileSubmissionRepository(data_dir=settings.data_dir)
