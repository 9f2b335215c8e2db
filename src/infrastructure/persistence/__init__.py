"""
Persistence Infrastructure Module

Submission storage backends.

Exports:
    - JsonFileSubmissionRepository: File-backed collections (JSON arrays)
    - RedisSubmissionRepository: Redis document store
    - build_submission_repository: Backend selection from Settings
"""

from .factory import build_submission_repository
from .json_file import JsonFileSubmissionRepository
from .redis import RedisSubmissionRepository

__all__ = [
    "JsonFileSubmissionRepository",
    "RedisSubmissionRepository",
    "build_submission_repository",
]
