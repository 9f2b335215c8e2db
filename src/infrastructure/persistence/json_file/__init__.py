"""
JSON File Persistence Module

Exports:
    - JsonFileSubmissionRepository: One JSON array file per collection
"""

from .submission_repository import JsonFileSubmissionRepository

__all__ = ["JsonFileSubmissionRepository"]
