"""
Signup Repository Interfaces.
"""

from .submission_repository import SubmissionRepositoryProtocol

__all__ = ["SubmissionRepositoryProtocol"]
