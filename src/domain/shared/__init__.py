"""
Shared Domain Module

Shared domain concepts used across all subdomains.
Contains base classes and domain exceptions.

This module exports:
    - DomainException: Base exception for all domain errors
    - SubmissionValidationError: Intake rules violated (HTTP 400)
    - DuplicateSubmissionError: Email already registered (HTTP 409)
    - SubmissionNotFoundError: Unknown submission id (HTTP 404)
"""

from .exceptions import (
    DomainException,
    DuplicateSubmissionError,
    SubmissionNotFoundError,
    SubmissionValidationError,
)

__all__ = [
    "DomainException",
    "SubmissionValidationError",
    "DuplicateSubmissionError",
    "SubmissionNotFoundError",
]
