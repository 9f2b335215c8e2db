"""
Domain Layer - Core Business Logic

Heart of the SnapShop signup backend. Contains the signup records, intake
rules and repository interface. Framework-independent and highly testable.

Architecture:
    - Clean Architecture: Domain Layer is the center, no external dependencies
    - Dependency Inversion: Domain defines interfaces, Infrastructure implements

Subdomains:
    - signup: Customer and merchant signup intake
    - shared: Cross-subdomain concepts (exceptions)

Usage:
    >>> from src.domain import IntakeValidator, SubmissionKind, DomainException
"""

# Signup Subdomain
from .signup import (
    CustomerSubmission,
    IntakeValidator,
    MerchantSubmission,
    Submission,
    SubmissionKind,
    SubmissionRepositoryProtocol,
)

# Shared Domain
from .shared import (
    DomainException,
    DuplicateSubmissionError,
    SubmissionNotFoundError,
    SubmissionValidationError,
)

__all__ = [
    # Signup Subdomain
    "CustomerSubmission",
    "MerchantSubmission",
    "Submission",
    "SubmissionKind",
    "IntakeValidator",
    "SubmissionRepositoryProtocol",
    # Shared Domain
    "DomainException",
    "SubmissionValidationError",
    "DuplicateSubmissionError",
    "SubmissionNotFoundError",
]
