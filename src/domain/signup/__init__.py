"""
Signup Subdomain Module

Core business logic for customer and merchant signups.
Contains entities, the intake validator and the repository interface.

Exports:
    Entities:
        - CustomerSubmission, MerchantSubmission: Persisted signup records
        - SubmissionKind: Form kind (one collection per kind)

    Services:
        - IntakeValidator: Sanitize and validate raw payloads

    Repository Interfaces:
        - SubmissionRepositoryProtocol: Data persistence contract

Usage:
    >>> from src.domain.signup import IntakeValidator, SubmissionKind
    >>> record = IntakeValidator().validate(SubmissionKind.CUSTOMER, payload)
"""

from .entities import (
    CustomerSubmission,
    MerchantSubmission,
    Submission,
    SubmissionKind,
    submission_from_dict,
)
from .repositories import SubmissionRepositoryProtocol
from .services import IntakeValidator

from . import constants

__all__ = [
    "CustomerSubmission",
    "MerchantSubmission",
    "Submission",
    "SubmissionKind",
    "submission_from_dict",
    "IntakeValidator",
    "SubmissionRepositoryProtocol",
    "constants",
]
