"""
Signup Domain Entities.

Available Entities:
    - CustomerSubmission: Customer signup record
    - MerchantSubmission: Merchant application record
    - SubmissionKind: Enum of form kinds (one collection per kind)
"""

from src.domain.signup.entities.submission import (
    CustomerSubmission,
    MerchantSubmission,
    Submission,
    SubmissionKind,
    submission_from_dict,
)

__all__ = [
    "CustomerSubmission",
    "MerchantSubmission",
    "Submission",
    "SubmissionKind",
    "submission_from_dict",
]
