"""
Intake Validator Domain Service

Turns an arbitrary input mapping into a sanitized, fully-typed submission
record, or reports every field error at once.

Responsibility:
    - Free-text sanitization (trim, strip angle brackets, cap length)
    - Email shape check and case normalization
    - Closed-set membership for style, budget and category
    - Fixed field set per record kind (unknown keys are dropped)

Architecture Notes:
    - Pure domain service: no I/O, no framework imports
    - Raises SubmissionValidationError with the ordered list of errors
    - Identity and timestamp are assigned by the entity factories
"""

from typing import Any, Mapping

from src.domain.shared.exceptions import SubmissionValidationError
from src.domain.signup.constants import (
    EMAIL_PATTERN,
    MAX_FIELD_LENGTH,
    STRIPPED_CHARACTERS,
    VALID_BUDGETS,
    VALID_CATEGORIES,
    VALID_STYLES,
)
from src.domain.signup.entities import (
    CustomerSubmission,
    MerchantSubmission,
    Submission,
    SubmissionKind,
)

VALIDATION_FAILED_MESSAGE = "Validation failed"
INVALID_FORM_TYPE_MESSAGE = "Invalid form type"


def sanitize_string(value: Any) -> str:
    """
    Normalize a free-text field for storage.

    Non-string input sanitizes to the empty string.

    Examples:
        >>> sanitize_string("  <b>Jo</b> ")
        'bJo/b'
        >>> sanitize_string(None)
        ''
    """
    if not isinstance(value, str):
        return ""
    return STRIPPED_CHARACTERS.sub("", value.strip())[:MAX_FIELD_LENGTH]


def normalize_email(value: Any) -> str:
    """Sanitize and lower-case an email address."""
    return sanitize_string(value).lower()


def is_valid_email(value: Any) -> bool:
    """
    Check basic local@domain.tld shape.

    Examples:
        >>> is_valid_email("jo@example.com")
        True
        >>> is_valid_email("jo@localhost")
        False
    """
    return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None


def _is_member(value: Any, allowed: frozenset) -> bool:
    return isinstance(value, str) and value in allowed


def parse_kind(value: Any) -> SubmissionKind:
    """
    Resolve the declared form type.

    Raises:
        SubmissionValidationError: If value is not "customer" or "merchant"
    """
    try:
        return SubmissionKind(value)
    except ValueError:
        raise SubmissionValidationError(
            INVALID_FORM_TYPE_MESSAGE, errors=[INVALID_FORM_TYPE_MESSAGE]
        ) from None


class IntakeValidator:
    """
    Validate and sanitize signup payloads.

    Examples:
        >>> validator = IntakeValidator()
        >>> record = validator.validate(
        ...     SubmissionKind.CUSTOMER,
        ...     {"name": "Jo Lin", "email": "JO@Example.com",
        ...      "style": "minimalist", "budget": "100-250"},
        ... )
        >>> record.email
        'jo@example.com'
    """

    def validate(self, kind: SubmissionKind, data: Mapping[str, Any]) -> Submission:
        """
        Validate payload for the given kind and build the record.

        Args:
            kind: Declared form kind
            data: Raw input mapping (extra keys ignored)

        Returns:
            CustomerSubmission or MerchantSubmission with fresh id and timestamp

        Raises:
            SubmissionValidationError: With one message per failing field, in field order
        """
        if kind is SubmissionKind.CUSTOMER:
            return self._validate_customer(data)
        return self._validate_merchant(data)

    def _validate_customer(self, data: Mapping[str, Any]) -> CustomerSubmission:
        name = sanitize_string(data.get("name"))
        email = normalize_email(data.get("email"))
        style = data.get("style")
        budget = data.get("budget")

        error = SubmissionValidationError(VALIDATION_FAILED_MESSAGE)
        if not name:
            error.add_error("Name is required")
        if not is_valid_email(email):
            error.add_error("Valid email is required")
        if not _is_member(style, VALID_STYLES):
            error.add_error("Invalid style selection")
        if not _is_member(budget, VALID_BUDGETS):
            error.add_error("Invalid budget selection")
        if error.has_errors():
            raise error

        return CustomerSubmission(name=name, email=email, style=style, budget=budget)

    def _validate_merchant(self, data: Mapping[str, Any]) -> MerchantSubmission:
        business_name = sanitize_string(data.get("businessName"))
        contact_name = sanitize_string(data.get("contactName"))
        email = normalize_email(data.get("email"))
        category = data.get("category")

        error = SubmissionValidationError(VALIDATION_FAILED_MESSAGE)
        if not business_name:
            error.add_error("Business name is required")
        if not contact_name:
            error.add_error("Contact name is required")
        if not is_valid_email(email):
            error.add_error("Valid email is required")
        if not _is_member(category, VALID_CATEGORIES):
            error.add_error("Invalid category selection")
        if error.has_errors():
            raise error

        return MerchantSubmission(
            business_name=business_name,
            contact_name=contact_name,
            email=email,
            category=category,
        )
