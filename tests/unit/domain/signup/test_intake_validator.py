"""
Tests for IntakeValidator and sanitization helpers.

Covers:
- String sanitization (trim, angle brackets, length cap, non-strings)
- Email shape and normalization
- Closed-set membership for style, budget, category
- Error ordering per form kind
- Form type parsing
"""

import pytest

from src.domain.shared.exceptions import SubmissionValidationError
from src.domain.signup.entities import (
    CustomerSubmission,
    MerchantSubmission,
    SubmissionKind,
)
from src.domain.signup.services import (
    IntakeValidator,
    is_valid_email,
    normalize_email,
    parse_kind,
    sanitize_string,
)


@pytest.fixture
def validator():
    return IntakeValidator()


@pytest.fixture
def customer_data():
    return {
        "name": "Jo Lin",
        "email": "jo@example.com",
        "style": "minimalist",
        "budget": "100-250",
    }


@pytest.fixture
def merchant_data():
    return {
        "businessName": "Thread Co",
        "contactName": "Sam Patel",
        "email": "sam@threadco.example",
        "category": "clothing",
    }


# ============================================================================
# SANITIZATION
# ============================================================================


def test_sanitize_string_trims_and_strips_angle_brackets():
    assert sanitize_string("  <script>alert(1)</script>  ") == "scriptalert(1)/script"


def test_sanitize_string_truncates_to_200_characters():
    assert len(sanitize_string("a" * 250)) == 200


def test_sanitize_string_truncates_after_stripping():
    """Brackets are removed before the length cap is applied."""
    value = "<" * 50 + "b" * 200
    assert sanitize_string(value) == "b" * 200


@pytest.mark.parametrize("value", [None, 42, ["Jo"], {"name": "Jo"}])
def test_sanitize_string_non_string_becomes_empty(value):
    assert sanitize_string(value) == ""


def test_normalize_email_lowercases():
    assert normalize_email("  Jo@Example.COM ") == "jo@example.com"


@pytest.mark.parametrize(
    "email",
    ["jo@example.com", "a.b+tag@sub.domain.co.uk"],
)
def test_is_valid_email_accepts(email):
    assert is_valid_email(email) is True


@pytest.mark.parametrize(
    "email",
    ["", "jo", "jo@", "@example.com", "jo@localhost", "jo @example.com", "jo@exa mple.com", None],
)
def test_is_valid_email_rejects(email):
    assert is_valid_email(email) is False


# ============================================================================
# FORM TYPE
# ============================================================================


def test_parse_kind_accepts_known_types():
    assert parse_kind("customer") is SubmissionKind.CUSTOMER
    assert parse_kind("merchant") is SubmissionKind.MERCHANT


@pytest.mark.parametrize("value", ["admin", "", None, 1, "Customer"])
def test_parse_kind_rejects_unknown_type(value):
    with pytest.raises(SubmissionValidationError) as exc_info:
        parse_kind(value)

    assert exc_info.value.message == "Invalid form type"
    assert exc_info.value.errors == ["Invalid form type"]


# ============================================================================
# CUSTOMER
# ============================================================================


def test_validate_customer_happy_path(validator, customer_data):
    record = validator.validate(SubmissionKind.CUSTOMER, customer_data)

    assert isinstance(record, CustomerSubmission)
    assert record.name == "Jo Lin"
    assert record.email == "jo@example.com"
    assert record.style == "minimalist"
    assert record.budget == "100-250"
    assert record.id
    assert record.submitted_at.endswith("Z")


def test_validate_customer_normalizes_email(validator, customer_data):
    customer_data["email"] = "JO@Example.com"

    record = validator.validate(SubmissionKind.CUSTOMER, customer_data)

    assert record.email == "jo@example.com"


def test_validate_customer_ignores_unknown_fields(validator, customer_data):
    customer_data["isAdmin"] = True
    customer_data["id"] = "attacker-chosen"

    record = validator.validate(SubmissionKind.CUSTOMER, customer_data)

    assert record.id != "attacker-chosen"
    assert "isAdmin" not in record.to_dict()


def test_validate_customer_reports_all_errors_in_field_order(validator):
    with pytest.raises(SubmissionValidationError) as exc_info:
        validator.validate(SubmissionKind.CUSTOMER, {})

    assert exc_info.value.message == "Validation failed"
    assert exc_info.value.errors == [
        "Name is required",
        "Valid email is required",
        "Invalid style selection",
        "Invalid budget selection",
    ]


def test_validate_customer_name_of_only_brackets_is_missing(validator, customer_data):
    customer_data["name"] = " <<>> "

    with pytest.raises(SubmissionValidationError) as exc_info:
        validator.validate(SubmissionKind.CUSTOMER, customer_data)

    assert exc_info.value.errors == ["Name is required"]


def test_validate_customer_rejects_budget_outside_closed_set(validator, customer_data):
    customer_data["budget"] = "1000+"

    with pytest.raises(SubmissionValidationError) as exc_info:
        validator.validate(SubmissionKind.CUSTOMER, customer_data)

    assert exc_info.value.errors == ["Invalid budget selection"]


def test_validate_customer_accepts_other_style(validator, customer_data):
    customer_data["style"] = "other"

    assert validator.validate(SubmissionKind.CUSTOMER, customer_data).style == "other"


def test_validate_customer_bad_email_and_budget(validator):
    """Example signup with a malformed email and an unknown budget."""
    with pytest.raises(SubmissionValidationError) as exc_info:
        validator.validate(
            SubmissionKind.CUSTOMER,
            {"name": "Jo", "email": "not-an-email", "style": "vintage", "budget": "cheap"},
        )

    assert exc_info.value.errors == ["Valid email is required", "Invalid budget selection"]


# ============================================================================
# MERCHANT
# ============================================================================


def test_validate_merchant_happy_path(validator, merchant_data):
    record = validator.validate(SubmissionKind.MERCHANT, merchant_data)

    assert isinstance(record, MerchantSubmission)
    assert record.business_name == "Thread Co"
    assert record.contact_name == "Sam Patel"
    assert record.category == "clothing"


def test_validate_merchant_reports_all_errors_in_field_order(validator):
    with pytest.raises(SubmissionValidationError) as exc_info:
        validator.validate(
            SubmissionKind.MERCHANT,
            {"businessName": "   ", "contactName": 7, "email": "x@y", "category": "food"},
        )

    assert exc_info.value.errors == [
        "Business name is required",
        "Contact name is required",
        "Valid email is required",
        "Invalid category selection",
    ]


def test_validate_merchant_sanitizes_names(validator, merchant_data):
    merchant_data["businessName"] = "  <b>Thread Co</b>  "

    record = validator.validate(SubmissionKind.MERCHANT, merchant_data)

    assert record.business_name == "bThread Co/b"
