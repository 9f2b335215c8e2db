"""
Signup Domain Services.

Available Services:
    - IntakeValidator: Sanitize and validate signup payloads
"""

from src.domain.signup.services.intake_validator import (
    IntakeValidator,
    is_valid_email,
    normalize_email,
    parse_kind,
    sanitize_string,
)

__all__ = [
    "IntakeValidator",
    "is_valid_email",
    "normalize_email",
    "parse_kind",
    "sanitize_string",
]
