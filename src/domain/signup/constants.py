"""
Signup Domain Constants

Closed enumerations and intake limits for customer and merchant signups.
These mirror the options rendered by the landing page forms.

Note: The sets are closed on purpose. Anything outside them is a validation
error, including a missing value.
"""

import re
from typing import Final, FrozenSet, Pattern


# ============================================================================
# ENUMERATIONS - Form select options
# ============================================================================

VALID_STYLES: Final[FrozenSet[str]] = frozenset(
    {
        "minimalist",
        "vintage",
        "streetwear",
        "formal",
        "casual",
        "other",
    }
)

# Budget brackets in GBP
VALID_BUDGETS: Final[FrozenSet[str]] = frozenset(
    {
        "0-100",
        "100-250",
        "250-500",
        "500+",
    }
)

VALID_CATEGORIES: Final[FrozenSet[str]] = frozenset(
    {
        "clothing",
        "accessories",
        "footwear",
        "jewelry",
        "other",
    }
)


# ============================================================================
# INTAKE LIMITS
# ============================================================================

MAX_FIELD_LENGTH: Final[int] = 200

# Characters stripped from free-text fields before storage
STRIPPED_CHARACTERS: Final[Pattern[str]] = re.compile(r"[<>]")

# local@domain.tld with no whitespace and at least one dot in the domain
EMAIL_PATTERN: Final[Pattern[str]] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
