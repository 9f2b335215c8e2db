"""
Submission Entities.

Core domain records created by a successful signup. Each record has identity
(server-assigned UUID) and a server-assigned creation timestamp.

Unlike most entities, submissions are immutable after creation: the only
lifecycle event after `submit` is an explicit administrative delete.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Union
from uuid import uuid4


def _utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return now.replace("+00:00", "Z")


def _new_id() -> str:
    return str(uuid4())


class SubmissionKind(str, Enum):
    """
    Kind of signup form, one per collection.

    Attributes:
        CUSTOMER: Shopper signing up for style matches
        MERCHANT: Business applying to list products

    Usage:
        >>> SubmissionKind("customer").collection
        'customers'
    """

    CUSTOMER = "customer"
    MERCHANT = "merchant"

    @property
    def collection(self) -> str:
        """Name of the collection holding records of this kind."""
        return f"{self.value}s"

    @property
    def label(self) -> str:
        """Capitalized singular label used in user-facing messages."""
        return self.value.capitalize()


@dataclass(frozen=True)
class CustomerSubmission:
    """
    Customer signup record.

    Attributes:
        name: Sanitized display name (1-200 characters)
        email: Lower-cased email, unique within the customers collection
        style: One of VALID_STYLES
        budget: One of VALID_BUDGETS
        id: Server-assigned UUID4 string
        submitted_at: Server-assigned ISO 8601 UTC timestamp

    Examples:
        >>> record = CustomerSubmission(
        ...     name="Jo Lin", email="jo@example.com", style="minimalist", budget="100-250"
        ... )
        >>> record.to_dict()["email"]
        'jo@example.com'
    """

    name: str
    email: str
    style: str
    budget: str
    id: str = field(default_factory=_new_id)
    submitted_at: str = field(default_factory=_utc_timestamp)

    kind: ClassVar[SubmissionKind] = SubmissionKind.CUSTOMER

    @property
    def display_name(self) -> str:
        return self.name

    def to_dict(self) -> dict[str, str]:
        """
        Serialize to the wire/persisted representation (camelCase keys).

        Returns:
            Dictionary with keys id, name, email, style, budget, submittedAt
        """
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "style": self.style,
            "budget": self.budget,
            "submittedAt": self.submitted_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CustomerSubmission":
        """
        Rebuild a record from its persisted representation.

        Args:
            data: Dictionary produced by to_dict()

        Raises:
            KeyError: If a required key is missing
        """
        return cls(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            style=data["style"],
            budget=data["budget"],
            submitted_at=data["submittedAt"],
        )


@dataclass(frozen=True)
class MerchantSubmission:
    """
    Merchant application record.

    Attributes:
        business_name: Sanitized business name (1-200 characters)
        contact_name: Sanitized contact person name (1-200 characters)
        email: Lower-cased email, unique within the merchants collection
        category: One of VALID_CATEGORIES
        id: Server-assigned UUID4 string
        submitted_at: Server-assigned ISO 8601 UTC timestamp
    """

    business_name: str
    contact_name: str
    email: str
    category: str
    id: str = field(default_factory=_new_id)
    submitted_at: str = field(default_factory=_utc_timestamp)

    kind: ClassVar[SubmissionKind] = SubmissionKind.MERCHANT

    @property
    def display_name(self) -> str:
        return self.business_name

    def to_dict(self) -> dict[str, str]:
        """
        Serialize to the wire/persisted representation (camelCase keys).

        Returns:
            Dictionary with keys id, businessName, contactName, email, category, submittedAt
        """
        return {
            "id": self.id,
            "businessName": self.business_name,
            "contactName": self.contact_name,
            "email": self.email,
            "category": self.category,
            "submittedAt": self.submitted_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MerchantSubmission":
        return cls(
            id=data["id"],
            business_name=data["businessName"],
            contact_name=data["contactName"],
            email=data["email"],
            category=data["category"],
            submitted_at=data["submittedAt"],
        )


Submission = Union[CustomerSubmission, MerchantSubmission]

_RECORD_TYPES: dict[SubmissionKind, type] = {
    SubmissionKind.CUSTOMER: CustomerSubmission,
    SubmissionKind.MERCHANT: MerchantSubmission,
}


def submission_from_dict(kind: SubmissionKind, data: dict[str, Any]) -> Submission:
    """
    Rebuild a record of the given kind from its persisted representation.

    Args:
        kind: Kind of record stored in the collection
        data: Dictionary produced by to_dict()

    Returns:
        CustomerSubmission or MerchantSubmission
    """
    return _RECORD_TYPES[kind].from_dict(data)
