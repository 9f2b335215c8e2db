"""
Domain Layer Exceptions

This module defines the exception hierarchy for the Domain Layer.
All domain-specific exceptions inherit from DomainException.

Responsibility:
    - Base exception class for domain errors
    - Type-safe error handling across layers
    - Clear separation from framework exceptions

Architecture Notes:
    - Part of Shared Domain (used across all subdomains)
    - API Layer maps each subclass to an HTTP status code (see src/api/main.py)
    - Infrastructure Layer raises its own exceptions (StorageError, RateLimitExceededError)
"""


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    This exception serves as the root of the domain exception hierarchy.
    All domain-specific exceptions should inherit from this class to enable
    type-safe error handling in Application and API layers.

    Usage:
        - Catch this in Application Layer to handle all domain errors
        - API Layer converts to appropriate HTTP status codes
        - Infrastructure Layer should not raise DomainException (use own exceptions)

    Examples:
        >>> raise DomainException("Business rule violation")
    """

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class SubmissionValidationError(DomainException):
    """
    Raised when a signup payload fails shape or enumeration rules.

    Collects every field error at once so the client can fix the whole
    form in one round trip (better UX than fail-fast).

    Attributes:
        errors: Ordered list of human-readable field errors

    Examples:
        >>> raise SubmissionValidationError(
        ...     "Validation failed",
        ...     errors=["Valid email is required", "Invalid style selection"],
        ... )
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        """
        Initialize submission validation error.

        Args:
            message: Primary error message
            errors: Optional list of specific validation errors
        """
        self.errors = errors or []
        super().__init__(message)

    def add_error(self, error: str) -> None:
        """
        Add validation error to the list.

        Args:
            error: Validation error message to add
        """
        self.errors.append(error)

    def has_errors(self) -> bool:
        """
        Check if any validation errors exist.

        Returns:
            True if there are validation errors, False otherwise
        """
        return len(self.errors) > 0


class DuplicateSubmissionError(DomainException):
    """
    Raised when the normalized email already exists in the target collection.

    Uniqueness is scoped per collection: a customer and a merchant may
    register with the same address.

    Attributes:
        collection: Collection name ("customers" or "merchants")
        email: Normalized (lower-cased) email that collided

    Examples:
        >>> raise DuplicateSubmissionError(
        ...     "This email has already been registered.",
        ...     collection="customers",
        ...     email="jo@example.com",
        ... )
    """

    def __init__(
        self,
        message: str,
        collection: str | None = None,
        email: str | None = None,
    ) -> None:
        """
        Initialize duplicate submission error.

        Args:
            message: Error description
            collection: Collection that already holds the email (optional)
            email: Colliding email address (optional)
        """
        self.collection = collection
        self.email = email
        super().__init__(message)


class SubmissionNotFoundError(DomainException):
    """
    Raised when an admin delete targets an id absent from the collection.

    Attributes:
        collection: Collection name ("customers" or "merchants")
        submission_id: Identifier that was not found
    """

    def __init__(
        self,
        message: str,
        collection: str | None = None,
        submission_id: str | None = None,
    ) -> None:
        self.collection = collection
        self.submission_id = submission_id
        super().__init__(message)
