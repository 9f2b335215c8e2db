"""
Infrastructure Layer Exceptions

Errors raised at the boundaries with external systems (file system, Redis,
SMTP) and by process-wide guards (rate limiting).

Architecture Notes:
    - Not DomainException subclasses: these describe technical failures,
      not business rule violations
    - API Layer maps StorageError to a generic 500 and RateLimitExceededError to 429
    - UpstreamNotifyError never reaches the API Layer
"""


class InfrastructureException(Exception):
    """
    Base exception for infrastructure failures.

    Attributes:
        message: Human-readable description (server-side only)
        original_error: Underlying library exception (optional)
    """

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        self.message = message
        self.original_error = original_error

        detailed_parts = [message]
        if original_error:
            detailed_parts.append(
                f"Original error: {type(original_error).__name__}: {original_error}"
            )
        super().__init__(" | ".join(detailed_parts))


class StorageError(InfrastructureException):
    """
    Raised when the persistence layer cannot read or write a collection.

    Examples:
        >>> raise StorageError("Cannot write customers.json", original_error=OSError(28, "No space"))
    """


class UpstreamNotifyError(InfrastructureException):
    """
    Raised when the notification email cannot be delivered.

    Always swallowed and logged by the notification dispatcher.
    """


class RateLimitExceededError(Exception):
    """
    Raised when a client exceeds its request budget for the rolling window.

    Attributes:
        message: Client-facing message
        limit: Maximum requests per window
        retry_after: Seconds until the oldest counted request leaves the window
    """

    def __init__(self, message: str, limit: int, retry_after: int) -> None:
        self.message = message
        self.limit = limit
        self.retry_after = retry_after
        super().__init__(message)
