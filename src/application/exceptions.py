"""
Application Layer Exceptions

Errors raised by application services that are neither domain rule
violations nor infrastructure failures.
"""


class UnauthorizedError(Exception):
    """
    Raised when the admin credential is absent or does not match.

    Mapped to HTTP 401 by the API Layer. The message is client-facing.

    Examples:
        >>> raise UnauthorizedError("Invalid password")
    """

    def __init__(self, message: str = "Unauthorized") -> None:
        self.message = message
        super().__init__(message)
