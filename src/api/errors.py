"""
API Layer Exceptions

Request-level failures detected before any Application Layer code runs.
"""


class RequestBodyTooLargeError(Exception):
    """
    Raised when a request body exceeds MAX_BODY_BYTES. Mapped to HTTP 413.

    Attributes:
        limit: Configured maximum body size in bytes
    """

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Request body exceeds {limit} bytes")


class MalformedRequestBodyError(Exception):
    """Raised when a request body is not valid JSON. Mapped to HTTP 400."""

    def __init__(self, message: str = "Invalid JSON body") -> None:
        self.message = message
        super().__init__(message)
