"""
Admin Access Gate

Single shared-secret check guarding list and delete of collected records.

Business Rules:
    - One secret (ADMIN_PASSWORD), no per-user accounts, no session expiry
    - Unset secret: every admin call is rejected
    - Comparison is constant-time (hmac.compare_digest)
    - Admin API calls send "Authorization: Bearer <secret>"
"""

import hmac
import logging
from typing import Optional

from src.application.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class AdminAccessGate:
    """
    Verify admin credentials against the shared secret.

    Examples:
        >>> gate = AdminAccessGate("s3cret")
        >>> gate.verify_password("s3cret")
        >>> gate.verify_bearer("Bearer s3cret")
        >>> gate.verify_bearer(None)
        Traceback (most recent call last):
        ...
        UnauthorizedError: Unauthorized
    """

    def __init__(self, secret: Optional[str]) -> None:
        self._secret = secret or None
        if self._secret is None:
            logger.warning("ADMIN_PASSWORD is not set: admin endpoints will reject all requests")

    @property
    def enabled(self) -> bool:
        return self._secret is not None

    def _matches(self, candidate: Optional[str]) -> bool:
        if self._secret is None or not isinstance(candidate, str):
            return False
        return hmac.compare_digest(candidate.encode("utf-8"), self._secret.encode("utf-8"))

    def verify_password(self, password: Optional[str]) -> None:
        """
        Check a login password.

        Raises:
            UnauthorizedError: "Invalid password" on mismatch or unset secret
        """
        if not self._matches(password):
            logger.warning("Admin login rejected")
            raise UnauthorizedError("Invalid password")

    def verify_bearer(self, authorization: Optional[str]) -> None:
        """
        Check an Authorization header value.

        Raises:
            UnauthorizedError: "Unauthorized" if the header is missing,
                not a bearer credential, or does not match
        """
        token = None
        if authorization and authorization.startswith(BEARER_PREFIX):
            token = authorization[len(BEARER_PREFIX):]
        if not self._matches(token):
            raise UnauthorizedError("Unauthorized")
