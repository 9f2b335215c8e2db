"""
Notifier Port

Protocol for out-of-band signup notifications.
Infrastructure Layer implements it (SmtpEmailNotifier, NullNotifier).
"""

from typing import Protocol

from src.domain.signup.entities import Submission


class NotifierProtocol(Protocol):
    """
    Best-effort notification about a newly stored record.

    Implementations raise UpstreamNotifyError on delivery failure; callers
    in the Application Layer catch and log it.
    """

    def notify(self, record: Submission) -> None:
        """
        Send a summary of `record` to the configured destination.

        Raises:
            UpstreamNotifyError: If delivery fails
        """
        ...
