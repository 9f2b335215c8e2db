"""
Notification Dispatcher

Fire-and-forget delivery of signup notifications.

Modes:
    - background: deliver in-process (called from a FastAPI background task,
      after the response has been sent)
    - celery: enqueue send_submission_notification on the Celery broker
    - disabled: do nothing

Business Rules:
    - Never raises: UpstreamNotifyError and enqueue failures are logged only
    - No automatic retries
"""

import logging

from kombu.exceptions import KombuError

from src.application.ports.notifier import NotifierProtocol
from src.domain.signup.entities import Submission
from src.infrastructure.exceptions import UpstreamNotifyError

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Route a stored record to the configured notification channel.

    Examples:
        >>> dispatcher = NotificationDispatcher(NullNotifier(), mode="background")
        >>> dispatcher.dispatch(record)  # never raises
    """

    def __init__(self, notifier: NotifierProtocol, mode: str = "background") -> None:
        self.notifier = notifier
        self.mode = mode

    def dispatch(self, record: Submission) -> None:
        """Deliver or enqueue a notification for `record`. Never raises."""
        if self.mode == "disabled":
            return
        if self.mode == "celery":
            self._enqueue(record)
        else:
            deliver(self.notifier, record)

    def _enqueue(self, record: Submission) -> None:
        # Imported lazily: only Celery deployments need the broker client
        from src.application.tasks.notification_tasks import send_submission_notification

        try:
            send_submission_notification.delay(record.kind.value, record.to_dict())
            logger.debug(f"Notification queued for {record.kind.value} {record.id}")
        except (KombuError, OSError) as e:
            logger.warning(
                f"Failed to enqueue notification for {record.kind.value} {record.id}: {e}"
            )


def deliver(notifier: NotifierProtocol, record: Submission) -> bool:
    """
    Send one notification, logging instead of raising on failure.

    Returns:
        True if the notifier reported success, False otherwise
    """
    try:
        notifier.notify(record)
        return True
    except UpstreamNotifyError as e:
        logger.warning(f"Notification failed for {record.kind.value} {record.id}: {e}")
        return False
