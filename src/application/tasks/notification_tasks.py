"""
Celery Task for signup notification emails.

The API process enqueues the stored record as a plain dict; the worker
rebuilds the entity, builds its own notifier from the environment and sends
one email. Delivery failures are logged, never retried.
"""

import logging

from .celery_app import celery_app
from src.application.services.notification_dispatcher import deliver
from src.domain.signup.entities import SubmissionKind, submission_from_dict
from src.infrastructure.notifications import build_notifier
from src.shared.config import get_settings

# Configure logger for this module
logger = logging.getLogger(__name__)


@celery_app.task(name="send_submission_notification", ignore_result=True)
def send_submission_notification(kind: str, record: dict) -> bool:
    """
    Send the notification email for one stored submission.

    Args:
        kind: "customer" or "merchant"
        record: Stored record as produced by Submission.to_dict()

    Returns:
        True if the email was accepted by the SMTP server
    """
    submission = submission_from_dict(SubmissionKind(kind), record)
    notifier = build_notifier(get_settings())

    delivered = deliver(notifier, submission)
    if delivered:
        logger.info(f"Notification sent for {kind} {submission.id}")
    return delivered
