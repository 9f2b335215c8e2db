"""
Celery Tasks

Responsibility:
    Out-of-process delivery of signup notifications (NOTIFIER_MODE=celery).

Contains:
    - celery_app.py - Celery configuration
    - notification_tasks.py - send_submission_notification

Does NOT contain:
    - Business logic (delegates to Application services)
"""

from .celery_app import celery_app
from .notification_tasks import send_submission_notification

__all__ = ["celery_app", "send_submission_notification"]
