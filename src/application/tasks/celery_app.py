"""
Celery application initialization.

Used only when NOTIFIER_MODE=celery: the API enqueues notification jobs and a
separate worker process delivers them.

Run a worker with:
    celery -A src.application.tasks.celery_app worker --loglevel=info

Architecture Note:
- Part of Application Layer (orchestration)
- Uses environment variables for configuration
- No business logic - pure infrastructure setup
"""

import os

from celery import Celery
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

celery_app = Celery(
    "snapshop",
    broker=os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/1"),
)

# Fire-and-forget notifications: no result backend, no retries
celery_app.conf.update(
    task_ignore_result=True,
    task_time_limit=60,
    task_acks_late=False,
    broker_connection_retry_on_startup=True,
)

celery_app.autodiscover_tasks(["src.application.tasks"], related_name="notification_tasks")
