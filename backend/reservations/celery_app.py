"""Celery application configuration."""

from __future__ import annotations

import logging

from celery import Celery
from celery.schedules import crontab

from reservations.core.config import settings

logger = logging.getLogger(__name__)

# Create Celery app
celery_app = Celery(
    "reservations",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["reservations.tasks.reminders"],
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Broker connection
    broker_connection_retry_on_startup=True,
    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    # Result expiration
    result_expires=3600,
    worker_prefetch_multiplier=1,
)

# Periodic tasks
celery_app.conf.beat_schedule = {
    # Deadline reminders once a day, early morning
    "send-deadline-reminders": {
        "task": "reservations.tasks.reminders.send_deadline_reminders",
        "schedule": crontab(hour=7, minute=0),
    },
}

logger.info(f"Celery app configured with broker: {settings.CELERY_BROKER_URL}")
