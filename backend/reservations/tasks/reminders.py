"""Celery tasks for task deadline reminders."""

import logging
from datetime import date

from sqlmodel import Session

from reservations.celery_app import celery_app
from reservations.core.config import settings
from reservations.db import engine
from reservations.services.notifications import queue_deadline_reminders
from reservations.services.store import TabularStore

logger = logging.getLogger(__name__)


@celery_app.task(name="reservations.tasks.reminders.send_deadline_reminders")
def send_deadline_reminders() -> dict[str, int]:
    """
    Periodic job queueing reminders for tasks due soon.

    Runs daily through Celery Beat. Tasks that are not Done and are due
    within REMINDER_WINDOW_DAYS get one notification per day for the
    assignee found in the project team.
    """
    with Session(engine) as session:
        result = queue_deadline_reminders(
            TabularStore(session),
            today=date.today(),
            window_days=settings.REMINDER_WINDOW_DAYS,
        )

    logger.info(
        f"[Reminder Task] Finished: {result['reminders_created']} created, "
        f"{result['reminders_skipped']} skipped, {result['tasks_checked']} tasks checked"
    )
    return result
