from __future__ import annotations

import logging
from datetime import date, timedelta

from sqlmodel import select

from reservations.models import Notification, Task, TaskStatus
from reservations.services.store import TabularStore

logger = logging.getLogger(__name__)

TASK_DUE_SOON = "task_due_soon"


def create_notification(
    store: TabularStore,
    recipient_email: str,
    type: str,
    title: str,
    message: str,
    task_id: str | None = None,
    reminder_date: date | None = None,
) -> Notification:
    """Queue a notification for an email recipient."""
    notification = Notification(
        recipient_email=recipient_email,
        task_id=task_id,
        type=type,
        title=title,
        message=message,
        reminder_date=reminder_date,
    )
    store.session.add(notification)
    return notification


def _already_reminded(store: TabularStore, task_id: str, today: date) -> bool:
    return (
        store.session.exec(
            select(Notification).where(
                Notification.task_id == task_id,
                Notification.type == TASK_DUE_SOON,
                Notification.reminder_date == today,
            )
        ).first()
        is not None
    )


def _assignee_email(store: TabularStore, task: Task) -> str | None:
    member = store.find_row("team", project_id=task.project_id, name=task.assigned_to)
    return member.email if member else None


def notify_task_due_soon(store: TabularStore, task: Task, email: str, today: date) -> Notification:
    days_left = (task.due_date - today).days
    project = store.find_row("projects", id=task.project_id)
    project_name = project.name if project else "Your Project"
    return create_notification(
        store,
        recipient_email=email,
        type=TASK_DUE_SOON,
        title=f"Task Due Soon: {task.title}",
        message=(
            f"Hi {task.assigned_to}, your task «{task.title}» in {project_name} is due "
            f"{task.due_date.isoformat()} ({days_left} day{'' if days_left == 1 else 's'} remaining)."
        ),
        task_id=task.id,
        reminder_date=today,
    )


def queue_deadline_reminders(
    store: TabularStore, today: date, window_days: int = 2
) -> dict[str, int]:
    """Queue one reminder per open task due within ``window_days`` of ``today``.

    Returns counts of reminders created, tasks skipped (no resolvable
    assignee or already reminded today) and tasks checked.
    """
    horizon = today + timedelta(days=window_days)
    created = 0
    skipped = 0

    due_tasks = [
        task
        for task in store.list_rows("tasks")
        if task.status != TaskStatus.DONE
        and task.due_date is not None
        and today <= task.due_date <= horizon
    ]
    for task in due_tasks:
        email = _assignee_email(store, task)
        if email is None or _already_reminded(store, task.id, today):
            skipped += 1
            continue
        notify_task_due_soon(store, task, email, today)
        created += 1
        logger.info(f"Queued reminder to {email} for task: {task.title}")

    store.session.commit()
    return {
        "reminders_created": created,
        "reminders_skipped": skipped,
        "tasks_checked": len(due_tasks),
    }
