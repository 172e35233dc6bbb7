from datetime import date, timedelta

import pytest
from sqlmodel import select

from reservations.models import Notification, TaskStatus
from reservations.services.lifecycle import set_task_status
from reservations.services.notifications import TASK_DUE_SOON, queue_deadline_reminders
from reservations.services.projects import create_project, create_task

from .conftest import ADMIN, ALICE

TODAY = date(2025, 3, 3)


@pytest.fixture
def project_id(store):
    return create_project(
        store,
        {"name": "AI Ethics", "team": [{"name": "Alice", "email": ALICE}]},
        ADMIN,
    ).id


def _task(store, project_id, title, due_in, assigned_to="Alice"):
    due_date = None if due_in is None else TODAY + timedelta(days=due_in)
    return create_task(
        store,
        {"project_id": project_id, "title": title, "assigned_to": assigned_to, "due_date": due_date},
        ALICE,
    ).id


def _notifications(store):
    return store.session.exec(select(Notification)).all()


def test_reminds_open_tasks_due_within_window(store, project_id):
    _task(store, project_id, "Due tomorrow", 1)
    _task(store, project_id, "Due today", 0)
    _task(store, project_id, "Due in two days", 2)
    _task(store, project_id, "Due next week", 7)
    _task(store, project_id, "Overdue", -1)
    _task(store, project_id, "No due date", None)
    done = _task(store, project_id, "Finished", 1)
    set_task_status(store, done, TaskStatus.DONE)

    result = queue_deadline_reminders(store, TODAY, window_days=2)

    assert result == {"reminders_created": 3, "reminders_skipped": 0, "tasks_checked": 3}
    notifications = _notifications(store)
    assert {n.recipient_email for n in notifications} == {ALICE}
    assert {n.type for n in notifications} == {TASK_DUE_SOON}
    tomorrow = next(n for n in notifications if n.title == "Task Due Soon: Due tomorrow")
    assert "1 day remaining" in tomorrow.message
    assert "AI Ethics" in tomorrow.message


def test_unknown_assignee_is_skipped(store, project_id):
    _task(store, project_id, "Orphan", 1, assigned_to="Mallory")
    result = queue_deadline_reminders(store, TODAY)
    assert result == {"reminders_created": 0, "reminders_skipped": 1, "tasks_checked": 1}
    assert _notifications(store) == []


def test_one_reminder_per_task_per_day(store, project_id):
    _task(store, project_id, "Due tomorrow", 1)

    queue_deadline_reminders(store, TODAY)
    again = queue_deadline_reminders(store, TODAY)
    next_day = queue_deadline_reminders(store, TODAY + timedelta(days=1))

    assert again["reminders_created"] == 0
    assert again["reminders_skipped"] == 1
    assert next_day["reminders_created"] == 1
    assert len(_notifications(store)) == 2
