from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from reservations.core.ids import new_id


class TaskStatus:
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    ALL = (TODO, IN_PROGRESS, DONE)


class TaskPriority:
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    ALL = (LOW, MEDIUM, HIGH)


class Task(SQLModel, table=True):
    """Due-date reservation of a project member's work."""

    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: new_id("TASK-"), primary_key=True, max_length=64)
    project_id: str = Field(max_length=64, index=True)
    # Project name at creation time, kept for display only
    resource_name: str = Field(max_length=255)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    assigned_to: str = Field(max_length=255)
    owner_email: str = Field(default="", max_length=255)
    priority: str = Field(default=TaskPriority.MEDIUM, max_length=20)
    status: str = Field(default=TaskStatus.TODO, max_length=20, index=True)
    due_date: Optional[date] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
