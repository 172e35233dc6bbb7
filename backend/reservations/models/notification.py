from __future__ import annotations

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Notification(SQLModel, table=True):
    """Outbound notification queued for an email recipient."""

    __tablename__ = "notifications"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    recipient_email: str = Field(max_length=255, index=True)
    task_id: str | None = Field(default=None, max_length=64, index=True)
    type: str = Field(max_length=50)  # task_due_soon
    title: str = Field(max_length=255)
    message: str = Field(max_length=1000)
    reminder_date: date | None = Field(default=None, index=True)
    is_read: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False, index=True)
