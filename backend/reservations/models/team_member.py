from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, SQLModel

from reservations.core.ids import new_id


class TeamMember(SQLModel, table=True):
    """Member of a project team; tasks are assigned to members by name."""

    __tablename__ = "team"

    id: str = Field(default_factory=lambda: new_id("M"), primary_key=True, max_length=64)
    project_id: str = Field(max_length=64, index=True)
    name: str = Field(max_length=255)
    email: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
