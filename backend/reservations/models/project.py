from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from reservations.core.ids import new_id


class Project(SQLModel, table=True):
    """Student project that owns tasks and a team."""

    __tablename__ = "projects"

    id: str = Field(default_factory=lambda: new_id("P"), primary_key=True, max_length=64)
    name: str = Field(max_length=255, unique=True, index=True)
    description: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
