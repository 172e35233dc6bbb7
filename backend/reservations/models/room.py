from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from reservations.core.ids import new_id


class Room(SQLModel, table=True):
    """Bookable room, referenced from bookings by name."""

    __tablename__ = "rooms"

    id: str = Field(default_factory=lambda: new_id("R"), primary_key=True, max_length=64)
    name: str = Field(max_length=255, unique=True, index=True)
    description: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
