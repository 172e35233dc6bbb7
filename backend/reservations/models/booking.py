from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from reservations.core.ids import new_id


class BookingStatus:
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"


class Booking(SQLModel, table=True):
    """Time-slot reservation of a room on a calendar date."""

    __tablename__ = "bookings"

    id: str = Field(default_factory=lambda: new_id("B"), primary_key=True, max_length=64)
    # Weak reference: renaming a room does not touch its bookings
    room_name: str = Field(max_length=255, index=True)
    user_name: Optional[str] = Field(default=None, max_length=255)
    user_email: str = Field(max_length=255, index=True)
    date: str = Field(max_length=10, index=True)  # YYYY-MM-DD
    start_time: str = Field(max_length=5)  # HH:MM
    end_time: str = Field(max_length=5)
    status: str = Field(default=BookingStatus.CONFIRMED, max_length=20, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
