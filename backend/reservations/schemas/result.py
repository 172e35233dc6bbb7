from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel

from .booking import BookingRead
from .room import RoomRead


class UndoSnapshot(BaseModel):
    table: str
    row_id: str
    values: dict[str, Any]
    timestamp: datetime


class OperationResult(BaseModel):
    """Structured outcome returned by every mutating operation."""

    ok: bool
    message: str
    error: Optional[str] = None
    id: Optional[str] = None
    cascade_count: Optional[int] = None
    booking: Optional[BookingRead] = None
    restored: Optional[UndoSnapshot] = None


class SessionInfo(BaseModel):
    email: str
    is_admin: bool
    rooms: List[RoomRead] = []
    bookings: List[BookingRead] = []
