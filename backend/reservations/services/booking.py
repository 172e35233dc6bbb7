"""Conflict-checked room booking."""

from __future__ import annotations

import logging
from datetime import time
from typing import Any, Optional

from reservations.core.errors import Conflict, NotFound
from reservations.core.locks import booking_guard
from reservations.models import Booking, BookingStatus
from reservations.schemas import BookingCreate, BookingRead, OperationResult
from reservations.schemas.booking import parse_time
from reservations.services.guard import guarded, parse_payload
from reservations.services.permissions import Role, ensure_authorized
from reservations.services.store import TabularStore

logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "Time slot is already booked."


def overlaps(new_start: time, new_end: time, existing_start: time, existing_end: time) -> bool:
    """Half-open interval overlap. Empty slots overlap nothing."""
    if new_start >= new_end or existing_start >= existing_end:
        return False
    return new_start < existing_end and new_end > existing_start


def list_bookings_for_date(store: TabularStore, date: str) -> list[Booking]:
    """All bookings whose date string equals ``date``, any status."""
    bookings = store.list_rows("bookings", date=date)
    logger.debug(f"Found {len(bookings)} bookings for date {date}")
    return bookings


def find_conflict(
    store: TabularStore,
    *,
    room_name: str,
    date: str,
    start_time: str,
    end_time: str,
    exclude_id: Optional[str] = None,
) -> Optional[Booking]:
    new_start, new_end = parse_time(start_time), parse_time(end_time)
    for booking in list_bookings_for_date(store, date):
        if booking.id == exclude_id:
            continue
        if booking.room_name != room_name or booking.status != BookingStatus.CONFIRMED:
            continue
        if overlaps(new_start, new_end, parse_time(booking.start_time), parse_time(booking.end_time)):
            return booking
    return None


@guarded("Booking a room")
def book(
    store: TabularStore,
    request: BookingCreate | dict[str, Any],
    caller_email: Optional[str],
) -> OperationResult:
    ensure_authorized(caller_email, Role.USER, detail="Sign in to book a room.")
    request = parse_payload(BookingCreate, request)

    if store.find_row("rooms", name=request.room_name) is None:
        raise NotFound("Room not found.")

    with booking_guard(request.room_name):
        conflict = find_conflict(
            store,
            room_name=request.room_name,
            date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
        )
        if conflict is not None:
            logger.info(
                f"Rejected booking of {request.room_name} on {request.date} "
                f"{request.start_time}-{request.end_time}: overlaps {conflict.id}"
            )
            raise Conflict(SLOT_TAKEN_MESSAGE)

        booking = Booking(
            room_name=request.room_name,
            user_name=request.user_name,
            user_email=caller_email,
            date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            status=BookingStatus.CONFIRMED,
        )
        booking_id = store.append_row("bookings", booking)

    logger.info(f"User {caller_email} booked room {request.room_name} for {request.date}")
    return OperationResult(
        ok=True,
        message="Room booked successfully!",
        id=booking_id,
        booking=BookingRead.model_validate(booking),
    )
