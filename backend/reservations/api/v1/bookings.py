from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, Response, status

from reservations.api.deps import CallerDep, StoreDep, respond
from reservations.schemas import BookingCreate, BookingRead, OperationResult
from reservations.services.booking import book, list_bookings_for_date
from reservations.services.lifecycle import cancel_booking, hard_delete_booking

router = APIRouter()


@router.get("/", response_model=List[BookingRead], summary="List bookings for a date")
def list_bookings(
    store: StoreDep,
    date: str = Query(..., description="Date to list bookings for (YYYY-MM-DD)"),
):
    return list_bookings_for_date(store, date)


@router.post(
    "/",
    response_model=OperationResult,
    response_model_exclude_none=True,
    summary="Book a room",
)
def create_booking(
    payload: BookingCreate, store: StoreDep, caller: CallerDep, response: Response
) -> OperationResult:
    return respond(book(store, payload, caller), response, status.HTTP_201_CREATED)


@router.post(
    "/{booking_id}/cancel",
    response_model=OperationResult,
    response_model_exclude_none=True,
    summary="Cancel booking (owner or admin)",
)
def cancel(
    booking_id: str, store: StoreDep, caller: CallerDep, response: Response
) -> OperationResult:
    return respond(cancel_booking(store, booking_id, caller), response)


@router.delete(
    "/{booking_id}",
    response_model=OperationResult,
    response_model_exclude_none=True,
    summary="Permanently delete booking (admin)",
)
def delete_booking(
    booking_id: str, store: StoreDep, caller: CallerDep, response: Response
) -> OperationResult:
    return respond(hard_delete_booking(store, booking_id, caller), response)
