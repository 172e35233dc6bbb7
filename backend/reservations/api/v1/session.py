from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Response

from reservations.api.deps import CallerDep, StoreDep, respond
from reservations.schemas import BookingRead, OperationResult, RoomRead, SessionInfo
from reservations.schemas.booking import DATE_FORMAT
from reservations.services.booking import list_bookings_for_date
from reservations.services.lifecycle import undo_last_change
from reservations.services.permissions import is_admin
from reservations.services.resources import ROOMS, get_resources

router = APIRouter()


@router.get("/session", response_model=SessionInfo, summary="Caller, rooms and today's bookings")
def read_session(store: StoreDep, caller: CallerDep) -> SessionInfo:
    today = date.today().strftime(DATE_FORMAT)
    return SessionInfo(
        email=caller,
        is_admin=is_admin(caller),
        rooms=[RoomRead.model_validate(room) for room in get_resources(store, ROOMS)],
        bookings=[BookingRead.model_validate(b) for b in list_bookings_for_date(store, today)],
    )


@router.post(
    "/undo",
    response_model=OperationResult,
    response_model_exclude_none=True,
    summary="Undo the caller's most recent status change",
)
def undo(store: StoreDep, caller: CallerDep, response: Response) -> OperationResult:
    return respond(undo_last_change(store, caller), response)
