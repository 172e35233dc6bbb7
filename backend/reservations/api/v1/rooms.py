from __future__ import annotations

from typing import List

from fastapi import APIRouter, Response, status

from reservations.api.deps import CallerDep, StoreDep, respond
from reservations.schemas import OperationResult, RoomCreate, RoomRead
from reservations.services.resources import ROOMS, add_resource, get_resources, remove_resource

router = APIRouter()


@router.get("/", response_model=List[RoomRead], summary="List rooms")
def list_rooms(store: StoreDep):
    return get_resources(store, ROOMS)


@router.post(
    "/",
    response_model=OperationResult,
    response_model_exclude_none=True,
    summary="Add room (admin)",
)
def create_room(
    payload: RoomCreate, store: StoreDep, caller: CallerDep, response: Response
) -> OperationResult:
    result = add_resource(store, payload.name, payload.description, caller, kind=ROOMS)
    return respond(result, response, status.HTTP_201_CREATED)


@router.delete(
    "/{room_name}",
    response_model=OperationResult,
    response_model_exclude_none=True,
    summary="Remove room and its bookings (admin)",
)
def delete_room(
    room_name: str, store: StoreDep, caller: CallerDep, response: Response
) -> OperationResult:
    return respond(remove_resource(store, room_name, caller, kind=ROOMS), response)
