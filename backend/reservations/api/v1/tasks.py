from __future__ import annotations

from fastapi import APIRouter, Response, status

from reservations.api.deps import CallerDep, StoreDep, respond
from reservations.schemas import OperationResult, TaskCreate, TaskStatusUpdate
from reservations.services.lifecycle import set_task_status
from reservations.services.projects import create_task

router = APIRouter()


@router.post(
    "/",
    response_model=OperationResult,
    response_model_exclude_none=True,
    summary="Create task",
)
def create(
    payload: TaskCreate, store: StoreDep, caller: CallerDep, response: Response
) -> OperationResult:
    return respond(create_task(store, payload, caller), response, status.HTTP_201_CREATED)


@router.patch(
    "/{task_id}/status",
    response_model=OperationResult,
    response_model_exclude_none=True,
    summary="Move task to another status",
)
def update_status(
    task_id: str,
    payload: TaskStatusUpdate,
    store: StoreDep,
    caller: CallerDep,
    response: Response,
) -> OperationResult:
    return respond(set_task_status(store, task_id, payload.status, caller), response)
