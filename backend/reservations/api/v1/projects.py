from __future__ import annotations

from typing import List

from fastapi import APIRouter, Response, status

from reservations.api.deps import CallerDep, StoreDep, respond
from reservations.schemas import OperationResult, ProjectCreate, ProjectDetail, ProjectSummary
from reservations.services.projects import (
    create_project,
    get_project_details,
    list_projects,
    remove_project,
)

router = APIRouter()


@router.get("/", response_model=List[ProjectSummary], summary="List projects")
def read_projects(store: StoreDep) -> List[ProjectSummary]:
    return list_projects(store)


@router.post(
    "/",
    response_model=OperationResult,
    response_model_exclude_none=True,
    summary="Create project with its team (admin)",
)
def create(
    payload: ProjectCreate, store: StoreDep, caller: CallerDep, response: Response
) -> OperationResult:
    return respond(create_project(store, payload, caller), response, status.HTTP_201_CREATED)


@router.get("/{project_id}", response_model=ProjectDetail, summary="Project with tasks and team")
def read_project(project_id: str, store: StoreDep) -> ProjectDetail:
    return get_project_details(store, project_id)


@router.delete(
    "/{project_id}",
    response_model=OperationResult,
    response_model_exclude_none=True,
    summary="Remove project, its tasks and team (admin)",
)
def delete_project(
    project_id: str, store: StoreDep, caller: CallerDep, response: Response
) -> OperationResult:
    return respond(remove_project(store, project_id, caller), response)
