"""Project tracker: projects with a team and due-dated tasks."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Optional

from reservations.core.errors import NotFound
from reservations.models import Task, TaskStatus, TeamMember
from reservations.schemas import (
    OperationResult,
    ProjectCreate,
    ProjectDetail,
    ProjectSummary,
    TaskCreate,
    TaskRead,
    TeamMemberRead,
)
from reservations.services.guard import guarded, parse_payload
from reservations.services.permissions import Role, ensure_authorized
from reservations.services.resources import PROJECTS, create_resource, get_resources, remove_resource
from reservations.services.store import TabularStore

logger = logging.getLogger(__name__)


@guarded("Creating a project")
def create_project(
    store: TabularStore,
    payload: ProjectCreate | dict[str, Any],
    caller_email: Optional[str],
) -> OperationResult:
    payload = parse_payload(ProjectCreate, payload)
    project = create_resource(store, PROJECTS, payload.name, payload.description, caller_email)
    for member in payload.team:
        store.append_row(
            "team", TeamMember(project_id=project.id, name=member.name, email=member.email)
        )
    return OperationResult(ok=True, message="Project created successfully!", id=project.id)


def list_projects(store: TabularStore) -> list[ProjectSummary]:
    summaries = []
    for project in get_resources(store, PROJECTS):
        counts = Counter(task.status for task in store.list_rows("tasks", project_id=project.id))
        summaries.append(
            ProjectSummary.model_validate(project).model_copy(
                update={
                    "task_counts": {status: counts.get(status, 0) for status in TaskStatus.ALL},
                    "team_size": len(store.list_rows("team", project_id=project.id)),
                }
            )
        )
    return summaries


def get_project_details(store: TabularStore, project_id: str) -> ProjectDetail:
    project = store.find_row("projects", id=project_id)
    if project is None:
        raise NotFound("Project not found.")
    tasks = [TaskRead.model_validate(t) for t in store.list_rows("tasks", project_id=project_id)]
    team = [TeamMemberRead.model_validate(m) for m in store.list_rows("team", project_id=project_id)]
    return ProjectDetail.model_validate(project).model_copy(update={"tasks": tasks, "team": team})


@guarded("Removing a project")
def remove_project(
    store: TabularStore, project_id: str, caller_email: Optional[str]
) -> OperationResult:
    ensure_authorized(caller_email, Role.ADMIN)
    project = store.find_row("projects", id=project_id)
    if project is None:
        raise NotFound("Project not found.")
    return remove_resource(store, project.name, caller_email, kind=PROJECTS)


@guarded("Creating a task")
def create_task(
    store: TabularStore,
    payload: TaskCreate | dict[str, Any],
    caller_email: Optional[str],
) -> OperationResult:
    ensure_authorized(caller_email, Role.USER, detail="Sign in to create tasks.")
    payload = parse_payload(TaskCreate, payload)
    project = store.find_row("projects", id=payload.project_id)
    if project is None:
        raise NotFound("Project not found.")

    task = Task(
        project_id=project.id,
        resource_name=project.name,
        title=payload.title,
        description=payload.description,
        assigned_to=payload.assigned_to,
        owner_email=caller_email,
        priority=payload.priority,
        status=TaskStatus.TODO,
        due_date=payload.due_date,
    )
    task_id = store.append_row("tasks", task)
    logger.info(f"{caller_email} created task {task_id} in project {project.name}")
    return OperationResult(ok=True, message="Task created successfully!", id=task_id)
