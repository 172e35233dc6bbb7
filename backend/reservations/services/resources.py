"""Admin-managed resources (rooms, projects) and their cascade rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from reservations.core.errors import Conflict, NotFound, ValidationError
from reservations.models import Project, Room
from reservations.schemas import OperationResult
from reservations.services.guard import guarded
from reservations.services.lifecycle import cascade_delete
from reservations.services.permissions import Role, ensure_authorized
from reservations.services.store import TabularStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceKind:
    table: str
    label: str
    model: type
    # (dependent table, referencing column, resource attribute it holds)
    dependents: tuple[tuple[str, str, str], ...]
    dependents_label: str


ROOMS = ResourceKind(
    table="rooms",
    label="Room",
    model=Room,
    dependents=(("bookings", "room_name", "name"),),
    dependents_label="bookings",
)
PROJECTS = ResourceKind(
    table="projects",
    label="Project",
    model=Project,
    dependents=(("tasks", "project_id", "id"), ("team", "project_id", "id")),
    dependents_label="tasks and team",
)


def get_resources(store: TabularStore, kind: ResourceKind = ROOMS) -> list:
    return [row for row in store.list_rows(kind.table) if row.name]


def create_resource(
    store: TabularStore,
    kind: ResourceKind,
    name: str,
    description: Optional[str],
    caller_email: Optional[str],
):
    ensure_authorized(caller_email, Role.ADMIN)
    name = (name or "").strip()
    if not name:
        raise ValidationError(f"{kind.label} name is required.")
    if store.find_row(kind.table, name=name) is not None:
        raise Conflict(f'{kind.label} "{name}" already exists.')

    resource = kind.model(name=name, description=description)
    store.append_row(kind.table, resource)
    logger.info(f"Admin {caller_email} added {kind.label.lower()}: {name}")
    return resource


@guarded("Adding a resource")
def add_resource(
    store: TabularStore,
    name: str,
    description: Optional[str],
    caller_email: Optional[str],
    kind: ResourceKind = ROOMS,
) -> OperationResult:
    resource = create_resource(store, kind, name, description, caller_email)
    return OperationResult(ok=True, message=f"{kind.label} added successfully.", id=resource.id)


@guarded("Removing a resource")
def remove_resource(
    store: TabularStore,
    name: str,
    caller_email: Optional[str],
    kind: ResourceKind = ROOMS,
) -> OperationResult:
    ensure_authorized(caller_email, Role.ADMIN)
    resource = store.find_row(kind.table, name=name)
    if resource is None:
        raise NotFound(f"{kind.label} not found.")

    # Dependents go first; a failed cascade leaves the resource in place.
    removed = cascade_delete(store, kind, resource)
    store.delete_row(kind.table, resource.id)
    logger.info(
        f"Admin {caller_email} removed {kind.label.lower()}: {name} "
        f"and {removed} associated {kind.dependents_label} rows."
    )
    return OperationResult(
        ok=True,
        message=f'{kind.label} "{name}" and its {kind.dependents_label} were removed.',
        id=resource.id,
        cascade_count=removed,
    )
