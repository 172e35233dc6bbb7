"""Record lifecycle: cancel, permanent delete, cascade delete, status changes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from reservations.core.errors import Conflict, NotFound, ValidationError
from reservations.core.locks import booking_guard
from reservations.models import BookingStatus, TaskStatus
from reservations.schemas import OperationResult
from reservations.services.booking import SLOT_TAKEN_MESSAGE, find_conflict
from reservations.services.guard import guarded
from reservations.services.permissions import Role, ensure_authorized
from reservations.services.store import TabularStore
from reservations.services.undo import UndoLog

if TYPE_CHECKING:
    from reservations.services.resources import ResourceKind

logger = logging.getLogger(__name__)


def cascade_delete(store: TabularStore, kind: "ResourceKind", resource) -> int:
    """Delete every dependent row of ``resource`` regardless of its status."""
    removed = 0
    for table, column, attribute in kind.dependents:
        removed += store.delete_where(table, **{column: getattr(resource, attribute)})
    return removed


def _get_booking(store: TabularStore, booking_id: str):
    booking = store.find_row("bookings", id=booking_id)
    if booking is None:
        raise NotFound("Booking not found.")
    return booking


@guarded("Cancelling a booking")
def cancel_booking(
    store: TabularStore,
    booking_id: str,
    caller_email: Optional[str],
    undo_log: Optional[UndoLog] = None,
) -> OperationResult:
    booking = _get_booking(store, booking_id)
    ensure_authorized(
        caller_email,
        Role.OWNER_OR_ADMIN,
        booking.user_email,
        detail="You don't have permission to cancel this booking.",
    )
    if booking.status == BookingStatus.CANCELLED:
        raise Conflict("Booking is already cancelled.")

    old_status = booking.status
    store.update_row("bookings", booking.id, {"status": BookingStatus.CANCELLED})
    (undo_log or UndoLog()).record(
        caller_email, "bookings", booking.id, {"status": old_status}
    )
    logger.info(f"{caller_email} cancelled booking {booking.id}")
    return OperationResult(ok=True, message="Booking cancelled.", id=booking.id)


@guarded("Deleting a booking")
def hard_delete_booking(
    store: TabularStore, booking_id: str, caller_email: Optional[str]
) -> OperationResult:
    ensure_authorized(
        caller_email,
        Role.ADMIN,
        detail="Permission denied. Only admins can delete bookings.",
    )
    booking = _get_booking(store, booking_id)
    store.delete_row("bookings", booking.id)
    logger.info(f"Admin {caller_email} deleted booking ID: {booking.id}")
    return OperationResult(ok=True, message="Booking permanently deleted.", id=booking.id)


@guarded("Updating task status")
def set_task_status(
    store: TabularStore,
    task_id: str,
    new_status: str,
    caller_email: Optional[str] = None,
    undo_log: Optional[UndoLog] = None,
) -> OperationResult:
    # Any caller may move any task; there is no ownership check here.
    if new_status not in TaskStatus.ALL:
        raise ValidationError(
            f"Unknown status {new_status!r}. Expected one of: {', '.join(TaskStatus.ALL)}."
        )
    task = store.find_row("tasks", id=task_id)
    if task is None:
        raise NotFound("Task not found.")

    old_status = task.status
    store.update_row("tasks", task.id, {"status": new_status})
    if caller_email:
        (undo_log or UndoLog()).record(caller_email, "tasks", task.id, {"status": old_status})
    logger.info(f"Task {task.id} moved from {old_status!r} to {new_status!r} by {caller_email or 'anonymous'}")
    return OperationResult(ok=True, message="Task status updated!", id=task.id)


@guarded("Undoing the last change")
def undo_last_change(
    store: TabularStore,
    caller_email: Optional[str],
    undo_log: Optional[UndoLog] = None,
) -> OperationResult:
    if not caller_email:
        raise NotFound("No recent change found to undo.")
    snapshot = (undo_log or UndoLog()).pop_latest(caller_email)

    row = store.find_row(snapshot.table, id=snapshot.row_id)
    if row is None:
        raise NotFound("The changed record no longer exists.")

    if snapshot.table == "bookings" and snapshot.values.get("status") == BookingStatus.CONFIRMED:
        with booking_guard(row.room_name):
            conflict = find_conflict(
                store,
                room_name=row.room_name,
                date=row.date,
                start_time=row.start_time,
                end_time=row.end_time,
                exclude_id=row.id,
            )
            if conflict is not None:
                raise Conflict(SLOT_TAKEN_MESSAGE)
            store.update_row(snapshot.table, snapshot.row_id, snapshot.values)
    else:
        store.update_row(snapshot.table, snapshot.row_id, snapshot.values)
    logger.info(f"{caller_email} restored {snapshot.table}/{snapshot.row_id} to {snapshot.values}")
    return OperationResult(
        ok=True,
        message="Successfully restored original values",
        id=snapshot.row_id,
        restored=snapshot,
    )
