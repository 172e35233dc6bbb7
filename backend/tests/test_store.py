import pytest
from sqlmodel import Session, create_engine

from reservations.core.errors import (
    BackendUnavailable,
    Conflict,
    RowNotFound,
    TableNotFound,
    ValidationError,
)
from reservations.core.ids import new_id
from reservations.db import DEFAULT_ROOMS, init_db
from reservations.models import Booking, Room, TeamMember
from reservations.services.store import TabularStore


def _booking(**overrides):
    data = {
        "room_name": "Conference Room A",
        "user_email": "alice@student.edu",
        "date": "2025-01-10",
        "start_time": "09:00",
        "end_time": "10:00",
    }
    data.update(overrides)
    return Booking(**data)


def test_provisioning_seeds_default_rooms(store):
    names = [room.name for room in store.list_rows("rooms")]
    assert names == [name for name, _ in DEFAULT_ROOMS]


def test_provisioning_is_idempotent(engine, store):
    init_db(engine, seed=True)
    assert len(store.list_rows("rooms")) == len(DEFAULT_ROOMS)


def test_empty_table_lists_nothing(store):
    assert store.list_rows("bookings") == []


def test_unknown_table_is_reported(store):
    with pytest.raises(TableNotFound):
        store.list_rows("sheet1")


def test_append_returns_generated_id(store):
    booking_id = store.append_row("bookings", _booking())
    assert booking_id.startswith("B")
    assert store.get_row("bookings", booking_id).room_name == "Conference Room A"


def test_append_accepts_mapping(store):
    room_id = store.append_row("rooms", {"name": "Lab C", "description": "Twelve PCs"})
    assert store.get_row("rooms", room_id).name == "Lab C"


def test_append_rejects_wrong_record_type(store):
    with pytest.raises(ValidationError):
        store.append_row("bookings", Room(name="Lab C"))


def test_duplicate_unique_column_is_conflict(store):
    with pytest.raises(Conflict):
        store.append_row("rooms", Room(name="Conference Room A"))
    # session stays usable after the rollback
    assert len(store.list_rows("rooms")) == 2


def test_rows_come_back_in_insertion_order(store):
    ids = [store.append_row("bookings", _booking(start_time=f"1{i}:00", end_time=f"1{i}:30")) for i in range(4)]
    assert [row.id for row in store.list_rows("bookings")] == ids


def test_list_rows_filters_by_exact_equality(store):
    store.append_row("bookings", _booking(date="2025-01-10"))
    store.append_row("bookings", _booking(date="2025-01-11"))
    rows = store.list_rows("bookings", date="2025-01-10")
    assert [row.date for row in rows] == ["2025-01-10"]


def test_filter_on_unknown_column_is_rejected(store):
    with pytest.raises(ValidationError):
        store.list_rows("bookings", colour="red")


def test_update_row_patches_named_fields(store):
    booking_id = store.append_row("bookings", _booking())
    store.update_row("bookings", booking_id, {"status": "Cancelled"})
    assert store.get_row("bookings", booking_id).status == "Cancelled"


def test_update_row_refuses_id_and_unknown_columns(store):
    booking_id = store.append_row("bookings", _booking())
    with pytest.raises(ValidationError):
        store.update_row("bookings", booking_id, {"id": "B1"})
    with pytest.raises(ValidationError):
        store.update_row("bookings", booking_id, {"colour": "red"})


def test_missing_row_is_reported(store):
    with pytest.raises(RowNotFound):
        store.update_row("bookings", "B0-missing", {"status": "Cancelled"})
    with pytest.raises(RowNotFound):
        store.delete_row("bookings", "B0-missing")


def test_delete_where_counts_removed_rows(store):
    store.append_row("bookings", _booking())
    store.append_row("bookings", _booking(start_time="11:00", end_time="12:00"))
    store.append_row("bookings", _booking(room_name="Focus Room B"))
    assert store.delete_where("bookings", room_name="Conference Room A") == 2
    assert [row.room_name for row in store.list_rows("bookings")] == ["Focus Room B"]


def test_ids_are_unique_within_a_burst():
    ids = {new_id("B") for _ in range(1000)}
    assert len(ids) == 1000


def test_dropped_table_is_reported_and_repaired(engine, store):
    TeamMember.__table__.drop(engine)
    with pytest.raises(TableNotFound):
        store.list_rows("team")

    init_db(engine, seed=False)
    assert store.list_rows("team") == []


def test_unreachable_database_is_backend_unavailable(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'db.sqlite'}")
    with Session(engine) as session:
        with pytest.raises(BackendUnavailable):
            TabularStore(session).list_rows("bookings")
    engine.dispose()
