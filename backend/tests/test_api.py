from sqlalchemy.exc import OperationalError
from sqlmodel import Session, create_engine

from reservations.api.deps import get_store
from reservations.services.store import TabularStore

from .conftest import ADMIN, ALICE, BOB, as_user

API = "/api/v1"


def _book(client, email, start="09:00", end="10:00", room="Conference Room A"):
    return client.post(
        f"{API}/bookings/",
        json={"room_name": room, "date": "2025-01-10", "start_time": start, "end_time": end},
        headers=as_user(email),
    )


def test_health(client):
    assert client.get(f"{API}/health/").json() == {"status": "ok"}


def test_session_reports_identity_and_rooms(client):
    body = client.get(f"{API}/session", headers=as_user(ADMIN)).json()
    assert body["email"] == ADMIN
    assert body["is_admin"] is True
    assert [room["name"] for room in body["rooms"]] == ["Conference Room A", "Focus Room B"]
    assert body["bookings"] == []


def test_session_without_identity_is_plain_user(client):
    body = client.get(f"{API}/session").json()
    assert (body["email"], body["is_admin"]) == ("", False)


def test_book_then_conflict(client):
    first = _book(client, ALICE)
    assert first.status_code == 201
    assert first.json()["ok"] is True
    assert first.json()["booking"]["status"] == "Confirmed"

    second = _book(client, BOB, "09:30", "10:30")
    assert second.status_code == 409
    assert second.json() == {
        "ok": False,
        "message": "Time slot is already booked.",
        "error": "conflict",
    }

    listed = client.get(f"{API}/bookings/", params={"date": "2025-01-10"}).json()
    assert len(listed) == 1


def test_malformed_booking_is_structured_422(client):
    response = client.post(
        f"{API}/bookings/",
        json={"room_name": "Conference Room A", "date": "2025-01-10", "start_time": "10:00", "end_time": "09:00"},
        headers=as_user(ALICE),
    )
    assert response.status_code == 422
    body = response.json()
    assert body["ok"] is False
    assert "end_time" in body["message"]


def test_cancel_and_delete_permissions(client):
    booking_id = _book(client, ALICE).json()["id"]

    denied = client.post(f"{API}/bookings/{booking_id}/cancel", headers=as_user(BOB))
    assert denied.status_code == 403

    assert client.post(f"{API}/bookings/{booking_id}/cancel", headers=as_user(ALICE)).status_code == 200
    assert client.post(f"{API}/bookings/{booking_id}/cancel", headers=as_user(ALICE)).status_code == 409

    assert client.delete(f"{API}/bookings/{booking_id}", headers=as_user(ALICE)).status_code == 403
    deleted = client.delete(f"{API}/bookings/{booking_id}", headers=as_user(ADMIN))
    assert deleted.status_code == 200
    assert client.delete(f"{API}/bookings/{booking_id}", headers=as_user(ADMIN)).status_code == 404


def test_room_admin_flow(client):
    assert client.post(f"{API}/rooms/", json={"name": "Lab C"}, headers=as_user(ALICE)).status_code == 403
    created = client.post(f"{API}/rooms/", json={"name": "Lab C", "description": "PCs"}, headers=as_user(ADMIN))
    assert created.status_code == 201

    _book(client, ALICE, room="Lab C")
    _book(client, BOB, "10:00", "11:00", room="Lab C")

    removed = client.delete(f"{API}/rooms/Lab C", headers=as_user(ADMIN))
    assert removed.status_code == 200
    assert removed.json()["cascade_count"] == 2
    assert "Lab C" not in [room["name"] for room in client.get(f"{API}/rooms/").json()]


def test_project_and_task_flow(client):
    created = client.post(
        f"{API}/projects/",
        json={"name": "AI Ethics", "team": [{"name": "Alice", "email": ALICE}]},
        headers=as_user(ADMIN),
    )
    assert created.status_code == 201
    project_id = created.json()["id"]

    task = client.post(
        f"{API}/tasks/",
        json={"project_id": project_id, "title": "Draft", "assigned_to": "Alice", "due_date": "2025-01-12"},
        headers=as_user(ALICE),
    )
    assert task.status_code == 201
    task_id = task.json()["id"]

    moved = client.patch(f"{API}/tasks/{task_id}/status", json={"status": "In Progress"}, headers=as_user(BOB))
    assert moved.status_code == 200

    detail = client.get(f"{API}/projects/{project_id}").json()
    assert detail["tasks"][0]["status"] == "In Progress"
    assert detail["team"][0]["email"] == ALICE

    undone = client.post(f"{API}/undo", headers=as_user(BOB))
    assert undone.status_code == 200
    assert client.get(f"{API}/projects/{project_id}").json()["tasks"][0]["status"] == "To Do"

    summary = client.get(f"{API}/projects/").json()
    assert summary[0]["task_counts"]["To Do"] == 1

    removed = client.delete(f"{API}/projects/{project_id}", headers=as_user(ADMIN))
    assert removed.json()["cascade_count"] == 2
    assert client.get(f"{API}/projects/{project_id}").status_code == 404


def test_unknown_task_status_is_422(client):
    response = client.patch(f"{API}/tasks/TASK-0/status", json={"status": "Blocked"})
    assert response.status_code == 422
    assert response.json()["ok"] is False


def test_backend_failure_is_a_503(client, session):
    class BrokenStore(TabularStore):
        def list_rows(self, table, **filters):
            with self._backend(table):
                raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    client.app.dependency_overrides[get_store] = lambda: BrokenStore(session)

    response = _book(client, ALICE)

    assert response.status_code == 503
    assert response.json()["ok"] is False
    assert response.json()["error"] == "backend_unavailable"


def test_unreachable_database_is_a_503(client, tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'db.sqlite'}")
    client.app.dependency_overrides[get_store] = lambda: TabularStore(Session(engine))

    response = _book(client, ALICE)

    assert response.status_code == 503
    assert response.json()["ok"] is False
    assert response.json()["error"] == "backend_unavailable"
    engine.dispose()
