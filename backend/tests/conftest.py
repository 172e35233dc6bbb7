"""
Pytest configuration and shared fixtures.
"""

import os

# Never reach for a real Redis from the test suite
os.environ.setdefault("CACHE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from reservations.core.cache import reset_cache
from reservations.core.config import settings
from reservations.db import get_session, init_db
from reservations.main import create_application
from reservations.services.store import TabularStore
from reservations.services.undo import UndoLog

ADMIN = "admin@school.edu"
ALICE = "alice@student.edu"
BOB = "bob@student.edu"


@pytest.fixture(autouse=True)
def app_settings(monkeypatch):
    """Known admin list and an in-memory cache for every test."""
    monkeypatch.setattr(settings, "ADMIN_EMAILS", [ADMIN])
    monkeypatch.setattr(settings, "CACHE_BACKEND", "memory")
    monkeypatch.setattr(settings, "BOOKING_LOCK_ENABLED", False)
    reset_cache()
    yield settings
    reset_cache()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine, seed=True)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session):
    return TabularStore(session)


@pytest.fixture
def undo_log():
    return UndoLog()


@pytest.fixture
def client(engine):
    app = create_application()

    def _session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session
    return TestClient(app)


def as_user(email):
    return {settings.IDENTITY_HEADER: email}


@pytest.fixture
def booking_request():
    """Sample booking payload for the seeded conference room."""
    return {
        "room_name": "Conference Room A",
        "date": "2025-01-10",
        "start_time": "09:00",
        "end_time": "10:00",
        "user_name": "alice",
    }
