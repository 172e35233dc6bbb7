from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine, select

from reservations.core.config import settings
from reservations.core.errors import BackendUnavailable

# Registers every table on SQLModel.metadata
from reservations import models  # noqa: F401
from reservations.models import Room

logger = logging.getLogger(__name__)

DEFAULT_ROOMS = [
    ("Conference Room A", "Seats 10, has a projector"),
    ("Focus Room B", "Seats 2, has a whiteboard"),
]


def _build_engine():
    connect_args = {}
    if settings.DATABASE_URL.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    return create_engine(settings.DATABASE_URL, connect_args=connect_args)


engine = _build_engine()


def init_db(bind: Engine | None = None, *, seed: bool | None = None) -> None:
    """Provision the store: create missing tables and seed default rooms.

    Runs once at process start. ``create_all`` only creates tables that are
    absent, so it also repairs a database where a table was dropped.
    """
    bind = bind or engine
    seed = settings.SEED_DEFAULT_ROOMS if seed is None else seed
    try:
        SQLModel.metadata.create_all(bind=bind)
        if not seed:
            return
        with Session(bind) as session:
            if session.exec(select(Room)).first() is not None:
                return
            for name, description in DEFAULT_ROOMS:
                session.add(Room(name=name, description=description))
            session.commit()
            logger.info(f"Seeded {len(DEFAULT_ROOMS)} default rooms")
    except SQLAlchemyError as e:
        logger.error(f"Failed to provision database: {e}", exc_info=True)
        raise BackendUnavailable(f"Failed to provision database: {e}") from e


def reset_db(bind: Engine | None = None) -> None:
    """Drop and recreate every table. Maintenance only."""
    bind = bind or engine
    SQLModel.metadata.drop_all(bind=bind)
    init_db(bind)
    logger.warning("Database reset")


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_session)]
