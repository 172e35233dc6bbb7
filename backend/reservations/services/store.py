"""Tabular store: named tables of typed records keyed by a generated id."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Type

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from reservations.core.errors import (
    BackendUnavailable,
    Conflict,
    RowNotFound,
    TableNotFound,
    ValidationError,
)
from reservations.models import Booking, Project, Room, Task, TeamMember

logger = logging.getLogger(__name__)

TABLES: dict[str, Type[SQLModel]] = {
    "rooms": Room,
    "bookings": Booking,
    "projects": Project,
    "tasks": Task,
    "team": TeamMember,
}


class TabularStore:
    """Thin table-oriented facade over a SQLModel session.

    Rows come back in insertion order. Every write commits immediately, the
    way an appended spreadsheet row is visible at once.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def _model(self, table: str) -> Type[SQLModel]:
        model = TABLES.get(table)
        if model is None:
            raise TableNotFound(table)
        return model

    @contextmanager
    def _backend(self, table: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            self.session.rollback()
            raise Conflict(f"Duplicate record in table {table!r}.") from e
        except OperationalError as e:
            self.session.rollback()
            model = TABLES[table]
            try:
                table_exists = inspect(self.session.get_bind()).has_table(model.__tablename__)
            except SQLAlchemyError as inspect_error:
                raise BackendUnavailable(
                    f"Storage error on table {table!r}: {inspect_error}"
                ) from e
            if not table_exists:
                raise TableNotFound(table) from e
            raise BackendUnavailable(f"Storage error on table {table!r}: {e}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise BackendUnavailable(f"Storage error on table {table!r}: {e}") from e

    def _filtered(self, model: Type[SQLModel], filters: dict[str, Any]):
        statement = select(model)
        for column, value in filters.items():
            if column not in model.model_fields:
                raise ValidationError(f"Unknown column {column!r}.")
            statement = statement.where(getattr(model, column) == value)
        return statement.order_by(model.created_at)

    def list_rows(self, table: str, **filters: Any) -> list[Any]:
        """Return all rows, optionally narrowed by exact column equality.

        An existing table with no rows yields an empty list.
        """
        model = self._model(table)
        with self._backend(table):
            return list(self.session.exec(self._filtered(model, filters)).all())

    def find_row(self, table: str, **filters: Any) -> Any | None:
        rows = self.list_rows(table, **filters)
        return rows[0] if rows else None

    def get_row(self, table: str, row_id: str) -> Any:
        model = self._model(table)
        with self._backend(table):
            row = self.session.get(model, row_id)
        if row is None:
            raise RowNotFound(table, row_id)
        return row

    def append_row(self, table: str, record: SQLModel | dict[str, Any]) -> str:
        """Insert a record and return its generated id."""
        model = self._model(table)
        if isinstance(record, dict):
            record = model(**record)
        elif not isinstance(record, model):
            raise ValidationError(
                f"Table {table!r} expects {model.__name__}, got {type(record).__name__}."
            )
        with self._backend(table):
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        return record.id

    def update_row(self, table: str, row_id: str, patch: dict[str, Any]) -> Any:
        model = self._model(table)
        unknown = [column for column in patch if column not in model.model_fields]
        if unknown:
            raise ValidationError(f"Unknown column(s) for {table!r}: {', '.join(unknown)}.")
        if "id" in patch:
            raise ValidationError("Record ids are immutable.")

        row = self.get_row(table, row_id)
        with self._backend(table):
            for column, value in patch.items():
                setattr(row, column, value)
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        return row

    def delete_row(self, table: str, row_id: str) -> None:
        row = self.get_row(table, row_id)
        with self._backend(table):
            self.session.delete(row)
            self.session.commit()

    def delete_where(self, table: str, **filters: Any) -> int:
        """Delete every row matching the filters and return how many went."""
        rows = self.list_rows(table, **filters)
        if not rows:
            return 0
        with self._backend(table):
            for row in rows:
                self.session.delete(row)
            self.session.commit()
        logger.debug(f"Deleted {len(rows)} row(s) from {table} where {filters}")
        return len(rows)
