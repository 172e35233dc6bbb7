"""Error taxonomy shared by the store and the services.

Every error carries a short machine ``code`` which the HTTP layer maps to a
status code. All of them except :class:`BackendUnavailable` are converted to
``OperationResult(ok=False)`` at the operation boundary.
"""

from __future__ import annotations


class ServiceError(Exception):
    code = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(ServiceError):
    code = "not_found"


class RowNotFound(NotFound):
    def __init__(self, table: str, row_id: str) -> None:
        super().__init__(f"Row {row_id!r} not found in table {table!r}.")
        self.table = table
        self.row_id = row_id


class PermissionDenied(ServiceError):
    code = "permission_denied"


class Conflict(ServiceError):
    code = "conflict"


class ValidationError(ServiceError):
    code = "validation_error"


class BackendUnavailable(ServiceError):
    code = "backend_unavailable"


class TableNotFound(BackendUnavailable):
    def __init__(self, table: str) -> None:
        super().__init__(f"Table {table!r} does not exist.")
        self.table = table
