from .config import settings
from .errors import (
    BackendUnavailable,
    Conflict,
    NotFound,
    PermissionDenied,
    RowNotFound,
    ServiceError,
    TableNotFound,
    ValidationError,
)

__all__ = [
    "settings",
    "BackendUnavailable",
    "Conflict",
    "NotFound",
    "PermissionDenied",
    "RowNotFound",
    "ServiceError",
    "TableNotFound",
    "ValidationError",
]
