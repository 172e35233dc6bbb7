from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request, Response

from reservations.core.config import settings
from reservations.db import SessionDep
from reservations.schemas import OperationResult
from reservations.services.store import TabularStore

ERROR_STATUS = {
    "not_found": 404,
    "permission_denied": 403,
    "conflict": 409,
    "validation_error": 422,
}


def get_caller_email(request: Request) -> str:
    """Identity supplied by the hosting environment; empty when absent."""
    return request.headers.get(settings.IDENTITY_HEADER, "").strip()


def get_store(session: SessionDep) -> TabularStore:
    return TabularStore(session)


CallerDep = Annotated[str, Depends(get_caller_email)]
StoreDep = Annotated[TabularStore, Depends(get_store)]


def respond(result: OperationResult, response: Response, success_status: int = 200) -> OperationResult:
    """Pick the HTTP status for an operation result; the body is the result itself."""
    if result.ok:
        response.status_code = success_status
    else:
        response.status_code = ERROR_STATUS.get(result.error or "", 400)
    return result
