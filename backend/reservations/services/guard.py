"""Operation boundary: turn service errors into structured results."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from reservations.core.errors import BackendUnavailable, ServiceError, ValidationError
from reservations.schemas import OperationResult

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def guarded(action: str) -> Callable[[Callable[..., OperationResult]], Callable[..., OperationResult]]:
    """Catch service errors raised by an operation and report them as ``ok=False``.

    ``BackendUnavailable`` is logged and re-raised: without storage there is
    no meaningful result to hand back.
    """

    def decorator(func: Callable[..., OperationResult]) -> Callable[..., OperationResult]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> OperationResult:
            try:
                return func(*args, **kwargs)
            except BackendUnavailable as e:
                logger.error(f"{action} failed, backend unavailable: {e.message}", exc_info=True)
                raise
            except ServiceError as e:
                logger.warning(f"{action} failed [{e.code}]: {e.message}")
                return OperationResult(ok=False, message=e.message, error=e.code)

        return wrapper

    return decorator


def parse_payload(schema: Type[M], payload: M | dict[str, Any]) -> M:
    """Accept either a validated schema instance or a raw mapping."""
    if isinstance(payload, schema):
        return payload
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'payload'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"Invalid request: {problems}") from None
