from __future__ import annotations

from typing import Iterable

from reservations.core.config import settings
from reservations.core.errors import PermissionDenied


class Role:
    USER = "user"
    OWNER_OR_ADMIN = "owner_or_admin"
    ADMIN = "admin"


def is_admin(email: str | None, admin_emails: Iterable[str] | None = None) -> bool:
    """Exact, case-sensitive membership in the admin allow-list."""
    if not email:
        return False
    allow_list = settings.ADMIN_EMAILS if admin_emails is None else admin_emails
    return email in allow_list


def authorize(
    email: str | None,
    required_role: str,
    record_owner_email: str | None = None,
) -> bool:
    """Decide whether ``email`` may perform an operation gated by ``required_role``.

    A missing identity is an ordinary caller that owns nothing, so it is
    denied by every gate.
    """
    if not email:
        return False
    if required_role == Role.USER:
        return True
    if required_role == Role.ADMIN:
        return is_admin(email)
    if required_role == Role.OWNER_OR_ADMIN:
        return is_admin(email) or (record_owner_email is not None and email == record_owner_email)
    raise ValueError(f"Unknown role: {required_role}")


def ensure_authorized(
    email: str | None,
    required_role: str,
    record_owner_email: str | None = None,
    *,
    detail: str = "Permission denied.",
) -> None:
    if not authorize(email, required_role, record_owner_email):
        raise PermissionDenied(detail)
