"""Single-step undo for status changes.

Each status mutation stores the previous values under a key owned by the
caller and derived from the mutated row, then repoints the caller's one
``latest`` key at it. An undo consumes both keys, so a change can be undone
at most once and only the most recent change per caller is reachable.
Callers never share a snapshot, even when they change the same row.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from reservations.core.cache import RedisCache, get_cache
from reservations.core.config import settings
from reservations.core.errors import NotFound
from reservations.schemas import UndoSnapshot

logger = logging.getLogger(__name__)


def snapshot_key(caller_email: str, table: str, row_id: str) -> str:
    return f"undo:{caller_email}:{table}:{row_id}"


def latest_key(caller_email: str) -> str:
    return f"undo:latest:{caller_email}"


class UndoLog:
    def __init__(self, cache: Optional[RedisCache] = None, ttl: Optional[int] = None) -> None:
        self.cache = cache or get_cache()
        self.ttl = ttl or settings.UNDO_TTL_SECONDS

    def record(
        self, caller_email: str, table: str, row_id: str, values: dict[str, Any]
    ) -> str:
        key = snapshot_key(caller_email, table, row_id)
        snapshot = {
            "table": table,
            "row_id": row_id,
            "values": values,
            "timestamp": datetime.utcnow().isoformat(),
        }
        self.cache.set(key, snapshot, ttl=self.ttl)
        self.cache.set(latest_key(caller_email), key, ttl=self.ttl)
        logger.debug(f"Stored undo snapshot {key} for {caller_email}")
        return key

    def pop_latest(self, caller_email: str) -> UndoSnapshot:
        pointer = latest_key(caller_email)
        key = self.cache.get(pointer)
        if not key:
            raise NotFound(
                f"No recent change found to undo. Undo data expires after {self.ttl // 3600} hours."
            )

        data = self.cache.get(key)
        self.cache.delete(key)
        self.cache.delete(pointer)
        if not data:
            raise NotFound("Undo data not found or expired.")
        return UndoSnapshot.model_validate(data)
