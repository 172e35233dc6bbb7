"""Per-resource mutual exclusion for booking check-and-append."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager, nullcontext
from typing import Iterator

from reservations.core.config import settings

logger = logging.getLogger(__name__)


class ResourceLocks:
    """Lazily created ``threading.Lock`` per resource name."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, name: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = threading.Lock()
                self._locks[name] = lock
            return lock

    @contextmanager
    def hold(self, name: str) -> Iterator[None]:
        lock = self._lock_for(name)
        with lock:
            logger.debug(f"Acquired booking lock for resource {name!r}")
            yield


_locks = ResourceLocks()


def booking_guard(resource_name: str):
    """Lock around the conflict check and append when hardening is enabled."""
    if settings.BOOKING_LOCK_ENABLED:
        return _locks.hold(resource_name)
    return nullcontext()
