"""Redis-based cache for short-lived records such as undo snapshots."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Optional

import redis
from redis.exceptions import ConnectionError, RedisError

from reservations.core.config import settings

logger = logging.getLogger(__name__)

# Redis connection pool
_redis_pool: Optional[redis.ConnectionPool] = None
_redis_client: Optional[redis.Redis] = None


def _get_redis_client() -> redis.Redis | "_InMemoryCache":
    """Get or create Redis client."""
    global _redis_client, _redis_pool

    if settings.CACHE_BACKEND == "memory":
        return _InMemoryCache()

    if _redis_client is None:
        try:
            _redis_pool = redis.ConnectionPool.from_url(
                settings.REDIS_CACHE_URL,
                max_connections=50,
                decode_responses=True,
            )
            client = redis.Redis(connection_pool=_redis_pool)
            # Test connection
            client.ping()
            _redis_client = client
            logger.info(f"Redis cache connected: {settings.REDIS_CACHE_URL}")
        except (ConnectionError, RedisError) as e:
            logger.warning(f"Failed to connect to Redis cache: {e}. Using fallback in-memory cache.")
            # Fallback to in-memory cache if Redis is unavailable
            return _InMemoryCache()

    return _redis_client


class _InMemoryCache:
    """Fallback in-memory cache when Redis is unavailable. Honors expiry."""

    def __init__(self):
        self._cache: dict[str, tuple[Any, Optional[float]]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= time.monotonic():
            self._cache.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any, ex: Optional[int] = None) -> None:
        expires_at = time.monotonic() + ex if ex else None
        self._cache[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        self._cache.pop(key, None)


class RedisCache:
    """Redis-based cache with TTL support."""

    def __init__(self, default_ttl: int = 300):
        """
        Initialize cache.

        Args:
            default_ttl: Default time-to-live in seconds (default: 5 minutes)
        """
        self.default_ttl = default_ttl
        self._client = _get_redis_client()

    @property
    def in_memory(self) -> bool:
        return isinstance(self._client, _InMemoryCache)

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        try:
            if self.in_memory:
                return self._client.get(key)

            value = self._client.get(key)
            if value is None:
                return None

            # Try to deserialize JSON
            try:
                return json.loads(value)
            except (json.JSONDecodeError, TypeError):
                # If not JSON, return as string
                return value
        except (ConnectionError, RedisError) as e:
            logger.warning(f"Redis cache get error for key {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Set value in cache with TTL."""
        try:
            ttl = ttl or self.default_ttl

            if self.in_memory:
                self._client.set(key, value, ex=ttl)
                return

            # Serialize to JSON if needed
            if isinstance(value, (dict, list)):
                serialized = json.dumps(value)
            else:
                serialized = str(value)

            self._client.setex(key, ttl, serialized)
        except (ConnectionError, RedisError) as e:
            logger.warning(f"Redis cache set error for key {key}: {e}")

    def delete(self, key: str) -> None:
        """Delete key from cache."""
        try:
            self._client.delete(key)
        except (ConnectionError, RedisError) as e:
            logger.warning(f"Redis cache delete error for key {key}: {e}")


_cache: Optional[RedisCache] = None


def get_cache() -> RedisCache:
    """Get global cache instance, connecting on first use."""
    global _cache
    if _cache is None:
        _cache = RedisCache(default_ttl=settings.UNDO_TTL_SECONDS)
    return _cache


def reset_cache() -> None:
    """Drop the global cache instance so the next call reconnects."""
    global _cache
    _cache = None
