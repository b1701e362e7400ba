"""Redis-backed object cache — production ObjectCache.

Shares lookup results between every worker process that points at the
same Redis. Keys are namespaced "<group>:<key>" and expire server-side
via SETEX, so get() never has to check TTLs itself.

Every redis-py failure (connection refused, timeout, server error) is
re-raised as CacheUnavailableError. The lookup cache above treats that
as a miss, so a Redis outage slows lookups down but never breaks them.

Tier 2 service module: imports from remote_media.hooks.interfaces (Tier 1).

Usage:
    from remote_media.hooks.redis_cache import RedisObjectCache

    cache = RedisObjectCache.from_url("redis://localhost:6379/0")
"""

from typing import Any

import redis

from remote_media.hooks.interfaces import CacheUnavailableError, ObjectCache

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


class RedisObjectCache(ObjectCache):
    """ObjectCache over a redis-py client (decode_responses=True)."""

    def __init__(self, client: redis.Redis) -> None:
        """Wraps an existing client.

        Args:
            client: A redis.Redis instance. It should decode responses so
                values come back as str, matching what was stored.
        """
        self._client = client

    @classmethod
    def from_url(cls, url: str = DEFAULT_REDIS_URL) -> "RedisObjectCache":
        """Builds a cache from a Redis URL. No connection is made yet."""
        return cls(redis.from_url(url, decode_responses=True))

    @staticmethod
    def _make_key(key: str, group: str) -> str:
        return f"{group}:{key}"

    def get(self, key: str, group: str) -> tuple[Any, bool]:
        try:
            value = self._client.get(self._make_key(key, group))
        except redis.RedisError as exc:
            raise CacheUnavailableError(f"Redis GET failed: {exc}") from exc
        if value is None:
            return None, False
        return value, True

    def set(self, key: str, value: Any, group: str, ttl: int) -> None:
        redis_key = self._make_key(key, group)
        try:
            if ttl > 0:
                self._client.setex(redis_key, ttl, value)
            else:
                self._client.set(redis_key, value)
        except redis.RedisError as exc:
            raise CacheUnavailableError(f"Redis SET failed: {exc}") from exc

    def is_available(self) -> bool:
        """Pings the server. False on any Redis error."""
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
