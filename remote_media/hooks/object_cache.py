"""In-memory object cache — development stub for ObjectCache.

Python dict-backed key/value storage. TTL is enforced on read: get checks
the entry's expiry and lazily deletes stale entries. No background
sweeper — a per-process stub that loses data on restart doesn't need one.

HOST: Replace this with your shared object cache. Subclass ObjectCache
from remote_media.hooks.interfaces, or use RedisObjectCache.

Tier 2 service module: imports from remote_media.hooks.interfaces (Tier 1).

Usage:
    from remote_media.hooks.object_cache import InMemoryObjectCache

    cache = InMemoryObjectCache()
    cache.set("abc123", "[42]", "remest_cache_group", ttl=604800)
    cache.get("abc123", "remest_cache_group")  # ("[42]", True)
"""

import time
from collections.abc import Callable
from typing import Any

from remote_media.hooks.interfaces import ObjectCache


class InMemoryObjectCache(ObjectCache):
    """STUB — dict-backed cache, per process, loses data on restart.

    Entries are keyed by (group, key) tuples and carry an absolute expiry
    on the injected clock (time.monotonic by default). An expiry of None
    means the entry never expires.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialises an empty cache.

        Args:
            clock: Source of the current time in seconds. Tests pass a
                fake clock to step past TTLs without sleeping.
        """
        self._clock = clock
        self._entries: dict[tuple[str, str], tuple[Any, float | None]] = {}

    def get(self, key: str, group: str) -> tuple[Any, bool]:
        entry = self._entries.get((group, key))
        if entry is None:
            return None, False
        value, expires_at = entry
        if expires_at is not None and expires_at <= self._clock():
            del self._entries[(group, key)]
            return None, False
        return value, True

    def set(self, key: str, value: Any, group: str, ttl: int) -> None:
        expires_at = self._clock() + ttl if ttl > 0 else None
        self._entries[(group, key)] = (value, expires_at)

    def __len__(self) -> int:
        return len(self._entries)
