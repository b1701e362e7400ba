"""Lookup cache — cache-or-compute over the host's object cache.

Memoizes the results of expensive lookups (attachment queries) for a
fixed TTL. Results are wrapped in a tagged envelope before they are
written, so decoding never has to guess whether a stored string is a
plain value or a serialized one:

- str, int, float, None  -> ScalarEntry, value stored verbatim
- bool, list, tuple, dict, pydantic models -> SerializedEntry, JSON payload

The cache changes latency, never results. A backend that raises
CacheUnavailableError, or an entry that cannot be decoded, degrades to
calling compute directly. Concurrent misses on the same key each compute
and the last write wins; compute is expected to be idempotent.

Tier 2 module: imports from remote_media.hooks.interfaces and
remote_media.schemas (Tier 1).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel

from remote_media.hooks.interfaces import CacheUnavailableError, ObjectCache
from remote_media.schemas import ScalarEntry, SerializedEntry, envelope_adapter

logger = logging.getLogger("remote_media")

T = TypeVar("T")

_MISS = object()


def encode_value(value: Any) -> str:
    """Wraps a value in a cache envelope and returns its JSON form.

    Raises:
        TypeError: If a composite value holds something JSON can't encode.
        ValueError: If a composite value is circular or holds NaN-like
            data JSON rejects.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float, type(None))):
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        entry: ScalarEntry | SerializedEntry = SerializedEntry(
            payload=json.dumps(value, allow_nan=False)
        )
    else:
        entry = ScalarEntry(value=value)
    return entry.model_dump_json()


def decode_value(raw: Any) -> Any:
    """Unwraps a stored envelope.

    Raises:
        ValueError: If raw is not a valid envelope (pydantic's
            ValidationError and json's JSONDecodeError both subclass it).
    """
    if not isinstance(raw, (str, bytes, bytearray)):
        raise ValueError(f"Cache entry is {type(raw).__name__}, expected an encoded envelope")
    entry = envelope_adapter.validate_json(raw)
    if isinstance(entry, SerializedEntry):
        return json.loads(entry.payload)
    return entry.value


class LookupCache:
    """Cache-or-compute helper scoped to one cache group (and site).

    Attributes:
        group: Cache group every key is written under.
        ttl: Default entry lifetime in seconds.
        site_id: Tenant id appended to keys on multi-site installs.
    """

    def __init__(
        self,
        store: ObjectCache,
        *,
        group: str,
        ttl: int,
        site_id: str | None = None,
    ) -> None:
        self._store = store
        self.group = group
        self.ttl = ttl
        self.site_id = site_id

    def scoped_key(self, key: str) -> str:
        """Appends the site id, so tenants sharing a cache never collide."""
        if self.site_id:
            return f"{key}_{self.site_id}"
        return key

    def get_or_compute(
        self, key: str, compute: Callable[[], T], ttl: int | None = None
    ) -> T:
        """Returns the cached value for key, computing and storing it on a miss.

        Args:
            key: Stable, already unique (typically hashed) lookup key.
            compute: Zero-argument producer, called only on a miss.
            ttl: Entry lifetime in seconds. Defaults to self.ttl.

        Returns:
            The cached or freshly computed value.
        """
        cache_key = self.scoped_key(key)

        cached = self._read(cache_key)
        if cached is not _MISS:
            return cached

        result = compute()
        self._write(cache_key, result, self.ttl if ttl is None else ttl)
        return result

    def _read(self, cache_key: str) -> Any:
        try:
            raw, hit = self._store.get(cache_key, self.group)
        except CacheUnavailableError as exc:
            logger.warning("Object cache unavailable on read (%s), computing directly.", exc)
            return _MISS
        if not hit:
            return _MISS
        try:
            return decode_value(raw)
        except ValueError:
            logger.debug("Discarding undecodable cache entry %s/%s.", self.group, cache_key)
            return _MISS

    def _write(self, cache_key: str, value: Any, ttl: int) -> None:
        try:
            encoded = encode_value(value)
        except (TypeError, ValueError) as exc:
            logger.warning("Not caching %s/%s: value is not serializable (%s).", self.group, cache_key, exc)
            return
        try:
            self._store.set(cache_key, encoded, self.group, ttl)
        except CacheUnavailableError as exc:
            logger.warning("Object cache unavailable on write (%s), result not cached.", exc)
