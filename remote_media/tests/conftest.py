"""Shared test fixtures for the rewrite engine.

Factory-pattern fixtures that return callables accepting **overrides,
plus small test doubles for the host's services.

Fixtures:
    make_settings: Factory for Settings instances (origin from a URL string)
    attachment_store: Fresh InMemoryAttachmentStore
    object_cache: Fresh InMemoryObjectCache on a controllable clock
    fake_clock: The clock driving object_cache
    make_plugin: Factory for a built (unregistered) RemoteMediaPlugin
"""

from typing import Any

import pytest

from remote_media.config import DEFAULT_CACHE_TTL, DEFAULT_PREFIX, Settings, parse_remote_origin
from remote_media.hooks.attachments import InMemoryAttachmentStore
from remote_media.hooks.events import HostEvents
from remote_media.hooks.interfaces import AttachmentStore, CacheUnavailableError, ObjectCache
from remote_media.hooks.object_cache import InMemoryObjectCache
from remote_media.plugin import build_plugin

ORIGIN_URL = "https://cdn.example.com"
STAGING_PHOTO_URL = "https://staging.example.com/wp-content/uploads/2019/01/photo.jpg"
PHOTO_PATH = "/wp-content/uploads/2019/01/photo.jpg"


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class UnavailableObjectCache(ObjectCache):
    """Object cache whose backend is always down."""

    def __init__(self) -> None:
        self.get_calls = 0
        self.set_calls = 0

    def get(self, key: str, group: str) -> tuple[Any, bool]:
        self.get_calls += 1
        raise CacheUnavailableError("connection refused")

    def set(self, key: str, value: Any, group: str, ttl: int) -> None:
        self.set_calls += 1
        raise CacheUnavailableError("connection refused")


class CountingAttachmentStore(AttachmentStore):
    """Wraps an AttachmentStore and counts queries."""

    def __init__(self, inner: AttachmentStore) -> None:
        self.inner = inner
        self.queries: list[str] = []

    def find_ids_by_locator(self, fragment: str) -> list[int]:
        self.queries.append(fragment)
        return self.inner.find_ids_by_locator(fragment)


# ---------------------------------------------------------------------------
# Settings factory
# ---------------------------------------------------------------------------


@pytest.fixture
def make_settings():
    """Returns a factory for Settings.

    Pass origin_url (a raw string, validated the same way as the
    environment value) instead of a RemoteOrigin.
    """

    def _make(origin_url: str | None = ORIGIN_URL, **overrides) -> Settings:
        defaults = {
            "origin": parse_remote_origin(origin_url),
            "cache_ttl": DEFAULT_CACHE_TTL,
            "prefix": DEFAULT_PREFIX,
            "site_id": None,
            "redis_url": "",
            "log_level": "info",
        }
        defaults.update(overrides)
        return Settings(**defaults)

    return _make


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


@pytest.fixture
def attachment_store() -> InMemoryAttachmentStore:
    return InMemoryAttachmentStore()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def object_cache(fake_clock) -> InMemoryObjectCache:
    return InMemoryObjectCache(clock=fake_clock)


# ---------------------------------------------------------------------------
# Wired plugin factory
# ---------------------------------------------------------------------------


@pytest.fixture
def make_plugin(make_settings, attachment_store, object_cache):
    """Returns a factory for a built, unregistered RemoteMediaPlugin.

    Defaults: origin https://cdn.example.com, the shared in-memory
    attachment store and object cache, fresh local host events.
    """

    def _make(settings: Settings | None = None, **overrides):
        parts = {
            "settings": settings or make_settings(),
            "events": HostEvents.local(),
            "store": attachment_store,
            "meta": attachment_store,
            "cache_store": object_cache,
        }
        parts.update(overrides)
        return build_plugin(**parts)

    return _make
