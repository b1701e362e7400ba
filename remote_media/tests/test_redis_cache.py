"""Tests for remote_media.hooks.redis_cache — Redis ObjectCache adapter.

Uses a MagicMock in place of the redis-py client; no server needed.
"""

from unittest.mock import MagicMock

import pytest
import redis

from remote_media.core.lookup_cache import LookupCache
from remote_media.hooks.interfaces import CacheUnavailableError
from remote_media.hooks.redis_cache import RedisObjectCache


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(spec=redis.Redis)


@pytest.fixture
def cache(client) -> RedisObjectCache:
    return RedisObjectCache(client)


class TestGet:
    def test_hit(self, cache, client) -> None:
        client.get.return_value = '{"kind":"scalar","value":"x"}'
        assert cache.get("abc", "remest_cache_group") == ('{"kind":"scalar","value":"x"}', True)
        client.get.assert_called_once_with("remest_cache_group:abc")

    def test_miss(self, cache, client) -> None:
        client.get.return_value = None
        assert cache.get("abc", "g") == (None, False)

    def test_connection_error_raises_unavailable(self, cache, client) -> None:
        client.get.side_effect = redis.ConnectionError("refused")
        with pytest.raises(CacheUnavailableError):
            cache.get("abc", "g")


class TestSet:
    def test_set_with_ttl_uses_setex(self, cache, client) -> None:
        cache.set("abc", "v", "g", 604800)
        client.setex.assert_called_once_with("g:abc", 604800, "v")
        client.set.assert_not_called()

    def test_set_without_ttl(self, cache, client) -> None:
        cache.set("abc", "v", "g", 0)
        client.set.assert_called_once_with("g:abc", "v")

    def test_timeout_raises_unavailable(self, cache, client) -> None:
        client.setex.side_effect = redis.TimeoutError("slow")
        with pytest.raises(CacheUnavailableError):
            cache.set("abc", "v", "g", 10)


class TestAvailability:
    def test_ping_ok(self, cache, client) -> None:
        client.ping.return_value = True
        assert cache.is_available() is True

    def test_ping_fails(self, cache, client) -> None:
        client.ping.side_effect = redis.ConnectionError("down")
        assert cache.is_available() is False


class TestFromUrl:
    def test_builds_decoding_client(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake_client = MagicMock(spec=redis.Redis)
        from_url = MagicMock(return_value=fake_client)
        monkeypatch.setattr(redis, "from_url", from_url)
        cache = RedisObjectCache.from_url("redis://cache:6379/2")
        from_url.assert_called_once_with("redis://cache:6379/2", decode_responses=True)
        assert cache._client is fake_client


class TestWithLookupCache:
    def test_outage_falls_back_to_compute(self, cache, client) -> None:
        client.get.side_effect = redis.ConnectionError("refused")
        client.setex.side_effect = redis.ConnectionError("refused")
        lookup = LookupCache(cache, group="g", ttl=60)
        assert lookup.get_or_compute("k", lambda: [42]) == [42]

    def test_roundtrip_through_stored_string(self, cache, client) -> None:
        stored = {}
        client.setex.side_effect = lambda key, ttl, value: stored.__setitem__(key, value)
        client.get.side_effect = lambda key: stored.get(key)
        lookup = LookupCache(cache, group="g", ttl=60, site_id="2")
        assert lookup.get_or_compute("k", lambda: [42]) == [42]
        assert "g:k_2" in stored
        assert lookup.get_or_compute("k", lambda: [0]) == [42]
