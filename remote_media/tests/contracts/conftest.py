"""Fixtures for contract tests — one parameterized fixture per hook interface.

Each fixture yields a fresh implementation instance, once per param. A
host adding its own implementation adds a param value and an elif branch.

HOST: To test your implementation against the contracts:
    1. Add your param string (e.g., "mysql") to the params list.
    2. Add an elif branch that yields your implementation instance.
    3. Run: python -m pytest remote_media/tests/contracts/ -v
    All tests should pass. If any fail, your implementation doesn't satisfy
    the contract — read the failing test's docstring for what's expected.
"""

import pytest

from remote_media.hooks.attachments import InMemoryAttachmentStore
from remote_media.hooks.object_cache import InMemoryObjectCache
from remote_media.hooks.sqlite_store import SQLiteAttachmentStore


@pytest.fixture(params=["stub", "sqlite"])
def attachments(request, tmp_path):
    """Yields an object implementing AttachmentStore and AttachmentMetaStore,
    with an add_attachment(locator) -> id seeding helper."""
    if request.param == "stub":
        yield InMemoryAttachmentStore()
    elif request.param == "sqlite":
        store = SQLiteAttachmentStore(tmp_path / "media.db")
        store.initialize()
        yield store
        store.close()


@pytest.fixture(params=["stub"])
def object_cache_impl(request):
    """Yields an ObjectCache implementation.

    HOST: Add your cache here:
        @pytest.fixture(params=["stub", "memcached"])
        def object_cache_impl(request):
            if request.param == "stub":
                yield InMemoryObjectCache()
            elif request.param == "memcached":
                yield YourMemcachedCache(test_servers)
    """
    if request.param == "stub":
        yield InMemoryObjectCache()
