"""Attachment resolver — maps an asset URL to the attachment it belongs to.

The URL's path is used as a substring query against stored locators,
through the lookup cache (keyed by the md5 of the path). Substring
matching is deliberately loose: the stored locator may carry a different
host, and it tolerates size-suffixed variants whose path still contains
the queried one. Two locators sharing a common substring can produce a
false positive; the lowest id wins.

Tier 2 module: imports from remote_media.core.lookup_cache,
remote_media.hooks.interfaces and remote_media.schemas.
"""

import hashlib
from urllib.parse import urlsplit

from remote_media.core.lookup_cache import LookupCache
from remote_media.hooks.interfaces import AttachmentStore
from remote_media.schemas import AttachmentId


def path_cache_key(path: str) -> str:
    """Hex md5 of a URL path — stable cache key for its lookup."""
    return hashlib.md5(path.encode("utf-8")).hexdigest()


class AttachmentResolver:
    """Resolves asset URLs to attachment ids, cache-assisted."""

    def __init__(self, store: AttachmentStore, cache: LookupCache) -> None:
        self._store = store
        self._cache = cache

    def resolve(self, url: str) -> AttachmentId | None:
        """Returns the attachment id an asset URL refers to.

        Negative results (no match) are cached like positive ones.

        Args:
            url: Absolute or relative asset URL.

        Returns:
            The first matching attachment id, or None if nothing matches
            or the URL has no path.

        Raises:
            ValueError: If the URL cannot be split into components.
                Callers that must not fail should guard for it.
        """
        path = urlsplit(url).path
        if not path:
            return None

        ids = self._cache.get_or_compute(
            path_cache_key(path),
            lambda: self._store.find_ids_by_locator(path),
        )
        if ids and ids[0]:
            return int(ids[0])
        return None
