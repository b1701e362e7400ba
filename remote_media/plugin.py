"""Plugin activation — wires the rewrite engine into a host.

The host hands over its event surface (HostEvents) and its stores; this
module builds the components from an explicit Settings object and
registers three plain handlers:

- attachment_url   -> UrlRewriter.rewrite
- image_srcset     -> UrlRewriter.rewrite_set
- attachment_added -> LocalityClassifier.mark_local

No globals: everything a handler needs is bound at construction. When
the remote origin is missing or invalid, activate() returns None and
registers nothing, so every URL is served unmodified.

Call bootstrap() once at process start; call activate() directly when
the host already has Settings and a cache.

Tier 3 orchestration module: imports from config (Tier 1), hooks/*
and core/* (Tier 2).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from remote_media.config import Settings, get_settings
from remote_media.core.locality import LocalityClassifier
from remote_media.core.lookup_cache import LookupCache
from remote_media.core.resolver import AttachmentResolver
from remote_media.core.rewriter import UrlRewriter
from remote_media.hooks.events import HostEvents
from remote_media.hooks.interfaces import AttachmentMetaStore, AttachmentStore, ObjectCache
from remote_media.hooks.object_cache import InMemoryObjectCache

logger = logging.getLogger("remote_media")


@dataclass
class RemoteMediaPlugin:
    """An activated rewrite engine and the host events it is attached to."""

    settings: Settings
    events: HostEvents
    rewriter: UrlRewriter
    classifier: LocalityClassifier
    resolver: AttachmentResolver
    cache: LookupCache
    registered: bool = field(default=False, init=False)

    def register(self) -> None:
        """Attaches the handlers to the host events. Idempotent."""
        if self.registered:
            return
        self.events.attachment_url.register(self.rewriter.rewrite)
        self.events.image_srcset.register(self.rewriter.rewrite_set)
        self.events.attachment_added.register(self.classifier.mark_local)
        self.registered = True

    def unregister(self) -> None:
        """Detaches the handlers. Idempotent."""
        if not self.registered:
            return
        self.events.attachment_url.unregister(self.rewriter.rewrite)
        self.events.image_srcset.unregister(self.rewriter.rewrite_set)
        self.events.attachment_added.unregister(self.classifier.mark_local)
        self.registered = False
        logger.info("Remote media rewriting deactivated.")


def build_plugin(
    settings: Settings,
    events: HostEvents,
    store: AttachmentStore,
    meta: AttachmentMetaStore,
    cache_store: ObjectCache,
) -> RemoteMediaPlugin:
    """Builds the component graph without registering anything."""
    cache = LookupCache(
        cache_store,
        group=settings.cache_group,
        ttl=settings.cache_ttl,
        site_id=settings.site_id,
    )
    resolver = AttachmentResolver(store, cache)
    classifier = LocalityClassifier(meta, meta_key=settings.local_meta_key)
    rewriter = UrlRewriter(settings.origin, resolver, classifier)
    return RemoteMediaPlugin(
        settings=settings,
        events=events,
        rewriter=rewriter,
        classifier=classifier,
        resolver=resolver,
        cache=cache,
    )


def activate(
    settings: Settings,
    events: HostEvents,
    store: AttachmentStore,
    meta: AttachmentMetaStore,
    cache_store: ObjectCache,
) -> RemoteMediaPlugin | None:
    """Builds and registers the plugin.

    Returns:
        The registered plugin, or None if the remote origin is not
        configured (nothing is registered in that case).
    """
    if not settings.enabled:
        return None

    plugin = build_plugin(settings, events, store, meta, cache_store)
    plugin.register()
    logger.info(
        "Remote media rewriting active: origin=%s, cache_ttl=%ds, site=%s",
        settings.origin.base_url,
        settings.cache_ttl,
        settings.site_id or "-",
    )
    return plugin


def _default_cache_store(settings: Settings) -> ObjectCache:
    """Redis when REMOTE_MEDIA_REDIS_URL is set and reachable, else a per-process dict."""
    if settings.redis_url:
        # Local import: redis is only needed when a Redis URL is configured.
        from remote_media.hooks.redis_cache import RedisObjectCache

        redis_cache = RedisObjectCache.from_url(settings.redis_url)
        if redis_cache.is_available():
            return redis_cache
        logger.warning("Redis object cache is not reachable, using an in-process lookup cache.")
    return InMemoryObjectCache()


def bootstrap(
    events: HostEvents,
    store: AttachmentStore,
    meta: AttachmentMetaStore,
    *,
    cache_store: ObjectCache | None = None,
    settings: Settings | None = None,
) -> RemoteMediaPlugin | None:
    """Process-start entry point: settings, logging, cache backend, activation."""
    settings = settings or get_settings()

    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

    if not settings.enabled:
        return None

    if cache_store is None:
        cache_store = _default_cache_store(settings)

    return activate(settings, events, store, meta, cache_store)
