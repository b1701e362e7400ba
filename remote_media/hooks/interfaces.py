"""Hook interfaces — abstract base classes for the host platform's services.

These ABCs define the contracts between the rewrite engine and the
content platform it runs inside. The engine never talks to the host's
database, object cache or event system directly; it is handed objects
satisfying these interfaces at activation time.

Each one has a stub implementation (in-memory, for development and
tests) and at least one production-shaped implementation (Redis for the
object cache, SQLite for attachments) in the sibling modules.

Tier 1 leaf module: imports only from abc, typing (stdlib) and
remote_media.schemas (also Tier 1). No project services, no orchestration.

HOST: To plug in your platform, subclass the relevant ABC and implement
every abstract method. Python will raise TypeError at instantiation if
any method is missing.

Usage:
    from remote_media.hooks.interfaces import ObjectCache, AttachmentStore
    from remote_media.hooks.interfaces import AttachmentMetaStore, FilterEvent, ActionEvent
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from remote_media.schemas import AttachmentId


class CacheUnavailableError(Exception):
    """The object cache backend could not be reached.

    ObjectCache implementations raise this (and only this) for transport
    or server failures. Callers treat it as a cache miss — a lookup must
    still succeed without the cache, only slower.
    """


# ---------------------------------------------------------------------------
# Object cache (key/value with TTL)
# ---------------------------------------------------------------------------


class ObjectCache(ABC):
    """Key/value cache with per-entry TTL, partitioned into groups.

    Values written by the engine are always strings (encoded cache
    envelopes), but implementations should store whatever they are given
    and hand it back unchanged.

    HOST: Replace the stub (InMemoryObjectCache) with your shared cache.
    RedisObjectCache is provided for Redis deployments.
    """

    @abstractmethod
    def get(self, key: str, group: str) -> tuple[Any, bool]:
        """Reads a live entry.

        Args:
            key: Entry key, unique within the group.
            group: Cache group (namespace) the key lives in.

        Returns:
            (value, True) on a hit, (None, False) on a miss or when the
            entry has expired. A stored None is still a hit.

        Raises:
            CacheUnavailableError: If the backend cannot be reached.
        """
        ...

    @abstractmethod
    def set(self, key: str, value: Any, group: str, ttl: int) -> None:
        """Creates or overwrites an entry.

        Args:
            key: Entry key, unique within the group.
            value: Value to store.
            group: Cache group (namespace) the key lives in.
            ttl: Lifetime in seconds. Zero or less means no expiry.

        Raises:
            CacheUnavailableError: If the backend cannot be reached.
        """
        ...


# ---------------------------------------------------------------------------
# Attachment records
# ---------------------------------------------------------------------------


class AttachmentStore(ABC):
    """Read-only query over the host's attachment records.

    HOST: Replace the stub (InMemoryAttachmentStore) with a query over
    your media table. SQLiteAttachmentStore shows the SQL shape.
    """

    @abstractmethod
    def find_ids_by_locator(self, fragment: str) -> list[AttachmentId]:
        """Finds attachments whose stored locator contains a substring.

        The match is a plain substring match — no wildcards. This is
        deliberately loose so size-suffixed variants and differing hosts
        still find their record.

        Args:
            fragment: Substring to look for, usually a URL path.

        Returns:
            Matching attachment ids in ascending order. Empty if none.
        """
        ...


class AttachmentMetaStore(ABC):
    """Per-attachment key/value metadata owned by the host.

    HOST: Replace the stub with your metadata table. Values may be any
    JSON-compatible type. Reading an unset field returns None.
    """

    @abstractmethod
    def get_meta(self, attachment_id: AttachmentId, field: str) -> Any:
        """Reads one metadata field.

        Args:
            attachment_id: The attachment the field belongs to.
            field: Metadata key.

        Returns:
            The stored value, or None if the field has never been set.
        """
        ...

    @abstractmethod
    def set_meta(self, attachment_id: AttachmentId, field: str, value: Any) -> None:
        """Creates or overwrites one metadata field.

        Args:
            attachment_id: The attachment the field belongs to.
            field: Metadata key.
            value: Value to store.
        """
        ...


# ---------------------------------------------------------------------------
# Host events
# ---------------------------------------------------------------------------


class FilterEvent(ABC):
    """A value-transforming event raised by the host.

    Registered handlers run in priority order (lower first, ties in
    registration order); each receives the previous handler's output.
    """

    @abstractmethod
    def register(self, handler: Callable[..., Any], priority: int = 10) -> None:
        """Adds a handler. Registering the same handler twice is a no-op."""
        ...

    @abstractmethod
    def unregister(self, handler: Callable[..., Any]) -> None:
        """Removes a handler. No-op if it was never registered."""
        ...

    @abstractmethod
    def apply(self, value: Any, *args: Any) -> Any:
        """Runs the value through every handler and returns the result."""
        ...


class ActionEvent(ABC):
    """A notification event raised by the host. Handlers return nothing."""

    @abstractmethod
    def register(self, handler: Callable[..., Any], priority: int = 10) -> None:
        """Adds a handler. Registering the same handler twice is a no-op."""
        ...

    @abstractmethod
    def unregister(self, handler: Callable[..., Any]) -> None:
        """Removes a handler. No-op if it was never registered."""
        ...

    @abstractmethod
    def fire(self, *args: Any) -> None:
        """Calls every handler with the event arguments."""
        ...
