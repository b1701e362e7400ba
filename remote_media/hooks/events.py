"""In-process host events — reference FilterEvent and ActionEvent.

A host that has its own hook system adapts it to the two ABCs; a host
that doesn't (tests, scripts, a small web app) can use these directly.
HostEvents bundles the three events the rewrite engine listens to.

Tier 2 service module: imports from remote_media.hooks.interfaces (Tier 1).

Usage:
    from remote_media.hooks.events import HostEvents

    events = HostEvents.local()
    url = events.attachment_url.apply(url)          # host asks for a display URL
    events.attachment_added.fire(attachment_id)     # host created an attachment
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from remote_media.hooks.interfaces import ActionEvent, FilterEvent

DEFAULT_PRIORITY = 10


class _HandlerList:
    """Priority-ordered, duplicate-free list of callables."""

    def __init__(self) -> None:
        self._handlers: list[tuple[int, int, Callable[..., Any]]] = []
        self._sequence = 0

    def add(self, handler: Callable[..., Any], priority: int) -> None:
        if any(existing == handler for _, _, existing in self._handlers):
            return
        self._handlers.append((priority, self._sequence, handler))
        self._sequence += 1
        self._handlers.sort(key=lambda entry: (entry[0], entry[1]))

    def remove(self, handler: Callable[..., Any]) -> None:
        self._handlers = [entry for entry in self._handlers if entry[2] != handler]

    def __iter__(self):
        # Snapshot, so a handler may unregister itself mid-dispatch.
        return iter([handler for _, _, handler in self._handlers])

    def __len__(self) -> int:
        return len(self._handlers)


class LocalFilterEvent(FilterEvent):
    """FilterEvent dispatched in the calling thread."""

    def __init__(self) -> None:
        self._handlers = _HandlerList()

    def register(self, handler: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._handlers.add(handler, priority)

    def unregister(self, handler: Callable[..., Any]) -> None:
        self._handlers.remove(handler)

    def apply(self, value: Any, *args: Any) -> Any:
        for handler in self._handlers:
            value = handler(value, *args)
        return value

    def __len__(self) -> int:
        return len(self._handlers)


class LocalActionEvent(ActionEvent):
    """ActionEvent dispatched in the calling thread. Handler errors propagate."""

    def __init__(self) -> None:
        self._handlers = _HandlerList()

    def register(self, handler: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._handlers.add(handler, priority)

    def unregister(self, handler: Callable[..., Any]) -> None:
        self._handlers.remove(handler)

    def fire(self, *args: Any) -> None:
        for handler in self._handlers:
            handler(*args)

    def __len__(self) -> int:
        return len(self._handlers)


@dataclass(frozen=True)
class HostEvents:
    """The host events the rewrite engine attaches to.

    Attributes:
        attachment_url: Filter over a single display URL (str -> str).
        image_srcset: Filter over a responsive source set
            (list[SrcsetSource] -> list[SrcsetSource]).
        attachment_added: Action fired with the new attachment id.
    """

    attachment_url: FilterEvent
    image_srcset: FilterEvent
    attachment_added: ActionEvent

    @classmethod
    def local(cls) -> "HostEvents":
        """Builds a bundle of fresh in-process events."""
        return cls(
            attachment_url=LocalFilterEvent(),
            image_srcset=LocalFilterEvent(),
            attachment_added=LocalActionEvent(),
        )
