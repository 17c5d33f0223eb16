"""
Event bus for the card stack.
Observer-pattern dispatch where every subscription is an explicit handle:
releasing it is the only way to stop delivery, and a released handler is
never called again, even mid-dispatch.
"""

from __future__ import annotations
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Optional

from .interfaces import IEventBus, ILogger, ISubscription
from .logging_service import NullLogger


class _HandlerEntry:
    __slots__ = ("handler", "active")

    def __init__(self, handler: Callable):
        self.handler = handler
        self.active = True


class Subscription(ISubscription):
    """Release handle; release() is idempotent."""

    def __init__(self, release: Callable[[], None]):
        self._release: Optional[Callable[[], None]] = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def release(self) -> None:
        if self._release is None:
            return
        release, self._release = self._release, None
        release()


class EventBus(IEventBus):
    """Concrete implementation of event bus."""

    def __init__(self, logger: Optional[ILogger] = None):
        self._logger = logger or NullLogger()
        self._handlers: Dict[str, List[_HandlerEntry]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: Callable) -> Subscription:
        """Subscribe to an event type."""
        return self.subscribe_many([event_type], handler)

    def subscribe_many(self, event_types: Iterable[str], handler: Callable) -> Subscription:
        """One handle covering several event types."""
        if not callable(handler):
            raise TypeError(f"Handler {handler!r} is not callable")

        entries = []
        for event_type in event_types:
            entry = _HandlerEntry(handler)
            self._handlers[event_type].append(entry)
            entries.append((event_type, entry))
            self._logger.debug(f"Subscribed to event '{event_type}'", handler=str(handler))

        def release() -> None:
            for event_type, entry in entries:
                self._remove(event_type, entry)

        return Subscription(release)

    def _remove(self, event_type: str, entry: _HandlerEntry) -> None:
        entry.active = False
        handlers = self._handlers.get(event_type)
        if not handlers:
            return
        if entry in handlers:
            handlers.remove(entry)
        if not handlers:
            del self._handlers[event_type]
        self._logger.debug(f"Unsubscribed from event '{event_type}'", handler=str(entry.handler))

    def publish(self, event_type: str, data: Any = None) -> None:
        """Call every active handler; one failing handler does not stop the rest."""
        for entry in list(self._handlers.get(event_type, ())):
            if not entry.active:
                continue
            try:
                entry.handler(data)
            except Exception as e:
                self._logger.error(
                    f"Error in event handler for '{event_type}'",
                    exception=e,
                    handler=str(entry.handler)
                )

    def get_subscriber_count(self, event_type: Optional[str] = None) -> Dict[str, int]:
        """Get count of subscribers for each event type."""
        if event_type:
            return {event_type: len(self._handlers.get(event_type, []))}

        return {et: len(handlers) for et, handlers in self._handlers.items()}
