"""
In-memory observable card list.
Mutations publish ADDED / REMOVED / CHANGED notifications through a private
event bus, mirroring what a toolkit list model would emit.
"""

from __future__ import annotations
from typing import Callable, Hashable, Iterable, Iterator, List, Optional

from .event_bus import EventBus, Subscription
from .interfaces import ChangeKind, IItemSource, ILogger, ListChange


class CardListModel(IItemSource):
    """Ordered card names; insertion order is the stacking order."""

    def __init__(self, items: Iterable[Hashable] = (), logger: Optional[ILogger] = None):
        self._items: List[Hashable] = list(items)
        self._bus = EventBus(logger)

    def subscribe(self, handler: Callable[[ListChange], None]) -> Subscription:
        return self._bus.subscribe_many([kind.value for kind in ChangeKind], handler)

    def subscriber_count(self) -> int:
        return self._bus.get_subscriber_count(ChangeKind.CHANGED.value)[ChangeKind.CHANGED.value]

    def _notify(self, kind: ChangeKind, first: int, last: int) -> None:
        self._bus.publish(kind.value, ListChange(kind, first, last))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Hashable:
        return self._items[index]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._items))

    def __setitem__(self, index: int, item: Hashable) -> None:
        self._items[index] = item
        row = index if index >= 0 else len(self._items) + index
        self._notify(ChangeKind.CHANGED, row, row)

    def append(self, item: Hashable) -> None:
        self._items.append(item)
        row = len(self._items) - 1
        self._notify(ChangeKind.ADDED, row, row)

    def extend(self, items: Iterable[Hashable]) -> None:
        new = list(items)
        if not new:
            return
        first = len(self._items)
        self._items.extend(new)
        self._notify(ChangeKind.ADDED, first, len(self._items) - 1)

    def insert(self, index: int, item: Hashable) -> None:
        n = len(self._items)
        # list.insert clamps out-of-range positions
        row = max(0, n + index) if index < 0 else min(index, n)
        self._items.insert(index, item)
        self._notify(ChangeKind.ADDED, row, row)

    def remove(self, item: Hashable) -> None:
        row = self._items.index(item)
        del self._items[row]
        self._notify(ChangeKind.REMOVED, row, row)

    def pop(self, index: int = -1) -> Hashable:
        row = index if index >= 0 else len(self._items) + index
        item = self._items.pop(index)
        self._notify(ChangeKind.REMOVED, row, row)
        return item

    def clear(self) -> None:
        if not self._items:
            return
        last = len(self._items) - 1
        self._items.clear()
        self._notify(ChangeKind.REMOVED, 0, last)

    def replace(self, items: Iterable[Hashable]) -> None:
        """Swap the whole contents in one CHANGED notification."""
        new = list(items)
        if not new and not self._items:
            return
        self._items = new
        self._notify(ChangeKind.CHANGED, 0, len(self._items) - 1)

    def __repr__(self) -> str:
        return f"CardListModel({self._items!r})"
