from __future__ import annotations
from typing import Callable, Hashable

from PySide6.QtCore import QAbstractItemModel, Qt

from ..services.event_bus import Subscription
from ..services.interfaces import ChangeKind, IItemSource, ListChange


class QtItemSource(IItemSource):
    """Presents one column of a Qt item model as an ordered card source."""

    def __init__(self, model: QAbstractItemModel, column: int = 0,
                 role: Qt.ItemDataRole = Qt.ItemDataRole.DisplayRole):
        self._model = model
        self._column = column
        self._role = role

    @property
    def model(self) -> QAbstractItemModel:
        return self._model

    def __len__(self) -> int:
        return self._model.rowCount()

    def __getitem__(self, index: int) -> Hashable:
        count = len(self)
        if index < 0:
            index += count
        if not 0 <= index < count:
            raise IndexError(f"Row {index} out of range for {count} rows")
        return self._model.data(self._model.index(index, self._column), self._role)

    def subscribe(self, handler: Callable[[ListChange], None]) -> Subscription:
        def on_inserted(parent, first, last):
            handler(ListChange(ChangeKind.ADDED, first, last))

        def on_removed(parent, first, last):
            handler(ListChange(ChangeKind.REMOVED, first, last))

        def on_data_changed(top_left, bottom_right, roles=()):
            handler(ListChange(ChangeKind.CHANGED, top_left.row(), bottom_right.row()))

        def on_reset(*args):
            handler(ListChange(ChangeKind.CHANGED))

        connections = [
            (self._model.rowsInserted, on_inserted),
            (self._model.rowsRemoved, on_removed),
            (self._model.dataChanged, on_data_changed),
            (self._model.modelReset, on_reset),
            (self._model.layoutChanged, on_reset),
        ]
        for signal, slot in connections:
            signal.connect(slot)

        def release():
            for signal, slot in connections:
                signal.disconnect(slot)

        return Subscription(release)
