from __future__ import annotations
from typing import List, Optional

from PySide6.QtCore import QStringListModel, Qt
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QLineEdit, QMainWindow, QPushButton, QScrollArea,
    QSpinBox, QVBoxLayout, QWidget
)

from ..services.interfaces import IImageProvider, ILogger
from .card_list import CardListWidget
from .qt_source import QtItemSource


class CardStackWindow(QMainWindow):
    """Demo window: a card stack driven by an editable string list."""

    def __init__(self, provider: IImageProvider, cards: List[str], vgap: int, card_width: int,
                 logger: ILogger, title: str = "Card Stack", parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self._logger = logger

        self.model = QStringListModel(list(cards))
        self.card_list = CardListWidget(QtItemSource(self.model), provider, vgap, card_width, logger)
        self.card_list.setContentsMargins(4, 4, 4, 4)

        scroll = QScrollArea()
        scroll.setWidget(self.card_list)
        scroll.setWidgetResizable(True)
        scroll.setAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignHCenter)

        self.ed_name = QLineEdit()
        self.ed_name.setPlaceholderText("Card name")
        self.btn_add = QPushButton("Add")
        self.btn_remove = QPushButton("Remove top")
        self.btn_clear = QPushButton("Clear")
        self.spin_vgap = QSpinBox()
        self.spin_vgap.setRange(1, 500)
        self.spin_vgap.setValue(vgap)

        top = QHBoxLayout()
        top.addWidget(self.ed_name, 1)
        top.addWidget(self.btn_add)
        top.addWidget(self.btn_remove)
        top.addWidget(self.btn_clear)
        top.addWidget(QLabel("Offset:"))
        top.addWidget(self.spin_vgap)

        central = QWidget()
        lay = QVBoxLayout(central)
        lay.addLayout(top)
        lay.addWidget(scroll, 1)
        self.setCentralWidget(central)

        self.btn_add.clicked.connect(self.add_card)
        self.ed_name.returnPressed.connect(self.add_card)
        self.btn_remove.clicked.connect(self.remove_top)
        self.btn_clear.clicked.connect(self.clear_cards)
        self.spin_vgap.valueChanged.connect(self.card_list.set_vgap)
        self.model.modelReset.connect(self._update_status)
        self.model.rowsRemoved.connect(self._update_status)
        self._update_status()

    def add_card(self, name: Optional[str] = None) -> None:
        name = (name if isinstance(name, str) else self.ed_name.text()).strip()
        if not name:
            return
        self.model.setStringList(self.model.stringList() + [name])
        self.ed_name.clear()
        self._logger.debug(f"Added card '{name}'")

    def remove_top(self) -> None:
        count = self.model.rowCount()
        if count:
            self.model.removeRows(count - 1, 1)

    def clear_cards(self) -> None:
        self.model.setStringList([])

    def _update_status(self, *args) -> None:
        count = self.model.rowCount()
        word = 'card' if count == 1 else 'cards'
        self.statusBar().showMessage(f"{count} {word}")
