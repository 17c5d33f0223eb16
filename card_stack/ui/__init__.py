from .card_list import CardListWidget
from .main_window import CardStackWindow
from .qt_source import QtItemSource

__all__ = ['CardListWidget', 'CardStackWindow', 'QtItemSource']
