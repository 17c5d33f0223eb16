"""Shared fixtures for the card stack tests.

FakeProvider hands out solid-grey BGR arrays of configurable size and
records every key it is asked for, so tests can count provider calls.
"""

import os

# Qt tests need a platform plugin even on headless CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from typing import Dict, List, Optional, Set, Tuple

import numpy as np
import pytest

from card_stack.core.errors import ImageNotFoundError
from card_stack.services.interfaces import IImageProvider, IRenderSurface
from card_stack.services.item_model import CardListModel


class FakeProvider(IImageProvider):
    def __init__(self, sizes: Optional[Dict[str, Tuple[int, int]]] = None,
                 default: Tuple[int, int] = (150, 200), with_uri: bool = True):
        self.sizes = dict(sizes or {})
        self.default = default
        self.with_uri = with_uri
        self.missing: Set[str] = set()
        self.calls: List[str] = []

    def load_image(self, key: str):
        self.calls.append(key)
        if key in self.missing:
            raise ImageNotFoundError(key)
        w, h = self.sizes.get(key, self.default)
        return np.full((h, w, 3), 128, dtype=np.uint8)

    def resource_uri(self, key: str):
        return f"file:///cards/{key}.jpg" if self.with_uri else None


class RecordingSurface(IRenderSurface):
    def __init__(self):
        self.draws = []

    def draw_image(self, image, x: int, y: int) -> None:
        self.draws.append((image, x, y))


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def kingdom():
    """The three-card example: every image 150x200."""
    return CardListModel(["Market", "Bazaar", "Festival"])


@pytest.fixture
def repaints():
    calls = []

    def on_repaint():
        calls.append(1)

    on_repaint.calls = calls
    return on_repaint
