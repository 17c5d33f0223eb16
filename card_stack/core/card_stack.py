from __future__ import annotations
import logging
from typing import Callable, Iterator, Optional

from ..services.interfaces import IImageProvider, IItemSource, IRenderSurface, ISubscription, ListChange
from .cache import CardImageCache
from .card_io import DEFAULT_CARD_WIDTH
from .geometry import DrawCommand, Insets, Point, Size
from .hit_test import CardPreview, HitTester
from .layout import DEFAULT_VGAP, StackLayoutEngine

logger = logging.getLogger(__name__)


class CardStack:
    """A list of card names shown as overlapping card images.

    Later cards are drawn over earlier ones, each shifted down by `vgap`, so
    only the header band of every covered card stays visible. The stack
    watches its item source and asks the host to repaint on any change; the
    image cache outlives source replacement.
    """

    def __init__(self, source: IItemSource, provider: IImageProvider, vgap: int = DEFAULT_VGAP,
                 card_width: int = DEFAULT_CARD_WIDTH, on_repaint: Optional[Callable[[], None]] = None):
        self._cache = CardImageCache(provider, card_width)
        self._layout = StackLayoutEngine(self._cache, vgap)
        self._hit_tester = HitTester(self._layout, self._cache)
        self._on_repaint = on_repaint or (lambda: None)
        self._insets = Insets()
        self._pinned_size: Optional[Size] = None
        self._source: Optional[IItemSource] = None
        self._subscription: Optional[ISubscription] = None
        self._closed = False
        self.set_source(source)

    # --- configuration -------------------------------------------------

    @property
    def source(self) -> IItemSource:
        return self._source

    def set_source(self, source: IItemSource) -> None:
        """Observe `source` instead of the current one; cached images are kept."""
        if source is None:
            raise ValueError("CardStack needs an item source")
        if self._subscription is not None:
            self._subscription.release()
        self._source = source
        self._subscription = source.subscribe(self._on_source_changed)
        self._closed = False
        logger.debug(f"Observing item source {source!r}")
        self._on_repaint()

    @property
    def vgap(self) -> int:
        return self._layout.vgap

    @vgap.setter
    def vgap(self, value: int) -> None:
        # A rejected value leaves the previous gap in place
        self._layout.vgap = value
        logger.debug(f"Vertical gap set to {self._layout.vgap}")
        self._on_repaint()

    @property
    def insets(self) -> Insets:
        return self._insets

    @insets.setter
    def insets(self, value: Insets) -> None:
        self._insets = value

    @property
    def pinned_size(self) -> Optional[Size]:
        return self._pinned_size

    @pinned_size.setter
    def pinned_size(self, value: Optional[Size]) -> None:
        """An explicit size wins over the computed one; None restores computing."""
        self._pinned_size = value

    @property
    def cache(self) -> CardImageCache:
        return self._cache

    # --- queries -------------------------------------------------------

    def preferred_size(self) -> Size:
        if self._pinned_size is not None:
            return self._pinned_size
        return self._layout.compute_bounds(self._source, self._insets)

    def iter_draw_commands(self) -> Iterator[DrawCommand]:
        return self._layout.iter_draw_commands(self._source, self._insets)

    def render(self, surface: IRenderSurface) -> None:
        for cmd in self.iter_draw_commands():
            surface.draw_image(cmd.image, cmd.x, cmd.y)

    def preview_at(self, point: Point) -> Optional[CardPreview]:
        """Card under a widget-local point, or None."""
        local = point.translated(-self._insets.left, -self._insets.top)
        return self._hit_tester.locate(self._source, local)

    # --- observation ---------------------------------------------------

    def _on_source_changed(self, change: ListChange) -> None:
        if self._closed:
            return
        self._on_repaint()

    def close(self) -> None:
        """Stop observing the source."""
        if self._subscription is not None:
            self._subscription.release()
            self._subscription = None
        self._closed = True
