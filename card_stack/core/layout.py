from __future__ import annotations
import numbers
from typing import Iterator, Sequence

from .card_io import image_size
from .errors import InvalidConfigurationError
from .geometry import DrawCommand, Insets, Size

# Shows just the title band of a full-size card scan
DEFAULT_VGAP = 55


def validate_vgap(vgap) -> int:
    if isinstance(vgap, bool) or not isinstance(vgap, numbers.Integral):
        raise InvalidConfigurationError(f"Vertical gap must be an integer, got {vgap!r}")
    if vgap <= 0:
        raise InvalidConfigurationError(f"Vertical gap must be positive, got {vgap}")
    return int(vgap)


class StackLayoutEngine:
    """Positions of stacked cards and the box that contains them.

    Card i is drawn i * vgap below the content origin, so every card except
    the last shows only a vgap-high header band.
    """

    def __init__(self, cache, vgap: int = DEFAULT_VGAP):
        self._cache = cache
        self._vgap = validate_vgap(vgap)

    @property
    def vgap(self) -> int:
        return self._vgap

    @vgap.setter
    def vgap(self, value: int) -> None:
        self._vgap = validate_vgap(value)

    def offset_of(self, index: int) -> int:
        return index * self._vgap

    def compute_bounds(self, items: Sequence, insets: Insets = Insets()) -> Size:
        max_w = 0
        max_h = 0
        for i in range(len(items)):
            w, h = image_size(self._cache.resolve(items[i]))
            max_w = max(max_w, w)
            max_h = max(max_h, h + self.offset_of(i))
        return Size(max_w, max_h).grown(insets)

    def iter_draw_commands(self, items: Sequence, insets: Insets = Insets()) -> Iterator[DrawCommand]:
        """Back-to-front: later cards paint over earlier ones."""
        for i in range(len(items)):
            item = items[i]
            image = self._cache.resolve(item)
            yield DrawCommand(i, item, image, insets.left, insets.top + self.offset_of(i))
