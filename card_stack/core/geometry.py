from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Hashable


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def translated(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    def grown(self, insets: "Insets") -> "Size":
        return Size(self.width + insets.left + insets.right,
                    self.height + insets.top + insets.bottom)


@dataclass(frozen=True)
class Insets:
    """Border margins supplied by the host, added around the stack."""
    top: int = 0
    left: int = 0
    bottom: int = 0
    right: int = 0


@dataclass(frozen=True)
class DrawCommand:
    """Draw `image` with its top-left corner at (x, y)."""
    index: int
    item: Hashable
    image: Any
    x: int
    y: int
