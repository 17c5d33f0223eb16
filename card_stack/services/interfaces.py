"""
Abstract interfaces for the card stack services.
The stack core only talks to its collaborators through these contracts:
where images come from, which cards to show, where to draw them,
and where diagnostics go.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Optional


class ChangeKind(Enum):
    """The three ways an ordered item source can change."""
    ADDED = "items.added"
    REMOVED = "items.removed"
    CHANGED = "items.changed"


@dataclass(frozen=True)
class ListChange:
    """Notification payload; first/last are inclusive row bounds, -1 if unknown."""
    kind: ChangeKind
    first: int = -1
    last: int = -1


class ISubscription(ABC):
    """Handle returned by subscribe(); release() stops further notifications."""

    @property
    @abstractmethod
    def active(self) -> bool:
        pass

    @abstractmethod
    def release(self) -> None:
        pass


class IImageProvider(ABC):
    """Resolves a case-folded card name to a decoded image."""

    @abstractmethod
    def load_image(self, key: str) -> Any:
        """Return a decoded BGR array; raise ImageNotFoundError if unknown."""
        pass

    def resource_uri(self, key: str) -> Optional[str]:
        """URI the host can use to show the image (e.g. in a tooltip)."""
        return None


class IItemSource(ABC):
    """Observable ordered sequence of cards; index 0 is the bottom of the stack."""

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def __getitem__(self, index: int) -> Hashable:
        pass

    @abstractmethod
    def subscribe(self, handler: Callable[[ListChange], None]) -> ISubscription:
        """Deliver every ADDED/REMOVED/CHANGED notification to handler."""
        pass


class IRenderSurface(ABC):
    """Host drawing target for one render pass."""

    @abstractmethod
    def draw_image(self, image: Any, x: int, y: int) -> None:
        pass


class IEventBus(ABC):
    """Interface for event-driven communication between components."""

    @abstractmethod
    def subscribe(self, event_type: str, handler: Callable) -> ISubscription:
        """Subscribe to an event type."""
        pass

    @abstractmethod
    def publish(self, event_type: str, data: Any = None) -> None:
        """Publish an event."""
        pass


class ILogger(ABC):
    """Interface for logging operations."""

    @abstractmethod
    def debug(self, message: str, **kwargs) -> None:
        pass

    @abstractmethod
    def info(self, message: str, **kwargs) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs) -> None:
        pass

    @abstractmethod
    def error(self, message: str, exception: Optional[Exception] = None, **kwargs) -> None:
        pass


class IConfigService(ABC):
    """Interface for configuration management."""

    @abstractmethod
    def load_config(self) -> Dict[str, Any]:
        """Current configuration as a plain dict."""
        pass

    @abstractmethod
    def save_config(self, config: Dict[str, Any]) -> bool:
        pass

    @abstractmethod
    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting by dotted key, e.g. 'stack.vgap'."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: Any) -> None:
        pass
