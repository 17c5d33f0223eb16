from __future__ import annotations
import math
import logging
from typing import Any, Hashable

from cachetools import Cache

from .card_io import DEFAULT_CARD_WIDTH, image_size, lookup_key, scale_to_width
from .errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


class CardImageCache:
    """Card item -> display-scaled image, loaded on first use.

    Entries are never evicted or reloaded, so the same item always yields the
    same (read-only) array. Memory grows with the number of distinct items,
    which assumes a small, closed card catalog rather than arbitrary input.
    """

    def __init__(self, provider, card_width: int = DEFAULT_CARD_WIDTH):
        if card_width <= 0:
            raise InvalidConfigurationError(f"Card width must be positive, got {card_width}")
        self._provider = provider
        self._card_width = card_width
        self._images = Cache(maxsize=math.inf)

    @property
    def card_width(self) -> int:
        return self._card_width

    def resolve(self, item: Hashable) -> Any:
        """Return the image for item, asking the provider on a miss.

        Raises ImageNotFoundError (uncached, so the next call retries).
        """
        image = self._images.get(item)
        if image is not None:
            return image

        key = lookup_key(item)
        logger.debug(f"Loading card image '{key}'")
        raw = self._provider.load_image(key)
        image = scale_to_width(raw, self._card_width)
        if image is raw:
            # Provider keeps ownership of what it handed out
            image = raw.copy()
        image.setflags(write=False)

        self._images[item] = image
        w, h = image_size(image)
        logger.debug(f"Cached card image '{key}' at {w}x{h}")
        return image

    def resource_uri(self, item: Hashable):
        """Addressable location of the item's image, if the provider has one."""
        locate = getattr(self._provider, "resource_uri", None)
        if locate is None:
            return None
        return locate(lookup_key(item))

    def __contains__(self, item) -> bool:
        return item in self._images

    def __len__(self) -> int:
        return len(self._images)
