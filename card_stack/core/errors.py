from __future__ import annotations


class CardStackError(Exception):
    """Base class for errors raised by the card stack."""


class InvalidConfigurationError(CardStackError, ValueError):
    """A configuration value (vertical gap, card width, ...) was rejected."""


class ImageNotFoundError(CardStackError, LookupError):
    """The image provider could not resolve a card image."""

    def __init__(self, key: str, detail: str = ""):
        self.key = key
        message = f"No card image for '{key}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class IndexOutOfRangeError(CardStackError, IndexError):
    """Internal guard; hit testing clamps and checks so this never escapes."""
