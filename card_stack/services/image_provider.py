"""
File-backed image provider.
Cards are looked up as <image_dir>/<case-folded name><extension>.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Optional

from ..core.card_io import imread_unicode
from ..core.errors import ImageNotFoundError
from .interfaces import IImageProvider, ILogger
from .logging_service import NullLogger


class DirectoryImageProvider(IImageProvider):
    """Loads card scans from a single directory."""

    def __init__(self, image_dir: Path, extension: str = ".jpg", logger: Optional[ILogger] = None):
        self._image_dir = Path(image_dir)
        self._extension = extension if extension.startswith('.') else '.' + extension
        self._logger = logger or NullLogger()

    @property
    def image_dir(self) -> Path:
        return self._image_dir

    def path_for(self, key: str) -> Path:
        return self._image_dir / f"{key}{self._extension}"

    def load_image(self, key: str) -> Any:
        path = self.path_for(key)
        if not path.is_file():
            raise ImageNotFoundError(key, f"missing file {path}")

        self._logger.debug(f"Decoding card image: {path}")
        image = imread_unicode(path)
        if image is None:
            raise ImageNotFoundError(key, f"cannot decode {path}")
        return image

    def resource_uri(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.is_file():
            return None
        return path.resolve().as_uri()
