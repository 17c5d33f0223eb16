from __future__ import annotations
from pathlib import Path
from typing import Tuple

import numpy as np

# Display width every card image is scaled to
DEFAULT_CARD_WIDTH = 150


def lookup_key(item) -> str:
    '''Card name as used by image providers: the item's text, case-folded.'''
    return str(item).casefold()


def imread_unicode(path: Path):
    '''cv2.imdecode + np.fromfile (Windows-unicode safe). Returns None if undecodable.'''
    import cv2

    data = np.fromfile(str(path), dtype=np.uint8)
    if data.size == 0:
        return None
    return cv2.imdecode(data, cv2.IMREAD_COLOR)


def image_size(image) -> Tuple[int, int]:
    '''(width, height) of a decoded image array.'''
    return int(image.shape[1]), int(image.shape[0])


def scaled_height(width: int, height: int, target_width: int) -> int:
    return max(1, height * target_width // width)


def scale_to_width(image, target_width: int = DEFAULT_CARD_WIDTH):
    '''Resize to target_width, keeping the aspect ratio.'''
    import cv2

    w, h = image_size(image)
    if w == target_width:
        return image
    new_h = scaled_height(w, h, target_width)
    return cv2.resize(image, (target_width, new_h), interpolation=cv2.INTER_AREA)
