"""Horizontal mip strip helpers.

A mip strip packs an image and its successive half-size reductions side by
side: level 0 occupies the left (cols + 1) // 2 columns, and every further
level sits immediately right of the previous one at half its width and
height, aligned to the top row.
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def max_mip_level(width: int) -> int:
    """Number of halvings of level 0 before a strip `width` columns wide collapses.

    Equals floor(log2((width + 1) // 2)), 0 for strips narrower than 3 columns.
    """
    if width < 0:
        raise ValueError(f"Width must be non-negative, got {width}")
    return max(0, ((width + 1) // 2).bit_length() - 1)


def mip_roi(matrix: np.ndarray, level: int) -> np.ndarray:
    """Return a view of mip `level` inside a strip.

    Levels beyond max_mip_level() give degenerate (empty) views.
    """
    if level < 0:
        raise ValueError(f"Mip level must be non-negative, got {level}")

    w = (matrix.shape[1] + 1) // 2
    h = matrix.shape[0]
    x = 0
    for _ in range(level):
        x += w
        w //= 2
        h //= 2

    return matrix[0:h, x:x + w]


def build_mip_strip(image: np.ndarray) -> np.ndarray:
    """Pack `image` and its half-size reductions into a mip strip.

    The strip is (h, 2w - 1) and zero outside the mip rectangles, so that
    mip_roi(strip, level) returns each reduction.
    """
    if image.ndim not in (2, 3) or image.shape[0] == 0 or image.shape[1] == 0:
        raise ValueError(f"Cannot build mip strip from image of shape {image.shape}")

    height, width = image.shape[:2]
    strip = np.zeros((height, 2 * width - 1) + image.shape[2:], dtype=image.dtype)

    level = 0
    current = image
    while True:
        roi = mip_roi(strip, level)
        h, w = roi.shape[:2]
        if h == 0 or w == 0:
            break
        if current.shape[:2] != (h, w):
            current = cv2.resize(image, (w, h), interpolation=cv2.INTER_AREA)
            if image.ndim == 3 and current.ndim == 2:
                current = current[:, :, np.newaxis]
        roi[...] = current
        level += 1

    logger.debug(f"Built mip strip {strip.shape} with {level} levels from {image.shape}")
    return strip
