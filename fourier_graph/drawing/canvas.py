"""Float canvas with anti-aliased, glowing line drawing.

Lines are accumulated in a linear float32 RGB buffer in [0, 1] and only
converted to 8-bit when the canvas is flattened with tonemap24().
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)

# Sub-pixel precision of line end points (cv2 fixed-point shift)
SUBPIXEL_SHIFT = 4
GLOW_STRENGTH = 0.35


@dataclass(frozen=True)
class Color:
    """Linear RGB color with components in [0, 1]."""

    r: float
    g: float
    b: float

    def as_array(self) -> np.ndarray:
        return np.array([self.r, self.g, self.b], dtype=np.float32)


def clip_segment(
    x1: float, y1: float, x2: float, y2: float,
    x_min: float, y_min: float, x_max: float, y_max: float,
) -> Optional[Tuple[float, float, float, float]]:
    """Clip a segment to a rectangle (Liang-Barsky), None if fully outside."""
    dx = x2 - x1
    dy = y2 - y1
    t0, t1 = 0.0, 1.0

    for p, q in ((-dx, x1 - x_min), (dx, x_max - x1), (-dy, y1 - y_min), (dy, y_max - y1)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)

    return x1 + t0 * dx, y1 + t0 * dy, x1 + t1 * dx, y1 + t1 * dy


class FloatCanvas:
    """Drawing surface for spectrum graphs."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._buffer = np.zeros((self.height, self.width, 3), dtype=np.float32)

    @property
    def buffer(self) -> np.ndarray:
        """Read-only view of the float RGB buffer"""
        view = self._buffer.view()
        view.flags.writeable = False
        return view

    def fill(self, color: Color) -> None:
        self._buffer[:, :] = color.as_array()

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: Color,
        width: float = 1.0,
        glow: float = 1.0,
        alpha: float = 1.0,
    ) -> None:
        """Blend an anti-aliased line segment into the canvas.

        Args:
            x1, y1, x2, y2: End points in canvas pixels (may lie outside)
            color: Line color
            width: Line thickness in pixels
            glow: Strength of the soft halo around the line (0 disables it)
            alpha: Opacity in [0, 1]
        """
        if not all(math.isfinite(v) for v in (x1, y1, x2, y2)):
            logger.debug(f"Skipping non-finite segment ({x1}, {y1}) -> ({x2}, {y2})")
            return
        if alpha <= 0:
            return

        sigma = max(width, 1.0)
        pad = width + (3.0 * sigma if glow > 0 else 0.0) + 2.0

        clipped = clip_segment(
            x1, y1, x2, y2,
            -pad, -pad, self.width + pad, self.height + pad,
        )
        if clipped is None:
            return
        ax, ay, bx, by = clipped

        left = max(0, int(math.floor(min(ax, bx) - pad)))
        right = min(self.width, int(math.ceil(max(ax, bx) + pad)) + 1)
        top = max(0, int(math.floor(min(ay, by) - pad)))
        bottom = min(self.height, int(math.ceil(max(ay, by) + pad)) + 1)
        if left >= right or top >= bottom:
            return

        # LINE_AA only anti-aliases 8-bit images
        mask = np.zeros((bottom - top, right - left), dtype=np.uint8)
        scale = 1 << SUBPIXEL_SHIFT
        p1 = (int(round((ax - left) * scale)), int(round((ay - top) * scale)))
        p2 = (int(round((bx - left) * scale)), int(round((by - top) * scale)))
        thickness = max(1, int(round(width)))
        cv2.line(mask, p1, p2, 255, thickness, cv2.LINE_AA, SUBPIXEL_SHIFT)

        coverage = mask.astype(np.float32) / 255.0
        if glow > 0:
            halo = cv2.GaussianBlur(coverage, (0, 0), sigmaX=sigma)
            coverage = np.maximum(coverage, np.clip(halo * GLOW_STRENGTH * glow, 0.0, 1.0))
        coverage *= min(alpha, 1.0)

        region = self._buffer[top:bottom, left:right]
        region += (color.as_array() - region) * coverage[:, :, np.newaxis]

    def tonemap24(self, width: Optional[int] = None, height: Optional[int] = None) -> np.ndarray:
        """Flatten the canvas to packed 8-bit RGB.

        Args:
            width: Output width (canvas width when omitted)
            height: Output height (canvas height when omitted)

        Returns:
            [height, width, 3] uint8 RGB image
        """
        width = width or self.width
        height = height or self.height

        image = np.clip(self._buffer, 0.0, 1.0)
        if (width, height) != (self.width, self.height):
            image = cv2.resize(image, (width, height), interpolation=cv2.INTER_AREA)

        return np.ascontiguousarray((image * 255.0 + 0.5).astype(np.uint8))
