"""Drawing surface for spectrum graphs."""

from .canvas import Color, FloatCanvas, clip_segment

__all__ = [
    "Color",
    "FloatCanvas",
    "clip_segment",
]
