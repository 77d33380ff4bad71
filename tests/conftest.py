"""
Test Configuration and Fixtures

Shared synthetic images and pixel buffers for the fourier_graph test suite.
"""

import numpy as np
import pytest

from fourier_graph.analysis.models import AnalysisResult, BinList
from fourier_graph.drawing.canvas import FloatCanvas


@pytest.fixture
def rng():
    """Seeded random generator so every run sees the same pixels"""
    return np.random.default_rng(1234)


@pytest.fixture
def uniform_gray_image():
    """256x256 BGRA image of uniform gray 128"""
    image = np.full((256, 256, 4), 128, dtype=np.uint8)
    image[:, :, 3] = 255
    return image


@pytest.fixture
def uniform_gray_buffer(uniform_gray_image):
    """Packed BGRA bytes of uniform_gray_image"""
    return uniform_gray_image.tobytes()


@pytest.fixture
def noise_image(rng):
    """64x64 BGRA image of uniform noise"""
    image = rng.integers(0, 256, size=(64, 64, 4), dtype=np.uint8)
    image[:, :, 3] = 255
    return image


def make_bins(means, weights=None):
    """BinList with the given per-bucket means (weight 1 unless given)"""
    means = np.asarray(means, dtype=np.float64)
    if weights is None:
        weights = np.ones_like(means)
    weights = np.asarray(weights, dtype=np.float64)
    has_data = weights > 0
    return BinList(
        values=means * weights,
        weights=weights,
        minima=np.where(has_data, means, np.nan),
        maxima=np.where(has_data, means, np.nan),
    )


def make_result(series, level_count=1, channel_count=1, is_rgb=False, is_mipmap=False):
    """AnalysisResult wrapping prepared BinLists"""
    return AnalysisResult(
        spectrum=tuple(series),
        is_rgb=is_rgb,
        is_mipmap=is_mipmap,
        mipmap_level_count=level_count,
        channel_count=channel_count,
    )


class RecordingCanvas(FloatCanvas):
    """FloatCanvas that records every drawing call"""

    def __init__(self, width=320, height=240):
        super().__init__(width, height)
        self.fills = []
        self.lines = []

    def fill(self, color):
        self.fills.append(color)
        super().fill(color)

    def draw_line(self, x1, y1, x2, y2, color, width=1.0, glow=1.0, alpha=1.0):
        self.lines.append({
            "points": (x1, y1, x2, y2),
            "color": color,
            "width": width,
            "glow": glow,
            "alpha": alpha,
        })
        super().draw_line(x1, y1, x2, y2, color, width, glow, alpha)


@pytest.fixture
def recording_canvas():
    return RecordingCanvas()
