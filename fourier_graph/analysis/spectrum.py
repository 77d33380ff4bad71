"""Magnitude spectrum and radial histogram of a single image region.

The forward transform is scipy.fft with "forward" normalization, so every
coefficient is divided by the number of elements of the padded region.
"""

from __future__ import annotations

import logging

import numpy as np
import scipy.fft

from .models import BinList

logger = logging.getLogger(__name__)

DEFAULT_PEAK_AMPLITUDE = 1e5


class SpectrumAnalyzer:
    """Computes radial magnitude histograms of 2D real-valued regions."""

    def __init__(self, peak_amplitude: float = DEFAULT_PEAK_AMPLITUDE):
        """Initialize spectrum analyzer.

        Args:
            peak_amplitude: Value the largest magnitude of a region is scaled to
        """
        if peak_amplitude <= 0:
            raise ValueError(f"Peak amplitude must be positive, got {peak_amplitude}")
        self.peak_amplitude = peak_amplitude

    def compute_magnitude_spectrum(self, region: np.ndarray) -> np.ndarray:
        """Centered magnitude spectrum of `region`.

        Args:
            region: [height, width] real-valued pixels

        Returns:
            [height, width] float64 magnitudes with DC at [height // 2, width // 2]
        """
        if region.ndim != 2:
            raise ValueError(f"Expected 2D region, got shape {region.shape}")

        height, width = region.shape
        if height == 0 or width == 0:
            return np.zeros((height, width), dtype=np.float64)

        padded_height = scipy.fft.next_fast_len(height)
        padded_width = scipy.fft.next_fast_len(width)

        padded = np.zeros((padded_height, padded_width), dtype=np.complex128)
        padded[:height, :width] = region

        spectrum = scipy.fft.fft2(padded, norm="forward")
        magnitude = np.abs(spectrum)[:height, :width]

        logger.debug(
            f"Magnitude spectrum {height}x{width} (padded to {padded_height}x{padded_width})"
        )
        return scipy.fft.fftshift(magnitude)

    def radial_histogram(self, magnitude: np.ndarray, scale: float) -> BinList:
        """Reduce a centered magnitude spectrum to a radial histogram.

        Pixels whose normalized distance from the center is 1 or more (the
        corners outside the inscribed circle) are discarded.

        Args:
            magnitude: [height, width] centered magnitude spectrum
            scale: Factor applied to every magnitude before accumulation

        Returns:
            BinList of length min(height, width) // 2
        """
        height, width = magnitude.shape
        length = min(width, height) // 2
        if length == 0:
            return BinList.empty(0)

        cx = width / 2.0
        cy = height / 2.0
        cl = min(cx, cy)

        ys, xs = np.indices((height, width), dtype=np.float64)
        radius = np.sqrt((xs - cx) ** 2 + (ys - cy) ** 2) / cl
        bin_index = np.floor(length * radius).astype(np.int64)

        inside = bin_index < length
        indices = bin_index[inside]
        scaled = magnitude[inside].astype(np.float64) * scale

        values = np.bincount(indices, weights=scaled, minlength=length)
        weights = np.bincount(indices, minlength=length).astype(np.float64)

        minima = np.full(length, np.inf)
        maxima = np.full(length, -np.inf)
        np.minimum.at(minima, indices, scaled)
        np.maximum.at(maxima, indices, scaled)

        empty = weights == 0
        minima[empty] = np.nan
        maxima[empty] = np.nan

        return BinList(values=values, weights=weights, minima=minima, maxima=maxima)

    def analyze_region(self, region: np.ndarray) -> BinList:
        """Normalized radial histogram of one region.

        The region's magnitude spectrum is scaled so its maximum equals
        peak_amplitude. An all-zero spectrum yields a histogram with no data
        in any bucket.
        """
        magnitude = self.compute_magnitude_spectrum(region)
        length = min(magnitude.shape) // 2

        peak = float(magnitude.max()) if magnitude.size else 0.0
        if peak == 0.0:
            logger.warning(
                f"Region {region.shape[1]}x{region.shape[0]} has an all-zero spectrum, "
                f"emitting {length} empty bins"
            )
            return BinList.empty(length)

        return self.radial_histogram(magnitude, self.peak_amplitude / peak)
