"""
Tests for magnitude spectra and radial histograms
"""

import numpy as np
import pytest

from fourier_graph.analysis.spectrum import SpectrumAnalyzer


class TestComputeMagnitudeSpectrum:
    """Test SpectrumAnalyzer.compute_magnitude_spectrum"""

    def setup_method(self):
        self.analyzer = SpectrumAnalyzer()

    @pytest.mark.parametrize("shape", [(8, 8), (5, 7), (16, 10)])
    def test_constant_region_has_only_centered_dc(self, shape):
        region = np.full(shape, 3.0, dtype=np.float32)

        magnitude = self.analyzer.compute_magnitude_spectrum(region)

        cy, cx = shape[0] // 2, shape[1] // 2
        assert magnitude.shape == shape
        assert magnitude[cy, cx] == pytest.approx(3.0)
        rest = magnitude.copy()
        rest[cy, cx] = 0.0
        assert rest.max() < 1e-9

    def test_dc_equals_region_mean(self, rng):
        region = rng.uniform(0, 255, size=(16, 16)).astype(np.float32)

        magnitude = self.analyzer.compute_magnitude_spectrum(region)

        assert magnitude[8, 8] == pytest.approx(float(region.astype(np.float64).mean()), rel=1e-6)

    def test_padded_sizes_are_cropped_back(self, rng):
        region = rng.uniform(0, 1, size=(13, 17))

        magnitude = self.analyzer.compute_magnitude_spectrum(region)

        assert magnitude.shape == (13, 17)
        assert np.all(magnitude >= 0)

    def test_single_frequency_lands_off_center(self):
        x = np.arange(32)
        region = np.tile(np.cos(2 * np.pi * 4 * x / 32), (32, 1))

        magnitude = self.analyzer.compute_magnitude_spectrum(region)

        # cos splits evenly between +4 and -4 cycles around the center column
        assert magnitude[16, 20] == pytest.approx(0.5)
        assert magnitude[16, 12] == pytest.approx(0.5)
        assert magnitude[16, 16] == pytest.approx(0.0, abs=1e-9)

    def test_rejects_non_2d_input(self):
        with pytest.raises(ValueError):
            self.analyzer.compute_magnitude_spectrum(np.zeros((4, 4, 3)))

    def test_input_is_not_modified(self, rng):
        region = rng.uniform(0, 1, size=(12, 12))
        original = region.copy()

        self.analyzer.compute_magnitude_spectrum(region)

        np.testing.assert_array_equal(region, original)


class TestRadialHistogram:
    """Test SpectrumAnalyzer.radial_histogram"""

    def setup_method(self):
        self.analyzer = SpectrumAnalyzer()

    def test_bucket_weights_for_8x8(self):
        """Ring populations of an 8x8 grid around (4, 4)"""
        bins = self.analyzer.radial_histogram(np.ones((8, 8)), 1.0)

        assert len(bins) == 4
        np.testing.assert_array_equal(bins.weights, [1, 8, 16, 20])

    def test_total_weight_excludes_corners(self):
        """64 pixels minus the 19 outside the inscribed circle"""
        bins = self.analyzer.radial_histogram(np.ones((8, 8)), 1.0)

        assert bins.total_weight == 45

    @pytest.mark.parametrize("height,width", [(32, 32), (20, 30), (31, 17)])
    def test_total_weight_matches_inscribed_circle(self, height, width):
        cx, cy = width / 2.0, height / 2.0
        cl = min(cx, cy)
        length = min(width, height) // 2
        ys, xs = np.indices((height, width))
        radius = np.sqrt((xs - cx) ** 2 + (ys - cy) ** 2) / cl
        inside = int(np.count_nonzero(np.floor(length * radius) < length))

        bins = self.analyzer.radial_histogram(np.ones((height, width)), 1.0)

        assert len(bins) == length
        assert bins.total_weight == inside
        assert inside < width * height

    def test_values_are_scaled(self):
        magnitude = np.full((8, 8), 2.0)

        bins = self.analyzer.radial_histogram(magnitude, 10.0)

        np.testing.assert_allclose(bins.mean_amplitudes(), [20.0] * 4)
        np.testing.assert_allclose(bins.minima, [20.0] * 4)
        np.testing.assert_allclose(bins.maxima, [20.0] * 4)

    def test_min_max_track_extremes(self):
        magnitude = np.zeros((8, 8))
        magnitude[4, 4] = 7.0  # bucket 0
        magnitude[4, 5] = 3.0  # bucket 1
        magnitude[4, 3] = 1.0  # bucket 1

        bins = self.analyzer.radial_histogram(magnitude, 1.0)

        assert bins[0].max == 7.0
        assert bins[1].max == 3.0
        assert bins[1].min == 0.0
        assert bins[1].value == pytest.approx(4.0)

    def test_tiny_region_gives_empty_histogram(self):
        bins = self.analyzer.radial_histogram(np.ones((1, 9)), 1.0)

        assert len(bins) == 0


class TestAnalyzeRegion:
    """Test SpectrumAnalyzer.analyze_region normalization"""

    def test_peak_is_normalized(self, rng):
        region = rng.uniform(0, 255, size=(32, 32)).astype(np.float32)

        bins = SpectrumAnalyzer().analyze_region(region)

        assert len(bins) == 16
        assert bins[0].max == pytest.approx(1e5)
        assert np.nanmax(bins.maxima) == pytest.approx(1e5)

    def test_custom_peak_amplitude(self, rng):
        region = rng.uniform(0, 255, size=(32, 32)).astype(np.float32)

        bins = SpectrumAnalyzer(peak_amplitude=10.0).analyze_region(region)

        assert np.nanmax(bins.maxima) == pytest.approx(10.0)

    def test_all_black_region_has_no_data(self, caplog):
        bins = SpectrumAnalyzer().analyze_region(np.zeros((16, 16), dtype=np.float32))

        assert len(bins) == 8
        assert bins.total_weight == 0
        assert not bins.has_data.any()
        assert all(entry.mean == 0.0 for entry in bins)
        assert "all-zero spectrum" in caplog.text

    def test_invalid_peak_amplitude(self):
        with pytest.raises(ValueError):
            SpectrumAnalyzer(peak_amplitude=0.0)
