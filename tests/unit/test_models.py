"""
Tests for spectrum value objects
"""

import numpy as np
import pytest
from pydantic import ValidationError

from fourier_graph.analysis.models import (
    AnalysisOptions,
    AnalysisResult,
    BinEntry,
    BinList,
    RenderOptions,
)
from fourier_graph.config import AnalysisConfig
from tests.conftest import make_bins, make_result


class TestBinEntry:
    """Test BinEntry value object"""

    def test_empty_entry_has_no_data(self):
        entry = BinEntry()

        assert not entry.has_data
        assert entry.mean == 0.0
        assert entry.min is None
        assert entry.max is None

    def test_mean_of_filled_entry(self):
        entry = BinEntry(value=12.0, weight=4.0, min=1.0, max=5.0)

        assert entry.has_data
        assert entry.mean == 3.0

    def test_empty_entry_cannot_carry_extrema(self):
        with pytest.raises(ValidationError):
            BinEntry(weight=0.0, min=1.0, max=2.0)

    def test_filled_entry_requires_extrema(self):
        with pytest.raises(ValidationError):
            BinEntry(value=1.0, weight=1.0)

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            BinEntry(weight=-1.0)

    def test_entry_is_frozen(self):
        entry = BinEntry()

        with pytest.raises(ValidationError):
            entry.value = 3.0


class TestBinList:
    """Test BinList container"""

    def test_empty_list(self):
        bins = BinList.empty(5)

        assert len(bins) == 5
        assert bins.total_weight == 0
        assert np.isnan(bins.minima).all()
        np.testing.assert_array_equal(bins.mean_amplitudes(), np.zeros(5))

    def test_indexing_returns_entries(self):
        bins = make_bins([4.0, 0.0, 2.0], weights=[2.0, 0.0, 1.0])

        assert bins[0] == BinEntry(value=8.0, weight=2.0, min=4.0, max=4.0)
        assert bins[1] == BinEntry()
        assert [entry.has_data for entry in bins] == [True, False, True]

    def test_mean_amplitudes_zero_for_missing_data(self):
        bins = make_bins([4.0, 0.0, 2.0], weights=[2.0, 0.0, 1.0])

        np.testing.assert_array_equal(bins.mean_amplitudes(), [4.0, 0.0, 2.0])
        np.testing.assert_array_equal(bins.has_data, [True, False, True])

    def test_arrays_are_read_only(self):
        bins = make_bins([1.0, 2.0])

        with pytest.raises(ValueError):
            bins.values[0] = 5.0

    def test_source_arrays_are_copied(self):
        values = np.array([1.0, 2.0])
        bins = BinList(values=values, weights=np.ones(2), minima=values, maxima=values)

        values[0] = 9.0

        assert bins.values[0] == 1.0

    def test_mismatched_lengths_rejected(self):
        with pytest.raises(ValueError):
            BinList(values=np.zeros(3), weights=np.zeros(2), minima=np.zeros(3), maxima=np.zeros(3))

    def test_equality_treats_missing_extrema_as_equal(self):
        assert BinList.empty(3) == BinList.empty(3)
        assert make_bins([1.0, 2.0]) != make_bins([1.0, 3.0])

    def test_to_dict_uses_none_for_missing_extrema(self):
        data = make_bins([4.0, 0.0], weights=[1.0, 0.0]).to_dict()

        assert data["weights"] == [1.0, 0.0]
        assert data["minima"] == [4.0, None]
        assert data["maxima"] == [4.0, None]


class TestAnalysisResult:
    """Test AnalysisResult container"""

    def test_series_order_is_level_major(self):
        series = [make_bins([float(i)]) for i in range(6)]
        result = make_result(series, level_count=2, channel_count=3, is_rgb=True, is_mipmap=True)

        assert result.series(0, 0) is result.spectrum[0]
        assert result.series(0, 2) is result.spectrum[2]
        assert result.series(1, 0) is result.spectrum[3]
        assert result.series(1, 2) is result.spectrum[5]

    def test_series_count_must_match(self):
        with pytest.raises(ValueError):
            make_result([make_bins([1.0])], level_count=2, channel_count=1)

    def test_series_out_of_range(self):
        result = make_result([make_bins([1.0])])

        with pytest.raises(IndexError):
            result.series(1, 0)
        with pytest.raises(IndexError):
            result.series(0, 1)

    def test_empty_result(self):
        result = make_result([], level_count=0, channel_count=1, is_mipmap=True)

        assert result.is_empty
        assert result.to_dict()["spectrum"] == []

    def test_to_dict(self):
        result = make_result([make_bins([1.0, 2.0])])

        data = result.to_dict()

        assert data["mipmap_level_count"] == 1
        assert data["channel_count"] == 1
        assert data["is_rgb"] is False
        assert data["spectrum"][0]["values"] == [1.0, 2.0]


class TestOptions:
    """Test analysis and render options"""

    def test_analysis_defaults(self):
        options = AnalysisOptions()

        assert options.use_color is False
        assert options.use_mipmap is False
        assert options.peak_amplitude == 1e5
        assert options.skipped_mip_levels == 2

    def test_analysis_options_from_config(self):
        options = AnalysisOptions.from_config(AnalysisConfig(use_color=True, peak_amplitude=10.0))

        assert options.use_color is True
        assert options.peak_amplitude == 10.0

    @pytest.mark.parametrize("kwargs", [
        {"peak_amplitude": 0.0},
        {"skipped_mip_levels": -1},
    ])
    def test_invalid_analysis_options(self, kwargs):
        with pytest.raises(ValidationError):
            AnalysisOptions(**kwargs)

    def test_render_defaults_draw_everything(self):
        options = RenderOptions()

        assert not options.suppress_axis
        assert not options.suppress_reference_line
        assert not options.black_and_white
        assert not options.use_second_reference_slope

    def test_print_preset(self):
        options = RenderOptions.print_preset()

        assert options.black_and_white
        assert options.use_second_reference_slope
        assert not options.suppress_axis
