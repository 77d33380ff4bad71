"""
Spectrum Value Objects

Immutable value objects describing radial spectrum results and the options
used to produce and draw them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, Field, model_validator

from ..config import AnalysisConfig


class BinEntry(BaseModel):
    """One radial-frequency bucket"""

    value: float = Field(default=0.0, description="Sum of scaled magnitudes in the bucket")
    weight: float = Field(default=0.0, ge=0.0, description="Number of pixels mapped into the bucket")
    min: Optional[float] = Field(default=None, description="Smallest scaled magnitude, None when empty")
    max: Optional[float] = Field(default=None, description="Largest scaled magnitude, None when empty")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_extrema(self):
        """Empty buckets carry no extrema, filled buckets carry both"""
        if self.weight == 0 and (self.min is not None or self.max is not None):
            raise ValueError("Empty bucket cannot have min/max")
        if self.weight > 0 and (self.min is None or self.max is None):
            raise ValueError("Filled bucket requires min and max")
        return self

    @property
    def has_data(self) -> bool:
        return self.weight > 0

    @property
    def mean(self) -> float:
        """Average amplitude, 0.0 for an empty bucket"""
        if not self.has_data:
            return 0.0
        return self.value / self.weight


@dataclass(frozen=True, eq=False)
class BinList:
    """Radial histogram of one (level, channel) series.

    Bucket i covers normalized radii in [i/L, (i+1)/L). Per-bucket data is
    kept as read-only numpy arrays; minima/maxima are NaN where a bucket has
    no data.
    """

    values: np.ndarray
    weights: np.ndarray
    minima: np.ndarray
    maxima: np.ndarray

    def __post_init__(self):
        lengths = {len(self.values), len(self.weights), len(self.minima), len(self.maxima)}
        if len(lengths) != 1:
            raise ValueError(f"Bin arrays differ in length: {sorted(lengths)}")

        for name in ("values", "weights", "minima", "maxima"):
            array = np.array(getattr(self, name), dtype=np.float64)
            array.flags.writeable = False
            object.__setattr__(self, name, array)

    @classmethod
    def empty(cls, length: int) -> "BinList":
        """Histogram of the given length with no data in any bucket"""
        return cls(
            values=np.zeros(length),
            weights=np.zeros(length),
            minima=np.full(length, np.nan),
            maxima=np.full(length, np.nan),
        )

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> BinEntry:
        weight = float(self.weights[index])
        if weight > 0:
            return BinEntry(
                value=float(self.values[index]),
                weight=weight,
                min=float(self.minima[index]),
                max=float(self.maxima[index]),
            )
        return BinEntry()

    def __iter__(self) -> Iterator[BinEntry]:
        for index in range(len(self)):
            yield self[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinList):
            return NotImplemented
        return (
            np.array_equal(self.values, other.values)
            and np.array_equal(self.weights, other.weights)
            and np.array_equal(self.minima, other.minima, equal_nan=True)
            and np.array_equal(self.maxima, other.maxima, equal_nan=True)
        )

    __hash__ = None

    @property
    def has_data(self) -> np.ndarray:
        """Boolean mask of buckets that received at least one pixel"""
        return self.weights > 0

    @property
    def total_weight(self) -> float:
        return float(self.weights.sum())

    def mean_amplitudes(self) -> np.ndarray:
        """Average amplitude per bucket, 0.0 where a bucket has no data"""
        means = np.zeros(len(self), dtype=np.float64)
        np.divide(self.values, self.weights, out=means, where=self.weights > 0)
        return means

    def to_dict(self) -> Dict[str, List[Optional[float]]]:
        """Convert to dictionary (JSON friendly, None for missing extrema)."""
        def _clean(array: np.ndarray) -> List[Optional[float]]:
            return [None if np.isnan(v) else float(v) for v in array]

        return {
            "values": self.values.tolist(),
            "weights": self.weights.tolist(),
            "minima": _clean(self.minima),
            "maxima": _clean(self.maxima),
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Spectrum of an analyzed image.

    spectrum holds one BinList per (mip level, channel) pair in level-major,
    channel-minor order.
    """

    spectrum: Tuple[BinList, ...]
    is_rgb: bool
    is_mipmap: bool
    mipmap_level_count: int
    channel_count: int

    def __post_init__(self):
        object.__setattr__(self, "spectrum", tuple(self.spectrum))
        expected = self.mipmap_level_count * self.channel_count
        if len(self.spectrum) != expected:
            raise ValueError(
                f"Expected {expected} series ({self.mipmap_level_count} levels x "
                f"{self.channel_count} channels), got {len(self.spectrum)}"
            )

    @property
    def is_empty(self) -> bool:
        return len(self.spectrum) == 0

    def series(self, level: int, channel: int) -> BinList:
        """Histogram for one mip level and channel"""
        if not 0 <= level < self.mipmap_level_count:
            raise IndexError(f"Mip level {level} out of range [0, {self.mipmap_level_count})")
        if not 0 <= channel < self.channel_count:
            raise IndexError(f"Channel {channel} out of range [0, {self.channel_count})")
        return self.spectrum[level * self.channel_count + channel]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "is_rgb": self.is_rgb,
            "is_mipmap": self.is_mipmap,
            "mipmap_level_count": self.mipmap_level_count,
            "channel_count": self.channel_count,
            "spectrum": [bins.to_dict() for bins in self.spectrum],
        }


class AnalysisOptions(BaseModel):
    """Options for one image analysis"""

    use_color: bool = Field(default=False, description="Analyze color channels separately")
    use_mipmap: bool = Field(default=False, description="Input is a horizontal mip strip")
    peak_amplitude: float = Field(default=1e5, gt=0.0, description="Normalized peak of every series")
    skipped_mip_levels: int = Field(default=2, ge=0, description="Smallest mip levels left out")

    model_config = {"frozen": True}

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> "AnalysisOptions":
        return cls(
            use_color=config.use_color,
            use_mipmap=config.use_mipmap,
            peak_amplitude=config.peak_amplitude,
            skipped_mip_levels=config.skipped_mip_levels,
        )


class RenderOptions(BaseModel):
    """Graph drawing switches"""

    suppress_axis: bool = Field(default=False, description="Skip the log grid")
    suppress_reference_line: bool = Field(default=False, description="Skip the 1/f reference line")
    black_and_white: bool = Field(default=False, description="Pure black background")
    use_second_reference_slope: bool = Field(
        default=False,
        description="Add a high-contrast 1/f reference line"
    )

    model_config = {"frozen": True}

    @classmethod
    def print_preset(cls) -> "RenderOptions":
        """Options used for exported graphs"""
        return cls(black_and_white=True, use_second_reference_slope=True)
