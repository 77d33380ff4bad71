"""
HDF5 export of spectrum results.

Each (level, channel) series is stored under `level_{l}/channel_{c}` with
`values`, `weights`, `minima` and `maxima` datasets; minima/maxima are NaN
for buckets without data. Result flags live in root attributes.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Union

import h5py
import numpy as np

from ..errors import SpectrumExportError
from .models import AnalysisResult, BinList

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"
BIN_DATASETS = ("values", "weights", "minima", "maxima")


def save_spectrum(result: AnalysisResult, path: Union[str, Path]) -> Path:
    """Write `result` to an HDF5 file, replacing any existing file.

    Returns:
        Path of the written file
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with h5py.File(file_path, "w") as f:
        f.attrs["is_rgb"] = result.is_rgb
        f.attrs["is_mipmap"] = result.is_mipmap
        f.attrs["mipmap_level_count"] = result.mipmap_level_count
        f.attrs["channel_count"] = result.channel_count
        f.attrs["created_timestamp"] = datetime.now().isoformat()
        f.attrs["format_version"] = FORMAT_VERSION

        for level in range(result.mipmap_level_count):
            for channel in range(result.channel_count):
                bins = result.series(level, channel)
                group = f.create_group(f"level_{level}/channel_{channel}")
                for name in BIN_DATASETS:
                    group.create_dataset(name, data=getattr(bins, name))

    logger.info(f"Saved {len(result.spectrum)} spectrum series to {file_path}")
    return file_path


def load_spectrum(path: Union[str, Path]) -> AnalysisResult:
    """Read an AnalysisResult written by save_spectrum().

    Raises:
        SpectrumExportError: If the file is missing or not a spectrum export
    """
    file_path = Path(path)
    if not file_path.exists():
        raise SpectrumExportError(f"Spectrum file not found: {file_path}")

    try:
        with h5py.File(file_path, "r") as f:
            level_count = int(f.attrs["mipmap_level_count"])
            channel_count = int(f.attrs["channel_count"])

            spectrum = []
            for level in range(level_count):
                for channel in range(channel_count):
                    group = f[f"level_{level}/channel_{channel}"]
                    arrays = {name: np.asarray(group[name][()]) for name in BIN_DATASETS}
                    spectrum.append(BinList(**arrays))

            return AnalysisResult(
                spectrum=tuple(spectrum),
                is_rgb=bool(f.attrs["is_rgb"]),
                is_mipmap=bool(f.attrs["is_mipmap"]),
                mipmap_level_count=level_count,
                channel_count=channel_count,
            )
    except (KeyError, OSError, ValueError) as e:
        raise SpectrumExportError(f"Invalid spectrum file {file_path}: {e}") from e
