"""Image Analysis Pipeline - radial spectrum per mip level and channel.

Drives the spectrum analyzer over every (mip level, channel) pair of an
image and assembles the results into an AnalysisResult. Every call builds a
fresh result; nothing is kept between calls.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

import cv2
import numpy as np

from ..errors import InvalidImageBufferError
from .mip_pyramid import max_mip_level, mip_roi
from .models import AnalysisOptions, AnalysisResult, BinList
from .spectrum import SpectrumAnalyzer

logger = logging.getLogger(__name__)

BYTES_PER_PIXEL = 4

PixelBuffer = Union[bytes, bytearray, memoryview, np.ndarray]


def decode_pixel_buffer(buffer: Optional[PixelBuffer], width: int, height: int) -> np.ndarray:
    """Interpret a packed 4-bytes/pixel BGRA buffer as an image.

    Args:
        buffer: Packed rows of width * height pixels
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        [height, width, 4] uint8 copy of the pixels

    Raises:
        InvalidImageBufferError: If the buffer cannot hold such an image
    """
    if buffer is None:
        raise InvalidImageBufferError("Pixel buffer is None")
    if width <= 0 or height <= 0:
        raise InvalidImageBufferError(f"Invalid image size {width}x{height}")

    try:
        data = np.frombuffer(buffer, dtype=np.uint8)
    except (TypeError, ValueError) as e:
        raise InvalidImageBufferError(f"Pixel buffer is not bytes-like: {e}") from e

    expected = width * height * BYTES_PER_PIXEL
    if data.size < expected:
        raise InvalidImageBufferError(
            f"Pixel buffer holds {data.size} bytes, {width}x{height} image needs {expected}"
        )

    return data[:expected].reshape(height, width, BYTES_PER_PIXEL).copy()


def split_channels(image: np.ndarray, use_color: bool) -> List[np.ndarray]:
    """Split an image into the float32 planes to analyze.

    Gray analysis converts to a single luminance plane; color analysis keeps
    the first three planes (B, G, R for OpenCV images).
    """
    if image.dtype not in (np.uint8, np.uint16, np.float32):
        image = image.astype(np.float32)

    if image.ndim == 2:
        planes = [image]
        if use_color:
            planes = [image, image, image]
    elif image.ndim == 3 and image.shape[2] in (3, 4):
        if use_color:
            planes = list(cv2.split(image))[:3]
        else:
            code = cv2.COLOR_BGRA2GRAY if image.shape[2] == 4 else cv2.COLOR_BGR2GRAY
            planes = [cv2.cvtColor(image, code)]
    elif image.ndim == 3 and image.shape[2] == 1:
        return split_channels(image[:, :, 0], use_color)
    else:
        raise InvalidImageBufferError(f"Unsupported image shape {image.shape}")

    return [np.asarray(plane, dtype=np.float32) for plane in planes]


class ImageAnalysisPipeline:
    """Radial spectrum analysis over mip levels and color channels.

    All dependencies injected via constructor. Instances hold no per-image
    state, so one pipeline can analyze any number of images.
    """

    def __init__(self, analyzer: Optional[SpectrumAnalyzer] = None):
        """Initialize analysis pipeline.

        Args:
            analyzer: Spectrum analyzer (built from options when omitted)
        """
        self.analyzer = analyzer

    def analyze(self, image: np.ndarray, options: Optional[AnalysisOptions] = None) -> AnalysisResult:
        """Analyze a decoded image.

        Args:
            image: [h, w] gray, [h, w, 3] BGR or [h, w, 4] BGRA pixels
            options: Analysis options (defaults when omitted)

        Returns:
            Fresh AnalysisResult
        """
        if options is None:
            options = AnalysisOptions()
        if image is None:
            raise InvalidImageBufferError("Image is None")

        image = np.asarray(image)
        if image.size == 0:
            raise InvalidImageBufferError(f"Image is empty: shape {image.shape}")

        analyzer = self.analyzer or SpectrumAnalyzer(options.peak_amplitude)
        channels = split_channels(image, options.use_color)

        if options.use_mipmap:
            level_count = max_mip_level(channels[0].shape[1]) - options.skipped_mip_levels
            if level_count <= 0:
                logger.warning(
                    f"Mip strip {channels[0].shape[1]} px wide has too few levels, analyzing none"
                )
                level_count = 0
        else:
            level_count = 1

        channel_count = 3 if options.use_color else 1

        logger.info(
            f"Analyzing {image.shape[1]}x{image.shape[0]} image: "
            f"{level_count} level(s) x {channel_count} channel(s)"
        )

        spectrum: List[BinList] = []
        for level in range(level_count):
            for channel in range(channel_count):
                plane = channels[channel]
                region = mip_roi(plane, level) if options.use_mipmap else plane

                bins = analyzer.analyze_region(region)
                logger.debug(
                    f"  level {level} channel {channel}: region {region.shape[1]}x{region.shape[0]}, "
                    f"{len(bins)} bins"
                )
                spectrum.append(bins)

        return AnalysisResult(
            spectrum=tuple(spectrum),
            is_rgb=options.use_color,
            is_mipmap=options.use_mipmap,
            mipmap_level_count=level_count,
            channel_count=channel_count,
        )

    def analyze_pixel_buffer(
        self,
        buffer: Optional[PixelBuffer],
        width: int,
        height: int,
        options: Optional[AnalysisOptions] = None,
    ) -> AnalysisResult:
        """Analyze a packed BGRA pixel buffer.

        Raises:
            InvalidImageBufferError: If the buffer cannot be decoded
        """
        image = decode_pixel_buffer(buffer, width, height)
        return self.analyze(image, options)


def analyze(image: np.ndarray, options: Optional[AnalysisOptions] = None) -> AnalysisResult:
    """Analyze a decoded image with a default pipeline."""
    return ImageAnalysisPipeline().analyze(image, options)
