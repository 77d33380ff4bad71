"""Radial frequency spectrum graphs of images.

Computes the radial magnitude spectrum of an image (optionally per mip level
and color channel) and draws it on a log-log plot for judging 1/f behavior.
"""

from .analysis import (
    AnalysisOptions,
    AnalysisResult,
    BinEntry,
    BinList,
    GraphManager,
    GraphRenderer,
    ImageAnalysisPipeline,
    RenderOptions,
)
from .errors import FourierGraphError, InvalidImageBufferError, SpectrumExportError

__version__ = "0.1.0"

__all__ = [
    "AnalysisOptions",
    "AnalysisResult",
    "BinEntry",
    "BinList",
    "GraphManager",
    "GraphRenderer",
    "ImageAnalysisPipeline",
    "RenderOptions",
    "FourierGraphError",
    "InvalidImageBufferError",
    "SpectrumExportError",
]
