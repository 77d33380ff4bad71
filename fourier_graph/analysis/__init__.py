"""Spectrum analysis for fourier_graph.

This package provides mip strip traversal, magnitude spectra, radial
histograms and log-log graph rendering. Uses constructor injection pattern -
all dependencies passed explicitly.
"""

from .log_transform import LogLogTransform
from .mip_pyramid import build_mip_strip, max_mip_level, mip_roi
from .models import AnalysisOptions, AnalysisResult, BinEntry, BinList, RenderOptions
from .spectrum import SpectrumAnalyzer
from .pipeline import ImageAnalysisPipeline, analyze, decode_pixel_buffer
from .renderer import GraphRenderer, render_rgb
from .manager import GraphManager
from .export import load_spectrum, save_spectrum

__all__ = [
    "LogLogTransform",
    "build_mip_strip",
    "max_mip_level",
    "mip_roi",
    "AnalysisOptions",
    "AnalysisResult",
    "BinEntry",
    "BinList",
    "RenderOptions",
    "SpectrumAnalyzer",
    "ImageAnalysisPipeline",
    "analyze",
    "decode_pixel_buffer",
    "GraphRenderer",
    "render_rgb",
    "GraphManager",
    "load_spectrum",
    "save_spectrum",
]
