"""Graph Manager - keeps the latest spectrum and draws it.

Wraps the analysis pipeline and renderer behind one object that remembers
the most recent successful analysis. Results themselves are immutable; the
manager only swaps which one it holds.

Not thread-safe: callers must serialize analyze() calls on one instance.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..config import AnalysisConfig, PlotConfig
from ..drawing.canvas import FloatCanvas
from .models import AnalysisOptions, AnalysisResult, RenderOptions
from .pipeline import ImageAnalysisPipeline, PixelBuffer
from .renderer import GraphRenderer

logger = logging.getLogger(__name__)


class GraphManager:
    """Analyzes images and draws the resulting spectrum graph.

    All dependencies injected via constructor.
    """

    def __init__(
        self,
        pipeline: Optional[ImageAnalysisPipeline] = None,
        renderer: Optional[GraphRenderer] = None,
        analysis_config: Optional[AnalysisConfig] = None,
        plot_config: Optional[PlotConfig] = None,
    ):
        """Initialize graph manager.

        Args:
            pipeline: Analysis pipeline
            renderer: Graph renderer
            analysis_config: Defaults for peak amplitude and skipped mip levels
            plot_config: Plot configuration used when no renderer is given
        """
        self.pipeline = pipeline or ImageAnalysisPipeline()
        self.renderer = renderer or GraphRenderer(plot_config)
        self.analysis_config = analysis_config or AnalysisConfig()
        self._result: Optional[AnalysisResult] = None

    @property
    def result(self) -> Optional[AnalysisResult]:
        """Latest successful analysis, None before the first one"""
        return self._result

    def analyze(
        self,
        buffer: Optional[PixelBuffer],
        width: int,
        height: int,
        use_color: Optional[bool] = None,
        use_mipmap: Optional[bool] = None,
    ) -> AnalysisResult:
        """Analyze a packed BGRA buffer and keep the result.

        If the buffer is invalid, InvalidImageBufferError propagates and the
        previously stored result is left untouched.
        """
        options = self._options(use_color, use_mipmap)
        result = self.pipeline.analyze_pixel_buffer(buffer, width, height, options)
        self._result = result
        return result

    def analyze_image(
        self,
        image: np.ndarray,
        use_color: Optional[bool] = None,
        use_mipmap: Optional[bool] = None,
    ) -> AnalysisResult:
        """Analyze a decoded image and keep the result."""
        options = self._options(use_color, use_mipmap)
        result = self.pipeline.analyze(image, options)
        self._result = result
        return result

    def draw(self, canvas: FloatCanvas, options: Optional[RenderOptions] = None) -> None:
        """Draw the latest result onto `canvas`."""
        self.renderer.draw(canvas, self._require_result(), options)

    def draw_rgb(self, width: int, height: int, options: Optional[RenderOptions] = None) -> np.ndarray:
        """Draw the latest result and return packed RGB [height, width, 3]."""
        canvas = FloatCanvas(width, height)
        self.draw(canvas, options)
        return canvas.tonemap24()

    def render_rgb(self, width: int, height: int) -> np.ndarray:
        """Export variant of draw_rgb: black background, highlighted 1/f line."""
        return self.draw_rgb(width, height, RenderOptions.print_preset())

    def _options(self, use_color: Optional[bool], use_mipmap: Optional[bool]) -> AnalysisOptions:
        options = AnalysisOptions.from_config(self.analysis_config)
        overrides = {}
        if use_color is not None:
            overrides["use_color"] = use_color
        if use_mipmap is not None:
            overrides["use_mipmap"] = use_mipmap
        return options.model_copy(update=overrides)

    def _require_result(self) -> AnalysisResult:
        if self._result is None:
            raise RuntimeError("No analysis result available - call analyze() first")
        return self._result
