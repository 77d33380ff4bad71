"""Graph Renderer - draws radial spectra on a log-log plot.

Turns an AnalysisResult into line segments (log grid, 1/f reference lines,
one curve per mip level and channel) and submits them to a canvas. The
renderer never rasterizes pixels itself.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple

import numpy as np

from ..config import PlotConfig
from ..drawing.canvas import Color, FloatCanvas
from .log_transform import DEFAULT_X_HI, LogLogTransform
from .models import AnalysisResult, BinList, RenderOptions

logger = logging.getLogger(__name__)

BACKGROUND = Color(0.125, 0.125, 0.125)
BACKGROUND_BW = Color(0.0, 0.0, 0.0)
AXIS_COLOR = Color(0.25, 0.25, 0.25)
REFERENCE_COLOR = Color(0.25, 0.25, 0.25)
REFERENCE_HIGHLIGHT_COLOR = Color(0.75, 0.5, 0.25)
WHITE = Color(1.0, 1.0, 1.0)

# Primary color per analyzed plane, in OpenCV (B, G, R) order
CHANNEL_COLORS = (
    Color(0.0, 0.0, 1.0),
    Color(0.0, 1.0, 0.0),
    Color(1.0, 0.0, 0.0),
)


class GraphRenderer:
    """Draws spectrum graphs onto a FloatCanvas.

    Stateless apart from plot configuration; all dependencies injected via
    constructor.
    """

    def __init__(self, plot_config: Optional[PlotConfig] = None):
        """Initialize graph renderer.

        Args:
            plot_config: Plot domain and grid steps (defaults when omitted)
        """
        self.plot_config = plot_config or PlotConfig()

    def make_transform(self, canvas: FloatCanvas, result: AnalysisResult) -> LogLogTransform:
        """Log-log transform spanning the result's bin count."""
        bin_count = max((len(bins) for bins in result.spectrum), default=0)
        x_hi = float(bin_count) if bin_count > self.plot_config.x_min else DEFAULT_X_HI
        return LogLogTransform(
            canvas.width,
            canvas.height,
            x_lo=self.plot_config.x_min,
            x_hi=x_hi,
            y_lo=self.plot_config.y_min,
            y_hi=self.plot_config.y_max,
        )

    def draw(
        self,
        canvas: FloatCanvas,
        result: AnalysisResult,
        options: Optional[RenderOptions] = None,
    ) -> None:
        """Draw the complete graph of `result` onto `canvas`."""
        options = options or RenderOptions()
        plot = self.make_transform(canvas, result)

        canvas.fill(BACKGROUND_BW if options.black_and_white else BACKGROUND)

        if not options.suppress_axis:
            self.draw_axis(canvas, plot)

        if not result.is_empty and not options.suppress_reference_line:
            base_value = self.reference_base_value(result.spectrum[0])
            if base_value > 0:
                self.draw_reference_line(canvas, plot, base_value, highlight=False)
                if options.use_second_reference_slope:
                    self.draw_reference_line(canvas, plot, base_value, highlight=True)

        segments = 0
        for level in range(result.mipmap_level_count):
            for channel in range(result.channel_count):
                color, alpha = self.series_style(result, level, channel)
                segments += self.draw_series(canvas, plot, result.series(level, channel), color, alpha)

        logger.debug(f"Drew {len(result.spectrum)} series ({segments} segments) with {plot}")

    def draw_axis(self, canvas: FloatCanvas, plot: LogLogTransform) -> None:
        """Vertical lines per octave, horizontal lines per half decade."""
        for x in self._geometric_steps(plot.x_lo, plot.x_hi, self.plot_config.grid_step_x):
            lx, _ = plot.transform(x, 1.0)
            canvas.draw_line(lx, 0.0, lx, canvas.height, AXIS_COLOR, 1.0, 1.0)

        for y in self._geometric_steps(plot.y_lo, plot.y_hi, self.plot_config.grid_step_y):
            _, ly = plot.transform(1.0, y)
            canvas.draw_line(0.0, ly, canvas.width, ly, AXIS_COLOR, 1.0, 1.0)

    def draw_reference_line(
        self,
        canvas: FloatCanvas,
        plot: LogLogTransform,
        base_value: float,
        highlight: bool = False,
    ) -> None:
        """Draw amplitude = base_value / x across the X domain."""
        if highlight:
            color, width, glow, alpha = REFERENCE_HIGHLIGHT_COLOR, 4.0, 1.0, 1.0
        else:
            color, width, glow, alpha = REFERENCE_COLOR, 2.0, 1.0, 0.5

        step = self.plot_config.grid_step_x
        for x in self._geometric_steps(plot.x_lo, plot.x_hi, step):
            x1, y1 = plot.transform(x, base_value / x)
            x2, y2 = plot.transform(x * step, base_value / (x * step))
            canvas.draw_line(x1, y1, x2, y2, color, width, glow, alpha)

    def draw_series(
        self,
        canvas: FloatCanvas,
        plot: LogLogTransform,
        bins: BinList,
        color: Color,
        alpha: float,
    ) -> int:
        """Draw one spectrum curve, skipping the first and last bins.

        Segments touching a bucket without data are not drawn.

        Returns:
            Number of segments submitted to the canvas
        """
        amplitudes = bins.mean_amplitudes()
        count = 0
        for i in range(1, len(bins) - 1):
            y1 = amplitudes[i]
            y2 = amplitudes[i + 1]
            if y1 <= 0 or y2 <= 0:
                continue

            px1, py1 = plot.transform(float(i), float(y1))
            px2, py2 = plot.transform(float(i + 1), float(y2))
            canvas.draw_line(px1, py1, px2, py2, color, 1.0, 1.0, alpha)
            count += 1
        return count

    @staticmethod
    def reference_base_value(bins: BinList) -> float:
        """Anchor of the 1/f line: a tenth of the mean amplitude of bin 1."""
        if len(bins) < 2:
            return 0.0
        return bins[1].mean / 10.0

    @staticmethod
    def series_style(result: AnalysisResult, level: int, channel: int) -> Tuple[Color, float]:
        """Color and opacity of one (level, channel) curve."""
        a = (level + 1) / result.mipmap_level_count

        if not result.is_rgb:
            if result.is_mipmap:
                return Color(a, 1.0 - a, a), 1.0
            return WHITE, 1.0

        return CHANNEL_COLORS[channel % len(CHANNEL_COLORS)], a

    @staticmethod
    def _geometric_steps(start: float, stop: float, factor: float) -> Iterator[float]:
        value = start
        while value < stop:
            yield value
            value *= factor


def render_rgb(
    result: AnalysisResult,
    width: int,
    height: int,
    options: Optional[RenderOptions] = None,
    plot_config: Optional[PlotConfig] = None,
) -> np.ndarray:
    """Draw `result` on a fresh canvas and return packed RGB [height, width, 3]."""
    canvas = FloatCanvas(width, height)
    GraphRenderer(plot_config).draw(canvas, result, options)
    return canvas.tonemap24()
