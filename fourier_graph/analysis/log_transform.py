"""Log-log coordinate transform for spectrum graphs.

Maps (frequency bin, amplitude) pairs onto canvas pixels: log base 2 on the
X axis, log base 10 on the Y axis, origin at the bottom-left corner.
"""

from __future__ import annotations

import math
from typing import Tuple

# Fixed amplitude domain shared by every graph
Y_LO = 1e-2
Y_HI = 1e5

DEFAULT_X_LO = 0.5
DEFAULT_X_HI = 1024.0


class LogLogTransform:
    """Stateless mapping from plot domain to canvas pixel space.

    Inputs outside the domain are extrapolated with the same linear formula.
    Both coordinates must be positive.
    """

    def __init__(
        self,
        width: float,
        height: float,
        x_lo: float = DEFAULT_X_LO,
        x_hi: float = DEFAULT_X_HI,
        y_lo: float = Y_LO,
        y_hi: float = Y_HI,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Plot size must be positive, got {width}x{height}")
        if not 0 < x_lo < x_hi:
            raise ValueError(f"Invalid X domain [{x_lo}, {x_hi}]")
        if not 0 < y_lo < y_hi:
            raise ValueError(f"Invalid Y domain [{y_lo}, {y_hi}]")

        self.width = float(width)
        self.height = float(height)
        self.x_lo = float(x_lo)
        self.x_hi = float(x_hi)
        self.y_lo = float(y_lo)
        self.y_hi = float(y_hi)

        self._log_x_lo = math.log2(self.x_lo)
        self._log_x_span = math.log2(self.x_hi) - self._log_x_lo
        self._log_y_lo = math.log10(self.y_lo)
        self._log_y_span = math.log10(self.y_hi) - self._log_y_lo

    def transform(self, freq_x: float, amplitude_y: float) -> Tuple[float, float]:
        """Map a domain point to (pixel_x, pixel_y)."""
        px = (math.log2(freq_x) - self._log_x_lo) / self._log_x_span * self.width
        py = self.height - (math.log10(amplitude_y) - self._log_y_lo) / self._log_y_span * self.height
        return px, py

    def __repr__(self) -> str:
        return (
            f"LogLogTransform({self.width:g}x{self.height:g}, "
            f"x=[{self.x_lo:g}, {self.x_hi:g}], y=[{self.y_lo:g}, {self.y_hi:g}])"
        )
