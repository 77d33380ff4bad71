"""Configuration primitives for fourier_graph.

All runtime configuration is expressed as immutable dataclasses so that
components receive explicit settings when they are built. JSON files may
carry a "current" and a "default" section; values in "current" win, then
"default", then the built-in defaults below.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class AnalysisConfig:
    """Spectrum analysis configuration."""

    use_color: bool = False  # Analyze B, G, R separately instead of gray
    use_mipmap: bool = False  # Input is a horizontal mip strip
    peak_amplitude: float = 1e5  # Every series is normalized to this peak
    skipped_mip_levels: int = 2  # Smallest mips carry no usable frequency content

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "use_color": self.use_color,
            "use_mipmap": self.use_mipmap,
            "peak_amplitude": self.peak_amplitude,
            "skipped_mip_levels": self.skipped_mip_levels,
        }


@dataclass(frozen=True)
class PlotConfig:
    """Log-log plot domain configuration."""

    x_min: float = 0.5  # Left edge of the frequency axis (bin index)
    y_min: float = 1e-2
    y_max: float = 1e5
    grid_step_x: float = 2.0
    grid_step_y: float = 10 ** 0.5

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "x_min": self.x_min,
            "y_min": self.y_min,
            "y_max": self.y_max,
            "grid_step_x": self.grid_step_x,
            "grid_step_y": self.grid_step_y,
        }


@dataclass(frozen=True)
class OutputConfig:
    """Graph output size."""

    width: int = 512
    height: int = 384

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    log_file: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level": self.level,
            "log_file": str(self.log_file) if self.log_file else None,
        }


@dataclass(frozen=True)
class AppConfig:
    """Composite application configuration."""

    analysis: AnalysisConfig
    plot: PlotConfig
    output: OutputConfig
    logging: LoggingConfig

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "analysis": self.analysis.to_dict(),
            "plot": self.plot.to_dict(),
            "output": self.output.to_dict(),
            "logging": self.logging.to_dict(),
        }

    @staticmethod
    def from_file(path: str) -> "AppConfig":
        """Load configuration from JSON file.

        Args:
            path: Path to JSON configuration file

        Returns:
            AppConfig instance populated from file
        """
        file_path = Path(path)
        with open(file_path) as f:
            data = json.load(f)

        return AppConfig.from_dict(data)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "AppConfig":
        """Build configuration from a parsed JSON document."""
        current = data.get("current", {})
        defaults = data.get("default", {})

        def section(name: str) -> Dict[str, Any]:
            merged = dict(defaults.get(name, {}))
            merged.update(current.get(name, {}))
            return merged

        analysis = section("analysis")
        plot = section("plot")
        output = section("output")
        log = section("logging")

        base = AppConfig.default()

        return AppConfig(
            analysis=AnalysisConfig(
                use_color=bool(analysis.get("use_color", base.analysis.use_color)),
                use_mipmap=bool(analysis.get("use_mipmap", base.analysis.use_mipmap)),
                peak_amplitude=float(analysis.get("peak_amplitude", base.analysis.peak_amplitude)),
                skipped_mip_levels=int(analysis.get("skipped_mip_levels", base.analysis.skipped_mip_levels)),
            ),
            plot=PlotConfig(
                x_min=float(plot.get("x_min", base.plot.x_min)),
                y_min=float(plot.get("y_min", base.plot.y_min)),
                y_max=float(plot.get("y_max", base.plot.y_max)),
                grid_step_x=float(plot.get("grid_step_x", base.plot.grid_step_x)),
                grid_step_y=float(plot.get("grid_step_y", base.plot.grid_step_y)),
            ),
            output=OutputConfig(
                width=int(output.get("width", base.output.width)),
                height=int(output.get("height", base.output.height)),
            ),
            logging=LoggingConfig(
                level=str(log.get("level", base.logging.level)),
                log_file=Path(log["log_file"]) if log.get("log_file") else base.logging.log_file,
            ),
        )

    @staticmethod
    def default() -> "AppConfig":
        """Build the built-in default configuration."""
        return AppConfig(
            analysis=AnalysisConfig(),
            plot=PlotConfig(),
            output=OutputConfig(),
            logging=LoggingConfig(),
        )
