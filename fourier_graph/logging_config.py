"""Centralized logging configuration for fourier_graph.

Call configure_logging() ONCE at application startup. Library modules only
create loggers with logging.getLogger(__name__) and never configure handlers.
"""

import logging
from pathlib import Path
from typing import Optional, Union


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    format_string: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> None:
    """Configure logging for the entire application.

    Args:
        level: Logging level (logging.DEBUG, "INFO", etc.)
        format_string: Custom format string (optional)
        log_file: Also write log records to this file (optional)
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level}")

    handlers = [logging.StreamHandler()]
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    # Root level set explicitly so child loggers follow it
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    logging.basicConfig(
        level=level,
        format=format_string,
        handlers=handlers,
        force=True  # Override any previous configuration
    )
