"""Command line entry point: analyze an image file and write its spectrum graph.

Usage:
    python -m fourier_graph IMAGE [-o graph.png] [--color] [--mipmap]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import cv2

from .analysis import (
    AnalysisOptions,
    GraphRenderer,
    ImageAnalysisPipeline,
    RenderOptions,
    build_mip_strip,
    save_spectrum,
)
from .config import AppConfig
from .drawing import FloatCanvas
from .errors import FourierGraphError, InvalidImageBufferError
from .logging_config import configure_logging

logger = logging.getLogger("fourier_graph")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fourier_graph",
        description="Plot the radial frequency spectrum of an image on a log-log graph",
    )
    parser.add_argument("image", type=Path, help="Input image file")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Graph PNG to write (default: <image>_spectrum.png)")
    parser.add_argument("--config", type=Path, default=None, help="JSON configuration file")
    parser.add_argument("--color", action="store_true", default=None,
                        help="Analyze B, G and R channels separately")
    parser.add_argument("--mipmap", action="store_true", default=None,
                        help="Input image is a horizontal mip strip")
    parser.add_argument("--build-mips", action="store_true",
                        help="Build a mip strip from the input image and analyze every level")
    parser.add_argument("--width", type=int, default=None, help="Graph width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Graph height in pixels")
    parser.add_argument("--print", dest="print_preset", action="store_true",
                        help="Black background and highlighted 1/f reference line")
    parser.add_argument("--no-axis", action="store_true", help="Do not draw the log grid")
    parser.add_argument("--no-reference", action="store_true", help="Do not draw the 1/f reference line")
    parser.add_argument("--export", type=Path, default=None, help="Write the spectrum to this HDF5 file")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def run(args: argparse.Namespace, config: AppConfig) -> Path:
    """Analyze args.image and write the graph; returns the graph path."""
    image = cv2.imread(str(args.image), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise InvalidImageBufferError(f"Cannot read image: {args.image}")

    use_mipmap = config.analysis.use_mipmap if args.mipmap is None else args.mipmap
    if args.build_mips:
        image = build_mip_strip(image)
        use_mipmap = True

    options = AnalysisOptions.from_config(config.analysis).model_copy(update={
        "use_color": config.analysis.use_color if args.color is None else args.color,
        "use_mipmap": use_mipmap,
    })
    result = ImageAnalysisPipeline().analyze(image, options)

    if args.print_preset:
        render_options = RenderOptions.print_preset()
    else:
        render_options = RenderOptions()
    render_options = render_options.model_copy(update={
        "suppress_axis": args.no_axis,
        "suppress_reference_line": args.no_reference,
    })

    width = args.width or config.output.width
    height = args.height or config.output.height
    canvas = FloatCanvas(width, height)
    GraphRenderer(config.plot).draw(canvas, result, render_options)

    output = args.output or args.image.with_name(f"{args.image.stem}_spectrum.png")
    rgb = canvas.tonemap24()
    if not cv2.imwrite(str(output), cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)):
        raise FourierGraphError(f"Cannot write graph: {output}")
    logger.info(f"Wrote {width}x{height} graph to {output}")

    if args.export:
        save_spectrum(result, args.export)

    return output


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = AppConfig.from_file(str(args.config)) if args.config else AppConfig.default()
        configure_logging(
            level=args.log_level or config.logging.level,
            log_file=config.logging.log_file,
        )
    except (OSError, ValueError) as e:
        configure_logging()
        logger.error(f"Cannot set up configuration: {e}")
        return 1

    try:
        output = run(args, config)
    except FourierGraphError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
