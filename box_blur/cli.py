"""
Command line interface for the box blur tool.

Usage examples
--------------

Blur ``lenna.png`` in the current directory into ``lenna-blurred.png``::

    python -m box_blur.cli

Blur a specific file with a 5x5 mask, spreading rows over four threads::

    python -m box_blur.cli photo.png photo-blurred.png --mask-size 5 --workers 4
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import DEFAULT_INPUT, DEFAULT_MASK_SIZE, DEFAULT_OUTPUT, DEFAULT_WORKERS, BlurConfig
from .engine import BoxBlurEngine
from .errors import BoxBlurError
from .image_io import load_pixel_grid, save_pixel_grid, validate_pixel_grid

logger = logging.getLogger("box_blur")


def _setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def process_image(cfg: BlurConfig) -> Path:
    """Load ``cfg.input_path``, blur it and write ``cfg.output_path``."""
    engine = BoxBlurEngine(mask_size=cfg.mask_size, workers=cfg.workers)

    logger.info("Start processing image %s", cfg.input_path)
    pixels = load_pixel_grid(cfg.input_path)
    validate_pixel_grid(pixels)

    logger.info("Applying blur filter (mask=%d)", engine.mask_size)
    blurred = engine.blur(pixels)

    logger.info("Writing new image file %s", cfg.output_path)
    output_path = save_pixel_grid(blurred, cfg.output_path)

    logger.info("Done.")
    return output_path


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply a box blur to an image.")
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=DEFAULT_INPUT,
        help=f"Image to blur (default: ./{DEFAULT_INPUT}).",
    )
    parser.add_argument(
        "output",
        nargs="?",
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Where to write the blurred image (default: ./{DEFAULT_OUTPUT}).",
    )
    parser.add_argument(
        "--mask-size",
        type=int,
        default=DEFAULT_MASK_SIZE,
        help=f"Side length of the square blur window (default: {DEFAULT_MASK_SIZE}).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help="Number of threads blurring disjoint row bands (default: 1).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    _setup_logging(args.debug)

    cfg = BlurConfig(
        input_path=args.input,
        output_path=args.output,
        mask_size=args.mask_size,
        workers=args.workers,
        debug=args.debug,
    )

    try:
        process_image(cfg)
    except BoxBlurError as exc:
        logger.error("%s", exc)
        return 1
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
