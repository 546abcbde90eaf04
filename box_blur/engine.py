"""
Box blur over an RGBA pixel grid.

Every output pixel is the unweighted mean of a ``mask_size x mask_size``
window read from the *source* grid.  Neighbours outside the image are
dropped from the average (no padding), so border pixels average fewer
samples than interior ones.  Alpha is copied through untouched.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, NamedTuple, Sequence

from .config import DEFAULT_MASK_SIZE, DEFAULT_WORKERS

logger = logging.getLogger(__name__)


class Pixel(NamedTuple):
    """One RGBA sample, each channel in [0, 255]."""

    red: int
    green: int
    blue: int
    alpha: int


PixelGrid = List[List[Pixel]]


def mask_offset(mask_size: int) -> int:
    """Distance from a pixel to the top/left edge of its sampling window.

    Even sizes use ``mask_size // 2``, so the window extends one pixel further
    up/left than down/right.
    """
    if mask_size % 2 == 0:
        return mask_size // 2
    return (mask_size - 1) // 2


class BoxBlurEngine:
    """Direct (non-separable) box filter with a fixed square mask."""

    def __init__(self, mask_size: int = DEFAULT_MASK_SIZE, workers: int = DEFAULT_WORKERS):
        if mask_size < 1:
            raise ValueError(f"mask_size must be a positive integer, got {mask_size}")
        if workers < 1:
            raise ValueError(f"workers must be a positive integer, got {workers}")
        self.mask_size = mask_size
        self.workers = workers

    @property
    def offset(self) -> int:
        return mask_offset(self.mask_size)

    def blur_pixel(self, pixels: Sequence[Sequence[Pixel]], row: int, col: int) -> Pixel:
        """Average the in-bounds window around ``(row, col)``."""
        height = len(pixels)
        width = len(pixels[0])
        top = row - self.offset
        left = col - self.offset

        red = green = blue = 0
        total = 0
        for r in range(max(top, 0), min(top + self.mask_size, height)):
            source_row = pixels[r]
            for c in range(max(left, 0), min(left + self.mask_size, width)):
                sample = source_row[c]
                red += sample.red
                green += sample.green
                blue += sample.blue
                total += 1

        return Pixel(red // total, green // total, blue // total, pixels[row][col].alpha)

    def blur_rows(self, pixels: Sequence[Sequence[Pixel]], start: int, end: int) -> PixelGrid:
        """Blur output rows ``[start, end)``, reading only from ``pixels``."""
        width = len(pixels[0])
        return [
            [self.blur_pixel(pixels, row, col) for col in range(width)]
            for row in range(start, end)
        ]

    def blur(self, pixels: Sequence[Sequence[Pixel]]) -> PixelGrid:
        """Return a new, blurred grid with the same dimensions as ``pixels``."""
        height = len(pixels)
        logger.debug(
            "Blurring %dx%d grid (mask=%d, offset=%d, workers=%d)",
            len(pixels[0]), height, self.mask_size, self.offset, self.workers,
        )
        workers = min(self.workers, height)
        if workers <= 1:
            return self.blur_rows(pixels, 0, height)

        # Disjoint row bands; each band writes only its own output rows.
        rows_per_worker = height // workers
        bands = []
        for i in range(workers):
            start = i * rows_per_worker
            end = start + rows_per_worker if i < workers - 1 else height
            bands.append((start, end))

        blurred: PixelGrid = []
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.blur_rows, pixels, start, end) for start, end in bands]
            for future in futures:
                blurred.extend(future.result())
        return blurred


def box_blur(
    pixels: Sequence[Sequence[Pixel]],
    mask_size: int = DEFAULT_MASK_SIZE,
    workers: int = DEFAULT_WORKERS,
) -> PixelGrid:
    """Blur ``pixels`` with a one-off :class:`BoxBlurEngine`."""
    return BoxBlurEngine(mask_size=mask_size, workers=workers).blur(pixels)
