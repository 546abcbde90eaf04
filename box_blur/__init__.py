"""Public interface for the box blur toolkit."""

from __future__ import annotations

from .engine import BoxBlurEngine, Pixel, PixelGrid, box_blur, mask_offset
from .image_io import (
    array_from_grid,
    grid_from_array,
    load_pixel_grid,
    save_pixel_grid,
    validate_pixel_grid,
)

__all__ = [
    "BoxBlurEngine",
    "Pixel",
    "PixelGrid",
    "array_from_grid",
    "box_blur",
    "grid_from_array",
    "load_pixel_grid",
    "mask_offset",
    "save_pixel_grid",
    "validate_pixel_grid",
]
