"""Convert between image files, numpy arrays and pixel grids."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Sequence, Union

import numpy as np
from PIL import Image

from .config import CHANNEL_MAX, WIDE_CHANNEL_DIVISOR, WIDE_CHANNEL_MAX
from .engine import Pixel, PixelGrid
from .errors import (
    ImageDecodeError,
    ImageEncodeError,
    ImageNotFoundError,
    InvalidPixelGridError,
)

logger = logging.getLogger(__name__)

# Pillow modes that hold more than 8 bits per sample; everything else goes through RGBA.
WIDE_MODES = {"I", "I;16", "I;16B", "I;16L", "I;16N"}

PathLike = Union[str, Path]


def validate_pixel_grid(pixels: Sequence[Sequence[Pixel]]) -> None:
    """Reject empty or jagged grids before they reach the engine or encoder."""
    if not pixels:
        raise InvalidPixelGridError("Pixel grid has no rows")
    width = len(pixels[0])
    if width == 0:
        raise InvalidPixelGridError("Pixel grid has no columns")
    for index, row in enumerate(pixels):
        if len(row) != width:
            raise InvalidPixelGridError(
                f"Row {index} has {len(row)} pixels, expected {width}"
            )


def grid_from_array(array: np.ndarray) -> PixelGrid:
    """Build a pixel grid from an ``(H, W)``, ``(H, W, C)`` image array.

    ``uint8`` data is taken as-is.  Any wider integer dtype is treated as
    16-bit samples and reduced with ``value // 257``.  Grayscale is
    replicated into R, G and B; missing alpha becomes fully opaque.
    """
    data = np.asarray(array)
    if data.ndim == 2:
        data = data[:, :, np.newaxis]
    if data.ndim != 3 or data.shape[0] == 0 or data.shape[1] == 0:
        raise InvalidPixelGridError(f"Expected a non-empty (H, W[, C]) array, got shape {data.shape}")
    if not np.issubdtype(data.dtype, np.integer):
        raise InvalidPixelGridError(f"Expected integer channel data, got {data.dtype}")

    if data.dtype == np.uint8:
        data = data.astype(np.int64)
    else:
        data = np.clip(data.astype(np.int64), 0, WIDE_CHANNEL_MAX) // WIDE_CHANNEL_DIVISOR

    channels = data.shape[2]
    height, width = data.shape[:2]
    opaque = np.full((height, width, 1), CHANNEL_MAX, dtype=np.int64)
    if channels == 1:
        data = np.concatenate([data, data, data, opaque], axis=2)
    elif channels == 2:
        gray, alpha = data[:, :, :1], data[:, :, 1:]
        data = np.concatenate([gray, gray, gray, alpha], axis=2)
    elif channels == 3:
        data = np.concatenate([data, opaque], axis=2)
    elif channels != 4:
        raise InvalidPixelGridError(f"Unsupported channel count: {channels}")

    return [[Pixel(*sample) for sample in row] for row in data.tolist()]


def array_from_grid(pixels: Sequence[Sequence[Pixel]]) -> np.ndarray:
    """Return an ``(H, W, 4)`` ``uint8`` RGBA array for ``pixels``."""
    validate_pixel_grid(pixels)
    return np.array(pixels, dtype=np.uint8).reshape(len(pixels), len(pixels[0]), 4)


def load_pixel_grid(path: PathLike) -> PixelGrid:
    """Decode an image file into a pixel grid."""
    path = Path(path)
    if not path.is_file():
        raise ImageNotFoundError(path)

    try:
        with Image.open(path) as img:
            img.load()
            logger.debug("Decoded %s (%s, %dx%d)", path, img.mode, img.width, img.height)
            if img.mode in WIDE_MODES:
                array = np.array(img)
            else:
                array = np.array(img.convert("RGBA"))
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(path, exc) from exc

    return grid_from_array(array)


def save_pixel_grid(pixels: Sequence[Sequence[Pixel]], path: PathLike) -> Path:
    """Encode ``pixels`` as RGBA and write them to ``path``.

    The format follows the file suffix.  The image is encoded in memory
    first so an encoder failure never leaves a file behind.
    """
    path = Path(path)
    image_format = Image.registered_extensions().get(path.suffix.lower())
    if image_format is None:
        raise ImageEncodeError(path, f"unsupported file extension '{path.suffix}'")

    array = array_from_grid(pixels)
    buffer = io.BytesIO()
    try:
        Image.fromarray(array).save(buffer, format=image_format)
    except (OSError, ValueError, KeyError) as exc:
        raise ImageEncodeError(path, exc) from exc

    try:
        path.write_bytes(buffer.getvalue())
    except OSError as exc:
        if path.is_file():
            path.unlink()
        raise ImageEncodeError(path, exc) from exc

    logger.debug("Wrote %s (%s, %d bytes)", path, image_format, buffer.tell())
    return path
