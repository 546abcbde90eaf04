"""Exceptions raised by the image adapter and the blur pipeline."""

from pathlib import Path
from typing import Optional, Union


class BoxBlurError(Exception):
    """Base exception for all box blur errors."""

    pass


class ImageIOError(BoxBlurError):
    """Raised when an image file cannot be read or written."""

    def __init__(self, path: Union[str, Path], message: Optional[str] = None):
        self.path = Path(path)
        if message is None:
            message = f"Image I/O failed for {self.path}"
        super().__init__(message)


class ImageNotFoundError(ImageIOError):
    """Raised when the input image does not exist."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(path, f"Error opening file: {path}")


class ImageDecodeError(ImageIOError):
    """Raised when the input exists but is not a decodable raster image."""

    def __init__(self, path: Union[str, Path], reason: object = None):
        message = f"Could not decode image {path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(path, message)


class ImageEncodeError(ImageIOError):
    """Raised when the blurred grid cannot be encoded or written."""

    def __init__(self, path: Union[str, Path], reason: object = None):
        message = f"Error writing file {path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(path, message)


class InvalidPixelGridError(BoxBlurError, ValueError):
    """Raised for empty or jagged pixel grids."""

    pass
