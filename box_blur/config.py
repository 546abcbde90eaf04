"""Blur configuration: kernel defaults, channel limits, run settings."""

from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Kernel
# ---------------------------------------------------------------------------
DEFAULT_MASK_SIZE = 3
DEFAULT_WORKERS = 1


# ---------------------------------------------------------------------------
# Channels
# ---------------------------------------------------------------------------
CHANNEL_MAX = 255

# 16-bit samples are reduced to 8 bits by integer division (65535 // 257 == 255)
WIDE_CHANNEL_DIVISOR = 257
WIDE_CHANNEL_MAX = 65535


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------
DEFAULT_INPUT = Path("lenna.png")
DEFAULT_OUTPUT = Path("lenna-blurred.png")


@dataclass
class BlurConfig:
    """Runtime configuration derived from CLI arguments."""

    input_path: Path = DEFAULT_INPUT
    output_path: Path = DEFAULT_OUTPUT
    mask_size: int = DEFAULT_MASK_SIZE
    workers: int = DEFAULT_WORKERS
    debug: bool = False
