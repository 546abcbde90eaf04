"""
Smoke tests for the command line interface.

Runs the full load -> blur -> write pipeline on tiny synthetic images so
regressions in wiring, exit codes or file layout are caught early.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from box_blur.cli import main as cli_main
from box_blur.cli import parse_args, process_image
from box_blur.config import BlurConfig


def _save_checkerboard(path: Path, size: int = 12, block: int = 3) -> np.ndarray:
    """Create a simple RGBA checkerboard with varying alpha."""
    pixels = np.zeros((size, size, 4), dtype=np.uint8)
    colors = [
        (32, 48, 112, 255),
        (240, 200, 96, 128),
        (20, 20, 24, 0),
        (220, 80, 92, 64),
    ]
    for y in range(size):
        for x in range(size):
            idx = ((x // block) + (y // block)) % len(colors)
            pixels[y, x] = colors[idx]
    Image.fromarray(pixels).save(path)
    return pixels


def test_cli_smoke(tmp_path):
    source = tmp_path / "sample.png"
    target = tmp_path / "sample-blurred.png"
    pixels = _save_checkerboard(source)

    assert cli_main([str(source), str(target)]) == 0

    assert target.exists(), "CLI did not write the blurred image"
    with Image.open(target) as img:
        assert img.mode == "RGBA"
        assert img.size == (12, 12)
        blurred = np.array(img)

    np.testing.assert_array_equal(blurred[:, :, 3], pixels[:, :, 3])
    assert not np.array_equal(blurred[:, :, :3], pixels[:, :, :3])


def test_cli_parallel_matches_serial(tmp_path):
    source = tmp_path / "sample.png"
    _save_checkerboard(source, size=15)
    serial = tmp_path / "serial.png"
    parallel = tmp_path / "parallel.png"

    assert cli_main([str(source), str(serial), "--mask-size", "5"]) == 0
    assert cli_main([str(source), str(parallel), "--mask-size", "5", "--workers", "4"]) == 0

    with Image.open(serial) as a, Image.open(parallel) as b:
        np.testing.assert_array_equal(np.array(a), np.array(b))


def test_cli_missing_input_returns_error(tmp_path):
    target = tmp_path / "out.png"
    assert cli_main([str(tmp_path / "missing.png"), str(target)]) == 1
    assert not target.exists()


def test_cli_corrupt_input_returns_error(tmp_path):
    source = tmp_path / "broken.png"
    source.write_bytes(b"\x89PNG but not really")
    assert cli_main([str(source), str(tmp_path / "out.png")]) == 1


def test_cli_rejects_bad_mask_size(tmp_path):
    source = tmp_path / "sample.png"
    _save_checkerboard(source)
    target = tmp_path / "out.png"
    assert cli_main([str(source), str(target), "--mask-size", "0"]) == 1
    assert not target.exists()


def test_default_arguments():
    args = parse_args([])
    assert args.input == Path("lenna.png")
    assert args.output == Path("lenna-blurred.png")
    assert args.mask_size == 3
    assert args.workers == 1
    assert args.debug is False


def test_process_image_returns_output_path(tmp_path):
    source = tmp_path / "sample.png"
    _save_checkerboard(source, size=4, block=1)
    cfg = BlurConfig(input_path=source, output_path=tmp_path / "out.png", mask_size=2)
    assert process_image(cfg) == tmp_path / "out.png"
    assert (tmp_path / "out.png").exists()
