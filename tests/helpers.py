from __future__ import annotations

from pathlib import Path
from typing import Sequence

import cv2
import numpy as np

from image_filters.core import PixelBuffer


def create_uniform_buffer(width: int, height: int, rgb: Sequence[int]) -> PixelBuffer:
    return PixelBuffer.blank(width, height, fill=rgb)


def create_random_buffer(width: int = 24, height: int = 16, *, seed: int = 7) -> PixelBuffer:
    """A reproducible noisy buffer with ties sprinkled in for posterize checks."""
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    pixels[0, :, :] = 128  # all-equal row
    pixels[1, :, 0] = pixels[1, :, 1]  # red/green tie row
    return PixelBuffer(pixels)


def create_gradient_pixels(width: int = 32, height: int = 20) -> np.ndarray:
    red = np.tile(np.linspace(0, 255, width, dtype=np.uint8), (height, 1))
    green = np.tile(np.linspace(255, 0, height, dtype=np.uint8)[:, None], (1, width))
    blue = np.full((height, width), 90, dtype=np.uint8)
    return np.dstack([red, green, blue])


def write_rgb_image(path: Path, pixels: np.ndarray) -> Path:
    """Write RGB pixels as an image file via OpenCV (which expects BGR)."""
    cv2.imwrite(str(path), cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR))
    return path


def read_rgb_image(path: Path) -> np.ndarray:
    return cv2.cvtColor(cv2.imread(str(path), cv2.IMREAD_COLOR), cv2.COLOR_BGR2RGB)
