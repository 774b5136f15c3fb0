"""Per-pixel filters expressed as pure ``PixelBuffer -> PixelBuffer`` functions.

Every filter leaves its inputs untouched and returns a freshly allocated
buffer. Channel arithmetic is widened to ``int32`` and narrowed back to
``uint8``; for in-range inputs every result already lies in ``[0, 255]`` so no
clamping is applied.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Tuple

import numpy as np

from .pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)

RED, GREEN, BLUE = 0, 1, 2

BOUNDS_MODES = ("area", "overlap")

Filter = Callable[[PixelBuffer], PixelBuffer]


def _widen(buffer: PixelBuffer) -> np.ndarray:
    return buffer.pixels.astype(np.int32)


def _narrow(values: np.ndarray) -> PixelBuffer:
    return PixelBuffer(values.astype(np.uint8), copy=False)


def greyscale(buffer: PixelBuffer) -> PixelBuffer:
    """Set every channel to the floored mean of the three channels."""
    mean = _widen(buffer).sum(axis=2) // 3
    return _narrow(np.repeat(mean[..., np.newaxis], 3, axis=2))


def invert(buffer: PixelBuffer) -> PixelBuffer:
    return _narrow(np.abs(_widen(buffer) - 255))


def _keep_channel(buffer: PixelBuffer, keep: int) -> PixelBuffer:
    values = buffer.pixels.copy()
    dropped = [c for c in (RED, GREEN, BLUE) if c != keep]
    values[..., dropped] = 0
    return PixelBuffer(values, copy=False)


def only_red(buffer: PixelBuffer) -> PixelBuffer:
    return _keep_channel(buffer, RED)


def only_green(buffer: PixelBuffer) -> PixelBuffer:
    return _keep_channel(buffer, GREEN)


def only_blue(buffer: PixelBuffer) -> PixelBuffer:
    return _keep_channel(buffer, BLUE)


def posterize(buffer: PixelBuffer) -> PixelBuffer:
    """Keep only the channel strictly greater than both others.

    The three comparisons are independent, so a pixel whose maximum is shared
    by two or three channels has none of them winning and is left unchanged.
    """
    values = buffer.pixels.copy()
    red, green, blue = values[..., RED], values[..., GREEN], values[..., BLUE]
    red_wins = (red > green) & (red > blue)
    green_wins = (green > red) & (green > blue)
    blue_wins = (blue > red) & (blue > green)

    values[red_wins, GREEN] = 0
    values[red_wins, BLUE] = 0
    values[green_wins, RED] = 0
    values[green_wins, BLUE] = 0
    values[blue_wins, RED] = 0
    values[blue_wins, GREEN] = 0
    return PixelBuffer(values, copy=False)


def watermark_region(
    first: PixelBuffer, second: PixelBuffer, bounds: str = "area"
) -> Tuple[int, int]:
    """Return the ``(width, height)`` region that ``watermark`` blends.

    ``"area"`` bounds the region by the dimensions of the second image when the
    first has the strictly larger area, and by the first image's dimensions
    otherwise. It may therefore reach past one of the buffers. ``"overlap"``
    uses the per-dimension minimum and always fits both.
    """
    if bounds == "area":
        if first.area > second.area:
            return second.width, second.height
        return first.width, first.height
    if bounds == "overlap":
        return min(first.width, second.width), min(first.height, second.height)
    raise ValueError(f"Unsupported watermark bounds mode: {bounds}")


def watermark(first: PixelBuffer, second: PixelBuffer, *, bounds: str = "area") -> PixelBuffer:
    """Average ``second`` over ``first`` inside the blend region.

    Pixels of ``first`` outside the region are kept as they are.

    Raises:
        IndexError: If the region reaches past either buffer.
        ValueError: If ``bounds`` is not a known mode.
    """
    width, height = watermark_region(first, second, bounds)
    for label, buffer in (("first", first), ("second", second)):
        if width > buffer.width or height > buffer.height:
            raise IndexError(
                f"Watermark region {width}x{height} exceeds the {label} image "
                f"({buffer.width}x{buffer.height})."
            )

    blended = _widen(first)
    overlay = second.pixels[:height, :width].astype(np.int32)
    blended[:height, :width] = (blended[:height, :width] + overlay) // 2
    logger.debug("Blended %sx%s region (bounds=%s).", width, height, bounds)
    return _narrow(blended)


FILTERS: Dict[str, Filter] = {
    "greyscale": greyscale,
    "invert": invert,
    "only_red": only_red,
    "only_blue": only_blue,
    "only_green": only_green,
    "posterize": posterize,
}


__all__ = [
    "BOUNDS_MODES",
    "FILTERS",
    "greyscale",
    "invert",
    "only_red",
    "only_green",
    "only_blue",
    "posterize",
    "watermark",
    "watermark_region",
]
