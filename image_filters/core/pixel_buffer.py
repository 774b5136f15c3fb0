"""RGB pixel grid shared by the filters and the image processor."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple, Sequence, Union

import numpy as np

from . import utils

PathLike = Union[str, Path]


class Pixel(NamedTuple):
    red: int
    green: int
    blue: int


def _check_channel(value: int) -> int:
    channel = int(value)
    if not 0 <= channel <= 255:
        raise ValueError(f"Channel value {value} outside [0, 255].")
    return channel


class PixelBuffer:
    """A ``width x height`` grid of RGB pixels stored as an (H, W, 3) uint8 array.

    Pixels are addressed as ``(x, y)`` where ``x`` is the column (< width) and
    ``y`` is the row (< height).
    """

    def __init__(self, pixels: np.ndarray, *, copy: bool = True) -> None:
        array = np.asarray(pixels)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) array, received shape {array.shape}.")
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise ValueError("Cannot build a pixel buffer from an empty image.")
        if not np.issubdtype(array.dtype, np.integer):
            raise ValueError(f"Channel values must be integers, received dtype {array.dtype}.")
        if array.dtype != np.uint8:
            if array.min() < 0 or array.max() > 255:
                raise ValueError("Channel values must lie in [0, 255].")
            array = array.astype(np.uint8)
        elif copy:
            array = array.copy()
        self._pixels = array

    @classmethod
    def blank(
        cls, width: int, height: int, fill: Sequence[int] = (0, 0, 0)
    ) -> "PixelBuffer":
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive.")
        rgb = [_check_channel(c) for c in fill]
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[...] = rgb
        return cls(pixels, copy=False)

    @classmethod
    def load(cls, path: PathLike) -> "PixelBuffer":
        return cls(utils.load_image(path), copy=False)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the underlying array."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer."
            )

    def get_pixel(self, x: int, y: int) -> Pixel:
        self._check_bounds(x, y)
        red, green, blue = (int(c) for c in self._pixels[y, x])
        return Pixel(red, green, blue)

    def set_pixel(self, x: int, y: int, pixel: Sequence[int]) -> None:
        self._check_bounds(x, y)
        if len(pixel) != 3:
            raise ValueError("A pixel needs exactly three channels.")
        self._pixels[y, x] = [_check_channel(c) for c in pixel]

    def deep_copy(self) -> "PixelBuffer":
        return PixelBuffer(self._pixels, copy=True)

    def show(self, title: str = "image", *, wait_ms: int = 0) -> None:
        utils.show_image(self._pixels, title, wait_ms=wait_ms)

    def save(self, path: PathLike) -> Path:
        return utils.save_image(path, self._pixels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


__all__ = ["Pixel", "PixelBuffer"]
