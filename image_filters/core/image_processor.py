"""Stateful filter front-end that keeps the latest result as the current image."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from . import filters
from .pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ImageProcessor:
    """Apply filters to a named image.

    Each filter call derives a new buffer from the *current* one and stores it
    as the new current buffer, so successive calls compose: ``invert()`` after
    ``greyscale()`` inverts the greyscale image. ``reset()`` goes back to the
    image as it was loaded.
    """

    def __init__(
        self,
        name: PathLike,
        *,
        buffer: Optional[PixelBuffer] = None,
        watermark_bounds: str = "area",
    ) -> None:
        if watermark_bounds not in filters.BOUNDS_MODES:
            raise ValueError(f"Unsupported watermark bounds mode: {watermark_bounds}")
        self._name = str(name)
        if buffer is None:
            buffer = PixelBuffer.load(name)
        self._original = buffer.deep_copy()
        self._buffer = self._original.deep_copy()
        self.watermark_bounds = watermark_bounds
        logger.debug(
            "Initialized ImageProcessor for %s (%sx%s, bounds=%s)",
            self._name,
            self._buffer.width,
            self._buffer.height,
            self.watermark_bounds,
        )

    @classmethod
    def from_buffer(
        cls, name: str, buffer: PixelBuffer, *, watermark_bounds: str = "area"
    ) -> "ImageProcessor":
        return cls(name, buffer=buffer, watermark_bounds=watermark_bounds)

    @classmethod
    def from_config(
        cls,
        name: PathLike,
        config: Mapping[str, Any],
        *,
        buffer: Optional[PixelBuffer] = None,
    ) -> "ImageProcessor":
        settings = dict(config.get("watermark", {}) or {})
        return cls(
            name,
            buffer=buffer,
            watermark_bounds=str(settings.get("bounds", "area")),
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def buffer(self) -> PixelBuffer:
        """The current buffer, replaced by every filter call."""
        return self._buffer

    @property
    def original(self) -> PixelBuffer:
        return self._original

    def _replace(self, label: str, transform: filters.Filter) -> PixelBuffer:
        self._buffer = transform(self._buffer)
        logger.debug("Applied %s to %s", label, self._name)
        return self._buffer

    def greyscale(self) -> PixelBuffer:
        return self._replace("greyscale", filters.greyscale)

    def invert(self) -> PixelBuffer:
        return self._replace("invert", filters.invert)

    def only_red(self) -> PixelBuffer:
        return self._replace("only_red", filters.only_red)

    def only_blue(self) -> PixelBuffer:
        return self._replace("only_blue", filters.only_blue)

    def only_green(self) -> PixelBuffer:
        return self._replace("only_green", filters.only_green)

    def posterize(self) -> PixelBuffer:
        return self._replace("posterize", filters.posterize)

    def apply(self, filter_name: str) -> PixelBuffer:
        """Apply a single-image filter by its name in ``filters.FILTERS``."""
        try:
            transform = filters.FILTERS[filter_name]
        except KeyError:
            raise ValueError(f"Unknown filter: {filter_name}") from None
        return self._replace(filter_name, transform)

    def watermark(self, other: "ImageProcessor") -> PixelBuffer:
        """Blend ``other``'s current image over this one.

        ``other`` has its current buffer replaced by a copy of itself; its pixel
        values are not changed. If the blend region reaches past either image an
        ``IndexError`` propagates and this processor keeps its current buffer.
        """
        second = other.buffer.deep_copy()
        other._buffer = second
        result = filters.watermark(self._buffer, second, bounds=self.watermark_bounds)
        self._buffer = result
        logger.debug("Watermarked %s with %s", self._name, other.name)
        return result

    def reset(self) -> PixelBuffer:
        self._buffer = self._original.deep_copy()
        return self._buffer

    def __repr__(self) -> str:
        return f"ImageProcessor(name={self._name!r}, buffer={self._buffer!r})"


__all__ = ["ImageProcessor"]
