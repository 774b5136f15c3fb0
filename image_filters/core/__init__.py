"""Core pixel processing package for the image filter tools."""

from . import filters, utils
from .image_processor import ImageProcessor
from .pixel_buffer import Pixel, PixelBuffer

__all__ = [
    "ImageProcessor",
    "Pixel",
    "PixelBuffer",
    "filters",
    "utils",
]
