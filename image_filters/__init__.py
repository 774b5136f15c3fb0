"""Per-pixel RGB image filters: greyscale, invert, channel isolation, posterize, watermark."""

from .core import ImageProcessor, Pixel, PixelBuffer

__version__ = "0.1.0"

__all__ = ["ImageProcessor", "Pixel", "PixelBuffer", "__version__"]
