"""Image I/O and display helpers backed by OpenCV."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Common file extensions we explicitly allow when validating paths.
SUPPORTED_IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".tiff", ".tif"}


def load_image(path: PathLike) -> np.ndarray:
    """Load an image as an RGB ``uint8`` array of shape (H, W, 3).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If OpenCV fails to decode the image.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")
    if path.suffix.lower() not in SUPPORTED_IMAGE_EXTENSIONS:
        logger.warning("Attempting to load image with uncommon extension: %s", path.suffix)
    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError(f"Unable to decode image: {path}")
    logger.debug("Loaded image %s with shape %s", path, image.shape)
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def save_image(path: PathLike, pixels: np.ndarray) -> Path:
    """Write RGB pixels to disk, creating parent directories if needed."""
    path = Path(path)
    if pixels is None or pixels.size == 0:
        raise ValueError("Cannot save empty image.")
    path.parent.mkdir(parents=True, exist_ok=True)
    success = cv2.imwrite(str(path), cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR))
    if not success:
        raise IOError(f"Failed to save image at {path}")
    logger.debug("Saved image to %s", path)
    return path


def show_image(pixels: np.ndarray, title: str = "image", *, wait_ms: int = 0) -> None:
    """Display RGB pixels in an OpenCV window until a key press or ``wait_ms`` elapses."""
    if wait_ms < 0:
        raise ValueError("wait_ms must be zero or positive.")
    cv2.imshow(title, cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR))
    cv2.waitKey(wait_ms)
    cv2.destroyWindow(title)
    logger.debug("Displayed %s", title)


def output_path_for(
    directory: PathLike, image_name: PathLike, label: str, extension: str = ".png"
) -> Path:
    """Build ``<directory>/<stem>_<label><extension>`` for a filter result."""
    if not extension.startswith("."):
        raise ValueError(f"Output extension must start with '.': {extension}")
    stem = Path(image_name).stem
    return Path(directory) / f"{stem}_{label}{extension}"


__all__ = [
    "SUPPORTED_IMAGE_EXTENSIONS",
    "load_image",
    "save_image",
    "show_image",
    "output_path_for",
]
