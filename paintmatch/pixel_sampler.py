"""
Pixel sampling from reference photos.
Handles loading images with Pillow and reading single pixels as hex colors.
"""

import logging
import math
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .color_converter import rgb_to_hex

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ['.jpg', '.jpeg', '.png', '.tif', '.tiff', '.webp', '.bmp']

ImageData = Union[Image.Image, np.ndarray]


class ImageLoadError(Exception):
    """Exception raised when a reference image cannot be loaded."""
    pass


def load_reference_image(file_path: Union[str, Path]) -> Image.Image:
    """
    Load a reference photo and return it as an RGB PIL Image.

    Args:
        file_path: Path to the image file to load

    Returns:
        PIL Image in RGB mode

    Raises:
        ImageLoadError: If the file cannot be loaded or is not a valid image
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise ImageLoadError(f"File not found: {file_path}")

    if file_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise ImageLoadError(f"Unsupported file format: {file_path.suffix}")

    try:
        with Image.open(file_path) as img:
            img.load()
            image = img.convert('RGB') if img.mode != 'RGB' else img.copy()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"Failed to load image {file_path}: {e}") from e

    logger.info(f"Loaded {file_path.name}: {image.size[0]}x{image.size[1]}")
    return image


def _nearest(value: float) -> int:
    """Round to the nearest integer, halves up."""
    return math.floor(value + 0.5)


def display_to_natural(displayed_coord: float, displayed_size: float, natural_size: int) -> int:
    """Map a coordinate on a scaled display to the natural-resolution pixel.

    Uses round((displayed_coord / displayed_size) * natural_size) with halves
    rounded up, clamped to [0, natural_size - 1].
    """
    if displayed_size <= 0 or natural_size <= 0:
        raise ValueError(f"Image sizes must be positive, got displayed={displayed_size}, natural={natural_size}")

    natural = _nearest((displayed_coord / displayed_size) * natural_size)
    return min(max(natural, 0), natural_size - 1)


def _image_size(image: ImageData):
    """Return (width, height) of a PIL image or pixel array."""
    if isinstance(image, Image.Image):
        return image.size
    height, width = image.shape[:2]
    return width, height


def _pixel_rgb(image: ImageData, x: int, y: int):
    if isinstance(image, Image.Image):
        if image.mode != 'RGB':
            image = image.convert('RGB')
        return image.getpixel((x, y))

    pixel = np.asarray(image[y, x])
    if pixel.ndim == 0:
        # Grayscale
        pixel = np.repeat(pixel, 3)
    pixel = pixel[:3].astype(float)

    if image.dtype == np.uint16:
        pixel = pixel / 65535.0 * 255.0
    elif np.issubdtype(image.dtype, np.floating):
        # Float buffers must be normalized to 0.0-1.0
        if pixel.min() < 0.0 or pixel.max() > 1.0:
            raise ValueError(f"Float pixel values must be within 0.0-1.0, got {tuple(pixel)}")
        pixel = pixel * 255.0
    return tuple(pixel)


def sample_pixel(image: ImageData, x: float, y: float) -> str:
    """Read one pixel (nearest, no interpolation) as a '#rrggbb' string.

    Coordinates outside the image read the nearest edge pixel.

    Args:
        image: PIL Image or array shaped (H, W), (H, W, 3) or (H, W, 4);
               float arrays hold 0.0-1.0 values
        x: Column in natural image pixels, rounded to the nearest pixel
        y: Row in natural image pixels, rounded to the nearest pixel

    Raises:
        ValueError: for an empty image or a float array outside 0.0-1.0
    """
    width, height = _image_size(image)
    if width <= 0 or height <= 0:
        raise ValueError("Cannot sample an empty image")

    px = min(max(_nearest(x), 0), width - 1)
    py = min(max(_nearest(y), 0), height - 1)

    hex_color = rgb_to_hex(_pixel_rgb(image, px, py))
    logger.debug(f"Sampled pixel ({px}, {py}) -> {hex_color}")
    return hex_color


def sample_displayed_pixel(image: ImageData, display_x: float, display_y: float,
                           display_width: float, display_height: float) -> str:
    """Sample the pixel under a point on a scaled display of the image."""
    width, height = _image_size(image)
    x = display_to_natural(display_x, display_width, width)
    y = display_to_natural(display_y, display_height, height)
    return sample_pixel(image, x, y)
