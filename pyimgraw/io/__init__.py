"""Entry points that build images from external data."""

from __future__ import annotations

from .pixel_data import load_pixel_bytes, load_pixel_data, load_pixels
from .pil import from_pil_image, to_pil_image

__all__ = [
    "from_pil_image",
    "load_pixel_bytes",
    "load_pixel_data",
    "load_pixels",
    "to_pil_image",
]
