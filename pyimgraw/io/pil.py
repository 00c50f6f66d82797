"""In-memory interop with Pillow images.

No file I/O happens here: PIL images are read through their raw byte
representation and written back via ``PIL.Image.fromarray``.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from pyimgraw.config.configuration import Configuration
from pyimgraw.image.image import Image
from pyimgraw.io.pixel_data import load_pixel_bytes
from pyimgraw.pixels.formats import L8, RGB24, RGBA32

# Channels to emit, in PIL order, for each supported pixel format.
_PIL_CHANNELS = {
    "l8": ("l",),
    "rgb24": ("r", "g", "b"),
    "bgr24": ("r", "g", "b"),
    "rgba32": ("r", "g", "b", "a"),
    "bgra32": ("r", "g", "b", "a"),
}

_FORMAT_FOR_PIL_MODE = {
    "L": L8,
    "RGB": RGB24,
    "RGBA": RGBA32,
}


def to_pil_image(image: Image):
    """Convert an ``l8``/``rgb24``/``bgr24``/``rgba32``/``bgra32`` image to a PIL image."""

    from PIL import Image as PILImage

    fmt = image.pixel_format
    order = _PIL_CHANNELS.get(fmt.name)
    if order is None:
        raise ValueError(
            f"Cannot convert {fmt.name!r} images to PIL. Supported: {', '.join(sorted(_PIL_CHANNELS))}."
        )

    grid = image.get_pixel_span().reshape(image.height, image.width)
    if len(order) == 1:
        arr = grid[order[0]]
    else:
        arr = np.stack([grid[c] for c in order], axis=-1)
    return PILImage.fromarray(np.ascontiguousarray(arr, dtype=np.uint8))


def from_pil_image(pil_image: Any, *, configuration: Optional[Configuration] = None) -> Image:
    """Load a PIL image in mode ``L``, ``RGB`` or ``RGBA`` through the byte path."""

    mode = getattr(pil_image, "mode", None)
    fmt = _FORMAT_FOR_PIL_MODE.get(mode)
    if fmt is None:
        raise ValueError(
            f"Unsupported PIL mode: {mode!r}. Supported: {', '.join(sorted(_FORMAT_FOR_PIL_MODE))}. "
            "Convert the image first, e.g. pil_image.convert('RGBA')."
        )
    width, height = pil_image.size
    return load_pixel_bytes(pil_image.tobytes(), width, height, fmt, configuration=configuration)
