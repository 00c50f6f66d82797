"""Zero-copy typed views over raw byte buffers.

`view_as_pixels` is the only place in `pyimgraw` that reinterprets memory.
It trusts the caller that the bytes are already laid out as the target
pixel format; nothing is converted or reordered.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pyimgraw.errors import InvalidArgumentError
from pyimgraw.pixels.registry import PixelFormatLike, parse_pixel_format


def byte_view(data: Any) -> np.ndarray:
    """Return a flat ``uint8`` array sharing memory with a bytes-like object."""

    try:
        view = memoryview(data)
    except TypeError as exc:
        raise TypeError(f"Expected a bytes-like object, got {type(data).__name__}") from exc
    if not view.c_contiguous:
        raise InvalidArgumentError("data", "byte buffer must be C-contiguous")
    if view.nbytes == 0:
        return np.empty(0, dtype=np.uint8)
    return np.frombuffer(view, dtype=np.uint8)


def view_as_pixels(data: Any, pixel_format: PixelFormatLike) -> np.ndarray:
    """View `data` as a read-only 1-D array of pixel units.

    The result shares memory with `data` and holds
    ``floor(nbytes / byte_width)`` elements; trailing bytes that do not fill a
    whole unit are left out of the view. The view must not be used after the
    underlying buffer has been modified or released by its owner.
    """

    fmt = parse_pixel_format(pixel_format)
    raw = byte_view(data)
    count = raw.shape[0] // fmt.byte_width

    if count == 0:
        pixels = np.empty(0, dtype=fmt.dtype)
    else:
        pixels = raw[: count * fmt.byte_width].view(fmt.dtype)
    pixels.flags.writeable = False
    return pixels
