"""Build images from raw pixel buffers.

Two kinds of input are accepted:

- pixel units: values already typed as the target pixel format (a structured
  numpy array, or channel values with a trailing channel axis)
- raw bytes: any C-contiguous bytes-like object laid out as the target pixel
  format, reinterpreted without copying before it is validated

Every entry point runs the same fixed sequence: check dimensions, (view
bytes as pixel units), check the buffer is long enough, allocate the image,
copy the first ``width * height`` units into it. Nothing is allocated for a
request that fails validation, and the returned image never aliases the input.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np

from pyimgraw.config.configuration import Configuration, get_default_configuration
from pyimgraw.image.image import Image
from pyimgraw.memory.copy import copy_pixels
from pyimgraw.memory.views import view_as_pixels
from pyimgraw.pixels.formats import PixelFormat
from pyimgraw.pixels.registry import PixelFormatLike, find_pixel_format_for_dtype, parse_pixel_format
from pyimgraw.utils.param_check import check_buffer_length, check_dimensions

logger = logging.getLogger(__name__)

_BYTES_TYPES = (bytes, bytearray, memoryview)


def _resolve_configuration(configuration: Optional[Configuration]) -> Configuration:
    if configuration is None:
        return get_default_configuration()
    if not isinstance(configuration, Configuration):
        raise TypeError(f"Expected Configuration, got {type(configuration).__name__}")
    return configuration


def _resolve_unit_format(data: Any, pixel_format: Optional[PixelFormatLike]) -> PixelFormat:
    if pixel_format is not None:
        return parse_pixel_format(pixel_format)

    dtype = getattr(data, "dtype", None)
    if dtype is not None and dtype.names is not None:
        fmt = find_pixel_format_for_dtype(dtype)
        if fmt is not None:
            return fmt
        raise ValueError(f"No registered pixel format matches dtype {dtype}; pass pixel_format explicitly.")
    raise ValueError("pixel_format is required unless data is a structured array of a registered format.")


def _build_image(
    configuration: Configuration,
    units: np.ndarray,
    width: int,
    height: int,
    pixel_format: PixelFormat,
    required: int,
) -> Image:
    check_buffer_length(units.shape[0], required, param_name="data")

    image = Image(configuration, width, height, pixel_format)
    try:
        copy_pixels(
            units,
            image.get_pixel_span(),
            required,
            max_workers=configuration.max_degree_of_parallelism,
            min_parallel_length=configuration.min_parallel_copy_length,
        )
    except BaseException:
        image.close()
        raise

    logger.debug(
        "Loaded %dx%d %s image from %d pixel units",
        int(width),
        int(height),
        pixel_format.name,
        units.shape[0],
    )
    return image


def load_pixels(
    pixels: Any,
    width: int,
    height: int,
    pixel_format: Optional[PixelFormatLike] = None,
    *,
    configuration: Optional[Configuration] = None,
) -> Image:
    """Create an image from pixel-unit values.

    Parameters
    ----------
    pixels:
        Structured array of the pixel format's dtype (any shape, read in
        row-major order), or channel values with a trailing channel axis, e.g.
        a list of ``(r, g, b, a)`` tuples for ``rgba32``.
    width, height:
        Non-negative image dimensions. Only the first ``width * height`` units
        of `pixels` are used.
    pixel_format:
        `PixelFormat` or registered name. May be omitted when `pixels` is a
        structured array whose dtype matches a registered format.
    configuration:
        Allocation and copy options; the process-wide default when omitted.

    Raises
    ------
    InvalidArgumentError
        Negative/oversized dimensions, or fewer than ``width * height`` units.
    """

    cfg = _resolve_configuration(configuration)
    required = check_dimensions(width, height)
    fmt = _resolve_unit_format(pixels, pixel_format)
    units = fmt.as_pixel_units(pixels, limit=required)
    return _build_image(cfg, units, width, height, fmt, required)


def load_pixel_bytes(
    data: Any,
    width: int,
    height: int,
    pixel_format: PixelFormatLike,
    *,
    configuration: Optional[Configuration] = None,
) -> Image:
    """Create an image from raw bytes laid out as `pixel_format`.

    `data` may be any C-contiguous bytes-like object. Its length in pixel
    units is ``len(data) // byte_width``; that count must cover
    ``width * height``.
    """

    cfg = _resolve_configuration(configuration)
    required = check_dimensions(width, height)
    fmt = parse_pixel_format(pixel_format)
    units = view_as_pixels(data, fmt)
    return _build_image(cfg, units, width, height, fmt, required)


def load_pixel_data(
    data: Any,
    width: int,
    height: int,
    pixel_format: Optional[PixelFormatLike] = None,
    *,
    configuration: Optional[Configuration] = None,
) -> Image:
    """Create an image from either raw bytes or pixel-unit values.

    ``bytes``, ``bytearray`` and ``memoryview`` go through `load_pixel_bytes`
    (which needs `pixel_format`); anything else through `load_pixels`. Call
    `load_pixel_bytes` directly to treat a numpy array as raw bytes.
    """

    if isinstance(data, _BYTES_TYPES):
        if pixel_format is None:
            raise ValueError("pixel_format is required for byte buffers.")
        return load_pixel_bytes(data, width, height, pixel_format, configuration=configuration)
    return load_pixels(data, width, height, pixel_format, configuration=configuration)
