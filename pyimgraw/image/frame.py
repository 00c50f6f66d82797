from __future__ import annotations

import logging
from typing import Any

import numpy as np
from numpy.lib import recfunctions as rfn

from pyimgraw.config.configuration import Configuration
from pyimgraw.errors import ImageDisposedError
from pyimgraw.pixels.formats import PixelFormat
from pyimgraw.pixels.registry import PixelFormatLike, parse_pixel_format
from pyimgraw.utils.param_check import check_dimensions

logger = logging.getLogger(__name__)


class ImageFrame:
    """One frame: a contiguous row-major buffer of ``width * height`` pixel units.

    Storage comes from the configuration's memory allocator and is zeroed on
    allocation. Pixel ``(x, y)`` lives at index ``y * width + x``.
    """

    def __init__(
        self,
        configuration: Configuration,
        width: int,
        height: int,
        pixel_format: PixelFormatLike,
    ) -> None:
        count = check_dimensions(width, height)
        fmt = parse_pixel_format(pixel_format)
        if not isinstance(configuration, Configuration):
            raise TypeError(f"Expected Configuration, got {type(configuration).__name__}")

        pixels = configuration.memory_allocator.allocate(count, fmt.dtype, clean=True)
        if pixels.shape != (count,) or pixels.dtype != fmt.dtype:
            raise RuntimeError(
                f"{configuration.memory_allocator!r} returned shape={pixels.shape} dtype={pixels.dtype}, "
                f"expected shape=({count},) dtype={fmt.dtype}"
            )

        self._configuration = configuration
        self._width = int(width)
        self._height = int(height)
        self._pixel_format = fmt
        self._pixels: np.ndarray | None = pixels
        logger.debug("Allocated %dx%d %s frame", self._width, self._height, fmt.name)

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixel_format(self) -> PixelFormat:
        return self._pixel_format

    @property
    def pixel_count(self) -> int:
        return self._width * self._height

    @property
    def is_closed(self) -> bool:
        return self._pixels is None

    def _storage(self) -> np.ndarray:
        if self._pixels is None:
            raise ImageDisposedError("Frame has been closed; its pixel storage was released")
        return self._pixels

    def get_pixel_span(self) -> np.ndarray:
        """Writable 1-D view of the whole pixel storage in row-major order."""

        return self._storage()

    def get_row_span(self, y: int) -> np.ndarray:
        pixels = self._storage()
        row = int(y)
        if not 0 <= row < self._height:
            raise IndexError(f"row {y} out of range for height {self._height}")
        start = row * self._width
        return pixels[start : start + self._width]

    def _offset(self, key: Any) -> int:
        try:
            x, y = key
        except (TypeError, ValueError) as exc:
            raise TypeError(f"Pixel index must be an (x, y) pair, got {key!r}") from exc
        x, y = int(x), int(y)
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) out of range for {self._width}x{self._height}")
        return y * self._width + x

    def __getitem__(self, key: Any) -> np.void:
        return self._storage()[self._offset(key)]

    def __setitem__(self, key: Any, value: Any) -> None:
        pixels = self._storage()
        pixels[self._offset(key)] = value

    def to_array(self, *, channels: bool = False) -> np.ndarray:
        """Copy the pixels into an ``(H, W)`` structured array.

        With ``channels=True`` the result is an ``(H, W, C)`` plain array instead.
        """

        grid = self._storage().reshape(self._height, self._width).copy()
        if channels:
            return rfn.structured_to_unstructured(grid)
        return grid

    def close(self) -> None:
        if self._pixels is None:
            return
        pixels, self._pixels = self._pixels, None
        self._configuration.memory_allocator.release(pixels)

    def __repr__(self) -> str:
        state = "closed" if self.is_closed else "open"
        return f"ImageFrame({self._width}x{self._height}, {self._pixel_format.name}, {state})"
