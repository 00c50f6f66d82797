from __future__ import annotations

from typing import Any

import numpy as np

from pyimgraw.config.configuration import Configuration
from pyimgraw.image.frame import ImageFrame
from pyimgraw.memory.copy import copy_pixels
from pyimgraw.pixels.formats import PixelFormat
from pyimgraw.pixels.registry import PixelFormatLike


class Image:
    """An owned in-memory image.

    Only the root frame carries pixels. Width and height are fixed at
    construction. Call `close()` (or use the image as a context manager) to hand
    the storage back to the configured allocator.
    """

    def __init__(
        self,
        configuration: Configuration,
        width: int,
        height: int,
        pixel_format: PixelFormatLike,
    ) -> None:
        self._frames: tuple[ImageFrame, ...] = (
            ImageFrame(configuration, width, height, pixel_format),
        )

    @property
    def frames(self) -> tuple[ImageFrame, ...]:
        return self._frames

    @property
    def root_frame(self) -> ImageFrame:
        return self._frames[0]

    @property
    def configuration(self) -> Configuration:
        return self.root_frame.configuration

    @property
    def width(self) -> int:
        return self.root_frame.width

    @property
    def height(self) -> int:
        return self.root_frame.height

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def pixel_format(self) -> PixelFormat:
        return self.root_frame.pixel_format

    @property
    def is_closed(self) -> bool:
        return self.root_frame.is_closed

    def get_pixel_span(self) -> np.ndarray:
        return self.root_frame.get_pixel_span()

    def get_row_span(self, y: int) -> np.ndarray:
        return self.root_frame.get_row_span(y)

    def __getitem__(self, key: Any) -> np.void:
        return self.root_frame[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        self.root_frame[key] = value

    def to_array(self, *, channels: bool = False) -> np.ndarray:
        return self.root_frame.to_array(channels=channels)

    def clone(self, *, configuration: Configuration | None = None) -> "Image":
        """Deep copy of the image, optionally allocated through another configuration."""

        cfg = configuration or self.configuration
        source = self.get_pixel_span()
        clone = Image(cfg, self.width, self.height, self.pixel_format)
        copy_pixels(
            source,
            clone.get_pixel_span(),
            source.shape[0],
            max_workers=cfg.max_degree_of_parallelism,
            min_parallel_length=cfg.min_parallel_copy_length,
        )
        return clone

    def close(self) -> None:
        for frame in self._frames:
            frame.close()

    def __enter__(self) -> "Image":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.is_closed else "open"
        return f"Image({self.width}x{self.height}, {self.pixel_format.name}, {state})"
