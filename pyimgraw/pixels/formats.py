from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.lib import recfunctions as rfn

from pyimgraw.errors import InvalidArgumentError
from pyimgraw.utils.param_check import check_buffer_length


@dataclass(frozen=True)
class PixelFormat:
    """In-memory layout of one pixel unit.

    The layout is a numpy structured dtype whose fields are the channels in the
    format's native order. Everything outside this module only relies on
    `byte_width`; channel names matter for coercion and interop.
    """

    name: str
    dtype: np.dtype
    description: str = ""

    def __post_init__(self) -> None:
        name = str(self.name).strip().lower()
        if not name:
            raise ValueError("Pixel format name must be a non-empty string")
        dt = np.dtype(self.dtype)
        if dt.names is None:
            raise ValueError(f"Pixel format {name!r} requires a structured dtype, got {dt}")
        if dt.hasobject:
            raise ValueError(f"Pixel format {name!r} must not contain object fields")
        if dt.itemsize <= 0:
            raise ValueError(f"Pixel format {name!r} has a zero-sized pixel unit")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "dtype", dt)

    @property
    def byte_width(self) -> int:
        return int(self.dtype.itemsize)

    @property
    def channels(self) -> tuple[str, ...]:
        return tuple(self.dtype.names)

    def __repr__(self) -> str:
        return f"PixelFormat(name={self.name!r}, byte_width={self.byte_width}, channels={self.channels})"

    def pixel(self, *values: Any, **channels: Any) -> np.void:
        """Build a single pixel unit from positional or named channel values."""

        if values and channels:
            raise TypeError("Pass channel values either positionally or by name, not both")
        unit = np.zeros((), dtype=self.dtype)
        if values:
            if len(values) != len(self.channels):
                raise InvalidArgumentError(
                    "values",
                    f"{self.name} has {len(self.channels)} channels {self.channels}, got {len(values)} values",
                )
            channels = dict(zip(self.channels, values))
        for key, value in channels.items():
            if key not in self.channels:
                raise InvalidArgumentError(key, f"not a channel of {self.name} {self.channels}")
            unit[key] = value
        return unit[()]

    def as_pixel_units(self, data: Any, *, limit: int | None = None) -> np.ndarray:
        """Coerce pixel-unit input into a 1-D array of this format's dtype.

        Accepted shapes:
        - structured arrays with exactly this dtype (any shape, flattened row-major;
          no copy when contiguous)
        - numeric arrays / nested sequences whose last axis enumerates the channels
        - for single-channel formats, plain numeric arrays of any shape

        With `limit`, the input must hold at least `limit` units and only the
        first `limit` are validated and converted; the rest are never read.
        """

        arr = data if isinstance(data, np.ndarray) else np.asarray(data)

        if arr.dtype.names is not None:
            if arr.dtype != self.dtype:
                raise InvalidArgumentError(
                    "data",
                    f"pixel dtype {arr.dtype} does not match format {self.name!r} ({self.dtype})",
                )
            units = arr.reshape(-1)
            if limit is not None:
                check_buffer_length(units.shape[0], limit, param_name="data")
                units = units[:limit]
            return units

        if arr.size == 0:
            if limit is not None:
                check_buffer_length(0, limit, param_name="data")
            return np.empty(0, dtype=self.dtype)

        if arr.dtype.kind not in "biuf":
            raise InvalidArgumentError("data", f"expected numeric channel values, got dtype {arr.dtype}")

        n_channels = len(self.channels)
        if n_channels == 1 and (arr.ndim < 2 or arr.shape[-1] != 1):
            arr = arr[..., np.newaxis]
        if arr.ndim < 2 or arr.shape[-1] != n_channels:
            raise InvalidArgumentError(
                "data",
                f"expected a trailing channel axis of length {n_channels} for {self.name}, got shape {arr.shape}",
            )

        flat = arr.reshape(-1, n_channels)
        if limit is not None:
            check_buffer_length(flat.shape[0], limit, param_name="data")
            flat = flat[:limit]
        if flat.shape[0] == 0:
            return np.empty(0, dtype=self.dtype)
        self._check_channel_range(flat)
        return rfn.unstructured_to_structured(flat, dtype=self.dtype).reshape(-1)

    def _check_channel_range(self, flat: np.ndarray) -> None:
        for index, field in enumerate(self.channels):
            field_dtype = self.dtype.fields[field][0]
            if field_dtype.kind not in "iu":
                continue
            info = np.iinfo(field_dtype)
            column = flat[:, index]
            if column.dtype.kind == "f":
                if not np.all(np.isfinite(column)):
                    raise InvalidArgumentError(
                        "data", f"channel {field!r} of {self.name} must be finite for an integer channel"
                    )
                if np.any(column != np.floor(column)):
                    raise InvalidArgumentError(
                        "data", f"channel {field!r} of {self.name} must hold whole numbers, got fractional values"
                    )
            low, high = column.min(), column.max()
            if low < info.min or high > info.max:
                raise InvalidArgumentError(
                    "data",
                    f"channel {field!r} of {self.name} must be in [{info.min}, {info.max}], "
                    f"got values in [{low}, {high}]",
                )


def _layout(channels: str, component: str) -> np.dtype:
    return np.dtype([(c, component) for c in channels])


ALPHA8 = PixelFormat("alpha8", _layout("a", "u1"), "8-bit alpha only")
L8 = PixelFormat("l8", _layout("l", "u1"), "8-bit luminance")
L16 = PixelFormat("l16", _layout("l", "<u2"), "16-bit luminance")
RGB24 = PixelFormat("rgb24", _layout("rgb", "u1"), "8-bit red, green, blue")
BGR24 = PixelFormat("bgr24", _layout("bgr", "u1"), "8-bit blue, green, red")
RGBA32 = PixelFormat("rgba32", _layout("rgba", "u1"), "8-bit red, green, blue, alpha")
BGRA32 = PixelFormat("bgra32", _layout("bgra", "u1"), "8-bit blue, green, red, alpha")
ARGB32 = PixelFormat("argb32", _layout("argb", "u1"), "8-bit alpha, red, green, blue")
RGB48 = PixelFormat("rgb48", _layout("rgb", "<u2"), "16-bit red, green, blue")
RGBA64 = PixelFormat("rgba64", _layout("rgba", "<u2"), "16-bit red, green, blue, alpha")
BGR565 = PixelFormat("bgr565", np.dtype([("packed", "<u2")]), "5/6/5-bit packed into one 16-bit word")
RG32 = PixelFormat("rg32", _layout("rg", "<u2"), "16-bit red, green")
RGBA_VECTOR = PixelFormat("rgba_vector", _layout("rgba", "<f4"), "32-bit float red, green, blue, alpha")

BUILTIN_PIXEL_FORMATS = (
    ALPHA8,
    L8,
    L16,
    RGB24,
    BGR24,
    RGBA32,
    BGRA32,
    ARGB32,
    RGB48,
    RGBA64,
    BGR565,
    RG32,
    RGBA_VECTOR,
)
