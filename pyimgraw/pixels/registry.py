from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

import numpy as np

from pyimgraw.errors import UnknownPixelFormatError
from pyimgraw.pixels.formats import BUILTIN_PIXEL_FORMATS, PixelFormat

PixelFormatLike = Union[str, PixelFormat]


@dataclass
class PixelFormatEntry:
    name: str
    pixel_format: PixelFormat
    tags: tuple[str, ...]
    metadata: Dict[str, Any]


class PixelFormatRegistry:
    """Registry of pixel formats addressable by name."""

    def __init__(self) -> None:
        self._registry: Dict[str, PixelFormatEntry] = {}

    def register(
        self,
        pixel_format: PixelFormat,
        *,
        tags: Optional[Iterable[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        overwrite: bool = False,
    ) -> PixelFormat:
        if not isinstance(pixel_format, PixelFormat):
            raise TypeError(f"Expected PixelFormat, got {type(pixel_format).__name__}")
        name = pixel_format.name
        if not overwrite and name in self._registry:
            raise KeyError(f"Pixel format {name!r} already exists. Set overwrite=True to replace it.")
        self._registry[name] = PixelFormatEntry(
            name=name,
            pixel_format=pixel_format,
            tags=tuple(str(t) for t in (tags or ())),
            metadata=dict(metadata or {}),
        )
        return pixel_format

    def get(self, name: str) -> PixelFormat:
        key = str(name).strip().lower()
        try:
            return self._registry[key].pixel_format
        except KeyError as exc:
            available = ", ".join(sorted(self._registry)) or "<empty>"
            raise UnknownPixelFormatError(
                f"Pixel format {name!r} not found. Available formats: {available}"
            ) from exc

    def available(self, *, tags: Optional[Iterable[str]] = None) -> List[str]:
        if tags is None:
            return sorted(self._registry)
        tag_set = {str(t) for t in tags}
        return sorted(
            entry.name for entry in self._registry.values() if tag_set.issubset(entry.tags)
        )

    def find_by_dtype(self, dtype: Any) -> Optional[PixelFormat]:
        dt = np.dtype(dtype)
        for name in sorted(self._registry):
            entry = self._registry[name]
            if entry.pixel_format.dtype == dt:
                return entry.pixel_format
        return None

    def __contains__(self, name: object) -> bool:
        return str(name).strip().lower() in self._registry


PIXEL_FORMAT_REGISTRY = PixelFormatRegistry()

for _fmt in BUILTIN_PIXEL_FORMATS:
    PIXEL_FORMAT_REGISTRY.register(_fmt, tags=("builtin",))


def register_pixel_format(
    pixel_format: PixelFormat,
    *,
    tags: Optional[Iterable[str]] = None,
    metadata: Optional[Dict[str, Any]] = None,
    overwrite: bool = False,
) -> PixelFormat:
    return PIXEL_FORMAT_REGISTRY.register(
        pixel_format,
        tags=tags,
        metadata=metadata,
        overwrite=overwrite,
    )


def list_pixel_formats(*, tags: Optional[Iterable[str]] = None) -> List[str]:
    return PIXEL_FORMAT_REGISTRY.available(tags=tags)


def get_pixel_format(name: str) -> PixelFormat:
    return PIXEL_FORMAT_REGISTRY.get(name)


def parse_pixel_format(raw: PixelFormatLike) -> PixelFormat:
    if isinstance(raw, PixelFormat):
        return raw
    if not isinstance(raw, str):
        raise TypeError(f"Expected PixelFormat or str, got {type(raw).__name__}")
    return PIXEL_FORMAT_REGISTRY.get(raw)


def find_pixel_format_for_dtype(dtype: Any) -> Optional[PixelFormat]:
    """Return the registered format whose pixel dtype equals `dtype`, if any."""

    return PIXEL_FORMAT_REGISTRY.find_by_dtype(dtype)
