"""Pixel formats: the fixed-size in-memory layout of one pixel unit.

Formats are numpy structured dtypes. The ingestion pipeline only depends on
`PixelFormat.byte_width`, so any registered format can be loaded without
changes elsewhere.
"""

from __future__ import annotations

from .formats import (
    ALPHA8,
    ARGB32,
    BGR24,
    BGR565,
    BGRA32,
    BUILTIN_PIXEL_FORMATS,
    L8,
    L16,
    RG32,
    RGB24,
    RGB48,
    RGBA32,
    RGBA64,
    RGBA_VECTOR,
    PixelFormat,
)
from .registry import (
    PIXEL_FORMAT_REGISTRY,
    PixelFormatLike,
    PixelFormatRegistry,
    find_pixel_format_for_dtype,
    get_pixel_format,
    list_pixel_formats,
    parse_pixel_format,
    register_pixel_format,
)

__all__ = [
    "ALPHA8",
    "ARGB32",
    "BGR24",
    "BGR565",
    "BGRA32",
    "BUILTIN_PIXEL_FORMATS",
    "L8",
    "L16",
    "RG32",
    "RGB24",
    "RGB48",
    "RGBA32",
    "RGBA64",
    "RGBA_VECTOR",
    "PIXEL_FORMAT_REGISTRY",
    "PixelFormat",
    "PixelFormatLike",
    "PixelFormatRegistry",
    "find_pixel_format_for_dtype",
    "get_pixel_format",
    "list_pixel_formats",
    "parse_pixel_format",
    "register_pixel_format",
]
