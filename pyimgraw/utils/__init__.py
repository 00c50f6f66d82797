"""Utility helpers for pyimgraw."""

from __future__ import annotations

from .optional_deps import optional_import, require
from .param_check import MAX_PIXEL_COUNT, check_buffer_length, check_dimensions, check_parameter

__all__ = [
    "MAX_PIXEL_COUNT",
    "check_buffer_length",
    "check_dimensions",
    "check_parameter",
    "optional_import",
    "require",
]
