"""pyimgraw - build owned, validated images from raw pixel buffers.

Keep top-level imports lightweight: exports are resolved on first access.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    # Modules
    "config",
    "errors",
    "image",
    "io",
    "memory",
    "pixels",
    "utils",
    # Entry points
    "load_pixel_data",
    "load_pixel_bytes",
    "load_pixels",
    "from_pil_image",
    "to_pil_image",
    # Types
    "Configuration",
    "Image",
    "ImageFrame",
    "PixelFormat",
    "InvalidArgumentError",
    "ImageDisposedError",
    "UnknownPixelFormatError",
]


_LAZY_SUBMODULES = {
    "config",
    "errors",
    "image",
    "io",
    "memory",
    "pixels",
    "utils",
}

_LAZY_EXPORTS = {
    "load_pixel_data": ("io.pixel_data", "load_pixel_data"),
    "load_pixel_bytes": ("io.pixel_data", "load_pixel_bytes"),
    "load_pixels": ("io.pixel_data", "load_pixels"),
    "from_pil_image": ("io.pil", "from_pil_image"),
    "to_pil_image": ("io.pil", "to_pil_image"),
    "Configuration": ("config.configuration", "Configuration"),
    "Image": ("image.image", "Image"),
    "ImageFrame": ("image.frame", "ImageFrame"),
    "PixelFormat": ("pixels.formats", "PixelFormat"),
    "InvalidArgumentError": ("errors", "InvalidArgumentError"),
    "ImageDisposedError": ("errors", "ImageDisposedError"),
    "UnknownPixelFormatError": ("errors", "UnknownPixelFormatError"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - thin delegation
    if name in _LAZY_SUBMODULES:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module

    target = _LAZY_EXPORTS.get(name)
    if target is not None:
        module_name, attr = target
        module = import_module(f"{__name__}.{module_name}")
        value = getattr(module, attr)
        globals()[name] = value
        return value

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:  # pragma: no cover - tooling convenience
    return sorted(set(globals()) | set(__all__))
