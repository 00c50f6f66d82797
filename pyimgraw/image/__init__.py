from __future__ import annotations

from .frame import ImageFrame
from .image import Image

__all__ = ["Image", "ImageFrame"]
