"""Raw pixel loading example (numpy-first).

Simulates a camera SDK handing over a packed BGRA byte buffer and shows:

- loading raw bytes with an explicit pixel format
- loading pixel-unit arrays (format inferred from the structured dtype)
- a custom `Configuration` (heap allocator, threaded copy for large frames)
- handing the result to Pillow
"""

from __future__ import annotations

import logging

import numpy as np

from pyimgraw.config import Configuration
from pyimgraw.io import load_pixel_bytes, load_pixels, to_pil_image
from pyimgraw.memory import HeapMemoryAllocator
from pyimgraw.pixels import BGRA32


def _make_bgra_frame(h: int, w: int) -> bytes:
    frame = np.zeros((h, w, 4), dtype=np.uint8)
    frame[..., 0] = np.linspace(0, 255, w, dtype=np.uint8)[None, :]  # B
    frame[..., 2] = np.linspace(0, 255, h, dtype=np.uint8)[:, None]  # R
    frame[..., 3] = 255
    return frame.tobytes()


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)

    raw = _make_bgra_frame(480, 640)
    cfg = Configuration(
        memory_allocator=HeapMemoryAllocator(),
        max_degree_of_parallelism=4,
        min_parallel_copy_length=64 * 1024,
    )

    with load_pixel_bytes(raw, 640, 480, BGRA32, configuration=cfg) as image:
        print(image, image[639, 479].tolist())
        preview = to_pil_image(image)
        print("PIL:", preview.mode, preview.size)

        # Pixel-unit arrays carry their format in the dtype.
        units = image.get_pixel_span().copy()
        with load_pixels(units, 640, 480) as again:
            print("identical:", again.get_pixel_span().tobytes() == units.tobytes())


if __name__ == "__main__":
    main()
