import numpy as np
import pytest

from pyimgraw.errors import InvalidArgumentError
from pyimgraw.memory.views import byte_view, view_as_pixels
from pyimgraw.pixels import RGBA32


def test_view_as_pixels_reinterprets_bytes():
    data = bytes([10, 20, 30, 255, 40, 50, 60, 255])
    pixels = view_as_pixels(data, "rgba32")

    assert pixels.dtype == RGBA32.dtype
    assert pixels.shape == (2,)
    assert pixels[0].tolist() == (10, 20, 30, 255)
    assert pixels[1].tolist() == (40, 50, 60, 255)


def test_view_as_pixels_is_zero_copy():
    data = bytearray([1, 2, 3, 4])
    pixels = view_as_pixels(data, RGBA32)

    data[0] = 99
    assert int(pixels[0]["r"]) == 99


def test_view_as_pixels_is_read_only():
    pixels = view_as_pixels(bytearray(8), "rgba32")
    assert not pixels.flags.writeable
    with pytest.raises(ValueError):
        pixels[0] = (1, 2, 3, 4)


def test_view_as_pixels_drops_incomplete_trailing_unit():
    pixels = view_as_pixels(bytes(10), "rgba32")
    assert pixels.shape == (2,)


def test_view_as_pixels_empty_buffer():
    pixels = view_as_pixels(b"", "rgb24")
    assert pixels.shape == (0,)


def test_view_as_pixels_multibyte_components_are_little_endian():
    pixels = view_as_pixels(bytes([1, 0, 2, 0, 3, 0, 0, 1]), "rgba64")
    assert pixels[0].tolist() == (1, 2, 3, 256)


def test_view_as_pixels_accepts_numpy_arrays():
    raw = np.arange(24, dtype=np.uint8).reshape(2, 3, 4)
    pixels = view_as_pixels(raw, "rgba32")
    assert pixels.shape == (6,)
    assert pixels[5].tolist() == (20, 21, 22, 23)


def test_view_as_pixels_rejects_non_contiguous():
    raw = np.arange(16, dtype=np.uint8)[::2]
    with pytest.raises(InvalidArgumentError):
        view_as_pixels(raw, "rgba32")


def test_view_as_pixels_rejects_non_buffers():
    with pytest.raises(TypeError):
        view_as_pixels([1, 2, 3, 4], "rgba32")


def test_byte_view_flattens():
    raw = np.zeros((2, 2), dtype=np.uint16)
    view = byte_view(raw)
    assert view.dtype == np.uint8
    assert view.shape == (8,)
