import numpy as np
import pytest

from pyimgraw.config import Configuration
from pyimgraw.errors import ImageDisposedError, InvalidArgumentError
from pyimgraw.image import Image
from pyimgraw.memory.allocators import HeapMemoryAllocator, PooledMemoryAllocator
from pyimgraw.pixels import RGBA32


class _CountingAllocator(HeapMemoryAllocator):
    def __init__(self) -> None:
        self.allocations = 0
        self.releases = 0

    def allocate(self, length, dtype, *, clean=True):
        self.allocations += 1
        return super().allocate(length, dtype, clean=clean)

    def release(self, buffer):
        self.releases += 1


def test_new_image_is_zeroed():
    image = Image(Configuration(), 3, 2, "rgba32")

    assert image.size == (3, 2)
    assert image.pixel_format is RGBA32
    assert len(image.frames) == 1
    assert image.root_frame.pixel_count == 6

    span = image.get_pixel_span()
    assert span.shape == (6,)
    assert span.dtype == RGBA32.dtype
    assert not span.tobytes().strip(b"\x00")


def test_zero_area_image():
    image = Image(Configuration(), 0, 5, "rgb24")
    assert image.get_pixel_span().shape == (0,)
    assert image.to_array().shape == (5, 0)


@pytest.mark.parametrize("width,height,name", [(-1, 1, "width"), (1, -1, "height")])
def test_negative_dimensions_are_rejected_before_allocation(width, height, name):
    allocator = _CountingAllocator()
    with pytest.raises(InvalidArgumentError) as exc:
        Image(Configuration(memory_allocator=allocator), width, height, "rgba32")
    assert exc.value.param_name == name
    assert allocator.allocations == 0


def test_oversized_dimensions_are_rejected_before_allocation():
    allocator = _CountingAllocator()
    with pytest.raises(InvalidArgumentError):
        Image(Configuration(memory_allocator=allocator), 2**16, 2**16, "l8")
    assert allocator.allocations == 0


def test_pixels_are_addressed_row_major():
    image = Image(Configuration(), 3, 2, "rgba32")
    image[1, 0] = (1, 2, 3, 4)
    image[0, 1] = (5, 6, 7, 8)

    span = image.get_pixel_span()
    assert span[1].tolist() == (1, 2, 3, 4)
    assert span[3].tolist() == (5, 6, 7, 8)
    assert image[0, 1].tolist() == (5, 6, 7, 8)
    assert image.get_row_span(1)[0].tolist() == (5, 6, 7, 8)


def test_pixel_index_errors():
    image = Image(Configuration(), 2, 2, "rgba32")
    with pytest.raises(IndexError):
        image[2, 0]
    with pytest.raises(IndexError):
        image.get_row_span(2)
    with pytest.raises(TypeError):
        image[0]


def test_to_array_shapes():
    image = Image(Configuration(), 3, 2, "rgba32")
    image[2, 1] = (9, 8, 7, 6)

    grid = image.to_array()
    assert grid.shape == (2, 3)
    assert grid[1, 2].tolist() == (9, 8, 7, 6)

    channels = image.to_array(channels=True)
    assert channels.shape == (2, 3, 4)
    assert channels.dtype == np.uint8
    assert channels[1, 2].tolist() == [9, 8, 7, 6]


def test_close_releases_storage():
    allocator = PooledMemoryAllocator()
    with Image(Configuration(memory_allocator=allocator), 4, 4, "rgba32") as image:
        image[0, 0] = (1, 1, 1, 1)
    assert image.is_closed
    assert allocator.retained_buffer_count() == 1

    with pytest.raises(ImageDisposedError):
        image.get_pixel_span()

    image.close()
    assert allocator.retained_buffer_count() == 1


def test_clone_is_independent():
    image = Image(Configuration(), 2, 1, "rgba32")
    image[0, 0] = (1, 2, 3, 4)

    clone = image.clone(configuration=Configuration(memory_allocator=HeapMemoryAllocator()))
    clone[0, 0] = (9, 9, 9, 9)

    assert image[0, 0].tolist() == (1, 2, 3, 4)
    assert clone[0, 0].tolist() == (9, 9, 9, 9)
    assert isinstance(clone.configuration.memory_allocator, HeapMemoryAllocator)


def test_image_requires_configuration():
    with pytest.raises(TypeError):
        Image(None, 1, 1, "rgba32")
