import gc

import numpy as np
import pytest

from pyimgraw.errors import InvalidArgumentError
from pyimgraw.memory.allocators import (
    HeapMemoryAllocator,
    PooledMemoryAllocator,
    make_allocator,
)
from pyimgraw.pixels import RGBA32


def test_heap_allocator_returns_zeroed_buffers():
    buffer = HeapMemoryAllocator().allocate(5, RGBA32.dtype)
    assert buffer.shape == (5,)
    assert buffer.dtype == RGBA32.dtype
    assert buffer.flags.writeable
    assert not buffer.tobytes().strip(b"\x00")


def test_allocator_rejects_negative_length():
    with pytest.raises(InvalidArgumentError):
        HeapMemoryAllocator().allocate(-1, RGBA32.dtype)
    with pytest.raises(InvalidArgumentError):
        PooledMemoryAllocator().allocate(-1, RGBA32.dtype)


@pytest.mark.parametrize("nbytes,expected", [(0, 1), (1, 1), (5, 8), (8, 8), (9, 16)])
def test_bucket_size(nbytes, expected):
    assert PooledMemoryAllocator.bucket_size(nbytes) == expected


def test_pooled_allocator_reuses_released_blocks():
    allocator = PooledMemoryAllocator()
    first = allocator.allocate(10, RGBA32.dtype)
    first[:] = (1, 2, 3, 4)

    allocator.release(first)
    assert allocator.retained_buffer_count() == 1

    second = allocator.allocate(10, RGBA32.dtype)
    assert allocator.retained_buffer_count() == 0
    assert np.shares_memory(first, second)
    assert second.shape == (10,)
    assert not second.tobytes().strip(b"\x00")


def test_pooled_allocator_ignores_foreign_buffers():
    allocator = PooledMemoryAllocator()
    allocator.release(np.zeros(4, dtype=RGBA32.dtype))
    assert allocator.retained_buffer_count() == 0


def test_pooled_allocator_double_release_is_ignored():
    allocator = PooledMemoryAllocator()
    buffer = allocator.allocate(4, RGBA32.dtype)
    allocator.release(buffer)
    allocator.release(buffer)
    assert allocator.retained_buffer_count() == 1


def test_pooled_allocator_bypasses_pool_for_large_requests():
    allocator = PooledMemoryAllocator(max_pooled_bytes=16)
    buffer = allocator.allocate(100, RGBA32.dtype)
    assert not buffer.tobytes().strip(b"\x00")
    allocator.release(buffer)
    assert allocator.retained_buffer_count() == 0


def test_pooled_allocator_bounds_bucket():
    allocator = PooledMemoryAllocator(max_buffers_per_bucket=1)
    a = allocator.allocate(4, RGBA32.dtype)
    b = allocator.allocate(4, RGBA32.dtype)
    allocator.release(a)
    allocator.release(b)
    assert allocator.retained_buffer_count() == 1

    allocator.release_retained_resources()
    assert allocator.retained_buffer_count() == 0


def test_make_allocator():
    assert isinstance(make_allocator("heap"), HeapMemoryAllocator)
    pooled = make_allocator("Pooled", max_pooled_bytes=64)
    assert isinstance(pooled, PooledMemoryAllocator)
    assert pooled.max_pooled_bytes == 64

    with pytest.raises(ValueError):
        make_allocator("arena")
    with pytest.raises(ValueError):
        make_allocator("heap", max_pooled_bytes=64)


def test_pooled_allocator_forgets_dropped_buffers():
    allocator = PooledMemoryAllocator()
    buffers = [allocator.allocate(4, RGBA32.dtype) for _ in range(10)]
    assert allocator.leased_buffer_count() == 10

    kept = buffers[0]
    del buffers
    gc.collect()
    assert allocator.leased_buffer_count() == 1

    allocator.release(kept)
    assert allocator.leased_buffer_count() == 0
    assert allocator.retained_buffer_count() == 1


def test_pooled_allocator_accepts_views_of_its_buffers():
    allocator = PooledMemoryAllocator()
    buffer = allocator.allocate(4, RGBA32.dtype)

    allocator.release(buffer[1:])
    assert allocator.retained_buffer_count() == 1
    assert allocator.leased_buffer_count() == 0
