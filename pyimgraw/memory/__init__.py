"""Memory layer: allocators, zero-copy byte views and the bulk copier."""

from __future__ import annotations

from .allocators import HeapMemoryAllocator, MemoryAllocator, PooledMemoryAllocator, make_allocator
from .copy import DEFAULT_MIN_PARALLEL_LENGTH, copy_pixels, plan_chunks
from .views import byte_view, view_as_pixels

__all__ = [
    "DEFAULT_MIN_PARALLEL_LENGTH",
    "HeapMemoryAllocator",
    "MemoryAllocator",
    "PooledMemoryAllocator",
    "byte_view",
    "copy_pixels",
    "make_allocator",
    "plan_chunks",
    "view_as_pixels",
]
