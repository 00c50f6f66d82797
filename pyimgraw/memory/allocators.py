"""Pixel storage allocators.

An allocator hands out 1-D numpy arrays of a requested dtype and length and
may take them back through `release`. The image layer only talks to the
`MemoryAllocator` interface; which strategy is used is decided by the
`Configuration`.
"""

from __future__ import annotations

import logging
import threading
import weakref
from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from pyimgraw.utils.param_check import check_parameter

logger = logging.getLogger(__name__)


def _resolve_request(length: int, dtype: Any) -> tuple[np.dtype, int]:
    check_parameter(length, low=0, param_name="length")
    dt = np.dtype(dtype)
    return dt, int(length) * int(dt.itemsize)


def _root_base(array: np.ndarray) -> np.ndarray:
    base = array
    while isinstance(base.base, np.ndarray):
        base = base.base
    return base


class MemoryAllocator(ABC):
    """Strategy for obtaining contiguous pixel storage."""

    @abstractmethod
    def allocate(self, length: int, dtype: Any, *, clean: bool = True) -> np.ndarray:
        """Return a writable, C-contiguous 1-D array of `length` elements.

        When `clean` is true every element is zeroed.
        """

    def release(self, buffer: np.ndarray) -> None:
        """Give a buffer obtained from `allocate` back to the allocator."""

    def release_retained_resources(self) -> None:
        """Drop any memory kept around for reuse."""


class HeapMemoryAllocator(MemoryAllocator):
    """Allocate a fresh numpy array for every request."""

    def allocate(self, length: int, dtype: Any, *, clean: bool = True) -> np.ndarray:
        dt, nbytes = _resolve_request(length, dtype)
        logger.debug("Heap allocation of %d x %s (%d bytes)", int(length), dt, nbytes)
        if clean:
            return np.zeros(int(length), dtype=dt)
        return np.empty(int(length), dtype=dt)

    def __repr__(self) -> str:
        return "HeapMemoryAllocator()"


class PooledMemoryAllocator(MemoryAllocator):
    """Reuse released byte blocks grouped in power-of-two size buckets.

    Requests larger than `max_pooled_bytes` bypass the pool. Each bucket keeps
    at most `max_buffers_per_bucket` idle blocks. Leased blocks are tracked by
    weak reference only: a buffer dropped without `release` is freed normally.
    Safe to share across threads.
    """

    def __init__(
        self,
        *,
        max_pooled_bytes: int = 32 * 1024 * 1024,
        max_buffers_per_bucket: int = 8,
    ) -> None:
        check_parameter(max_pooled_bytes, low=1, param_name="max_pooled_bytes")
        check_parameter(max_buffers_per_bucket, low=1, param_name="max_buffers_per_bucket")
        self.max_pooled_bytes = int(max_pooled_bytes)
        self.max_buffers_per_bucket = int(max_buffers_per_bucket)
        self._buckets: dict[int, list[np.ndarray]] = {}
        self._leased: "weakref.WeakValueDictionary[int, np.ndarray]" = weakref.WeakValueDictionary()
        self._lock = threading.Lock()

    @staticmethod
    def bucket_size(nbytes: int) -> int:
        return 1 << max(0, (int(nbytes) - 1).bit_length())

    def allocate(self, length: int, dtype: Any, *, clean: bool = True) -> np.ndarray:
        dt, nbytes = _resolve_request(length, dtype)
        if nbytes == 0 or nbytes > self.max_pooled_bytes:
            logger.debug("Unpooled allocation of %d x %s (%d bytes)", int(length), dt, nbytes)
            return np.zeros(int(length), dtype=dt) if clean else np.empty(int(length), dtype=dt)

        size = self.bucket_size(nbytes)
        with self._lock:
            bucket = self._buckets.get(size)
            block = bucket.pop() if bucket else None

        if block is None:
            block = np.empty(size, dtype=np.uint8)
            logger.debug("Pool miss: new %d-byte block for %d x %s", size, int(length), dt)
        else:
            logger.debug("Pool hit: reusing %d-byte block for %d x %s", size, int(length), dt)

        if clean:
            block[:nbytes] = 0
        buffer = block[:nbytes].view(dt)

        with self._lock:
            self._leased[id(block)] = block
        return buffer

    def release(self, buffer: np.ndarray) -> None:
        with self._lock:
            block = _root_base(buffer)
            if self._leased.get(id(block)) is not block:
                return
            del self._leased[id(block)]
            bucket = self._buckets.setdefault(int(block.size), [])
            if len(bucket) >= self.max_buffers_per_bucket:
                logger.debug("Pool bucket %d is full, dropping released block", int(block.size))
                return
            bucket.append(block)

    def release_retained_resources(self) -> None:
        with self._lock:
            self._buckets.clear()

    def retained_buffer_count(self) -> int:
        with self._lock:
            return sum(len(bucket) for bucket in self._buckets.values())

    def leased_buffer_count(self) -> int:
        with self._lock:
            return len(self._leased)

    def __repr__(self) -> str:
        return (
            "PooledMemoryAllocator("
            f"max_pooled_bytes={self.max_pooled_bytes}, "
            f"max_buffers_per_bucket={self.max_buffers_per_bucket})"
        )


def make_allocator(name: str, **kwargs: Any) -> MemoryAllocator:
    """Build an allocator by name (``"heap"`` or ``"pooled"``)."""

    key = str(name).strip().lower()
    if key == "heap":
        if kwargs:
            raise ValueError(f"heap allocator takes no options, got {sorted(kwargs)}")
        return HeapMemoryAllocator()
    if key == "pooled":
        return PooledMemoryAllocator(**kwargs)
    raise ValueError(f"Unknown memory allocator: {name!r}. Choose from: heap, pooled.")
