from __future__ import annotations

import logging
import math

import numpy as np
from joblib import Parallel, delayed

from pyimgraw.errors import InvalidArgumentError
from pyimgraw.utils.param_check import check_parameter

logger = logging.getLogger(__name__)

# Copies shorter than this stay on the calling thread.
DEFAULT_MIN_PARALLEL_LENGTH = 1 << 20


def _copy_range(source: np.ndarray, destination: np.ndarray, start: int, stop: int) -> None:
    np.copyto(destination[start:stop], source[start:stop])


def plan_chunks(count: int, workers: int) -> list[tuple[int, int]]:
    """Split ``[0, count)`` into at most `workers` contiguous, non-empty ranges."""

    n = int(count)
    if n <= 0:
        return []
    w = max(1, min(int(workers), n))
    step = math.ceil(n / w)
    return [(start, min(start + step, n)) for start in range(0, n, step)]


def copy_pixels(
    source: np.ndarray,
    destination: np.ndarray,
    count: int,
    *,
    max_workers: int = 1,
    min_parallel_length: int = DEFAULT_MIN_PARALLEL_LENGTH,
) -> None:
    """Copy the first `count` elements of `source` into `destination`.

    Elements of `source` past `count` are never read. Large copies may be
    split across joblib threads; the result is the same as a sequential copy.
    """

    check_parameter(count, low=0, param_name="count")
    check_parameter(max_workers, low=1, param_name="max_workers")
    check_parameter(min_parallel_length, low=1, param_name="min_parallel_length")

    n = int(count)
    if source.ndim != 1 or destination.ndim != 1:
        raise InvalidArgumentError("source", "source and destination must be 1-D pixel sequences")
    if source.dtype != destination.dtype:
        raise InvalidArgumentError(
            "source",
            f"dtype {source.dtype} does not match destination dtype {destination.dtype}",
        )
    if source.shape[0] < n:
        raise InvalidArgumentError("source", f"holds {source.shape[0]} elements, {n} required")
    if destination.shape[0] < n:
        raise InvalidArgumentError("destination", f"holds {destination.shape[0]} elements, {n} required")
    if n == 0:
        return

    src = source[:n]
    dst = destination[:n]
    workers = int(max_workers) if n >= int(min_parallel_length) else 1
    chunks = plan_chunks(n, workers)

    if len(chunks) <= 1:
        logger.debug("Sequential copy of %d pixel units", n)
        np.copyto(dst, src)
        return

    logger.debug("Threaded copy of %d pixel units in %d chunks", n, len(chunks))
    Parallel(n_jobs=len(chunks), prefer="threads")(
        delayed(_copy_range)(src, dst, start, stop) for start, stop in chunks
    )
