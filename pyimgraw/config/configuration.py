from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from pyimgraw.memory.allocators import MemoryAllocator, PooledMemoryAllocator, make_allocator
from pyimgraw.memory.copy import DEFAULT_MIN_PARALLEL_LENGTH
from pyimgraw.utils.param_check import check_parameter


def _default_parallelism() -> int:
    return max(1, int(os.cpu_count() or 1))


@dataclass(frozen=True)
class Configuration:
    """Runtime options forwarded to image allocation and pixel copying.

    Loading code does not interpret these values itself: the allocator is
    handed to the image, the parallel options to the bulk copier.
    """

    memory_allocator: MemoryAllocator = field(default_factory=PooledMemoryAllocator)
    max_degree_of_parallelism: int = field(default_factory=_default_parallelism)
    min_parallel_copy_length: int = DEFAULT_MIN_PARALLEL_LENGTH

    def __post_init__(self) -> None:
        if not isinstance(self.memory_allocator, MemoryAllocator):
            raise TypeError(
                f"memory_allocator must be a MemoryAllocator, got {type(self.memory_allocator).__name__}"
            )
        check_parameter(self.max_degree_of_parallelism, low=1, param_name="max_degree_of_parallelism")
        check_parameter(self.min_parallel_copy_length, low=1, param_name="min_parallel_copy_length")

    @classmethod
    def default(cls) -> "Configuration":
        return get_default_configuration()


_DEFAULT: Optional[Configuration] = None
_DEFAULT_LOCK = threading.Lock()


def get_default_configuration() -> Configuration:
    """Return the process-wide default configuration, creating it on first use."""

    global _DEFAULT
    if _DEFAULT is None:
        with _DEFAULT_LOCK:
            if _DEFAULT is None:
                _DEFAULT = Configuration()
    return _DEFAULT


def _require_mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be a dict/object, got {type(value).__name__}")
    return value


def _optional_int(value: Any, *, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{name} must be int or null, got {value!r}")
    try:
        return int(value)
    except Exception as exc:  # noqa: BLE001 - validation boundary
        raise ValueError(f"{name} must be int or null, got {value!r}") from exc


def _parse_allocator(value: Any) -> MemoryAllocator | None:
    if value is None:
        return None
    if isinstance(value, MemoryAllocator):
        return value
    if isinstance(value, str):
        return make_allocator(value)

    raw = _require_mapping(value, name="memory_allocator")
    kind = raw.get("kind", "pooled")
    options = {k: v for k, v in raw.items() if k != "kind"}
    for key in list(options):
        options[key] = _optional_int(options[key], name=f"memory_allocator.{key}")
    return make_allocator(str(kind), **options)


_KNOWN_KEYS = ("memory_allocator", "max_degree_of_parallelism", "min_parallel_copy_length")


def configuration_from_dict(raw: Mapping[str, Any]) -> Configuration:
    """Build a `Configuration` from a plain dict (e.g. a parsed JSON/YAML file).

    Example::

        {
            "memory_allocator": {"kind": "pooled", "max_pooled_bytes": 16777216},
            "max_degree_of_parallelism": 4,
            "min_parallel_copy_length": 1048576
        }

    Missing keys keep their defaults; unknown keys are rejected.
    """

    data = _require_mapping(raw, name="configuration")
    unknown = sorted(set(data) - set(_KNOWN_KEYS))
    if unknown:
        raise ValueError(f"Unknown configuration keys: {unknown}. Supported: {list(_KNOWN_KEYS)}")

    kwargs: dict[str, Any] = {}
    allocator = _parse_allocator(data.get("memory_allocator"))
    if allocator is not None:
        kwargs["memory_allocator"] = allocator
    for key in ("max_degree_of_parallelism", "min_parallel_copy_length"):
        value = _optional_int(data.get(key), name=key)
        if value is not None:
            kwargs[key] = value
    return Configuration(**kwargs)
