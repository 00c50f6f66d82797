import dataclasses

import pytest

from pyimgraw.config import Configuration, configuration_from_dict, get_default_configuration
from pyimgraw.errors import InvalidArgumentError
from pyimgraw.memory.allocators import HeapMemoryAllocator, PooledMemoryAllocator


def test_default_configuration_is_a_singleton():
    first = get_default_configuration()
    assert get_default_configuration() is first
    assert Configuration.default() is first
    assert isinstance(first.memory_allocator, PooledMemoryAllocator)
    assert first.max_degree_of_parallelism >= 1


def test_configuration_is_frozen():
    cfg = Configuration()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.max_degree_of_parallelism = 3


def test_configuration_validates_fields():
    with pytest.raises(InvalidArgumentError):
        Configuration(max_degree_of_parallelism=0)
    with pytest.raises(InvalidArgumentError):
        Configuration(min_parallel_copy_length=0)
    with pytest.raises(TypeError):
        Configuration(memory_allocator="heap")


def test_configuration_from_dict():
    cfg = configuration_from_dict(
        {
            "memory_allocator": "heap",
            "max_degree_of_parallelism": 2,
            "min_parallel_copy_length": 64,
        }
    )
    assert isinstance(cfg.memory_allocator, HeapMemoryAllocator)
    assert cfg.max_degree_of_parallelism == 2
    assert cfg.min_parallel_copy_length == 64


def test_configuration_from_dict_allocator_options():
    cfg = configuration_from_dict(
        {"memory_allocator": {"kind": "pooled", "max_pooled_bytes": 1024, "max_buffers_per_bucket": 2}}
    )
    allocator = cfg.memory_allocator
    assert isinstance(allocator, PooledMemoryAllocator)
    assert allocator.max_pooled_bytes == 1024
    assert allocator.max_buffers_per_bucket == 2


def test_configuration_from_dict_defaults():
    cfg = configuration_from_dict({})
    assert isinstance(cfg.memory_allocator, PooledMemoryAllocator)


@pytest.mark.parametrize(
    "payload",
    [
        {"unknown": 1},
        {"max_degree_of_parallelism": "many"},
        {"max_degree_of_parallelism": True},
        {"memory_allocator": ["heap"]},
        {"memory_allocator": {"kind": "arena"}},
    ],
)
def test_configuration_from_dict_rejects_bad_payloads(payload):
    with pytest.raises(ValueError):
        configuration_from_dict(payload)
