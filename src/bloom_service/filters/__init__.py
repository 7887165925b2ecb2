"""Bloom filter backends."""

from .base import BloomFilter
from .local import LocalBloomFilter
from .memory import InMemoryBloomFilter
from .redis import RedisBloomFilter

__all__ = [
    "BloomFilter",
    "InMemoryBloomFilter",
    "LocalBloomFilter",
    "RedisBloomFilter",
]
