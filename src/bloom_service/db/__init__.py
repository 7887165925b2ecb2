"""Storage clients for the Bloom filter service."""

from .redis import RedisScriptClient, close_pool, create_pool

__all__ = [
    "RedisScriptClient",
    "close_pool",
    "create_pool",
]
