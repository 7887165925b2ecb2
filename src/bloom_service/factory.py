"""Construction of the configured Bloom filter backend."""

from __future__ import annotations

from typing import Optional

import structlog

from .config import Settings
from .db.redis import RedisScriptClient
from .filters.base import BloomFilter
from .filters.memory import InMemoryBloomFilter
from .filters.redis import RedisBloomFilter
from .hashing import Encryptor, Murmur3Encryptor

logger = structlog.get_logger(__name__)


def create_script_client(settings: Settings) -> RedisScriptClient:
    """Create a script client that owns a pool sized from settings."""
    return RedisScriptClient.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_max_connections,
        pool_timeout=settings.redis_pool_timeout_seconds,
    )


def create_bloom_filter(
    settings: Settings,
    script_client: Optional[RedisScriptClient] = None,
    encryptor: Optional[Encryptor] = None,
) -> BloomFilter:
    """
    Build the backend selected by ``settings.bloom_backend``.

    Args:
        settings: Loaded service settings
        script_client: Shared Redis client; required for the redis backend
        encryptor: Hash primitive (MurmurHash3 by default)

    Returns:
        An in-memory or Redis-backed filter

    Raises:
        ValueError: If the redis backend is selected without a client
    """
    params = settings.filter_params
    encryptor = encryptor or Murmur3Encryptor()

    if settings.bloom_backend == "redis":
        if script_client is None:
            raise ValueError(
                "A RedisScriptClient is required when BLOOM_BACKEND is 'redis'."
            )
        logger.info(
            "bloom_filter_created",
            backend="redis",
            bloom_bits=params.bits,
            bloom_hash_rounds=params.hash_rounds,
        )
        return RedisBloomFilter.from_params(
            params,
            script_client,
            encryptor=encryptor,
            default_timeout=settings.operation_timeout,
        )

    logger.info(
        "bloom_filter_created",
        backend="memory",
        bloom_bits=params.bits,
        bloom_hash_rounds=params.hash_rounds,
    )
    return InMemoryBloomFilter(params=params, encryptor=encryptor)
