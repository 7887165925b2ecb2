"""Configuration management for the Bloom filter service."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
import structlog

from .params import FilterParams

# Filter sizing defaults
DEFAULT_BLOOM_BITS = 1 << 20
DEFAULT_BLOOM_HASH_ROUNDS = 3

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Settings:
    """Service settings loaded from environment variables."""

    bloom_backend: str
    bloom_bits: int
    bloom_hash_rounds: int
    redis_url: str
    redis_pool_max_connections: int
    redis_pool_timeout_seconds: float
    bloom_operation_timeout_seconds: float

    @property
    def filter_params(self) -> FilterParams:
        return FilterParams(bits=self.bloom_bits, hash_rounds=self.bloom_hash_rounds)

    @property
    def operation_timeout(self) -> Optional[float]:
        """Per-call deadline, or None when disabled."""
        if self.bloom_operation_timeout_seconds <= 0:
            return None
        return self.bloom_operation_timeout_seconds


def _sized_from_capacity() -> Optional[FilterParams]:
    raw_capacity = os.getenv("BLOOM_CAPACITY")
    raw_error_rate = os.getenv("BLOOM_ERROR_RATE")
    if not raw_capacity or not raw_error_rate:
        return None
    try:
        capacity = int(raw_capacity)
        error_rate = float(raw_error_rate)
    except ValueError as exc:
        raise ValueError(
            "BLOOM_CAPACITY must be an integer and BLOOM_ERROR_RATE a float. "
            "Check your .env file."
        ) from exc
    try:
        return FilterParams.from_capacity(capacity, error_rate)
    except ValueError as exc:
        raise ValueError(
            f"BLOOM_CAPACITY and BLOOM_ERROR_RATE do not describe a valid filter: {exc}"
        ) from exc


def load_settings() -> Settings:
    """
    Load settings from environment variables.

    When both BLOOM_CAPACITY and BLOOM_ERROR_RATE are set they take
    precedence over BLOOM_BITS and BLOOM_HASH_ROUNDS.

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If a variable is malformed or out of range
    """
    load_dotenv()

    bloom_backend = os.getenv("BLOOM_BACKEND", "memory").strip().lower()
    if bloom_backend not in {"memory", "redis"}:
        raise ValueError("BLOOM_BACKEND must be 'memory' or 'redis'.")

    try:
        bloom_bits = int(os.getenv("BLOOM_BITS", str(DEFAULT_BLOOM_BITS)))
        bloom_hash_rounds = int(
            os.getenv("BLOOM_HASH_ROUNDS", str(DEFAULT_BLOOM_HASH_ROUNDS))
        )
        redis_pool_max_connections = int(os.getenv("REDIS_POOL_MAX_CONNECTIONS", "50"))
    except ValueError as exc:
        raise ValueError(
            "BLOOM_BITS, BLOOM_HASH_ROUNDS, and REDIS_POOL_MAX_CONNECTIONS "
            "must be valid integers. Check your .env file."
        ) from exc

    try:
        redis_pool_timeout_seconds = float(os.getenv("REDIS_POOL_TIMEOUT_SECONDS", "5.0"))
        bloom_operation_timeout_seconds = float(
            os.getenv("BLOOM_OPERATION_TIMEOUT_SECONDS", "0")
        )
    except ValueError as exc:
        raise ValueError(
            "REDIS_POOL_TIMEOUT_SECONDS and BLOOM_OPERATION_TIMEOUT_SECONDS "
            "must be valid numbers. Check your .env file."
        ) from exc

    sized = _sized_from_capacity()
    if sized is not None:
        bloom_bits = sized.bits
        bloom_hash_rounds = sized.hash_rounds
        logger.info(
            "bloom_sized_from_capacity",
            bloom_bits=bloom_bits,
            bloom_hash_rounds=bloom_hash_rounds,
        )

    if bloom_bits < 1 or bloom_hash_rounds < 1:
        raise ValueError("BLOOM_BITS and BLOOM_HASH_ROUNDS must be >= 1.")
    if redis_pool_max_connections < 1:
        raise ValueError("REDIS_POOL_MAX_CONNECTIONS must be >= 1.")
    if redis_pool_timeout_seconds <= 0:
        raise ValueError("REDIS_POOL_TIMEOUT_SECONDS must be > 0.")

    return Settings(
        bloom_backend=bloom_backend,
        bloom_bits=bloom_bits,
        bloom_hash_rounds=bloom_hash_rounds,
        redis_url=os.getenv("REDIS_URL", "redis://localhost:6379"),
        redis_pool_max_connections=redis_pool_max_connections,
        redis_pool_timeout_seconds=redis_pool_timeout_seconds,
        bloom_operation_timeout_seconds=bloom_operation_timeout_seconds,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once
    from environment variables.

    Returns:
        Cached Settings instance
    """
    return load_settings()
