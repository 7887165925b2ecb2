"""Redis client that runs Lua scripts over a shared connection pool."""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Sequence

import redis.asyncio as redis
import structlog

logger = structlog.get_logger(__name__)


def create_pool(
    url: str,
    max_connections: int,
    timeout: Optional[float],
) -> redis.BlockingConnectionPool:
    """
    Create a blocking connection pool for script execution.

    Callers waiting for a free connection block for at most ``timeout``
    seconds before redis-py raises ``redis.ConnectionError``.

    Args:
        url: Redis connection URL (e.g., redis://localhost:6379)
        max_connections: Upper bound on open connections
        timeout: Seconds to wait for a free connection (None waits forever)

    Returns:
        Unopened connection pool; connections are created lazily
    """
    pool = redis.BlockingConnectionPool.from_url(
        url,
        max_connections=max_connections,
        timeout=timeout,
    )
    logger.info(
        "redis_pool_created",
        max_connections=max_connections,
        timeout=timeout,
    )
    return pool


async def close_pool(pool: redis.ConnectionPool) -> None:
    """Disconnect every connection held by a pool."""
    await pool.disconnect()
    logger.info("redis_pool_closed")


class RedisScriptClient:
    """
    Executes Lua scripts atomically on Redis.

    Each call borrows one connection from the injected pool for the duration
    of a single EVAL and hands it back on every exit path, including errors
    and cancellation. Errors from the pool, the network or the script itself
    are propagated unchanged.
    """

    def __init__(self, pool: redis.ConnectionPool, owns_pool: bool = False) -> None:
        """
        Initialize the script client.

        Args:
            pool: Shared connection pool, usually created at startup
            owns_pool: Whether close() should also disconnect the pool
        """
        self.pool = pool
        self._owns_pool = owns_pool
        self._client = redis.Redis(connection_pool=pool)

    @classmethod
    def from_url(
        cls,
        url: str,
        max_connections: int = 50,
        pool_timeout: Optional[float] = 5.0,
    ) -> "RedisScriptClient":
        pool = create_pool(url, max_connections=max_connections, timeout=pool_timeout)
        return cls(pool, owns_pool=True)

    @property
    def client(self) -> redis.Redis:
        return self._client

    async def eval(
        self,
        script: str,
        key_count: int,
        keys_and_args: Sequence[Any],
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Run a Lua script with EVAL.

        Args:
            script: Lua source
            key_count: How many leading entries of ``keys_and_args`` are keys
            keys_and_args: Keys followed by script arguments
            timeout: Seconds to wait for the reply, pool wait included
                (None or <= 0 disables the deadline)

        Returns:
            Raw script reply

        Raises:
            redis.RedisError: On pool exhaustion, network or script failure
            asyncio.TimeoutError: If the deadline expires first
        """
        command = self._client.eval(script, key_count, *keys_and_args)
        if timeout is None or timeout <= 0:
            return await command
        try:
            return await asyncio.wait_for(command, timeout=timeout)
        except asyncio.TimeoutError as exc:
            logger.warning("redis_eval_timeout", timeout=timeout, error=str(exc))
            raise

    async def ping(self) -> bool:
        """Check that Redis is reachable."""
        return bool(await self._client.ping())

    async def close(self) -> None:
        """Release the client and, when owned, the pool."""
        await self._client.aclose()
        if self._owns_pool:
            await close_pool(self.pool)
