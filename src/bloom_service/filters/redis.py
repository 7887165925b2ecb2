"""Bloom filter whose bitmap lives in Redis.

Both operations send the element's k offsets to Redis in a single EVAL, so
the k SETBIT (or GETBIT) calls run as one atomic script: other clients see
either none or all of an element's bits.
"""

from __future__ import annotations

from typing import Any, Optional

import redis.asyncio as redis
import structlog

from ..core.errors import (
    BitMissingError,
    ScriptExecutionError,
    UnexpectedScriptResultError,
)
from ..db.redis import RedisScriptClient
from ..hash_chain import hash_chain
from ..hashing import Encryptor, Murmur3Encryptor
from ..observability.metrics import (
    record_bloom_error,
    record_bloom_operation,
    track_bloom_latency,
)
from ..params import FilterParams

logger = structlog.get_logger(__name__)

BACKEND = "redis"
BIT_MISSING_MARKER = "BLOOM_BIT_MISSING"

# KEYS[1] = bitmap key; ARGV[1] = offset count, ARGV[2] = bitmap size,
# ARGV[3..] = raw offsets, reduced modulo the bitmap size here.
BATCH_SET_BITS_SCRIPT = """
local bloom_key = KEYS[1]
local bits_cnt = tonumber(ARGV[1])
local bits = tonumber(ARGV[2])
for i = 1, bits_cnt do
  local offset = tonumber(ARGV[2 + i]) % bits
  redis.call('SETBIT', bloom_key, offset, 1)
end
return 1
"""

BATCH_GET_BITS_SCRIPT = """
local bloom_key = KEYS[1]
local bits_cnt = tonumber(ARGV[1])
local bits = tonumber(ARGV[2])
for i = 1, bits_cnt do
  local offset = tonumber(ARGV[2 + i]) % bits
  local reply = redis.call('GETBIT', bloom_key, offset)
  if not reply then
    error('""" + BIT_MISSING_MARKER + """')
  end
  if reply == 0 then
    return 0
  end
end
return 1
"""


class RedisBloomFilter:
    """
    Keyed Bloom filters stored as Redis bitmaps.

    Holds no client-side lock; any number of coroutines may call ``set`` and
    ``exist`` concurrently. Bitmaps under different keys are independent.
    """

    def __init__(
        self,
        bits: int,
        hash_rounds: int,
        client: RedisScriptClient,
        encryptor: Optional[Encryptor] = None,
        default_timeout: Optional[float] = None,
    ) -> None:
        """
        Initialize the Redis-backed filter.

        Args:
            bits: Bitmap length in bits (m)
            hash_rounds: Hash rounds per element (k)
            client: Script client sharing the process-wide connection pool
            encryptor: Hash primitive (MurmurHash3 by default)
            default_timeout: Deadline in seconds for calls that pass none
        """
        self.params = FilterParams(bits=bits, hash_rounds=hash_rounds)
        self.client = client
        self.encryptor = encryptor or Murmur3Encryptor()
        self.default_timeout = default_timeout

    @classmethod
    def from_params(
        cls,
        params: FilterParams,
        client: RedisScriptClient,
        encryptor: Optional[Encryptor] = None,
        default_timeout: Optional[float] = None,
    ) -> "RedisBloomFilter":
        return cls(params.bits, params.hash_rounds, client, encryptor, default_timeout)

    @property
    def bits(self) -> int:
        return self.params.bits

    @property
    def hash_rounds(self) -> int:
        return self.params.hash_rounds

    def offsets(self, value: str) -> list[int]:
        """Raw (unreduced) offsets for ``value``."""
        return hash_chain(
            value,
            self.hash_rounds,
            self.bits,
            self.encryptor,
            reduce=False,
        )

    def _keys_and_args(self, key: str, value: str) -> list[Any]:
        return [key, self.hash_rounds, self.bits, *self.offsets(value)]

    async def _run(
        self,
        operation: str,
        script: str,
        key: str,
        value: str,
        timeout: Optional[float],
    ) -> Any:
        if timeout is None:
            timeout = self.default_timeout
        with track_bloom_latency(BACKEND, operation):
            try:
                return await self.client.eval(
                    script,
                    1,
                    self._keys_and_args(key, value),
                    timeout=timeout,
                )
            except redis.ResponseError as exc:
                record_bloom_error(BACKEND, operation, exc)
                logger.warning(
                    "bloom_script_failed",
                    operation=operation,
                    bloom_key=key,
                    error=str(exc),
                )
                if BIT_MISSING_MARKER in str(exc):
                    raise BitMissingError(key) from exc
                raise ScriptExecutionError(operation, key, str(exc)) from exc
            except Exception as exc:
                record_bloom_error(BACKEND, operation, exc)
                raise

    async def set(self, key: str, value: str, timeout: Optional[float] = None) -> None:
        """
        Add ``value`` to the bitmap under ``key``.

        Args:
            key: Bitmap key; elements under different keys are isolated
            value: Element to add
            timeout: Deadline in seconds (defaults to ``default_timeout``)

        Raises:
            UnexpectedScriptResultError: If Redis does not acknowledge with 1
            ScriptExecutionError: If the script raised inside Redis
            redis.RedisError: Transport or pool errors, unchanged
        """
        result = await self._run("set", BATCH_SET_BITS_SCRIPT, key, value, timeout)
        if result != 1:
            error = UnexpectedScriptResultError("set", key, result)
            record_bloom_error(BACKEND, "set", error)
            raise error
        record_bloom_operation(BACKEND, "set", "ok")
        logger.debug("bloom_set", bloom_key=key, hash_rounds=self.hash_rounds)

    async def exist(self, key: str, value: str, timeout: Optional[float] = None) -> bool:
        """
        Check whether ``value`` may have been added under ``key``.

        Args:
            key: Bitmap key
            value: Element to look up
            timeout: Deadline in seconds (defaults to ``default_timeout``)

        Returns:
            False if the element was definitely never added, True otherwise

        Raises:
            BitMissingError: If Redis produced no reply for a queried bit
            UnexpectedScriptResultError: If the reply is neither 0 nor 1
            ScriptExecutionError: If the script raised inside Redis
            redis.RedisError: Transport or pool errors, unchanged
        """
        result = await self._run("exist", BATCH_GET_BITS_SCRIPT, key, value, timeout)
        if result == 1:
            found = True
        elif result == 0:
            found = False
        else:
            error = UnexpectedScriptResultError("exist", key, result)
            record_bloom_error(BACKEND, "exist", error)
            raise error
        record_bloom_operation(BACKEND, "exist", "hit" if found else "miss")
        logger.debug("bloom_exist", bloom_key=key, found=found)
        return found
