"""pytest fixtures for Bloom filter service tests."""

import os

# Set environment variables BEFORE any imports
os.environ.setdefault("BLOOM_BACKEND", "memory")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379")

from typing import Any, Optional, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest

from bloom_service.filters.redis import BATCH_SET_BITS_SCRIPT


class FakeBitmapScripts:
    """Stands in for RedisScriptClient, applying the bitmap scripts to local sets."""

    def __init__(self) -> None:
        self.bitmaps: dict[str, set[int]] = {}
        self.calls: list[tuple[str, int, list[Any], Optional[float]]] = []

    async def eval(
        self,
        script: str,
        key_count: int,
        keys_and_args: Sequence[Any],
        timeout: Optional[float] = None,
    ) -> int:
        self.calls.append((script, key_count, list(keys_and_args), timeout))
        key, count, bits, *offsets = keys_and_args
        assert key_count == 1
        assert len(offsets) == count
        if script == BATCH_SET_BITS_SCRIPT:
            self.bitmaps.setdefault(key, set()).update(o % bits for o in offsets)
            return 1
        bitmap = self.bitmaps.get(key, set())
        for offset in offsets:
            if offset % bits not in bitmap:
                return 0
        return 1


class IdentityEncryptor:
    """Encryptor whose output is easy to predict: int(value) or len(value)."""

    def __init__(self) -> None:
        self.inputs: list[str] = []

    def encrypt(self, value: str) -> int:
        self.inputs.append(value)
        if value.isdigit():
            return int(value) + 7
        return len(value)


@pytest.fixture
def fake_scripts():
    """Fake script client backed by in-process bitmaps."""
    return FakeBitmapScripts()


@pytest.fixture
def identity_encryptor():
    """Predictable encryptor that records every input."""
    return IdentityEncryptor()


@pytest.fixture
def mock_redis():
    """Mock redis.asyncio.Redis for testing."""
    redis_mock = AsyncMock()
    redis_mock.eval.return_value = 1
    redis_mock.ping.return_value = True
    return redis_mock


@pytest.fixture
def mock_script_client():
    """Mock RedisScriptClient wrapper."""
    from bloom_service.db.redis import RedisScriptClient

    client = MagicMock(spec=RedisScriptClient)
    client.eval = AsyncMock(return_value=1)
    client.ping = AsyncMock(return_value=True)
    client.close = AsyncMock()
    return client
