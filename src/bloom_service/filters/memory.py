"""Keyed Bloom filters held in process memory."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Optional

from ..hashing import Encryptor, Murmur3Encryptor
from ..observability.metrics import record_bloom_operation, track_bloom_latency
from ..params import FilterParams
from .local import LocalBloomFilter

BACKEND = "memory"


@dataclass
class InMemoryBloomFilter:
    """Keyed Bloom filters held in process memory (per process).

    Note: In multi-worker deployments, each worker maintains its own bitmaps.
    Use the Redis backend to share membership across workers.
    """

    params: FilterParams
    encryptor: Encryptor = field(default_factory=Murmur3Encryptor)

    def __post_init__(self) -> None:
        """Initialize per-key filter state."""
        self._lock = Lock()
        self._filters: dict[str, LocalBloomFilter] = {}

    def _filter_for(self, key: str) -> LocalBloomFilter:
        bloom = self._filters.get(key)
        if bloom is None:
            bloom = LocalBloomFilter.from_params(self.params, self.encryptor)
            self._filters[key] = bloom
        return bloom

    async def set(self, key: str, value: str, timeout: Optional[float] = None) -> None:
        # timeout is accepted for parity with the Redis backend; nothing here blocks on I/O
        with track_bloom_latency(BACKEND, "set"):
            with self._lock:
                self._filter_for(key).set(value)
        record_bloom_operation(BACKEND, "set", "ok")

    async def exist(self, key: str, value: str, timeout: Optional[float] = None) -> bool:
        with track_bloom_latency(BACKEND, "exist"):
            with self._lock:
                bloom = self._filters.get(key)
                found = bloom is not None and bloom.exist(value)
        record_bloom_operation(BACKEND, "exist", "hit" if found else "miss")
        return found

    def count(self, key: str) -> int:
        """Number of ``set`` calls recorded under ``key``."""
        with self._lock:
            bloom = self._filters.get(key)
            return len(bloom) if bloom is not None else 0

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._filters)
