"""Capability interface shared by the keyed Bloom filter backends."""

from __future__ import annotations

from typing import Optional, Protocol


class BloomFilter(Protocol):
    """Keyed membership filter shared by the in-memory and Redis backends."""

    async def set(self, key: str, value: str, timeout: Optional[float] = None) -> None:
        ...

    async def exist(self, key: str, value: str, timeout: Optional[float] = None) -> bool:
        ...
