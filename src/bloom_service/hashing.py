"""String hashing used to derive Bloom filter offsets."""

from __future__ import annotations

from typing import Protocol

import mmh3

from .params import INT32_MAX


class Encryptor(Protocol):
    """Deterministic string hash with non-negative int32 output."""

    def encrypt(self, value: str) -> int:
        ...


class Murmur3Encryptor:
    """MurmurHash3 (x86, 32-bit) folded into the non-negative int32 range.

    The output is stable across processes and hosts, so every client of a
    shared Redis bitmap derives identical offsets for the same element.
    """

    def __init__(self, seed: int = 0) -> None:
        self.seed = seed

    def encrypt(self, value: str) -> int:
        # surrogatepass keeps lone surrogates hashable; well-formed text is unchanged
        data = value.encode("utf-8", "surrogatepass")
        return mmh3.hash(data, self.seed, signed=False) % INT32_MAX
