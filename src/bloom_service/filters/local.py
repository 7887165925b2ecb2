"""In-process Bloom filter backed by a packed bit array."""

from __future__ import annotations

from typing import Optional

from ..bitmap import get_bit, set_bit, word_count
from ..hash_chain import hash_chain
from ..hashing import Encryptor, Murmur3Encryptor
from ..params import FilterParams


class LocalBloomFilter:
    """Space-efficient probabilistic set for membership checks.

    Not thread-safe: callers sharing an instance across threads must
    serialize access themselves.
    """

    def __init__(
        self,
        bits: int,
        hash_rounds: int,
        encryptor: Optional[Encryptor] = None,
    ) -> None:
        self.params = FilterParams(bits=bits, hash_rounds=hash_rounds)
        self.encryptor = encryptor or Murmur3Encryptor()
        self._words = [0] * word_count(bits)
        self._count = 0

    @classmethod
    def from_params(
        cls,
        params: FilterParams,
        encryptor: Optional[Encryptor] = None,
    ) -> "LocalBloomFilter":
        return cls(params.bits, params.hash_rounds, encryptor)

    @property
    def bits(self) -> int:
        return self.params.bits

    @property
    def hash_rounds(self) -> int:
        return self.params.hash_rounds

    @property
    def count(self) -> int:
        """Number of ``set`` calls so far, duplicates included."""
        return self._count

    @property
    def words(self) -> tuple[int, ...]:
        return tuple(self._words)

    def offsets(self, value: str) -> list[int]:
        return hash_chain(value, self.hash_rounds, self.bits, self.encryptor)

    def set(self, value: str) -> None:
        self._count += 1
        for offset in self.offsets(value):
            set_bit(self._words, offset)

    def exist(self, value: str) -> bool:
        for offset in self.offsets(value):
            if not get_bit(self._words, offset):
                return False
        return True

    def estimated_false_positive_rate(self) -> float:
        return self.params.false_positive_rate(self._count)

    def __contains__(self, value: str) -> bool:
        return self.exist(value)

    def __len__(self) -> int:
        return self._count
