"""Bloom filter sizing parameters."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .core.errors import InvalidFilterParamsError

INT32_MAX = 2**31 - 1


def _check_positive_int32(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFilterParamsError(name, value, "must be an integer")
    if value <= 0:
        raise InvalidFilterParamsError(name, value, "must be positive")
    if value > INT32_MAX:
        raise InvalidFilterParamsError(name, value, f"must not exceed {INT32_MAX}")


@dataclass(frozen=True)
class FilterParams:
    """Immutable (m, k) pair shared by every filter backend.

    Attributes:
        bits: Number of addressable bits (m)
        hash_rounds: Number of hash rounds per element (k)
    """

    bits: int
    hash_rounds: int

    def __post_init__(self) -> None:
        _check_positive_int32("bits", self.bits)
        _check_positive_int32("hash_rounds", self.hash_rounds)

    @classmethod
    def from_capacity(cls, capacity: int, error_rate: float) -> "FilterParams":
        """Size a filter for an expected element count and target error rate."""
        if capacity <= 0:
            raise InvalidFilterParamsError("capacity", capacity, "must be positive")
        if error_rate <= 0 or error_rate >= 1:
            raise InvalidFilterParamsError(
                "error_rate", error_rate, "must be between 0 and 1"
            )
        bits = max(1, int(-(capacity * math.log(error_rate)) / (math.log(2) ** 2)))
        hash_rounds = max(1, int((bits / capacity) * math.log(2)))
        return cls(bits=bits, hash_rounds=hash_rounds)

    def false_positive_rate(self, elements: int) -> float:
        """Theoretical false-positive rate (1 - e^(-kn/m))^k after n insertions."""
        if elements <= 0:
            return 0.0
        k = self.hash_rounds
        return (1.0 - math.exp(-k * elements / self.bits)) ** k
