"""Derivation of k bit offsets from a single hash primitive."""

from __future__ import annotations

from .hashing import Encryptor


def hash_chain(
    value: str,
    rounds: int,
    bits: int,
    encryptor: Encryptor,
    reduce: bool = True,
) -> list[int]:
    """
    Produce ``rounds`` offsets for ``value`` by iterative re-hashing.

    The first round hashes ``value`` itself; each later round hashes the
    decimal string of the previous round's raw hash. With ``reduce`` set,
    every offset is taken modulo ``bits``; otherwise the raw hashes are
    returned and range reduction is left to the bitmap owner.

    Args:
        value: Element to hash
        rounds: Number of offsets to produce (k)
        bits: Size of the addressable bit range (m)
        encryptor: Hash primitive
        reduce: Whether to reduce each hash modulo ``bits``

    Returns:
        Exactly ``rounds`` offsets
    """
    offsets: list[int] = []
    origin = value
    for round_index in range(rounds):
        encrypted = encryptor.encrypt(origin)
        offsets.append(encrypted % bits if reduce else encrypted)
        if round_index == rounds - 1:
            break
        origin = str(encrypted)
    return offsets
