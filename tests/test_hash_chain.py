"""Tests for hash-chain offset derivation."""

import pytest

from bloom_service.hash_chain import hash_chain
from bloom_service.hashing import Murmur3Encryptor


def test_chain_rehashes_previous_raw_hash(identity_encryptor):
    # "abc" -> 3, "3" -> 10, "10" -> 17
    offsets = hash_chain("abc", 3, 1000, identity_encryptor, reduce=False)
    assert offsets == [3, 10, 17]
    assert identity_encryptor.inputs == ["abc", "3", "10"]


def test_chain_reduces_modulo_bits_but_chains_raw_values(identity_encryptor):
    # "abcdefgh" -> 8, "8" -> 15, "15" -> 22; reduced mod 5
    offsets = hash_chain("abcdefgh", 3, 5, identity_encryptor)
    assert offsets == [3, 0, 2]
    assert identity_encryptor.inputs == ["abcdefgh", "8", "15"]


def test_chain_does_not_hash_past_last_round(identity_encryptor):
    hash_chain("value", 4, 64, identity_encryptor)
    assert len(identity_encryptor.inputs) == 4


@pytest.mark.parametrize("rounds", [1, 2, 3, 7, 20])
def test_chain_length_is_exactly_rounds(rounds):
    assert len(hash_chain("alpha", rounds, 64, Murmur3Encryptor())) == rounds


def test_chain_is_deterministic():
    encryptor = Murmur3Encryptor()
    first = hash_chain("alpha", 5, 1024, encryptor)
    second = hash_chain("alpha", 5, 1024, Murmur3Encryptor())
    assert first == second


def test_reduced_offsets_are_in_range():
    encryptor = Murmur3Encryptor()
    for bits in (1, 7, 64, 1000):
        for i in range(200):
            for offset in hash_chain(f"item-{i}", 4, bits, encryptor):
                assert 0 <= offset < bits


def test_raw_and_reduced_chains_agree_modulo_bits():
    encryptor = Murmur3Encryptor()
    raw = hash_chain("alpha", 6, 97, encryptor, reduce=False)
    reduced = hash_chain("alpha", 6, 97, encryptor)
    assert [offset % 97 for offset in raw] == reduced
