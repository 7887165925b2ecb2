"""Bit addressing for arrays of packed 32-bit words."""

from __future__ import annotations

from typing import MutableSequence, Sequence

WORD_BITS = 32
WORD_SHIFT = 5  # log2(WORD_BITS)
WORD_MASK = WORD_BITS - 1


def word_count(bits: int) -> int:
    """Number of words needed to hold ``bits`` bits, plus one spare word."""
    return bits // WORD_BITS + 1


def word_index(index: int) -> int:
    return index >> WORD_SHIFT


def bit_offset(index: int) -> int:
    return index & WORD_MASK


def set_bit(words: MutableSequence[int], index: int) -> None:
    words[index >> WORD_SHIFT] |= 1 << (index & WORD_MASK)


def get_bit(words: Sequence[int], index: int) -> bool:
    return words[index >> WORD_SHIFT] & (1 << (index & WORD_MASK)) != 0

