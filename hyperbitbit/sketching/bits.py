"""Bit-level helpers shared by the HyperBitBit sketch.

A 64-bit hash value is split into two parts:
- The low 6 bits select one of 64 buckets.
- The remaining 58 bits give the rank: leading zeros + 1, capped at 58.
"""

from __future__ import annotations

BUCKET_BITS = 6
NUM_BUCKETS = 1 << BUCKET_BITS  # 64
BUCKET_MASK = NUM_BUCKETS - 1  # 0x3F

HASH_BITS = 64
HASH_MASK = (1 << HASH_BITS) - 1

REMAINDER_BITS = HASH_BITS - BUCKET_BITS  # 58
MAX_RANK = REMAINDER_BITS


def count_leading_zeros(value: int, width: int) -> int:
    """Count leading zeros of ``value`` viewed as a ``width``-bit integer.

    Zero has ``width`` leading zeros. Bits above ``width`` are ignored.

    Args:
        value: Non-negative integer.
        width: Number of bits to consider.

    Returns:
        Number of leading zero bits, in [0, width].
    """
    value &= (1 << width) - 1
    if value == 0:
        return width
    return width - value.bit_length()


def popcount(value: int) -> int:
    """Number of set bits in a non-negative integer."""
    return value.bit_count()


def bucket_of(hash_value: int) -> int:
    """Bucket index in [0, 64) taken from the low 6 bits of a hash."""
    return hash_value & BUCKET_MASK


def rank_of(hash_value: int) -> int:
    """Rank in [1, 58] of the 58 bits above the bucket selector.

    An all-zero remainder would give 59 and is capped to 58.
    """
    remainder = (hash_value & HASH_MASK) >> BUCKET_BITS
    return min(count_leading_zeros(remainder, REMAINDER_BITS) + 1, MAX_RANK)
