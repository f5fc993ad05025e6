"""HyperBitBit for cardinality (distinct count) estimation.

HyperBitBit estimates the number of distinct elements in a stream using
128 bits of registers and an 8-bit exponent. It is far smaller and cheaper
than HyperLogLog, at the cost of accuracy: estimates move in powers of two
and are only meaningful for large cardinalities.

Key properties:
- Space: 17 bytes
- Update: O(1)
- Query: O(1), depends on the exponent only
- Error: roughly 10-15% for large N; biased upwards for small N

State:
- register A: bucket k is set when an item in bucket k had the rank of the
  current level
- register B: the same for the next level, staged for promotion
- exponent c: current level

When more than 31 buckets of register A are set, register B becomes
register A, register B is cleared and the exponent advances.

Unlike HyperLogLog, two HyperBitBit sketches cannot be merged: promotion
depends on the order in which ranks were observed. Use HyperLogLog when
sketches from parallel streams must be combined.

Reference:
    Sedgewick. "Cardinality Estimation" (Analytic Combinatorics, 2011)
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Hashable, TypeVar

from hyperbitbit.sketching.base import CardinalitySketch
from hyperbitbit.sketching.bits import HASH_MASK, NUM_BUCKETS, bucket_of, popcount, rank_of
from hyperbitbit.sketching.codec import (
    MAX_EXPONENT,
    STATE_SIZE,
    SketchState,
    decode_state,
    encode_state,
    state_from_dict,
    state_to_dict,
)
from hyperbitbit.sketching.hashing import HashFunction, item_bytes, make_hash_function

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)

# Bias correction constant, tuned together with LEVEL_OFFSET
ALPHA = 5.4

# Rank that maps to exponent 0
LEVEL_OFFSET = 3

# Register A may hold at most this many set buckets
PROMOTION_THRESHOLD = 31

BASE_ESTIMATE = round(ALPHA * NUM_BUCKETS)  # 346


class HyperBitBit(CardinalitySketch, Generic[T]):
    """HyperBitBit for streaming cardinality estimation.

    Args:
        seed: Seed for the default SHA-256 hash. Ignored when
            ``hash_func`` is given.
        hash_func: Optional replacement hash taking bytes and returning a
            64-bit integer.

    Example:
        # Count unique visitors
        hbb = HyperBitBit[str](seed=42)

        for visitor_id in visitor_stream:
            hbb.insert(visitor_id)

        print(f"~{hbb.cardinality()} unique visitors")
    """

    def __init__(self, seed: int | None = None, hash_func: HashFunction | None = None):
        if hash_func is not None and not callable(hash_func):
            raise TypeError(f"hash_func must be callable, got {type(hash_func).__name__}")

        self._seed = seed if seed is not None else 0
        self._hash_func = hash_func if hash_func is not None else make_hash_function(self._seed)
        self._register_a = 0
        self._register_b = 0
        self._exponent = 0

    @property
    def seed(self) -> int:
        """Seed of the default hash function."""
        return self._seed

    @property
    def register_a(self) -> int:
        """Buckets belonging to the current level."""
        return self._register_a

    @property
    def register_b(self) -> int:
        """Buckets staged for the next level."""
        return self._register_b

    @property
    def exponent(self) -> int:
        """Current level; never decreases."""
        return self._exponent

    @property
    def state(self) -> SketchState:
        return SketchState(self._register_a, self._register_b, self._exponent)

    def _hash(self, item: T) -> int:
        return self._hash_func(item_bytes(item)) & HASH_MASK

    def insert(self, item: T) -> None:
        """Add an item to the sketch.

        Inserting the same item again never changes the state.

        Args:
            item: Bytes, a string, or any value with a stable repr().
        """
        hash_value = self._hash(item)
        bucket = bucket_of(hash_value)
        rank = rank_of(hash_value)

        level = self._exponent + LEVEL_OFFSET
        if rank == level:
            self._register_a |= 1 << bucket
        elif rank == level + 1:
            self._register_b |= 1 << bucket

        if popcount(self._register_a) > PROMOTION_THRESHOLD:
            self._promote()

    def _promote(self) -> None:
        # Only reachable from decoded state: inserts stop promoting near 55
        # because rank is capped at 58.
        if self._exponent >= MAX_EXPONENT:
            return
        self._register_a = self._register_b
        self._register_b = 0
        self._exponent += 1
        logger.debug(
            "Promoted to exponent %d (estimate %d)", self._exponent, self.cardinality()
        )

    def add(self, item: T, count: int = 1) -> None:
        """Add an item to the sketch.

        Only presence matters for cardinality, so any positive count is
        the same as a single insert.

        Args:
            item: The item to add.
            count: Number of occurrences (must be non-negative).
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if count == 0:
            return
        self.insert(item)

    def cardinality(self) -> int:
        """Estimate the number of distinct items.

        The estimate depends on the exponent alone: 346 * 2^exponent.
        """
        return BASE_ESTIMATE << self._exponent

    def encode(self) -> bytes:
        """Serialize the state to 17 bytes (big-endian A, B, exponent)."""
        return encode_state(self.state)

    @classmethod
    def decode(
        cls,
        data: bytes | bytearray | memoryview,
        seed: int | None = None,
        hash_func: HashFunction | None = None,
    ) -> "HyperBitBit[T]":
        """Restore a sketch from ``encode()`` output.

        The hash configuration is not stored; pass the original ``seed`` or
        ``hash_func`` if more items will be inserted.

        Raises:
            DecodeError: If ``data`` is not a valid 17-byte record.
        """
        return cls._from_state(decode_state(data), seed, hash_func)

    def to_dict(self) -> dict[str, int]:
        return state_to_dict(self.state)

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        seed: int | None = None,
        hash_func: HashFunction | None = None,
    ) -> "HyperBitBit[T]":
        """Restore a sketch from ``to_dict()`` output.

        Raises:
            DecodeError: If fields are missing or out of range.
        """
        return cls._from_state(state_from_dict(data), seed, hash_func)

    @classmethod
    def _from_state(
        cls, state: SketchState, seed: int | None, hash_func: HashFunction | None
    ) -> "HyperBitBit[T]":
        sketch = cls(seed=seed, hash_func=hash_func)
        sketch._register_a = state.register_a
        sketch._register_b = state.register_b
        sketch._exponent = state.exponent
        return sketch

    @property
    def memory_bytes(self) -> int:
        """Size of the sketch state in bytes."""
        return STATE_SIZE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HyperBitBit):
            return NotImplemented
        return self.state == other.state

    def __repr__(self) -> str:
        return (
            f"HyperBitBit(exponent={self._exponent}, "
            f"register_a={self._register_a:#018x}, "
            f"register_b={self._register_b:#018x}, "
            f"cardinality≈{self.cardinality()})"
        )
