"""Streaming/sketching algorithms for approximate statistics.

This module provides space-efficient algorithms for computing approximate
statistics over data streams.

Quick Reference:
    HyperBitBit: Cardinality (distinct count) estimation in 17 bytes

Example:
    from hyperbitbit.sketching import HyperBitBit

    # Count unique visitors
    hbb = HyperBitBit[str](seed=42)
    for visitor_id in visitors:
        hbb.insert(visitor_id)
    print(f"~{hbb.cardinality()} unique visitors")

    # Persist and restore
    blob = hbb.encode()  # 17 bytes
    restored = HyperBitBit.decode(blob, seed=42)
"""

# Base protocols
from hyperbitbit.sketching.base import CardinalitySketch, Sketch

# Serialization
from hyperbitbit.sketching.codec import (
    DecodeError,
    SketchState,
    decode_state,
    encode_state,
)

# Hashing
from hyperbitbit.sketching.hashing import HashFunction, default_hash, item_bytes

# Cardinality estimation
from hyperbitbit.sketching.hyperbitbit import HyperBitBit

__all__ = [
    "CardinalitySketch",
    # Serialization
    "DecodeError",
    # Hashing
    "HashFunction",
    # Cardinality estimation
    "HyperBitBit",
    # Protocols
    "Sketch",
    "SketchState",
    "decode_state",
    "default_hash",
    "encode_state",
    "item_bytes",
]
