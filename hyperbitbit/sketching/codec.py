"""Fixed-size binary encoding of HyperBitBit state.

Layout (17 bytes, big-endian):

    offset  0-7   register A (unsigned 64-bit)
    offset  8-15  register B (unsigned 64-bit)
    offset 16     exponent   (unsigned 8-bit, 0-63)

Decoding never truncates or pads: any other length is rejected.
"""

from __future__ import annotations

import struct
from typing import Any, NamedTuple

from hyperbitbit.sketching.bits import HASH_MASK

STATE_FORMAT = ">QQB"
STATE_SIZE = struct.calcsize(STATE_FORMAT)  # 17
MAX_EXPONENT = 63


class DecodeError(ValueError):
    """Raised when serialized sketch state is malformed."""


class SketchState(NamedTuple):
    """Raw sketch registers and exponent."""

    register_a: int
    register_b: int
    exponent: int


def encode_state(state: SketchState) -> bytes:
    """Pack state into its 17-byte form."""
    return struct.pack(STATE_FORMAT, state.register_a, state.register_b, state.exponent)


def decode_state(data: bytes | bytearray | memoryview) -> SketchState:
    """Unpack a 17-byte record.

    Raises:
        DecodeError: If ``data`` is not bytes-like, its length is not
            exactly 17 bytes, or the exponent byte is above 63.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeError(f"expected a bytes-like object, got {type(data).__name__}")
    data = bytes(data)
    if len(data) != STATE_SIZE:
        raise DecodeError(f"expected {STATE_SIZE} bytes, got {len(data)}")

    register_a, register_b, exponent = struct.unpack(STATE_FORMAT, data)
    if exponent > MAX_EXPONENT:
        raise DecodeError(f"exponent must be in [0, {MAX_EXPONENT}], got {exponent}")
    return SketchState(register_a, register_b, exponent)


def state_to_dict(state: SketchState) -> dict[str, int]:
    return state._asdict()


def state_from_dict(data: dict[str, Any]) -> SketchState:
    """Rebuild state from the output of ``state_to_dict``.

    Raises:
        DecodeError: On missing keys, non-integer values or values out of range.
    """
    missing = [name for name in SketchState._fields if name not in data]
    if missing:
        raise DecodeError(f"missing fields: {', '.join(missing)}")

    values = []
    for name in SketchState._fields:
        value = data[name]
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError(f"{name} must be an integer, got {type(value).__name__}")
        values.append(value)

    register_a, register_b, exponent = values
    for name, value in (("register_a", register_a), ("register_b", register_b)):
        if not 0 <= value <= HASH_MASK:
            raise DecodeError(f"{name} must fit in 64 bits, got {value}")
    if not 0 <= exponent <= MAX_EXPONENT:
        raise DecodeError(f"exponent must be in [0, {MAX_EXPONENT}], got {exponent}")
    return SketchState(register_a, register_b, exponent)
