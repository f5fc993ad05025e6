"""Deterministic 64-bit hashing of stream items.

The sketch only needs a function from bytes to a uniformly distributed
64-bit integer. The default is a seeded SHA-256: slow compared to
non-cryptographic hashes, but stable across processes and platforms,
unlike Python's built-in ``hash()``.

Any callable with the ``HashFunction`` signature can be used instead.
"""

from __future__ import annotations

import hashlib
import struct
from collections.abc import Callable

from hyperbitbit.sketching.bits import HASH_MASK

HashFunction = Callable[[bytes], int]


def item_bytes(item: object) -> bytes:
    """Convert an item to the bytes that get hashed.

    Bytes-like objects are used as-is and strings are UTF-8 encoded.
    Anything else goes through ``repr()``.
    """
    if isinstance(item, bytes):
        return item
    if isinstance(item, (bytearray, memoryview)):
        return bytes(item)
    if isinstance(item, str):
        return item.encode("utf-8")
    return repr(item).encode("utf-8")


def default_hash(data: bytes, seed: int = 0) -> int:
    """Hash bytes to a 64-bit integer.

    Args:
        data: The bytes to hash.
        seed: Unsigned 64-bit seed mixed in ahead of the data.

    Returns:
        Integer in [0, 2^64).
    """
    h = hashlib.sha256()
    h.update(struct.pack(">Q", seed & HASH_MASK))
    h.update(data)
    return struct.unpack(">Q", h.digest()[:8])[0]


def make_hash_function(seed: int = 0) -> HashFunction:
    """Bind ``seed`` into a single-argument hash function."""

    def _hash(data: bytes) -> int:
        return default_hash(data, seed)

    return _hash
