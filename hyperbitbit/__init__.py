"""HyperBitBit: approximate distinct counting in 17 bytes.

Example:
    import hyperbitbit

    hbb = hyperbitbit.HyperBitBit(seed=42)
    for line in open("access.log"):
        hbb.insert(line.split()[0])
    print(hbb.cardinality())
"""

import logging

from hyperbitbit.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
)
from hyperbitbit.sketching import (
    CardinalitySketch,
    DecodeError,
    HashFunction,
    HyperBitBit,
    SketchState,
    decode_state,
    default_hash,
    encode_state,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "CardinalitySketch",
    "DecodeError",
    "HashFunction",
    "HyperBitBit",
    "SketchState",
    "configure_from_env",
    "decode_state",
    "default_hash",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "encode_state",
]
