"""Time-ordered identifiers (UUID version 7 layout)."""

import os
import time
import uuid


def new_id() -> str:
    """Return a UUIDv7 string: 48-bit unix millis, then random bits.

    Ids generated later sort after earlier ones at millisecond granularity.
    """
    millis = time.time_ns() // 1_000_000
    rand = int.from_bytes(os.urandom(10), "big")
    value = (millis & ((1 << 48) - 1)) << 80
    value |= 0x7 << 76
    value |= ((rand >> 64) & 0xFFF) << 64
    value |= 0b10 << 62
    value |= rand & ((1 << 62) - 1)
    return str(uuid.UUID(int=value))


__all__ = ["new_id"]
