"""TAI64N timestamps with whitened sub-second precision."""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone

TIMESTAMP_SIZE = 12
BASE = 0x400000000000000A
WHITENER_MASK = 0x1000000 - 1

_MASK64 = (1 << 64) - 1
_NANOS_PER_SECOND = 1_000_000_000
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Timestamp(bytes):
    """A 12-byte TAI64N label: big-endian seconds then big-endian nanoseconds."""

    def __new__(cls, data: bytes = bytes(TIMESTAMP_SIZE)) -> "Timestamp":
        data = bytes(data)
        if len(data) != TIMESTAMP_SIZE:
            raise ValueError(
                f"timestamp must be {TIMESTAMP_SIZE} bytes, got {len(data)}"
            )
        return super().__new__(cls, data)

    def after(self, other: bytes) -> bool:
        """Report whether this timestamp is strictly later than ``other``."""
        return bytes(self) > bytes(other)

    def __str__(self) -> str:
        secs = int.from_bytes(self[:8], "big") - BASE
        nanos = int.from_bytes(self[8:], "big")
        moment = _EPOCH + timedelta(seconds=secs)
        frac = f".{nanos:09d}".rstrip("0") if nanos else ""
        return f"{moment:%Y-%m-%d %H:%M:%S}{frac} +0000 UTC"


def stamp(unix_nanos: int) -> Timestamp:
    """Build a timestamp from nanoseconds since the Unix epoch."""
    secs, nanos = divmod(unix_nanos, _NANOS_PER_SECOND)
    label = ((BASE + secs) & _MASK64).to_bytes(8, "big")
    label += (nanos & ~WHITENER_MASK & 0xFFFFFFFF).to_bytes(4, "big")
    return Timestamp(label)


def now() -> Timestamp:
    """The current time as a timestamp."""
    return stamp(time.time_ns())