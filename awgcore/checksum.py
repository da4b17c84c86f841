"""Internet (RFC 1071) checksums for packet headers and payloads."""

from __future__ import annotations

import sys
from array import array

_MASK64 = (1 << 64) - 1


class TooManySegmentsError(Exception):
    """Segmentation overflowed the supplied buffers; reading may continue."""

    def __init__(self, message: str = "too many segments") -> None:
        super().__init__(message)


def _word_sum(data: bytes) -> int:
    data = bytes(data)
    if len(data) % 2:
        data += b"\x00"
    words = array("H", data)
    if sys.byteorder == "little":
        words.byteswap()
    return sum(words)


def checksum_no_fold(data: bytes, initial: int = 0) -> int:
    """Ones' complement sum of big-endian 16-bit words, kept within 64 bits."""
    total = initial + _word_sum(data)
    while total > _MASK64:
        total = (total >> 64) + (total & _MASK64)
    return total


def checksum(data: bytes, initial: int = 0) -> int:
    """Ones' complement sum of ``data`` folded to 16 bits."""
    total = checksum_no_fold(data, initial)
    while total > 0xFFFF:
        total = (total >> 16) + (total & 0xFFFF)
    return total


def pseudo_header_checksum_no_fold(
    protocol: int, src_addr: bytes, dst_addr: bytes, total_len: int
) -> int:
    """Unfolded sum of the TCP/UDP pseudo-header."""
    total = checksum_no_fold(src_addr, 0)
    total = checksum_no_fold(dst_addr, total)
    total = checksum_no_fold(bytes((0, protocol)), total)
    return checksum_no_fold(total_len.to_bytes(2, "big"), total)