import random

import pytest

from awgcore.checksum import checksum, checksum_no_fold, pseudo_header_checksum_no_fold

IPPROTO_TCP = 6


def test_rfc1071_example():
    data = bytes.fromhex("0001f203f4f5f6f7")
    assert checksum(data, 0) == 0xDDF2


def test_ipv4_header_example():
    header = bytes.fromhex("450000730000400040110000c0a80001c0a800c7")
    assert checksum(header, 0) == 0x479E
    assert (~checksum(header, 0)) & 0xFFFF == 0xB861


def test_empty_data_returns_initial():
    assert checksum(b"", 0x1234) == 0x1234


def test_odd_trailing_byte_is_high_order():
    assert checksum(b"\x01", 0) == 0x0100


def test_initial_is_folded():
    assert checksum(b"", 0x10000) == 1


def test_no_fold_stays_within_64_bits():
    total = checksum_no_fold(b"\xff" * 100_000, (1 << 64) - 1)
    assert 0 <= total < (1 << 64)
    assert checksum(b"", total) == checksum(b"\xff" * 100_000, (1 << 64) - 1)


@pytest.mark.parametrize("length", [0, 2, 8, 16, 62, 64, 126, 128, 1500, 9000])
def test_appending_complement_verifies(length):
    rng = random.Random(1)
    data = rng.randbytes(length)
    complement = (~checksum(data, 0x1234)) & 0xFFFF
    assert checksum(data + complement.to_bytes(2, "big"), 0x1234) == 0xFFFF


def test_checksum_is_split_invariant():
    rng = random.Random(1)
    data = rng.randbytes(9001)
    for cut in range(0, 9001, 250):
        split = cut - cut % 2
        partial = checksum_no_fold(data[:split], 0x1234)
        assert checksum(data[split:], partial) == checksum(data, 0x1234)


@pytest.mark.parametrize("addr_len", [4, 16])
@pytest.mark.parametrize("length", [0, 1, 20, 513, 1500, 9001])
def test_pseudo_header_matches_explicit_header(addr_len, length):
    rng = random.Random(1)
    src = rng.randbytes(addr_len)
    dst = rng.randbytes(addr_len)
    buf = rng.randbytes(length)
    pseudo = pseudo_header_checksum_no_fold(IPPROTO_TCP, src, dst, length)
    explicit = src + dst + bytes((0, IPPROTO_TCP)) + length.to_bytes(2, "big") + buf
    assert checksum(buf, pseudo) == checksum(explicit, 0)