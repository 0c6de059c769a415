"""One-byte additive checksum appended to every payload."""
from __future__ import annotations

from .protocol import CHECKSUM_MASK


def checksum(data: bytes) -> int:
    """Sum of all bytes modulo 256."""
    acc = 0
    for b in data:
        # Python ints never wrap, so keep the accumulator inside one byte.
        acc = (acc + b) & CHECKSUM_MASK
    return acc


def verify(data: bytes, claimed: int) -> bool:
    return checksum(data) == claimed
