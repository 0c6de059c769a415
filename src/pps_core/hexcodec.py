"""Uppercase, separator-free hex text as written into profile files."""
from __future__ import annotations

from .errors import MalformedHex
from .protocol import HEX_DIGITS, HEX_PREFIXES, MIN_PAYLOAD_BYTES


def to_hex(data: bytes) -> str:
    return bytes(data).hex().upper()


def clean_hex(text: str) -> str:
    """Strip surrounding whitespace and one optional ``0x`` prefix."""
    text = text.strip()
    if text.startswith(HEX_PREFIXES):
        text = text[2:]
    return text


def hex_digits_to_bytes(cleaned: str) -> bytes:
    """Strict parse of already-cleaned hex: digits only, even count."""
    for i, ch in enumerate(cleaned):
        if ch not in HEX_DIGITS:
            raise MalformedHex(f"Invalid hex digit {ch!r}", position=i)
    if len(cleaned) % 2:
        raise MalformedHex("Odd number of hex digits", position=len(cleaned) - 1)
    return bytes.fromhex(cleaned)


def from_hex(text: str) -> bytes:
    """Parse payload hex; positions in errors index the cleaned string."""
    if not isinstance(text, str):
        raise MalformedHex(f"Expected text, got {type(text).__name__}")
    cleaned = clean_hex(text)

    data = hex_digits_to_bytes(cleaned)
    if len(data) < MIN_PAYLOAD_BYTES:
        raise MalformedHex(f"Payload needs at least {MIN_PAYLOAD_BYTES} bytes, got {len(data)}")
    return data
