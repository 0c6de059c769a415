"""Encode/decode entry points and the legacy profile-API style wrappers.

``write_record``/``read_record`` behave like WritePrivateProfileStructA and
GetPrivateProfileStructA: every failure collapses into ``False``. Call
:func:`encode`/:func:`decode` directly to get the reason.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping

from .checksum import checksum, verify
from .codec import deserialize, serialize
from .errors import ChecksumMismatch, LengthMismatch, MalformedHex, ProfileStructError
from .hexcodec import clean_hex, from_hex, hex_digits_to_bytes, to_hex
from .layout import TypeDescriptor, default_value
from .protocol import CHECKSUM_LEN

Setter = Callable[[str, str, str, Any], bool]
Getter = Callable[[str, str, Any], "str | None"]


def encode(value: Mapping[str, Any], descriptor: TypeDescriptor) -> str:
    data = serialize(value, descriptor)
    return to_hex(data + bytes([checksum(data)]))


def decode(hex_text: str, descriptor: TypeDescriptor) -> dict:
    payload = from_hex(hex_text)

    expected = descriptor.size + CHECKSUM_LEN
    if len(payload) != expected:
        raise LengthMismatch(expected, len(payload))

    data, claimed = payload[:-CHECKSUM_LEN], payload[-1]
    if not verify(data, claimed):
        raise ChecksumMismatch(checksum(data), claimed)

    return deserialize(data, descriptor)


def add_checksum(hex_data: str) -> str:
    """Append the checksum to bare data hex (``640000000000C03F`` -> ``...63``)."""
    data = hex_digits_to_bytes(clean_hex(hex_data))
    return to_hex(data + bytes([checksum(data)]))


def validate_checksum(hex_text: str) -> dict:
    """Check a payload's length and checksum without knowing its record type."""
    try:
        payload = from_hex(hex_text)
    except MalformedHex as e:
        return {"valid": False, "reason": str(e)}

    data, stored = payload[:-CHECKSUM_LEN], payload[-1]
    computed = checksum(data)
    if computed != stored:
        return {
            "valid": False,
            "reason": f"Checksum mismatch: expected {computed:02X}, got {stored:02X}",
            "expected": computed,
            "actual": stored,
            "data_length": len(data),
        }
    return {"valid": True, "data_length": len(data), "checksum": stored}


def write_record(
    section: str,
    key: str,
    value: Mapping[str, Any],
    descriptor: TypeDescriptor,
    setter: Setter,
    target: Any,
) -> bool:
    try:
        hex_text = encode(value, descriptor)
    except ProfileStructError:
        return False
    try:
        return bool(setter(section, key, hex_text, target))
    except Exception:
        # Store failures surface only as a failed write.
        return False


def read_record(
    section: str,
    key: str,
    descriptor: TypeDescriptor,
    getter: Getter,
    target: Any,
) -> tuple[bool, dict]:
    """Return ``(True, record)`` or ``(False, zeroed record)``."""
    try:
        hex_text = getter(section, key, target)
    except Exception:
        return False, default_value(descriptor)
    if hex_text is None:
        return False, default_value(descriptor)
    try:
        return True, decode(hex_text, descriptor)
    except ProfileStructError:
        return False, default_value(descriptor)
