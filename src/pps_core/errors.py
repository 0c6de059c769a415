"""Failure kinds raised by the struct codec."""
from __future__ import annotations


class ProfileStructError(ValueError):
    """Base class for every codec failure."""


class InvalidDescriptor(ProfileStructError):
    """Field list is missing, malformed or self-referential."""


class LayoutMismatch(ProfileStructError):
    """A value or buffer does not fit the descriptor it is paired with."""


class MalformedHex(ProfileStructError):
    """Input is not a well-formed even-length hex string."""

    def __init__(self, message: str, position: int | None = None):
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)
        self.position = position


class LengthMismatch(ProfileStructError):
    """Decoded byte count differs from record size + checksum."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected {expected} bytes (data + checksum), got {actual}")
        self.expected = expected
        self.actual = actual


class ChecksumMismatch(ProfileStructError):
    def __init__(self, expected: int, actual: int):
        super().__init__(f"Checksum mismatch: expected {expected:02X}, got {actual:02X}")
        self.expected = expected
        self.actual = actual
