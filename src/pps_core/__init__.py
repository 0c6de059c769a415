"""PPS Core - struct layout, checksum and hex codec for private profile structs."""
from .checksum import checksum, verify
from .codec import deserialize, serialize
from .errors import (
    ChecksumMismatch,
    InvalidDescriptor,
    LayoutMismatch,
    LengthMismatch,
    MalformedHex,
    ProfileStructError,
)
from .facade import add_checksum, decode, encode, read_record, validate_checksum, write_record
from .hexcodec import from_hex, to_hex
from .layout import FieldDescriptor, Nested, Scalar, TypeDescriptor, build, default_value, iter_layout, padding
from .schema import load_record, load_schema, load_schema_file

__all__ = [
    "Scalar", "Nested", "FieldDescriptor", "TypeDescriptor",
    "build", "default_value", "iter_layout", "padding",
    "load_schema", "load_schema_file", "load_record",
    "serialize", "deserialize",
    "checksum", "verify",
    "to_hex", "from_hex",
    "encode", "decode", "add_checksum", "validate_checksum",
    "write_record", "read_record",
    "ProfileStructError", "InvalidDescriptor", "LayoutMismatch",
    "MalformedHex", "LengthMismatch", "ChecksumMismatch",
]
