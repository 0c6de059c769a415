"""Byte-exact serialization of records against a computed layout."""
from __future__ import annotations

import struct
from typing import Any, Mapping

from .errors import LayoutMismatch
from .layout import Nested, Scalar, TypeDescriptor
from .protocol import BYTE_ORDER


def _pack_into(buf: bytearray, base: int, value: Any, descriptor: TypeDescriptor, path: str) -> None:
    where = path.rstrip(".") or "record"
    if not isinstance(value, Mapping):
        raise LayoutMismatch(f"{where}: expected a mapping, got {type(value).__name__}")

    names = {f.name for f in descriptor.fields}
    extra = [k for k in value if k not in names]
    if extra:
        raise LayoutMismatch(f"{where}: unknown field(s) {', '.join(map(str, extra))}")

    for f in descriptor.fields:
        fpath = path + f.name
        if f.name not in value:
            raise LayoutMismatch(f"Missing field {fpath}")
        v = value[f.name]
        if isinstance(f.kind, Nested):
            _pack_into(buf, base + f.offset, v, f.kind.descriptor, fpath + ".")
            continue
        if f.kind is Scalar.BOOL and not (isinstance(v, int) and v in (0, 1)):
            raise LayoutMismatch(f"Field {fpath} (bool) cannot hold {v!r}: expected True, False, 0 or 1")
        try:
            struct.pack_into(BYTE_ORDER + f.kind.fmt, buf, base + f.offset, v)
        except (struct.error, OverflowError) as e:
            raise LayoutMismatch(f"Field {fpath} ({f.kind.value}) cannot hold {v!r}: {e}") from e


def _unpack_from(data: bytes, base: int, descriptor: TypeDescriptor) -> dict:
    out: dict = {}
    for f in descriptor.fields:
        if isinstance(f.kind, Nested):
            out[f.name] = _unpack_from(data, base + f.offset, f.kind.descriptor)
        else:
            (out[f.name],) = struct.unpack_from(BYTE_ORDER + f.kind.fmt, data, base + f.offset)
    return out


def serialize(value: Mapping[str, Any], descriptor: TypeDescriptor) -> bytes:
    """Lay ``value`` out as native struct bytes; padding stays zero.

    float32 fields are rounded to single precision, so only values a C
    ``float`` can hold exactly come back unchanged from :func:`deserialize`.
    """
    buf = bytearray(descriptor.size)
    _pack_into(buf, 0, value, descriptor, "")
    return bytes(buf)


def deserialize(data: bytes, descriptor: TypeDescriptor) -> dict:
    """Rebuild a record from exactly ``descriptor.size`` bytes."""
    if len(data) != descriptor.size:
        raise LayoutMismatch(
            f"Record {descriptor.name or '<anonymous>'} is {descriptor.size} bytes, got {len(data)}"
        )
    return _unpack_from(bytes(data), 0, descriptor)
