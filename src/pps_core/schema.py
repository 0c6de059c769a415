"""Declarative record schemas.

A schema maps record names to ordered ``[field, type]`` pairs::

    {
      "SIZE": [["width", "uint32"], ["height", "uint32"]],
      "DatasetInfo": [["format", "int32"], ["size", "SIZE"], ["colordeep", "int32"]]
    }

Types are scalar names (C spellings such as ``int``, ``DWORD`` or ``double``
are accepted as aliases) or the name of another record in the same schema.
Records may be declared in any order.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from .errors import InvalidDescriptor
from .layout import Scalar, TypeDescriptor, build

SCALAR_ALIASES = {
    "char": Scalar.INT8,
    "signed char": Scalar.INT8,
    "unsigned char": Scalar.UINT8,
    "byte": Scalar.UINT8,
    "BYTE": Scalar.UINT8,
    "short": Scalar.INT16,
    "unsigned short": Scalar.UINT16,
    "WORD": Scalar.UINT16,
    "int": Scalar.INT32,
    "long": Scalar.INT32,
    "unsigned int": Scalar.UINT32,
    "unsigned long": Scalar.UINT32,
    "DWORD": Scalar.UINT32,
    "UINT": Scalar.UINT32,
    "LONG": Scalar.INT32,
    "long long": Scalar.INT64,
    "unsigned long long": Scalar.UINT64,
    "float": Scalar.FLOAT32,
    "double": Scalar.FLOAT64,
}


def _scalar(type_name: str) -> Scalar | None:
    if type_name in SCALAR_ALIASES:
        return SCALAR_ALIASES[type_name]
    try:
        return Scalar(type_name)
    except ValueError:
        return None


def load_schema(schema: Mapping[str, list]) -> dict[str, TypeDescriptor]:
    """Resolve every record in ``schema`` into a :class:`TypeDescriptor`."""
    if not isinstance(schema, Mapping):
        raise InvalidDescriptor("Schema must map record names to field lists")

    resolved: dict[str, TypeDescriptor] = {}
    resolving: list[str] = []

    def resolve(record: str) -> TypeDescriptor:
        if record in resolved:
            return resolved[record]
        if record in resolving:
            cycle = " -> ".join(resolving[resolving.index(record):] + [record])
            raise InvalidDescriptor(f"Self-referential record: {cycle}")
        fields = schema.get(record)
        if fields is None:
            raise InvalidDescriptor(f"Record {record!r} has no field list")

        resolving.append(record)
        pairs = []
        for entry in fields:
            if not isinstance(entry, (list, tuple)) or len(entry) != 2:
                raise InvalidDescriptor(f"Record {record!r}: malformed field entry {entry!r}")
            fname, type_name = entry
            if not isinstance(type_name, str):
                raise InvalidDescriptor(f"Record {record!r}: type of {fname!r} must be a string")
            kind = _scalar(type_name)
            if kind is None:
                if type_name not in schema:
                    raise InvalidDescriptor(f"Record {record!r}: unknown type {type_name!r}")
                kind = resolve(type_name)
            pairs.append((fname, kind))
        resolving.pop()

        descriptor = build(pairs, name=record)
        resolved[record] = descriptor
        return descriptor

    for record in schema:
        resolve(record)
    return resolved


def load_schema_file(path: Path) -> dict[str, TypeDescriptor]:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidDescriptor(f"Schema file {path} is not valid JSON: {e}") from e
    return load_schema(raw)


def load_record(path: Path, record: str) -> TypeDescriptor:
    """Descriptor of one named record from a schema file."""
    descriptors = load_schema_file(path)
    if record not in descriptors:
        raise InvalidDescriptor(f"Record {record!r} not found in {path}")
    return descriptors[record]
