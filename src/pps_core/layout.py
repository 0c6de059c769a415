"""Sequential, naturally-aligned struct layout.

A :class:`TypeDescriptor` is the explicit stand-in for a native struct
definition: an ordered field list with every offset, the struct alignment and
the padded size computed once by :func:`build`. The rules are the default
(non-packed) C convention:

- each field starts at the next multiple of its own alignment;
- a nested struct aligns to the widest field inside it;
- the struct size is rounded up to its own alignment.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Union

from .errors import InvalidDescriptor
from .protocol import SCALAR_FORMATS


class Scalar(enum.Enum):
    """Fixed-size primitive field kinds."""

    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"

    @property
    def fmt(self) -> str:
        return SCALAR_FORMATS[self.value][0]

    @property
    def size(self) -> int:
        return SCALAR_FORMATS[self.value][1]

    @property
    def alignment(self) -> int:
        return self.size


@dataclass(frozen=True)
class Nested:
    """A field whose kind is another record."""

    descriptor: "TypeDescriptor"

    @property
    def size(self) -> int:
        return self.descriptor.size

    @property
    def alignment(self) -> int:
        return self.descriptor.alignment


FieldKind = Union[Scalar, Nested]


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    kind: FieldKind
    offset: int = 0


@dataclass(frozen=True)
class TypeDescriptor:
    fields: tuple[FieldDescriptor, ...]
    size: int
    alignment: int
    name: str | None = None

    def field(self, name: str) -> FieldDescriptor:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)


def _align(cursor: int, alignment: int) -> int:
    return (cursor + alignment - 1) // alignment * alignment


def _coerce_kind(kind: Any) -> FieldKind:
    if isinstance(kind, (Scalar, Nested)):
        return kind
    if isinstance(kind, TypeDescriptor):
        return Nested(kind)
    if isinstance(kind, str):
        try:
            return Scalar(kind)
        except ValueError:
            raise InvalidDescriptor(f"Unknown scalar type {kind!r}") from None
    raise InvalidDescriptor(f"Unsupported field kind {kind!r}")


def _check_acyclic(descriptor: TypeDescriptor, chain: tuple[int, ...]) -> None:
    if id(descriptor) in chain:
        raise InvalidDescriptor(f"Record {descriptor.name or '<anonymous>'} nests itself")
    chain = chain + (id(descriptor),)
    for f in descriptor.fields:
        if isinstance(f.kind, Nested):
            _check_acyclic(f.kind.descriptor, chain)


def build(fields: Iterable[Any] | None, name: str | None = None) -> TypeDescriptor:
    """Compute offsets, alignment and padded size for an ordered field list.

    ``fields`` holds :class:`FieldDescriptor` objects or ``(name, kind)`` pairs
    where kind is a :class:`Scalar`, a scalar name such as ``"uint32"``, a
    :class:`Nested` or a :class:`TypeDescriptor`.
    """
    if fields is None:
        raise InvalidDescriptor("Field list is unspecified")

    laid_out: list[FieldDescriptor] = []
    seen: set[str] = set()
    cursor = 0
    struct_alignment = 1

    for entry in fields:
        if isinstance(entry, FieldDescriptor):
            fname, kind = entry.name, entry.kind
        else:
            try:
                fname, kind = entry
            except (TypeError, ValueError):
                raise InvalidDescriptor(f"Malformed field entry {entry!r}") from None

        if not isinstance(fname, str) or not fname:
            raise InvalidDescriptor(f"Field name must be a non-empty string, got {fname!r}")
        if fname in seen:
            raise InvalidDescriptor(f"Duplicate field name {fname!r}")
        seen.add(fname)

        kind = _coerce_kind(kind)
        if isinstance(kind, Nested):
            _check_acyclic(kind.descriptor, ())

        a = kind.alignment
        cursor = _align(cursor, a)
        laid_out.append(FieldDescriptor(fname, kind, cursor))
        cursor += kind.size
        struct_alignment = max(struct_alignment, a)

    return TypeDescriptor(
        fields=tuple(laid_out),
        size=_align(cursor, struct_alignment),
        alignment=struct_alignment,
        name=name,
    )


def iter_layout(descriptor: TypeDescriptor, base: int = 0, prefix: str = "") -> Iterator[tuple[str, int, Scalar]]:
    """Yield ``(dotted_name, absolute_offset, scalar)`` for every leaf field."""
    for f in descriptor.fields:
        path = prefix + f.name
        if isinstance(f.kind, Nested):
            yield from iter_layout(f.kind.descriptor, base + f.offset, path + ".")
        else:
            yield path, base + f.offset, f.kind


def padding(descriptor: TypeDescriptor) -> list[tuple[int, int]]:
    """Return ``(start, length)`` of every padding gap, nested gaps included."""
    gaps: list[tuple[int, int]] = []
    cursor = 0
    for _, offset, kind in iter_layout(descriptor):
        if offset > cursor:
            gaps.append((cursor, offset - cursor))
        cursor = offset + kind.size
    if descriptor.size > cursor:
        gaps.append((cursor, descriptor.size - cursor))
    return gaps


def default_value(descriptor: TypeDescriptor) -> dict:
    """The all-zero record, as a freshly zeroed native struct would read."""
    out: dict = {}
    for f in descriptor.fields:
        if isinstance(f.kind, Nested):
            out[f.name] = default_value(f.kind.descriptor)
        elif f.kind is Scalar.BOOL:
            out[f.name] = False
        elif f.kind in (Scalar.FLOAT32, Scalar.FLOAT64):
            out[f.name] = 0.0
        else:
            out[f.name] = 0
    return out
