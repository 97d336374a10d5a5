"""
Value model for the form encoder.

Every input handed to the encoder is viewed through one of a small, closed set
of variants: scalars, structs, sequences, mappings, pointers and the absent
value. Host objects are turned into this model once (see ``adapters``), which
keeps the encoding walk independent of how a given Python type is introspected.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union


class Kind(Enum):
    """Abstract kind of a value."""

    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    STRING = "string"
    STRUCT = "struct"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    POINTER = "pointer"
    INVALID = "invalid"
    FUNC = "func"
    CHAN = "chan"
    OPAQUE = "opaque"


INTEGER_KINDS = frozenset({
    Kind.INT, Kind.INT8, Kind.INT16, Kind.INT32, Kind.INT64,
    Kind.UINT, Kind.UINT8, Kind.UINT16, Kind.UINT32, Kind.UINT64,
})
FLOAT_KINDS = frozenset({Kind.FLOAT32, Kind.FLOAT64})
COMPLEX_KINDS = frozenset({Kind.COMPLEX64, Kind.COMPLEX128})
SCALAR_KINDS = INTEGER_KINDS | FLOAT_KINDS | COMPLEX_KINDS | {Kind.BOOL, Kind.STRING}
OPAQUE_KINDS = frozenset({Kind.FUNC, Kind.CHAN, Kind.OPAQUE})


class KV(NamedTuple):
    """One flat output pair."""

    key: str
    value: str


@dataclass(frozen=True)
class FieldMeta:
    """Declared name and raw tags of one struct field."""

    name: str
    tags: Dict[str, str] = field(default_factory=dict)

    def lookup(self, tag_name: str) -> str:
        """Return the raw tag stored under ``tag_name``, or "" when missing."""
        return self.tags.get(tag_name, "")


def _content_matches(kind: Kind, content: Any) -> bool:
    # bool is an int subclass but never a number here
    if kind is Kind.BOOL:
        return isinstance(content, bool)
    if kind is Kind.STRING:
        return isinstance(content, str)
    if isinstance(content, bool):
        return False
    if kind in INTEGER_KINDS:
        return isinstance(content, int)
    if kind in FLOAT_KINDS:
        return isinstance(content, (int, float))
    return isinstance(content, (int, float, complex))


@dataclass(frozen=True)
class Scalar:
    kind: Kind
    content: Any

    def __post_init__(self):
        if self.kind not in SCALAR_KINDS:
            raise ValueError(f"{self.kind} is not a scalar kind")
        if not _content_matches(self.kind, self.content):
            raise TypeError(
                f"{type(self.content).__name__} content does not fit a {self.kind.value} scalar"
            )


@dataclass(frozen=True)
class Struct:
    fields: Tuple[Tuple[FieldMeta, "Value"], ...] = ()

    @property
    def kind(self) -> Kind:
        return Kind.STRUCT


@dataclass(frozen=True)
class Sequence:
    """
    Ordered collection of values.

    ``elem_kind`` is the declared element kind when known (e.g. ``UINT8`` for
    byte strings, ``STRING`` for lists of strings), otherwise None.
    """

    items: Tuple["Value", ...] = ()
    elem_kind: Optional[Kind] = None

    @property
    def kind(self) -> Kind:
        return Kind.SEQUENCE


@dataclass(frozen=True)
class Mapping:
    """Key/value entries, kept in the order the caller supplied them."""

    entries: Tuple[Tuple["Value", "Value"], ...] = ()

    @property
    def kind(self) -> Kind:
        return Kind.MAPPING


@dataclass(frozen=True)
class Pointer:
    """Reference to another value; a None target is a nil pointer."""

    target: Optional["Value"] = None

    @property
    def kind(self) -> Kind:
        return Kind.POINTER


@dataclass(frozen=True)
class Absent:
    @property
    def kind(self) -> Kind:
        return Kind.INVALID


@dataclass(frozen=True)
class Opaque:
    """A host value with no encoding, such as a function."""

    kind: Kind
    type_name: str = ""

    def __post_init__(self):
        if self.kind not in OPAQUE_KINDS:
            raise ValueError(f"{self.kind} is not an opaque kind")


ABSENT = Absent()

Value = Union[Scalar, Struct, Sequence, Mapping, Pointer, Absent, Opaque]


def unwrap(value: "Value") -> "Value":
    """Follow pointers until a non-pointer value or a nil pointer is reached."""
    while isinstance(value, Pointer):
        if value.target is None:
            return ABSENT
        value = value.target
    return value


def pointer(value: "Value", depth: int = 1) -> Pointer:
    """Wrap ``value`` in ``depth`` pointer layers."""
    wrapped = Pointer(value)
    for _ in range(depth - 1):
        wrapped = Pointer(wrapped)
    return wrapped


def struct(*fields: Tuple[FieldMeta, "Value"]) -> Struct:
    return Struct(tuple(fields))


def string_list(items: List[str]) -> Sequence:
    """Build a sequence of strings with a declared ``STRING`` element kind."""
    return Sequence(tuple(Scalar(Kind.STRING, s) for s in items), Kind.STRING)


def byte_string(data: bytes) -> Sequence:
    """Build a byte sequence from raw bytes."""
    return Sequence(tuple(Scalar(Kind.UINT8, b) for b in bytes(data)), Kind.UINT8)


VALUE_TYPES = (Scalar, Struct, Sequence, Mapping, Pointer, Absent, Opaque)
