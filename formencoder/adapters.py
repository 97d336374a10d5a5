"""
Build encoder values from native Python objects.

Dataclasses play the role of structs: each field's tags are read from the
string entries of ``dataclasses.field(metadata=...)``, e.g.
``field(metadata={"form": "auth"})``. Type hints refine what plain Python
values cannot express on their own (``Annotated[int, Kind.UINT16]`` for a
fixed-width integer, ``List[str]`` for a string list that may be empty).
"""
import collections.abc
import dataclasses
import types
import typing
from typing import Any, Dict, Optional

from formencoder.values import (
    ABSENT,
    FieldMeta,
    Kind,
    Mapping,
    Opaque,
    Scalar,
    SCALAR_KINDS,
    Sequence,
    Struct,
    Value,
    VALUE_TYPES,
    INTEGER_KINDS,
    FLOAT_KINDS,
    COMPLEX_KINDS,
)

# typing.Optional[X] and X | None (3.10+)
_UNION_TYPES = (typing.Union, getattr(types, "UnionType", typing.Union))

_PLAIN_HINTS = {
    bool: Kind.BOOL,
    int: Kind.INT,
    float: Kind.FLOAT64,
    complex: Kind.COMPLEX128,
    str: Kind.STRING,
}


def _strip_optional(hint: Any) -> Any:
    """Reduce ``Optional[X]`` to ``X``; other unions are left alone."""
    if typing.get_origin(hint) in _UNION_TYPES:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _declared_kind(hint: Any) -> Optional[Kind]:
    """Scalar kind named by a hint, if any."""
    hint = _strip_optional(hint)
    if typing.get_origin(hint) is typing.Annotated:
        for extra in hint.__metadata__:
            if isinstance(extra, Kind) and extra in SCALAR_KINDS:
                return extra
        hint = typing.get_args(hint)[0]
    if isinstance(hint, type):
        return _PLAIN_HINTS.get(hint)
    return None


def _args(hint: Any):
    hint = _strip_optional(hint)
    if typing.get_origin(hint) is typing.Annotated:
        hint = typing.get_args(hint)[0]
    return typing.get_args(hint)


def _element_hint(hint: Any) -> Any:
    args = _args(hint)
    if not args:
        return None
    # Tuple[X, ...] and List[X] both name the element first
    return args[0]


def _mapping_hints(hint: Any):
    args = _args(hint)
    if len(args) == 2:
        return args
    return None, None


def _scalar(kind: Kind, obj: Any, declared: Optional[Kind], family) -> Scalar:
    if declared in family:
        return Scalar(declared, obj)
    return Scalar(kind, obj)


def _type_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        # Unresolvable forward references leave fields without hints
        return {}


def _from_dataclass(obj: Any) -> Struct:
    hints = _type_hints(type(obj))
    fields = []
    for f in dataclasses.fields(obj):
        tags = {k: v for k, v in f.metadata.items() if isinstance(k, str) and isinstance(v, str)}
        meta = FieldMeta(f.name, tags)
        fields.append((meta, from_python(getattr(obj, f.name), hints.get(f.name))))
    return Struct(tuple(fields))


def _from_sequence(obj: Any, hint: Any) -> Sequence:
    item_hint = _element_hint(hint)
    items = tuple(from_python(item, item_hint) for item in obj)
    elem_kind = _declared_kind(item_hint)
    if elem_kind is None and items and all(
        isinstance(item, Scalar) and item.kind is Kind.STRING for item in items
    ):
        elem_kind = Kind.STRING
    return Sequence(items, elem_kind)


def from_python(obj: Any, hint: Any = None) -> Value:
    """
    Convert a Python object into an encoder value.

    Args:
        obj: Object to convert; ``Value`` instances are returned unchanged
        hint: Optional type hint for ``obj`` (taken from the enclosing
            dataclass field or container annotation)

    Returns:
        The value variant describing ``obj``
    """
    if isinstance(obj, VALUE_TYPES):
        return obj
    if obj is None:
        return ABSENT

    declared = _declared_kind(hint)
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return Scalar(Kind.BOOL, obj)
    if isinstance(obj, int):
        return _scalar(Kind.INT, obj, declared, INTEGER_KINDS)
    if isinstance(obj, float):
        return _scalar(Kind.FLOAT64, obj, declared, FLOAT_KINDS)
    if isinstance(obj, complex):
        return _scalar(Kind.COMPLEX128, obj, declared, COMPLEX_KINDS)
    if isinstance(obj, str):
        return Scalar(Kind.STRING, obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        raw = bytes(obj)
        return Sequence(tuple(Scalar(Kind.UINT8, b) for b in raw), Kind.UINT8)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _from_dataclass(obj)
    if isinstance(obj, collections.abc.Mapping):
        key_hint, value_hint = _mapping_hints(hint)
        return Mapping(tuple(
            (from_python(k, key_hint), from_python(v, value_hint)) for k, v in obj.items()
        ))
    if isinstance(obj, (list, tuple)):
        return _from_sequence(obj, hint)
    if callable(obj):
        return Opaque(Kind.FUNC, type(obj).__name__)
    return Opaque(Kind.OPAQUE, type(obj).__name__)


def from_json_record(obj: Any) -> Value:
    """
    Convert decoded JSON into an encoder value.

    JSON objects become structs whose fields follow document order and carry
    no tags, so member names are used as keys.
    """
    if isinstance(obj, dict):
        return Struct(tuple(
            (FieldMeta(str(name)), from_json_record(member)) for name, member in obj.items()
        ))
    if isinstance(obj, list):
        return _from_sequence([from_json_record(item) for item in obj], None)
    return from_python(obj)
