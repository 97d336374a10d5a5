"""Flatten structured values into HTTP form key/value pairs."""

from .adapters import from_json_record, from_python
from .errors import (
    ConstructionError,
    EncodeError,
    FormEncoderError,
    InvalidRoot,
    NestedEncodeFailure,
    UnsupportedKind,
)
from .form_encoder import Encoder, encode
from .tags import SUPPRESS_INHERIT, TagSpec, compose, resolve
from .values import (
    ABSENT,
    Absent,
    FieldMeta,
    Kind,
    KV,
    Mapping,
    Opaque,
    Pointer,
    Scalar,
    Sequence,
    Struct,
    Value,
    byte_string,
    pointer,
    string_list,
    struct,
    unwrap,
)

__all__ = [
    "Encoder",
    "encode",
    "from_python",
    "from_json_record",
    "resolve",
    "compose",
    "TagSpec",
    "SUPPRESS_INHERIT",
    "Kind",
    "KV",
    "FieldMeta",
    "Value",
    "Scalar",
    "Struct",
    "Sequence",
    "Mapping",
    "Pointer",
    "Absent",
    "ABSENT",
    "Opaque",
    "pointer",
    "struct",
    "string_list",
    "byte_string",
    "unwrap",
    "FormEncoderError",
    "ConstructionError",
    "EncodeError",
    "InvalidRoot",
    "UnsupportedKind",
    "NestedEncodeFailure",
]
