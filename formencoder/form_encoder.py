"""
Encoder that flattens struct values into HTTP form key/value pairs.

> The key "..." stops a field's children from inheriting its key, for struct
  and mapping fields. Given

      @dataclass
      class Auth:
          ak: Optional[str] = field(default=None, metadata={"form": "ak"})

      @dataclass
      class Demo1:
          auth: Auth = field(metadata={"form": "..."})

      @dataclass
      class Demo2:
          auth: Auth = field(metadata={"form": "auth"})

  Demo1 encodes as "ak"="xxx" and Demo2 as "auth.ak"="xxx".

> The modifier "join" collapses a list of strings into one comma-joined value,
  e.g. ``metadata={"form": "items,join"}`` gives "items"="a,b,c".
"""
import base64
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, List
from typing import Mapping as TypingMapping

import config
from formencoder.adapters import from_python
from formencoder.errors import (
    ConstructionError,
    InvalidRoot,
    NestedEncodeFailure,
    UnsupportedKind,
)
from formencoder.scalars import RENDERERS
from formencoder.tags import SUPPRESS_INHERIT, TagSpec, compose, resolve
from formencoder.values import (
    KV,
    Kind,
    Mapping,
    Scalar,
    Sequence,
    Struct,
    Value,
    unwrap,
)

logger = logging.getLogger(__name__)

# Output key path of the value being encoded, for error reports
Path = str
KindEncoder = Callable[[Value, str, Path], List[KV]]


def _extend(path: Path, segment: str) -> Path:
    # "..." levels never show up in emitted keys
    if segment == SUPPRESS_INHERIT:
        return path
    if not path:
        return segment
    return f"{path}.{segment}"


def _is_byte_string(value: Sequence) -> bool:
    if value.elem_kind is not Kind.UINT8:
        return False
    return all(isinstance(item, Scalar) and item.kind is Kind.UINT8 for item in value.items)


def _is_string_list(value: Sequence) -> bool:
    if value.elem_kind not in (None, Kind.STRING):
        return False
    if not value.items:
        return value.elem_kind is Kind.STRING
    return all(isinstance(item, Scalar) and item.kind is Kind.STRING for item in value.items)


class Encoder:
    """
    Converts struct values into the key/value form used by HTTP requests.

    Configuration is fixed at construction, so one encoder can be shared by
    any number of threads.
    """

    def __init__(self, tag_name: str, ignore_flag: str):
        """
        Initialize encoder.

        Args:
            tag_name: Tag read from field metadata, like the "json" tag
            ignore_flag: Tag value that drops a field, like "-" for JSON

        Raises:
            ConstructionError: If either argument is empty
        """
        if not tag_name:
            raise ConstructionError("Missing `tag_name` value")
        if not ignore_flag:
            raise ConstructionError("Missing `ignore_flag` value")
        self._tag_name = tag_name
        self._ignore_flag = ignore_flag
        self._encoders: TypingMapping[Kind, KindEncoder] = MappingProxyType(self._build_encoders())
        logger.debug(f"Encoder created (tag={tag_name!r}, ignore_flag={ignore_flag!r})")

    @classmethod
    def default(cls) -> "Encoder":
        """Encoder using the tag name and ignore flag from configuration."""
        return cls(config.TAG_NAME, config.IGNORE_FLAG)

    @property
    def tag_name(self) -> str:
        return self._tag_name

    @property
    def ignore_flag(self) -> str:
        return self._ignore_flag

    def encode(self, root: Any) -> List[KV]:
        """
        Flatten a struct into ordered key/value pairs.

        Args:
            root: A struct value, a pointer to one, or a dataclass instance

        Returns:
            Pairs in field declaration order; pairs coming from a mapping
            follow the mapping's own entry order

        Raises:
            InvalidRoot: If the root is not a struct after unwrapping pointers
            NestedEncodeFailure: If a nested value has no encoder; the wrapped
                UnsupportedKind is available as ``cause``
        """
        value = unwrap(from_python(root))
        if not isinstance(value, Struct):
            raise InvalidRoot(value.kind.value)
        return self._encode_fields(value, "")

    def to_map(self, root: Any) -> Dict[str, str]:
        """
        Encode and fold the pairs into a dict.

        Later pairs overwrite earlier ones with the same key.
        """
        result: Dict[str, str] = {}
        for kv in self.encode(root):
            result[kv.key] = kv.value
        return result

    def debug_lines(self, root: Any) -> List[str]:
        """Render the encoded pairs as aligned ``key : value`` lines."""
        return [f"{kv.key:>10} : {kv.value}" for kv in self.encode(root)]

    def _build_encoders(self) -> Dict[Kind, KindEncoder]:
        encoders: Dict[Kind, KindEncoder] = {
            kind: self._encode_scalar for kind in RENDERERS
        }
        encoders.update({
            Kind.SEQUENCE: self._encode_sequence,
            Kind.STRUCT: self._encode_struct,
            Kind.MAPPING: self._encode_mapping,
            Kind.INVALID: self._encode_absent,
        })
        return encoders

    def _encode(self, value: Value, key: str, path: Path) -> List[KV]:
        value = unwrap(value)
        encoder = self._encoders.get(value.kind)
        if encoder is None:
            error = UnsupportedKind(value.kind.value, getattr(value, "type_name", None))
            raise NestedEncodeFailure(path, error) from error
        return encoder(value, key, path)

    def _encode_fields(self, value: Struct, path: Path) -> List[KV]:
        pairs: List[KV] = []
        for meta, field_value in value.fields:
            field_value = unwrap(field_value)
            if field_value.kind is Kind.INVALID:
                continue
            key, drop = resolve(meta, self._tag_name, self._ignore_flag)
            if drop:
                logger.debug(f"Dropping field {meta.name}")
                continue
            pairs.extend(self._encode(field_value, key, _extend(path, key)))
        return pairs

    def _encode_scalar(self, value: Scalar, key: str, path: Path) -> List[KV]:
        return [KV(key, RENDERERS[value.kind](value.content))]

    def _encode_struct(self, value: Struct, key: str, path: Path) -> List[KV]:
        return [KV(compose(key, kv.key), kv.value) for kv in self._encode_fields(value, path)]

    def _encode_sequence(self, value: Sequence, key: str, path: Path) -> List[KV]:
        # Byte strings travel as one base64 value
        if _is_byte_string(value):
            raw = bytes(int(item.content) for item in value.items)
            return [KV(key, base64.b64encode(raw).decode("ascii"))]

        if _is_string_list(value):
            spec = TagSpec.parse(key)
            if spec.joined:
                return [KV(spec.name, ",".join(str(item.content) for item in value.items))]

        pairs: List[KV] = []
        for index, item in enumerate(value.items):
            pairs.extend(self._encode(item, compose(key, str(index)), _extend(path, str(index))))
        return pairs

    def _encode_mapping(self, value: Mapping, key: str, path: Path) -> List[KV]:
        # Composite keys or values produce the cross product of their pairs
        pairs: List[KV] = []
        for map_key, map_value in value.entries:
            key_pairs = self._encode(map_key, "", path)
            segment = key_pairs[0].value if key_pairs else ""
            value_pairs = self._encode(map_value, "", _extend(path, segment))
            for key_kv in key_pairs:
                for value_kv in value_pairs:
                    pairs.append(KV(compose(key, key_kv.value), value_kv.value))
        return pairs

    def _encode_absent(self, value: Value, key: str, path: Path) -> List[KV]:
        return []


def encode(root: Any) -> List[KV]:
    """Encode ``root`` with the default encoder."""
    return Encoder.default().encode(root)


