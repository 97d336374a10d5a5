"""
Field tag resolution and key path composition.
"""
from typing import List, NamedTuple, Tuple

from formencoder.values import FieldMeta

# Key that stops children from inheriting the parent key as a prefix
SUPPRESS_INHERIT = "..."
JOIN_MODIFIER = "join"


class TagSpec(NamedTuple):
    """Raw tag split into its key name and trailing modifiers."""

    name: str
    modifiers: List[str]

    @classmethod
    def parse(cls, raw: str) -> "TagSpec":
        name, *modifiers = raw.split(",")
        return cls(name, modifiers)

    @property
    def joined(self) -> bool:
        """True when the first modifier asks for a comma-joined string list."""
        return bool(self.modifiers) and self.modifiers[0] == JOIN_MODIFIER


def resolve(meta: FieldMeta, tag_name: str, ignore_flag: str) -> Tuple[str, bool]:
    """
    Resolve the output key for a struct field.

    Args:
        meta: Field metadata
        tag_name: Name of the tag to read, like "json" for JSON serialization
        ignore_flag: Tag value that drops the field

    Returns:
        Tuple of (effective key, drop). The raw tag is returned verbatim,
        modifiers included; composite encoders consume the ones they know.
    """
    tag = meta.lookup(tag_name)
    if tag == ignore_flag:
        return tag, True
    if tag == "":
        return meta.name, False
    return tag, False


def compose(parent_key: str, child_key: str) -> str:
    """Join a parent and child key, honouring the no-inherit marker."""
    if parent_key == SUPPRESS_INHERIT:
        return child_key
    return f"{parent_key}.{child_key}"
