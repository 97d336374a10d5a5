"""
Exception types raised while building encoders and flattening values.
"""
from typing import Optional


class FormEncoderError(Exception):
    """Base class for all form encoder errors."""


class ConstructionError(FormEncoderError, ValueError):
    """Raised when an encoder is configured with an empty tag name or ignore flag."""


class EncodeError(FormEncoderError):
    """Base class for failures during a single encode call."""


class InvalidRoot(EncodeError):
    """Raised when the root value is not a struct after pointer unwrapping."""

    def __init__(self, kind_name: str):
        self.kind_name = kind_name
        super().__init__(
            f"Root value is invalid ({kind_name}), struct or non-nil pointer to struct is needed"
        )


class UnsupportedKind(EncodeError):
    """Raised when a value kind has no registered encoder."""

    def __init__(self, kind_name: str, type_name: Optional[str] = None):
        self.kind_name = kind_name
        self.type_name = type_name
        detail = f" ({type_name})" if type_name else ""
        super().__init__(f"Unknown type {kind_name}{detail}")


class NestedEncodeFailure(EncodeError):
    """
    Wraps an inner encode failure with the key path where it happened.

    Attributes:
        path: Dotted diagnostic path of the failing value
        cause: The wrapped UnsupportedKind or InvalidRoot
    """

    def __init__(self, path: str, cause: EncodeError):
        self.path = path
        self.cause = cause
        super().__init__(f"Encode value for key path ({path}) failed, {cause}")
