"""
Canonical string rendering for scalar kinds.

Floats follow Python's default ``repr`` (shortest round-trip form). Single
precision values are rendered with the shortest decimal that survives a round
trip through an IEEE-754 binary32, laid out the same way.
"""
import math
import struct
from typing import Any, Callable, Dict

from formencoder.values import Kind

Renderer = Callable[[Any], str]


def render_bool(content: Any) -> str:
    return "true" if content else "false"


def render_int(content: Any) -> str:
    return str(int(content))


def render_string(content: Any) -> str:
    return str(content)


def to_float32(x: float) -> float:
    """Round a Python float to the nearest binary32 value."""
    try:
        return struct.unpack("<f", struct.pack("<f", x))[0]
    except OverflowError:
        return math.copysign(math.inf, x)


def render_float64(content: Any) -> str:
    return repr(float(content))


def render_float32(content: Any) -> str:
    x = to_float32(float(content))
    if math.isnan(x) or math.isinf(x):
        return repr(x)
    text = repr(x)
    for digits in range(1, 10):
        candidate = f"{x:.{digits}g}"
        if to_float32(float(candidate)) == x:
            text = repr(float(candidate))
            break
    return text


def _complex_text(real: str, imag: str, real_value: float) -> str:
    # Same layout as repr(complex): bare imaginary part when real is +0
    if real_value == 0 and math.copysign(1.0, real_value) > 0:
        return f"{imag}j"
    if not imag.startswith("-"):
        imag = "+" + imag
    return f"({real}{imag}j)"


def _part(text: str) -> str:
    return text[:-2] if text.endswith(".0") else text


def render_complex128(content: Any) -> str:
    return repr(complex(content))


def render_complex64(content: Any) -> str:
    value = complex(content)
    real = to_float32(value.real)
    return _complex_text(
        _part(render_float32(real)),
        _part(render_float32(value.imag)),
        real,
    )


RENDERERS: Dict[Kind, Renderer] = {
    Kind.BOOL: render_bool,
    Kind.INT: render_int,
    Kind.INT8: render_int,
    Kind.INT16: render_int,
    Kind.INT32: render_int,
    Kind.INT64: render_int,
    Kind.UINT: render_int,
    Kind.UINT8: render_int,
    Kind.UINT16: render_int,
    Kind.UINT32: render_int,
    Kind.UINT64: render_int,
    Kind.FLOAT32: render_float32,
    Kind.FLOAT64: render_float64,
    Kind.COMPLEX64: render_complex64,
    Kind.COMPLEX128: render_complex128,
    Kind.STRING: render_string,
}
