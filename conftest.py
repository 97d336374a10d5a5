"""Shared fixtures for the test suite."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest

from formencoder import Encoder


@dataclass
class Info:
    cpu: Optional[str] = field(default=None, metadata={"a": "cpu"})


@dataclass
class Hello:
    a: int = field(metadata={"a": "a"})
    b: str = field(metadata={"a": "b"})
    c: int = field(metadata={"a": "c"})
    d: float = field(metadata={"a": "d"})
    e: List[int] = field(metadata={"a": "e"})
    f: Info = field(metadata={"a": "f"})
    g: bool = field(metadata={"a": "g"})
    h: List[Optional[Info]] = field(metadata={"a": "h"})
    i: Dict[str, Optional[str]] = field(metadata={"a": "i"})
    j: bytes = field(metadata={"a": "j"})


@pytest.fixture
def encoder():
    return Encoder("a", "-")


@pytest.fixture
def hello():
    return Hello(
        a=1,
        b="BB",
        c=2,
        d=3.14,
        e=[2, 0, 32],
        f=Info(cpu="1 core"),
        g=True,
        h=[Info(cpu="2 cores"), Info(cpu="3 cores"), Info(cpu="4 cores")],
        i={"m1": "m1", "m2": "m2"},
        j=b"Golang",
    )
