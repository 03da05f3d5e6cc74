"""Test fixtures for tagmap tests."""

from .documents import (
    NESTED_DOCUMENT,
    PERSON_DOCUMENT,
    SCALAR_DOCUMENT,
)
from .targets import (
    Address,
    Frozen,
    Node,
    OptionalScalars,
    Person,
    Required,
    Scalars,
    Times,
    Untagged,
    WithPrivate,
    WithUnsupported,
)

__all__ = [
    "NESTED_DOCUMENT",
    "PERSON_DOCUMENT",
    "SCALAR_DOCUMENT",
    "Address",
    "Frozen",
    "Node",
    "OptionalScalars",
    "Person",
    "Required",
    "Scalars",
    "Times",
    "Untagged",
    "WithPrivate",
    "WithUnsupported",
]
