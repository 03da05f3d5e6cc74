"""
Field descriptors for mapping targets.

Each dataclass used as a mapping target is inspected once and turned into
an ordered list of FieldDescriptor objects. The descriptor records how the
field is populated (its FieldKind), so the mapper dispatches on a small
closed set of kinds instead of inspecting types on every call.

Classification rules:
- ``str``, ``int``, ``float``, ``bool`` and their width-annotated aliases
  -> SCALAR
- ``datetime`` -> TEMPORAL
- a dataclass -> COMPOSITE
- ``Optional[X]`` of any of the above -> the OPTIONAL_* variant
- anything else (lists, dicts, unions of several types) -> UNSUPPORTED
"""

from __future__ import annotations

import dataclasses
import re
import types
from collections.abc import Mapping
from datetime import datetime
from functools import lru_cache
from typing import Annotated, Any, Optional, Union, get_args, get_origin, get_type_hints

from .constants import TAG_NAME, FieldKind, ScalarKind
from .tags import annotation_for
from .timestamps import ZERO_TIME
from .types import FloatWidth, IntWidth

__all__ = ["ScalarSpec", "FieldDescriptor", "describe", "zero_instance"]

_OPTIONAL_KINDS = {
    FieldKind.SCALAR: FieldKind.OPTIONAL_SCALAR,
    FieldKind.TEMPORAL: FieldKind.OPTIONAL_TEMPORAL,
    FieldKind.COMPOSITE: FieldKind.OPTIONAL_COMPOSITE,
}

_ZERO_SCALARS = {
    ScalarKind.STRING: "",
    ScalarKind.INT: 0,
    ScalarKind.UINT: 0,
    ScalarKind.FLOAT: 0.0,
    ScalarKind.BOOL: False,
}


@dataclasses.dataclass(frozen=True)
class ScalarSpec:
    """Primitive kind and bit width of a scalar field."""

    kind: ScalarKind
    bits: int = 64

    @property
    def zero(self) -> Any:
        return _ZERO_SCALARS[self.kind]


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """
    Precomputed mapping information for one dataclass field.

    Attributes:
        name: Attribute name on the target
        kind: How the field is populated
        scalar: Kind and width for SCALAR/OPTIONAL_SCALAR fields
        nested: Dataclass type for COMPOSITE/OPTIONAL_COMPOSITE fields
        tags: Annotations keyed by metadata key (``"tagmap"``, ``"tagmapAlt"``, ...)
        settable: False for private fields and fields of frozen dataclasses
    """

    name: str
    kind: FieldKind
    scalar: Optional[ScalarSpec] = None
    nested: Optional[type] = None
    tags: Mapping[str, str] = dataclasses.field(default_factory=dict)
    settable: bool = True

    @property
    def optional(self) -> bool:
        return self.kind in (
            FieldKind.OPTIONAL_SCALAR,
            FieldKind.OPTIONAL_TEMPORAL,
            FieldKind.OPTIONAL_COMPOSITE,
        )

    @property
    def composite(self) -> bool:
        return self.kind in (FieldKind.COMPOSITE, FieldKind.OPTIONAL_COMPOSITE)

    def tag(self, namespace_suffix: str = "") -> str:
        """Annotation for the given namespace ("" when absent)."""
        return annotation_for(self.tags, namespace_suffix)

    def zero(self) -> Any:
        """Zero value for this field's kind."""
        if self.optional or self.kind is FieldKind.UNSUPPORTED:
            return None
        if self.kind is FieldKind.TEMPORAL:
            return ZERO_TIME
        if self.kind is FieldKind.COMPOSITE:
            return zero_instance(self.nested)
        return self.scalar.zero


def _unwrap_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    if get_origin(hint) is Annotated:
        base, *extras = get_args(hint)
        return base, tuple(extras)
    return hint, ()


def _unwrap_optional(hint: Any) -> tuple[Any, bool]:
    if get_origin(hint) in (Union, types.UnionType):
        args = [a for a in get_args(hint) if a is not type(None)]
        if len(args) == 1 and len(args) != len(get_args(hint)):
            return args[0], True
    return hint, False


def _is_class(hint: Any) -> bool:
    # list[int] and friends report as types on some interpreters
    return isinstance(hint, type) and get_origin(hint) is None


def _scalar_spec(base: Any, extras: tuple[Any, ...]) -> Optional[ScalarSpec]:
    # bool first: it is a subclass of int
    if base is bool:
        return ScalarSpec(ScalarKind.BOOL)
    if base is str:
        return ScalarSpec(ScalarKind.STRING)
    if base is int:
        width = next((e for e in extras if isinstance(e, IntWidth)), IntWidth())
        kind = ScalarKind.INT if width.signed else ScalarKind.UINT
        return ScalarSpec(kind, width.bits)
    if base is float:
        width = next((e for e in extras if isinstance(e, FloatWidth)), FloatWidth())
        return ScalarSpec(ScalarKind.FLOAT, width.bits)
    return None


def classify(hint: Any) -> tuple[FieldKind, Optional[ScalarSpec], Optional[type]]:
    """Classify a resolved type hint into a FieldKind."""
    hint, outer = _unwrap_annotated(hint)
    hint, optional = _unwrap_optional(hint)
    base, inner = _unwrap_annotated(hint)
    extras = inner + outer

    scalar = None
    nested = None
    if _is_class(base) and issubclass(base, datetime):
        kind = FieldKind.TEMPORAL
    elif _is_class(base) and dataclasses.is_dataclass(base):
        kind = FieldKind.COMPOSITE
        nested = base
    else:
        scalar = _scalar_spec(base, extras)
        if scalar is None:
            return FieldKind.UNSUPPORTED, None, None
        kind = FieldKind.SCALAR

    if optional:
        kind = _OPTIONAL_KINDS[kind]
    return kind, scalar, nested


def _unresolved_field(cls: type, name: Optional[str]) -> str:
    # names the first field whose annotation mentions the missing name
    for f in dataclasses.fields(cls):
        text = f.type if isinstance(f.type, str) else repr(f.type)
        if name and re.search(rf"\b{re.escape(name)}\b", text):
            return f.name
    return "<unknown>"


@lru_cache(maxsize=None)
def describe(cls: type) -> tuple[FieldDescriptor, ...]:
    """
    Build the descriptors for a dataclass, in declaration order.

    Raises:
        TypeError: If ``cls`` is not a dataclass, or a field annotation names
            a class that cannot be resolved from the module globals
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"{cls!r} is not a dataclass type")

    try:
        hints = get_type_hints(cls, include_extras=True)
    except NameError as e:
        field = _unresolved_field(cls, getattr(e, "name", None))
        raise TypeError(
            f"cannot resolve the type of {cls.__qualname__}.{field}: {e}; "
            f"define the referenced class at module level"
        ) from e
    frozen = cls.__dataclass_params__.frozen

    descriptors = []
    for f in dataclasses.fields(cls):
        kind, scalar, nested = classify(hints.get(f.name, f.type))
        tags = {k: v for k, v in f.metadata.items() if k.startswith(TAG_NAME)}
        descriptors.append(
            FieldDescriptor(
                name=f.name,
                kind=kind,
                scalar=scalar,
                nested=nested,
                tags=tags,
                settable=not frozen and not f.name.startswith("_"),
            )
        )
    return tuple(descriptors)


def zero_instance(cls: type) -> Any:
    """
    Create an instance of ``cls`` with every field at its zero value.

    Fields with defaults keep them; required init fields get the zero of
    their kind (``""``, ``0``, ``False``, ZERO_TIME, None for optionals,
    a zero instance for nested dataclasses).
    """
    kwargs: dict[str, Any] = {}
    by_name = {d.name: d for d in describe(cls)}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            kwargs[f.name] = by_name[f.name].zero()
    return cls(**kwargs)
