"""
Type dispatcher for leaf fields.

Selects the accessor call for a field from its FieldKind, coerces the
extracted value to the declared width and stores it on the target.

Write policies:
- SCALAR: always assigned; a type mismatch stores the accessor's zero value.
- OPTIONAL_SCALAR: always assigned once the value exists and is not null,
  even when the extraction falls back to a zero value. With
  ``strict_optionals`` the value is skipped instead when its JSON type does
  not fit the declared kind.
- TEMPORAL: always assigned; ZERO_TIME on a parse failure (fault recorded).
- OPTIONAL_TEMPORAL: assigned only when the parsed timestamp is non-zero, so
  a failed parse never clobbers an earlier value.

Existence and null checks happen in the struct mapper before dispatch.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Optional

import numpy as np

from ..constants import INT64_MAX, INT64_MIN, SCALAR_JSON_TYPES, UINT64_MAX, FieldKind, ScalarKind
from ..descriptors import FieldDescriptor, ScalarSpec
from ..document import Document, Path
from ..errors import TimestampParseError
from ..timestamps import ZERO_TIME, is_zero, parse_timestamp
from .base import MappingContext

logger = logging.getLogger(__name__)

_SIGNED_DTYPES = {8: np.int8, 16: np.int16, 32: np.int32, 64: np.int64}
_UNSIGNED_DTYPES = {8: np.uint8, 16: np.uint16, 32: np.uint32, 64: np.uint64}


def narrow_int(value: int, bits: int, signed: bool = True) -> int:
    """Truncate ``value`` to a fixed-width integer, wrapping on overflow."""
    source = np.int64 if signed else np.uint64
    target = (_SIGNED_DTYPES if signed else _UNSIGNED_DTYPES)[bits]
    return int(np.array(value, dtype=source).astype(target))


def narrow_float(value: float, bits: int) -> float:
    """Round ``value`` to single precision when ``bits`` is 32."""
    if bits != 32:
        return value
    with np.errstate(over="ignore"):
        return float(np.float32(value))


def extract_scalar(document: Document, path: Path, spec: ScalarSpec) -> Any:
    """Read a scalar at ``path`` and coerce it to ``spec``."""
    if spec.kind is ScalarKind.STRING:
        return document.get_string(path)
    if spec.kind is ScalarKind.INT:
        return narrow_int(document.get_int64(path), spec.bits, signed=True)
    if spec.kind is ScalarKind.UINT:
        return narrow_int(document.get_uint64(path), spec.bits, signed=False)
    if spec.kind is ScalarKind.FLOAT:
        return narrow_float(document.get_float64(path), spec.bits)
    return document.get_bool(path)


def fits(document: Document, path: Path, spec: ScalarSpec) -> bool:
    """Check whether the value at ``path`` can be read as ``spec`` without fallback."""
    if document.type_of(path) is not SCALAR_JSON_TYPES[spec.kind]:
        return False
    value = document.get(path)
    if spec.kind is ScalarKind.INT:
        return isinstance(value, int) and INT64_MIN <= value <= INT64_MAX
    if spec.kind is ScalarKind.UINT:
        return isinstance(value, int) and 0 <= value <= UINT64_MAX
    return True


def _parse_time(
    path: tuple[str, ...],
    context: MappingContext,
    field_path: str,
) -> Optional[datetime]:
    raw = context.document.raw_text(path)
    try:
        return parse_timestamp(raw, context.zone)
    except TimestampParseError as e:
        logger.warning(f"Field {field_path}: {e}")
        context.add_fault(field_path, path, e)
        return None


def _apply_scalar(target, descriptor, path, context, field_path) -> bool:
    value = extract_scalar(context.document, path, descriptor.scalar)
    setattr(target, descriptor.name, value)
    return True


def _apply_optional_scalar(target, descriptor, path, context, field_path) -> bool:
    if context.strict_optionals and not fits(context.document, path, descriptor.scalar):
        logger.debug(f"Field {field_path}: value at {'.'.join(path)} does not fit, skipped")
        return False
    value = extract_scalar(context.document, path, descriptor.scalar)
    setattr(target, descriptor.name, value)
    return True


def _apply_temporal(target, descriptor, path, context, field_path) -> bool:
    parsed = _parse_time(path, context, field_path)
    setattr(target, descriptor.name, parsed if parsed is not None else ZERO_TIME)
    return True


def _apply_optional_temporal(target, descriptor, path, context, field_path) -> bool:
    parsed = _parse_time(path, context, field_path)
    if is_zero(parsed):
        return False
    setattr(target, descriptor.name, parsed)
    return True


_HANDLERS: dict[FieldKind, Callable[..., bool]] = {
    FieldKind.SCALAR: _apply_scalar,
    FieldKind.OPTIONAL_SCALAR: _apply_optional_scalar,
    FieldKind.TEMPORAL: _apply_temporal,
    FieldKind.OPTIONAL_TEMPORAL: _apply_optional_temporal,
}


def apply(
    target: Any,
    descriptor: FieldDescriptor,
    path: tuple[str, ...],
    context: MappingContext,
    field_path: str,
) -> bool:
    """
    Populate one leaf field of ``target`` from ``path``.

    Args:
        target: Object owning the field
        descriptor: Descriptor of the field
        path: Effective document path (known to exist)
        context: Current mapping context
        field_path: Dotted attribute path, for diagnostics

    Returns:
        True if the field was assigned

    Raises:
        ValueError: If the descriptor is not a leaf kind
    """
    handler = _HANDLERS.get(descriptor.kind)
    if handler is None:
        raise ValueError(f"{descriptor.kind.value} fields are not dispatched as leaves")
    return handler(target, descriptor, path, context, field_path)
