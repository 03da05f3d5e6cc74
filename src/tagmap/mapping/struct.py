"""
Recursive struct mapper - main orchestration for populating dataclasses.

Walks a target dataclass field by field, resolves each field's annotation
into a document path, skips absent paths, and either dispatches leaf
fields to the type dispatcher or descends into nested dataclasses.
"""

import dataclasses
import logging
from collections.abc import Sequence
from datetime import tzinfo
from typing import Any, TypeVar, Union

from ..constants import FieldKind, JsonType
from ..descriptors import describe, zero_instance
from ..document import Document
from ..tags import effective_path
from ..timestamps import resolve_zone
from . import dispatch
from .base import MappingContext, MappingResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

Source = Union[Document, bytes, bytearray, str]


def _as_document(source: Source) -> Document:
    if isinstance(source, Document):
        return source
    if isinstance(source, (bytes, bytearray, str)):
        return Document.parse(source)
    raise TypeError(f"cannot map from {type(source).__name__}; expected Document, bytes or str")


def _map_struct(
    target: Any,
    context: MappingContext,
    namespace_suffix: str,
    propagate: bool,
    base_path: tuple[str, ...],
    owner: str,
) -> None:
    document = context.document

    for descriptor in describe(type(target)):
        field_path = f"{owner}.{descriptor.name}" if owner else descriptor.name

        if not descriptor.settable or descriptor.kind is FieldKind.UNSUPPORTED:
            continue

        path = effective_path(base_path, descriptor.tag(namespace_suffix))

        if not document.exists(path):
            continue

        if descriptor.optional and document.type_of(path) is JsonType.NULL:
            logger.debug(f"Field {field_path}: explicit null at {'.'.join(path)}, skipped")
            continue

        if not descriptor.composite:
            if dispatch.apply(target, descriptor, path, context, field_path):
                context.mark_written(field_path)
            continue

        child = getattr(target, descriptor.name, None)
        if child is None:
            child = zero_instance(descriptor.nested)
            setattr(target, descriptor.name, child)
            context.mark_written(field_path)

        if propagate:
            _map_struct(child, context, namespace_suffix, True, path, field_path)
        else:
            _map_struct(child, context, "", False, path, field_path)


class StructMapper:
    """
    Populates dataclass instances from JSON documents.

    Holds the settings of a mapping pass so the same configuration can be
    reused across many documents.

    Example:
        @dataclass
        class Address:
            city: str = tagged("city", default="")

        @dataclass
        class Person:
            name: str = tagged("name", default="")
            address: Address = tagged("address", default_factory=Address)

        mapper = StructMapper(zone="Europe/Berlin")
        result = mapper.map(b'{"name": "Ada", "address": {"city": "Berlin"}}', Person())
        result.target.address.city  # "Berlin"

    Attributes:
        zone: Time zone timestamps are interpreted in
        namespace_suffix: Selects the annotation family ("" is the default)
        propagate: Whether nested dataclasses inherit the namespace suffix
        strict_optionals: Skip optional scalars whose JSON type does not fit
    """

    def __init__(
        self,
        zone: Union[tzinfo, str, None] = None,
        namespace_suffix: str = "",
        propagate: bool = False,
        strict_optionals: bool = False,
    ):
        """
        Initialize the mapper.

        Args:
            zone: tzinfo or IANA name. If None, uses TAGMAP_TIMEZONE or UTC.
            namespace_suffix: Appended to "tagmap" to pick the annotation key
            propagate: Carry the namespace suffix into nested dataclasses
            strict_optionals: Only write optional scalars holding a fitting value
        """
        self.zone = resolve_zone(zone)
        self.namespace_suffix = namespace_suffix
        self.propagate = propagate
        self.strict_optionals = strict_optionals

    def map(
        self,
        source: Source,
        target: T,
        base_path: Sequence[str] = (),
    ) -> MappingResult:
        """
        Map a document onto ``target`` in place.

        Args:
            source: Parsed Document, or raw JSON bytes/text
            target: Dataclass instance to populate
            base_path: Path prefix prepended to every top-level annotation

        Returns:
            MappingResult with the target and any per-field faults

        Raises:
            DocumentParseError: If raw input is not valid JSON
            TypeError: If ``target`` is not a dataclass instance
        """
        if not dataclasses.is_dataclass(target) or isinstance(target, type):
            raise TypeError(f"target must be a dataclass instance, got {type(target).__name__}")

        document = _as_document(source)
        context = MappingContext(
            document=document,
            zone=self.zone,
            strict_optionals=self.strict_optionals,
        )

        _map_struct(
            target,
            context,
            self.namespace_suffix,
            self.propagate,
            tuple(base_path),
            "",
        )

        logger.info(
            f"Mapped {type(target).__name__}: {len(context.written)} field(s) written, "
            f"{len(context.faults)} fault(s)"
        )
        return MappingResult(target=target, faults=context.faults, written=context.written)

    def load(
        self,
        source: Source,
        cls: type[T],
        base_path: Sequence[str] = (),
    ) -> MappingResult:
        """Create a zero-valued ``cls`` instance and map ``source`` onto it."""
        return self.map(source, zero_instance(cls), base_path=base_path)


def map_json(
    source: Source,
    target: Any,
    zone: Union[tzinfo, str, None] = None,
    namespace_suffix: str = "",
    propagate: bool = False,
    base_path: Sequence[str] = (),
    strict_optionals: bool = False,
) -> MappingResult:
    """
    Map a JSON document onto a dataclass instance.

    Convenience wrapper around StructMapper for one-off calls.

    Args:
        source: Parsed Document, or raw JSON bytes/text
        target: Dataclass instance to populate in place
        zone: Time zone for timestamps (tzinfo, IANA name or None)
        namespace_suffix: Annotation family to read ("" for the default)
        propagate: Carry ``namespace_suffix`` into nested dataclasses
        base_path: Path prefix for every top-level annotation
        strict_optionals: Only write optional scalars holding a fitting value

    Returns:
        MappingResult with the target and any per-field faults

    Raises:
        DocumentParseError: If raw input is not valid JSON
    """
    mapper = StructMapper(
        zone=zone,
        namespace_suffix=namespace_suffix,
        propagate=propagate,
        strict_optionals=strict_optionals,
    )
    return mapper.map(source, target, base_path=base_path)
