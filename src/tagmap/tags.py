"""
Field annotations and path resolution.

An annotation is a ``.``-delimited path stored in the dataclass field
metadata under ``"tagmap"`` (default namespace) or ``"tagmap" + suffix``
(alternate namespaces).
"""

import dataclasses
from collections.abc import Mapping, Sequence
from typing import Any

from .constants import DIVIDER, TAG_NAME


def split_tag(tag: str) -> list[str]:
    """
    Split an annotation into path segments.

    Splits strictly on ``.`` with no trimming or escaping. An empty
    annotation yields a single empty segment.

    Example:
        >>> split_tag("profile.created")
        ['profile', 'created']
        >>> split_tag("")
        ['']
    """
    return tag.split(DIVIDER)


def effective_path(base: Sequence[str], tag: str) -> tuple[str, ...]:
    """Concatenate the accumulated base path with the segments of ``tag``."""
    return (*base, *split_tag(tag))


def tag_key(namespace_suffix: str = "") -> str:
    """Metadata key holding the annotation for a namespace."""
    return TAG_NAME + namespace_suffix


def annotation_for(metadata: Mapping[str, Any], namespace_suffix: str = "") -> str:
    """Return the annotation for a namespace, or "" if the field has none."""
    return metadata.get(tag_key(namespace_suffix), "")


def tagged(
    path: str = "",
    *,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    **namespaces: str,
) -> Any:
    """
    Declare a dataclass field with mapping annotations.

    Args:
        path: Annotation for the default namespace
        default: Field default value
        default_factory: Field default factory
        **namespaces: Alternate annotations keyed by namespace suffix

    Example:
        @dataclass
        class Address:
            city: str = tagged("city", Alt="town", default="")

        # metadata == {"tagmap": "city", "tagmapAlt": "town"}
    """
    metadata = {TAG_NAME: path}
    for suffix, alternate in namespaces.items():
        metadata[tag_key(suffix)] = alternate

    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        metadata=metadata,
    )
