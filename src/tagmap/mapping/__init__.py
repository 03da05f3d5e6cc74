"""
Mapping engine: recursive struct walk and leaf-field dispatch.

The struct mapper resolves each field's document path and descends into
nested dataclasses; the dispatcher extracts and stores leaf values.
"""

from .base import FieldFault, MappingContext, MappingResult
from .struct import StructMapper, map_json

__all__ = [
    "FieldFault",
    "MappingContext",
    "MappingResult",
    "StructMapper",
    "map_json",
]
