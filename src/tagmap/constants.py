"""
Constants and enums for tag-driven JSON mapping.

Centralizes magic strings to improve maintainability and type safety.
"""

from enum import Enum


class JsonType(str, Enum):
    """JSON value types reported by the document accessor."""

    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    OBJECT = "object"
    ARRAY = "array"


class ScalarKind(str, Enum):
    """Primitive kinds a scalar field can be extracted as."""

    STRING = "string"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    BOOL = "bool"


class FieldKind(str, Enum):
    """How a target field is populated."""

    SCALAR = "scalar"
    OPTIONAL_SCALAR = "optional_scalar"
    TEMPORAL = "temporal"
    OPTIONAL_TEMPORAL = "optional_temporal"
    COMPOSITE = "composite"
    OPTIONAL_COMPOSITE = "optional_composite"
    UNSUPPORTED = "unsupported"


# JSON type each scalar kind is read from
SCALAR_JSON_TYPES = {
    ScalarKind.STRING: JsonType.STRING,
    ScalarKind.INT: JsonType.NUMBER,
    ScalarKind.UINT: JsonType.NUMBER,
    ScalarKind.FLOAT: JsonType.NUMBER,
    ScalarKind.BOOL: JsonType.BOOL,
}

# Base annotation key; a namespace suffix is appended to select alternates
TAG_NAME = "tagmap"

# Separator between path segments in an annotation
DIVIDER = "."

# Environment variable consulted when no time zone is given
TIMEZONE_ENV_VAR = "TAGMAP_TIMEZONE"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1
