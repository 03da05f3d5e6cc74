"""
tagmap - populate dataclasses from JSON documents with path annotations.

Each dataclass field carries a ``.``-delimited path saying where its value
lives in the document, so documents whose layout differs from the target's
field names and nesting can be mapped without per-field extraction code.
Timestamps are parsed from several common textual layouts.

Programmatic usage::

    from dataclasses import dataclass
    from datetime import datetime
    from typing import Optional

    from tagmap import map_json, tagged

    @dataclass
    class Profile:
        name: str = tagged("user.name", default="")
        created: Optional[datetime] = tagged("user.meta.created", default=None)

    result = map_json(b'{"user": {"name": "Ada", "meta": {"created": "2003-01"}}}', Profile())
    result.target.created  # datetime(2003, 1, 1, tzinfo=timezone.utc)

CLI usage::

    tagmap map document.json mypackage.models:Profile --tz Europe/Berlin
    tagmap date "01/02/2003 04:05:06"
"""

__version__ = "0.1.0"

from .document import Document
from .errors import DocumentParseError, MappingFaultError, TagMapError, TimestampParseError
from .mapping import FieldFault, MappingResult, StructMapper, map_json
from .tags import split_tag, tagged
from .timestamps import ZERO_TIME, is_zero, parse_timestamp

__all__ = [
    "Document",
    "DocumentParseError",
    "FieldFault",
    "MappingFaultError",
    "MappingResult",
    "StructMapper",
    "TagMapError",
    "TimestampParseError",
    "ZERO_TIME",
    "is_zero",
    "map_json",
    "parse_timestamp",
    "split_tag",
    "tagged",
    "__version__",
]
