"""
Read-only JSON document accessor.

Wraps a parsed JSON tree and answers path-based queries: existence,
value type, and typed scalar extraction. Typed getters never fail; they
return the zero value of their type when the path is missing or holds a
value of another type. The mapper relies on that fallback for non-optional
scalar fields.

Example:
    doc = Document.parse(b'{"profile": {"age": 42, "tags": ["a", "b"]}}')
    doc.exists(["profile", "age"])        # True
    doc.get_int64(["profile", "age"])     # 42
    doc.get_string(["profile", "tags", "1"])  # "b"
    doc.get_string(["profile", "age"])    # "" (type mismatch)
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Optional, Union

from .constants import INT64_MAX, INT64_MIN, UINT64_MAX, JsonType
from .errors import DocumentParseError

__all__ = ["Document", "Path"]

Path = Sequence[str]

_MISSING = object()


def _reject_constant(name: str) -> Any:
    # json accepts NaN/Infinity by default, JSON itself does not
    raise ValueError(f"invalid JSON literal {name!r}")


class Document:
    """Immutable view over a parsed JSON value."""

    __slots__ = ("_root",)

    def __init__(self, root: Any):
        self._root = root

    @classmethod
    def parse(cls, data: Union[bytes, bytearray, str]) -> Document:
        """
        Parse raw JSON text into a Document.

        Raises:
            DocumentParseError: If ``data`` is not valid JSON
        """
        try:
            root = json.loads(data, parse_constant=_reject_constant)
        except (ValueError, UnicodeDecodeError, RecursionError) as e:
            raise DocumentParseError(f"invalid JSON document: {e}", data) from e
        return cls(root)

    @property
    def root(self) -> Any:
        """The underlying parsed value."""
        return self._root

    def _lookup(self, path: Path) -> Any:
        value = self._root
        for segment in path:
            if isinstance(value, dict):
                if segment not in value:
                    return _MISSING
                value = value[segment]
            elif isinstance(value, list):
                if not segment.isdecimal():
                    return _MISSING
                index = int(segment)
                if index >= len(value):
                    return _MISSING
                value = value[index]
            else:
                return _MISSING
        return value

    def get(self, path: Path, default: Any = None) -> Any:
        """Return the raw value at ``path`` or ``default`` if absent."""
        value = self._lookup(path)
        return default if value is _MISSING else value

    def exists(self, path: Path) -> bool:
        """Check whether ``path`` resolves to a value (explicit null counts)."""
        return self._lookup(path) is not _MISSING

    def type_of(self, path: Path) -> Optional[JsonType]:
        """Return the JSON type at ``path``, or None if the path is absent."""
        value = self._lookup(path)
        if value is _MISSING:
            return None
        if value is None:
            return JsonType.NULL
        if isinstance(value, bool):
            return JsonType.BOOL
        if isinstance(value, str):
            return JsonType.STRING
        if isinstance(value, (int, float)):
            return JsonType.NUMBER
        if isinstance(value, dict):
            return JsonType.OBJECT
        return JsonType.ARRAY

    def get_string(self, path: Path) -> str:
        value = self._lookup(path)
        return value if isinstance(value, str) else ""

    def get_int64(self, path: Path) -> int:
        value = self._lookup(path)
        if isinstance(value, int) and not isinstance(value, bool):
            if INT64_MIN <= value <= INT64_MAX:
                return value
        return 0

    def get_uint64(self, path: Path) -> int:
        value = self._lookup(path)
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value <= UINT64_MAX:
                return value
        return 0

    def get_float64(self, path: Path) -> float:
        value = self._lookup(path)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0.0
        try:
            return float(value)
        except OverflowError:
            return 0.0

    def get_bool(self, path: Path) -> bool:
        return self._lookup(path) is True

    def raw_text(self, path: Path) -> str:
        """
        Return the text at ``path`` for free-form parsing.

        String values are returned as-is; any other value is returned as its
        JSON representation (``null``, ``42``, ``{...}``), and an absent path
        yields an empty string.
        """
        value = self._lookup(path)
        if value is _MISSING:
            return ""
        if isinstance(value, str):
            return value
        return json.dumps(value)

    def __repr__(self) -> str:
        return f"Document({self._root!r})"
