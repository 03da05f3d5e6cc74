"""
Exceptions raised while mapping JSON documents onto dataclasses.
"""

from typing import Any


class TagMapError(Exception):
    """Base class for all mapping errors."""


class DocumentParseError(TagMapError, ValueError):
    """Raw input could not be parsed as a JSON document."""

    def __init__(self, message: str, data: Any = None):
        super().__init__(message)
        self.data = data


class TimestampParseError(TagMapError, ValueError):
    """
    Text did not match any of the supported timestamp layouts.

    Attributes:
        text: The raw text that failed to parse
    """

    def __init__(self, text: str, reason: str = "no matching layout"):
        super().__init__(f'failed to parse "{text}" as a timestamp: {reason}')
        self.text = text
        self.reason = reason


class MappingFaultError(TagMapError):
    """Raised on demand when a mapping pass recorded per-field faults."""

    def __init__(self, faults: list):
        messages = "; ".join(f.message for f in faults)
        super().__init__(f"{len(faults)} field(s) could not be mapped: {messages}")
        self.faults = faults
