"""
Shared context and result types for a mapping pass.

The MappingContext travels through the recursive walk and accumulates
per-field faults; the MappingResult is what callers get back.
"""

from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any

from ..document import Document
from ..errors import MappingFaultError, TagMapError


@dataclass(frozen=True)
class FieldFault:
    """
    A recoverable problem encountered while mapping one field.

    Attributes:
        field: Dotted attribute path on the target (e.g. "profile.created")
        path: Document path that was read
        error: The underlying error
    """

    field: str
    path: tuple[str, ...]
    error: TagMapError

    @property
    def message(self) -> str:
        return f"{self.field} ({'.'.join(self.path)}): {self.error}"


@dataclass
class MappingContext:
    """
    State shared by every level of one mapping pass.

    Attributes:
        document: The document being read
        zone: Time zone for timestamp parsing
        strict_optionals: Skip optional scalars whose JSON type does not fit
        faults: Recoverable per-field faults
        written: Dotted attribute paths that were assigned
    """

    document: Document
    zone: tzinfo
    strict_optionals: bool = False
    faults: list[FieldFault] = field(default_factory=list)
    written: list[str] = field(default_factory=list)

    def add_fault(self, field_path: str, path: tuple[str, ...], error: TagMapError) -> None:
        """Record a fault for a field."""
        self.faults.append(FieldFault(field_path, path, error))

    def mark_written(self, field_path: str) -> None:
        self.written.append(field_path)

    @property
    def has_faults(self) -> bool:
        return len(self.faults) > 0


class MappingResult:
    """
    Outcome of mapping a document onto a target.

    Attributes:
        target: The (mutated) target object
        faults: Recoverable per-field faults, in encounter order
        written: Dotted attribute paths that were assigned
    """

    def __init__(
        self,
        target: Any,
        faults: list[FieldFault] | None = None,
        written: list[str] | None = None,
    ):
        self.target = target
        self.faults = faults or []
        self.written = written or []

    @property
    def has_faults(self) -> bool:
        """Check if any field could not be mapped cleanly."""
        return len(self.faults) > 0

    @property
    def messages(self) -> list[str]:
        """Human-readable fault messages."""
        return [f.message for f in self.faults]

    def raise_for_faults(self) -> None:
        """
        Raise if the pass recorded any faults.

        Raises:
            MappingFaultError: Carrying the recorded faults
        """
        if self.faults:
            raise MappingFaultError(self.faults)

    def __repr__(self) -> str:
        return (
            f"MappingResult(target={type(self.target).__name__}, "
            f"written={len(self.written)}, faults={len(self.faults)})"
        )
