"""
Width-annotated numeric types for target fields.

Python numbers are unbounded, so fixed-width semantics are declared with
``typing.Annotated`` markers. Values extracted for these fields are narrowed
the way a fixed-width integer or float store would narrow them: integers
wrap around (two's complement), 32-bit floats lose precision.

Example:
    @dataclass
    class Reading:
        sensor: UInt8 = tagged("sensor.id", default=0)
        value: Float32 = tagged("sensor.value", default=0.0)

Plain ``int`` is treated as a signed 64-bit integer and plain ``float`` as
a 64-bit float.
"""

from dataclasses import dataclass
from typing import Annotated

__all__ = [
    "IntWidth",
    "FloatWidth",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "UInt",
    "Float32",
    "Float64",
]


@dataclass(frozen=True)
class IntWidth:
    """Bit width and signedness of an integer field."""

    bits: int = 64
    signed: bool = True


@dataclass(frozen=True)
class FloatWidth:
    """Bit width of a float field (32 or 64)."""

    bits: int = 64


Int8 = Annotated[int, IntWidth(8)]
Int16 = Annotated[int, IntWidth(16)]
Int32 = Annotated[int, IntWidth(32)]
Int64 = Annotated[int, IntWidth(64)]

UInt8 = Annotated[int, IntWidth(8, signed=False)]
UInt16 = Annotated[int, IntWidth(16, signed=False)]
UInt32 = Annotated[int, IntWidth(32, signed=False)]
UInt64 = Annotated[int, IntWidth(64, signed=False)]
UInt = UInt64

Float32 = Annotated[float, FloatWidth(32)]
Float64 = Annotated[float, FloatWidth(64)]
