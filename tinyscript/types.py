"""Type definitions and value helpers for TinyScript.

TinyScript has four value types: Boolean, Integer, Float and String. At
runtime they are represented by the Python `bool`, `int`, `float` and
`str` types. Integers behave like signed 64-bit integers: arithmetic wraps
around and division truncates toward zero. A variable that was never
written reads as the absent value `None`.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Optional
import math


class ValueType(Enum):
    """The static type of an expression, as inferred by the type checker."""
    BOOLEAN = 'Boolean'
    INTEGER = 'Integer'
    FLOAT = 'Float'
    STRING = 'String'

    def __str__(self) -> str:
        return self.value


NUMERIC_TYPES = frozenset({ValueType.INTEGER, ValueType.FLOAT})

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap_int64(x: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    x &= (1 << 64) - 1
    if x > INT64_MAX:
        x -= 1 << 64
    return x


def truncate_divide(a: int, b: int) -> int:
    """Integer division rounding toward zero. The caller rejects b == 0."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return wrap_int64(q)


def float_divide(a: float, b: float) -> float:
    """IEEE division: dividing by zero yields an infinity or nan instead of raising."""
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def type_of_value(value: Any) -> Optional[ValueType]:
    """Return the ValueType of a runtime value, or None for the absent value."""
    # bool is a subclass of int; test it first
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, int):
        return ValueType.INTEGER
    if isinstance(value, float):
        return ValueType.FLOAT
    if isinstance(value, str):
        return ValueType.STRING
    return None


def type_name(value: Any) -> str:
    """Return the TinyScript type name of a runtime value."""
    value_type = type_of_value(value)
    if value_type is None:
        return 'Absent' if value is None else type(value).__name__
    return value_type.value


def is_numeric(value: Any) -> bool:
    return type_of_value(value) in NUMERIC_TYPES


def format_float(x: float) -> str:
    """Format a float as `digits.digits` so that the float grammar reads it back exactly.

    `repr` gives the shortest round-trip digits; exponent forms are expanded
    into positional notation.
    """
    if not math.isfinite(x):
        return repr(x)
    text = repr(x)
    if 'e' in text or 'E' in text:
        text = format(Decimal(text), 'f')
    if '.' not in text:
        text += '.0'
    return text
