"""
linebasic Value Model

Numbers are a two-variant tagged union:
- Integer: whole numbers
- Float: double precision numbers

Arithmetic between two numbers promotes to Float if either operand is a
Float, otherwise it stays Integer. Integer division truncates toward zero.
Equality and ordering compare the promoted representation, so
``Integer(3) == Float(3.0)``.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, ClassVar, Union

from linebasic.errors import BasicRuntimeError


@dataclass(frozen=True, eq=False)
class Number:
    """Base class of the numeric value variants."""
    value: Union[int, float]

    is_int: ClassVar[bool] = False

    @staticmethod
    def of(value: Union[int, float]) -> "Number":
        """Wrap a Python number in the matching variant."""
        if isinstance(value, bool):
            return Integer(int(value))
        if isinstance(value, int):
            return Integer(value)
        return Float(float(value))

    def int_value(self) -> int:
        """Get the value of an Integer; a Float is a type error."""
        if not self.is_int:
            raise BasicRuntimeError.type_error("Type error: expected an integer")
        return self.value

    def truncate(self) -> "Integer":
        """Truncate toward zero, passing Integers through unchanged."""
        if self.is_int:
            return self
        if not math.isfinite(self.value):
            raise BasicRuntimeError.overflow()
        return Integer(int(self.value))

    def _combine(self, other: "Number", op: Callable) -> "Number":
        if self.is_int and other.is_int:
            return Integer(op(self.value, other.value))
        return Float(op(_as_float(self.value), _as_float(other.value)))

    def __add__(self, other: "Number") -> "Number":
        if not isinstance(other, Number):
            return NotImplemented
        return self._combine(other, operator.add)

    def __sub__(self, other: "Number") -> "Number":
        if not isinstance(other, Number):
            return NotImplemented
        return self._combine(other, operator.sub)

    def __mul__(self, other: "Number") -> "Number":
        if not isinstance(other, Number):
            return NotImplemented
        return self._combine(other, operator.mul)

    def __truediv__(self, other: "Number") -> "Number":
        if not isinstance(other, Number):
            return NotImplemented
        if other.value == 0:
            raise BasicRuntimeError.divide_by_zero()
        if self.is_int and other.is_int:
            quotient = abs(self.value) // abs(other.value)
            if (self.value < 0) != (other.value < 0):
                quotient = -quotient
            return Integer(quotient)
        return Float(_as_float(self.value) / _as_float(other.value))

    def __neg__(self) -> "Number":
        return type(self)(-self.value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: "Number") -> bool:
        return self.value < other.value

    def __le__(self, other: "Number") -> bool:
        return self.value <= other.value

    def __gt__(self, other: "Number") -> bool:
        return self.value > other.value

    def __ge__(self, other: "Number") -> bool:
        return self.value >= other.value

    def __str__(self) -> str:
        try:
            return str(self.value)
        except ValueError:
            # int too long for the interpreter's digit limit
            raise BasicRuntimeError.overflow() from None


@dataclass(frozen=True, eq=False)
class Integer(Number):
    value: int

    is_int: ClassVar[bool] = True

    def __repr__(self) -> str:
        return f"Integer({self.value})"


@dataclass(frozen=True, eq=False)
class Float(Number):
    value: float

    def __repr__(self) -> str:
        return f"Float({self.value!r})"

    def __str__(self) -> str:
        return format_float(self.value)


def _as_float(value: Union[int, float]) -> float:
    try:
        return float(value)
    except OverflowError:
        raise BasicRuntimeError.overflow() from None


def format_float(value: float) -> str:
    """Render a float positionally, always with a fractional part.

    The result reads back as a Float through the number scanner, which only
    accepts digits and a decimal point.
    """
    text = repr(value)
    if "inf" in text or "nan" in text:
        return text
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    return text
