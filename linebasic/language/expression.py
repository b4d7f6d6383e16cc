"""
linebasic Expression Tree

Expressions are immutable trees built by the parser and walked by the
evaluator:
- StringLiteral: quoted text (only meaningful as a PRINT argument)
- NumericLiteral: an Integer or Float constant
- Variable: a single-letter variable reference
- BinaryOp: one of + - * / applied to two child expressions
- Call: a built-in function call with ordered arguments

Conditions pair two expressions with a relational operator and are only
used by IF.

str() of any node gives its canonical source form.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from linebasic.language.values import Number


class ArithOp(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def precedence(self) -> int:
        if self in (ArithOp.MULTIPLY, ArithOp.DIVIDE):
            return 2
        return 1

    def apply(self, left: Number, right: Number) -> Number:
        if self is ArithOp.ADD:
            return left + right
        if self is ArithOp.SUBTRACT:
            return left - right
        if self is ArithOp.MULTIPLY:
            return left * right
        return left / right


class Relop(str, Enum):
    EQ = "="
    NEQ = "<>"
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="

    def compare(self, left: Number, right: Number) -> bool:
        if self is Relop.EQ:
            return left == right
        if self is Relop.NEQ:
            return left != right
        if self is Relop.LT:
            return left < right
        if self is Relop.LTE:
            return left <= right
        if self is Relop.GT:
            return left > right
        return left >= right


class Expression:
    """Base class of all expression nodes."""

    # Leaves bind tighter than any operator.
    precedence = 3


@dataclass(frozen=True)
class StringLiteral(Expression):
    text: str

    def __str__(self) -> str:
        return f'"{self.text}"'


@dataclass(frozen=True)
class NumericLiteral(Expression):
    value: Number

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Variable(Expression):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class BinaryOp(Expression):
    """
    Binary arithmetic node.

    Both children are always present; the parser only builds a node once its
    right operand has been read.
    """
    op: ArithOp
    left: Expression
    right: Expression

    def __post_init__(self):
        if self.left is None or self.right is None:
            raise ValueError(f"BinaryOp {self.op.value} requires two operands")

    @property
    def precedence(self) -> int:
        return self.op.precedence

    def __str__(self) -> str:
        left = str(self.left)
        if self.left.precedence < self.precedence:
            left = f"({left})"

        # Equal precedence on the right changes meaning for - and /, and for
        # truncating integer division under *.
        right = str(self.right)
        if self.right.precedence <= self.precedence:
            right = f"({right})"

        return f"{left}{self.op.value}{right}"


@dataclass(frozen=True)
class Call(Expression):
    name: str
    args: Tuple[Expression, ...] = ()

    def __str__(self) -> str:
        return f"{self.name}({', '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class Condition:
    left: Expression
    relop: Relop
    right: Expression

    def __str__(self) -> str:
        return f"{self.left}{self.relop.value}{self.right}"
