"""
linebasic Language Layer

Source text to syntax tree:
- values: Integer / Float numbers and their arithmetic
- expression: expression and condition trees
- statement: one statement variant per keyword
- parser: SourceReader, parse, parse_line
"""

from linebasic.language.values import Number, Integer, Float
from linebasic.language.expression import (
    ArithOp,
    BinaryOp,
    Call,
    Condition,
    Expression,
    NumericLiteral,
    Relop,
    StringLiteral,
    Variable,
)
from linebasic.language.statement import Keyword, Statement
from linebasic.language.parser import SourceReader, parse, parse_line

__all__ = [
    "Number",
    "Integer",
    "Float",
    "ArithOp",
    "BinaryOp",
    "Call",
    "Condition",
    "Expression",
    "NumericLiteral",
    "Relop",
    "StringLiteral",
    "Variable",
    "Keyword",
    "Statement",
    "SourceReader",
    "parse",
    "parse_line",
]
