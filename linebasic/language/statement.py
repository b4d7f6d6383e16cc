"""
linebasic Statements

One statement variant per keyword. Statements are immutable; executing one
is the job of linebasic.runtime.executor.StatementExecutor.

str() of a statement gives its canonical source form, which the parser reads
back into an equivalent statement. LIST and SAVE are built on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple

from linebasic.language.expression import Condition, Expression


class Keyword(str, Enum):
    """Keywords as they appear in source code."""
    REM = "REM"
    PRINT = "PRINT"
    LET = "LET"
    GOTO = "GOTO"
    IF = "IF"
    THEN = "THEN"
    INPUT = "INPUT"
    GOSUB = "GOSUB"
    RETURN = "RETURN"
    FOR = "FOR"
    TO = "TO"
    STEP = "STEP"
    NEXT = "NEXT"
    LIST = "LIST"
    RUN = "RUN"
    LOAD = "LOAD"
    SAVE = "SAVE"
    CLEAR = "CLEAR"
    END = "END"


class Statement:
    """Base class of all statement variants."""

    keyword: ClassVar[Optional[Keyword]] = None

    def __str__(self) -> str:
        return self.keyword.value if self.keyword else ""


@dataclass(frozen=True)
class Empty(Statement):
    """A blank line. Storing it under a line number deletes that line."""


@dataclass(frozen=True)
class Comment(Statement):
    text: str = ""

    keyword: ClassVar[Keyword] = Keyword.REM

    def __str__(self) -> str:
        return f"{Keyword.REM.value} {self.text}" if self.text else Keyword.REM.value


@dataclass(frozen=True)
class Print(Statement):
    args: Tuple[Expression, ...] = ()

    keyword: ClassVar[Keyword] = Keyword.PRINT

    def __str__(self) -> str:
        if not self.args:
            return Keyword.PRINT.value
        return f"{Keyword.PRINT.value} {', '.join(str(a) for a in self.args)}"


@dataclass(frozen=True)
class Let(Statement):
    var: str
    expr: Expression

    keyword: ClassVar[Keyword] = Keyword.LET

    def __str__(self) -> str:
        return f"{Keyword.LET.value} {self.var}={self.expr}"


@dataclass(frozen=True)
class If(Statement):
    condition: Condition
    consequent: Statement

    keyword: ClassVar[Keyword] = Keyword.IF

    def __str__(self) -> str:
        return f"{Keyword.IF.value} {self.condition} {Keyword.THEN.value} {self.consequent}"


@dataclass(frozen=True)
class Goto(Statement):
    line: int

    keyword: ClassVar[Keyword] = Keyword.GOTO

    def __str__(self) -> str:
        return f"{Keyword.GOTO.value} {self.line}"


@dataclass(frozen=True)
class Input(Statement):
    var: str

    keyword: ClassVar[Keyword] = Keyword.INPUT

    def __str__(self) -> str:
        return f"{Keyword.INPUT.value} {self.var}"


@dataclass(frozen=True)
class Gosub(Statement):
    line: int

    keyword: ClassVar[Keyword] = Keyword.GOSUB

    def __str__(self) -> str:
        return f"{Keyword.GOSUB.value} {self.line}"


@dataclass(frozen=True)
class Return(Statement):
    keyword: ClassVar[Keyword] = Keyword.RETURN


@dataclass(frozen=True)
class For(Statement):
    var: str
    start: Expression
    end: Expression
    step: Optional[Expression] = None

    keyword: ClassVar[Keyword] = Keyword.FOR

    def __str__(self) -> str:
        text = f"{Keyword.FOR.value} {self.var}={self.start} {Keyword.TO.value} {self.end}"
        if self.step is not None:
            text += f" {Keyword.STEP.value} {self.step}"
        return text


@dataclass(frozen=True)
class Next(Statement):
    var: Optional[str] = None

    keyword: ClassVar[Keyword] = Keyword.NEXT

    def __str__(self) -> str:
        if self.var is None:
            return Keyword.NEXT.value
        return f"{Keyword.NEXT.value} {self.var}"


@dataclass(frozen=True)
class List(Statement):
    keyword: ClassVar[Keyword] = Keyword.LIST


@dataclass(frozen=True)
class Load(Statement):
    path: str

    keyword: ClassVar[Keyword] = Keyword.LOAD

    def __str__(self) -> str:
        return f'{Keyword.LOAD.value} "{self.path}"'


@dataclass(frozen=True)
class Save(Statement):
    path: str

    keyword: ClassVar[Keyword] = Keyword.SAVE

    def __str__(self) -> str:
        return f'{Keyword.SAVE.value} "{self.path}"'


@dataclass(frozen=True)
class Run(Statement):
    keyword: ClassVar[Keyword] = Keyword.RUN


@dataclass(frozen=True)
class ClearVars(Statement):
    keyword: ClassVar[Keyword] = Keyword.CLEAR


@dataclass(frozen=True)
class End(Statement):
    keyword: ClassVar[Keyword] = Keyword.END
