"""
linebasic Control Signals

Statement execution returns a signal when a statement needs an effect it
cannot perform itself: a change to the flow of control, or a host command.
Only the engine (for a running program) or the interpreter session (for an
immediate command) acts on a signal. Signals are plain requests and carry no
mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from linebasic.language.statement import Keyword


class ControlSignal:
    """Base class of all control signals."""

    keyword: ClassVar[Keyword]


@dataclass(frozen=True)
class Jump(ControlSignal):
    line: int

    keyword: ClassVar[Keyword] = Keyword.GOTO


@dataclass(frozen=True)
class Call(ControlSignal):
    line: int

    keyword: ClassVar[Keyword] = Keyword.GOSUB


@dataclass(frozen=True)
class Return(ControlSignal):
    keyword: ClassVar[Keyword] = Keyword.RETURN


@dataclass(frozen=True)
class StartLoop(ControlSignal):
    var: str
    start: int
    end: int
    step: Optional[int] = None

    keyword: ClassVar[Keyword] = Keyword.FOR


@dataclass(frozen=True)
class EndLoop(ControlSignal):
    var: Optional[str] = None

    keyword: ClassVar[Keyword] = Keyword.NEXT


@dataclass(frozen=True)
class List(ControlSignal):
    keyword: ClassVar[Keyword] = Keyword.LIST


@dataclass(frozen=True)
class Load(ControlSignal):
    path: str

    keyword: ClassVar[Keyword] = Keyword.LOAD


@dataclass(frozen=True)
class Save(ControlSignal):
    path: str

    keyword: ClassVar[Keyword] = Keyword.SAVE


@dataclass(frozen=True)
class Run(ControlSignal):
    keyword: ClassVar[Keyword] = Keyword.RUN


@dataclass(frozen=True)
class ClearVars(ControlSignal):
    keyword: ClassVar[Keyword] = Keyword.CLEAR


@dataclass(frozen=True)
class End(ControlSignal):
    keyword: ClassVar[Keyword] = Keyword.END


# Signals that only make sense while a program is running.
FLOW_SIGNALS = (Jump, Call, Return, StartLoop, EndLoop, End)

# Host commands that may not be issued from inside a running program.
HOST_SIGNALS = (List, Load, Save, Run)
