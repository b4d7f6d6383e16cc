"""
linebasic - a line-numbered BASIC interpreter

Numbered program lines are kept in an ordered store and executed by a
program-counter driven engine with GOTO, IF/THEN, GOSUB/RETURN and
FOR/NEXT.

Exports:
- Interpreter: interactive session and program host
- Engine: runs a stored program
- parse / parse_line: source text to statements
- BasicError, BasicSyntaxError, BasicRuntimeError: error types
"""

from linebasic.errors import BasicError, BasicSyntaxError, BasicRuntimeError, ErrorCode
from linebasic.language.parser import parse, parse_line
from linebasic.language.values import Number, Integer, Float
from linebasic.runtime.console import BufferedConsole, StreamConsole
from linebasic.runtime.environment import Environment
from linebasic.runtime.executor import ExecutionConfig
from linebasic.runtime.interpreter import Engine, Interpreter, ExecutionResult
from linebasic.runtime.program import Program

__version__ = "0.1.0"

__all__ = [
    "Interpreter",
    "Engine",
    "ExecutionResult",
    "ExecutionConfig",
    "Program",
    "Environment",
    "BufferedConsole",
    "StreamConsole",
    "parse",
    "parse_line",
    "Number",
    "Integer",
    "Float",
    "BasicError",
    "BasicSyntaxError",
    "BasicRuntimeError",
    "ErrorCode",
]
