"""
linebasic Runtime Engine

This module provides the runtime for executing line-numbered programs:
- Interpreter: session host (immediate mode, LIST/RUN/LOAD/SAVE/CLEAR)
- Engine: program-counter driven fetch/execute loop
- StatementExecutor: statement execution returning control signals
- ExpressionEvaluator: expression evaluation and built-in functions
- Program: ordered store of numbered statements
- Environment: variable name to value mapping
- ExecutionFrame: program counter, call stack, loop stack
"""

from linebasic.runtime.console import Console, StreamConsole, BufferedConsole
from linebasic.runtime.environment import Environment
from linebasic.runtime.evaluator import ExpressionEvaluator, FunctionRegistry
from linebasic.runtime.executor import StatementExecutor, ExecutionConfig
from linebasic.runtime.interpreter import Engine, Interpreter, ExecutionResult
from linebasic.runtime.program import Program, check_source
from linebasic.runtime.state import ExecutionFrame, LoopFrame

__all__ = [
    "Console",
    "StreamConsole",
    "BufferedConsole",
    "Environment",
    "ExpressionEvaluator",
    "FunctionRegistry",
    "StatementExecutor",
    "ExecutionConfig",
    "Engine",
    "Interpreter",
    "ExecutionResult",
    "Program",
    "check_source",
    "ExecutionFrame",
    "LoopFrame",
]
