"""
linebasic Statement Executor

Executes one statement at a time.

Local-effect statements (blank lines, REM, PRINT, LET, INPUT) do all their
work against the environment and console and return None, meaning "advance
to the next line". Every other statement returns a ControlSignal for the
engine or the interpreter session to act on; the executor never touches the
program counter or the control stacks.

Key classes:
- ExecutionConfig: configuration for execution
- StatementExecutor: statement -> optional ControlSignal
"""

from __future__ import annotations

import math
import random
import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type

from linebasic.errors import BasicRuntimeError, ErrorCode
from linebasic.language import statement as st
from linebasic.language.expression import Condition, Expression, StringLiteral
from linebasic.language.statement import Statement
from linebasic.language.values import Float, Integer, Number
from linebasic.runtime import signals
from linebasic.runtime.console import Console, StreamConsole
from linebasic.runtime.environment import Environment
from linebasic.runtime.evaluator import ExpressionEvaluator, FunctionRegistry
from linebasic.runtime.signals import ControlSignal


# Accepted INPUT replies: optional sign, digits with an optional fraction,
# optional exponent.
INPUT_NUMBER = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


@dataclass
class ExecutionConfig:
    """Configuration for program execution."""
    max_steps: Optional[int] = None
    input_prompt: str = "? "
    random_seed: Optional[int] = None
    trace: bool = False


class StatementExecutor:
    """
    Executes statements against an environment.

    All console traffic goes through the console collaborator.
    """

    def __init__(self,
                 console: Console = None,
                 config: ExecutionConfig = None,
                 evaluator: ExpressionEvaluator = None):
        self.console = console or StreamConsole()
        self.config = config or ExecutionConfig()
        self.evaluator = evaluator or ExpressionEvaluator(
            FunctionRegistry(random.Random(self.config.random_seed))
        )
        self._handlers: Dict[Type[Statement], Callable] = {
            st.Empty: lambda s, env: None,
            st.Comment: lambda s, env: None,
            st.Print: self._exec_print,
            st.Let: self._exec_let,
            st.Input: self._exec_input,
            st.If: self._exec_if,
            st.Goto: lambda s, env: signals.Jump(s.line),
            st.Gosub: lambda s, env: signals.Call(s.line),
            st.Return: lambda s, env: signals.Return(),
            st.For: self._exec_for,
            st.Next: lambda s, env: signals.EndLoop(s.var),
            st.List: lambda s, env: signals.List(),
            st.Load: lambda s, env: signals.Load(s.path),
            st.Save: lambda s, env: signals.Save(s.path),
            st.Run: lambda s, env: signals.Run(),
            st.ClearVars: lambda s, env: signals.ClearVars(),
            st.End: lambda s, env: signals.End(),
        }

    def execute(self, statement: Statement, env: Environment) -> Optional[ControlSignal]:
        """
        Execute a statement.

        Returns:
            None to advance to the next line, or a ControlSignal
        """
        handler = self._handlers.get(type(statement))
        if handler is None:
            raise BasicRuntimeError(f"Unknown statement kind: {type(statement).__name__}")
        return handler(statement, env)

    def _exec_print(self, statement: st.Print, env: Environment) -> None:
        output = ""
        for arg in statement.args:
            if isinstance(arg, StringLiteral):
                output += arg.text
            else:
                output += str(self.evaluator.evaluate(arg, env))
        self.console.write(output + "\n")

    def _exec_let(self, statement: st.Let, env: Environment) -> None:
        if isinstance(statement.expr, StringLiteral):
            raise BasicRuntimeError.type_error("Can't assign strings to variables")
        env.set(statement.var, self.evaluator.evaluate(statement.expr, env))

    def _exec_input(self, statement: st.Input, env: Environment) -> None:
        text = self.console.read_line(self.config.input_prompt)
        if text is None:
            raise BasicRuntimeError("Input error", ErrorCode.INPUT_ERROR)

        env.set(statement.var, self.parse_input(text))

    def parse_input(self, text: str) -> Number:
        """Read an INPUT reply as an Integer, else a finite Float."""
        text = text.strip()
        if not INPUT_NUMBER.fullmatch(text):
            raise BasicRuntimeError("Parse error", ErrorCode.INPUT_ERROR)
        try:
            return Integer(int(text))
        except ValueError:
            pass
        value = float(text)
        if not math.isfinite(value):
            raise BasicRuntimeError("Parse error", ErrorCode.INPUT_ERROR)
        return Float(value)

    def _exec_if(self, statement: st.If, env: Environment) -> Optional[ControlSignal]:
        if self.test(statement.condition, env):
            return self.execute(statement.consequent, env)
        return None

    def test(self, condition: Condition, env: Environment) -> bool:
        """Evaluate an IF condition."""
        if isinstance(condition.left, StringLiteral) or isinstance(condition.right, StringLiteral):
            raise BasicRuntimeError.type_error("Can't compare strings")
        left = self.evaluator.evaluate(condition.left, env)
        right = self.evaluator.evaluate(condition.right, env)
        return condition.relop.compare(left, right)

    def _exec_for(self, statement: st.For, env: Environment) -> ControlSignal:
        step = None
        if statement.step is not None:
            step = self._loop_value(statement.step, env)
        start = self._loop_value(statement.start, env)
        end = self._loop_value(statement.end, env)
        return signals.StartLoop(statement.var, start, end, step)

    def _loop_value(self, expr: Expression, env: Environment) -> int:
        value = self.evaluator.evaluate(expr, env)
        if not value.is_int:
            raise BasicRuntimeError.type_error("Values in for statement must be integers")
        return value.int_value()
