"""
linebasic Interpreter

Main interpreter loop and interactive session.

The engine runs the stored program: it fetches the statement at the program
counter, executes it, and turns the returned ControlSignal into a change of
program counter, call stack or loop stack. The session handles one source
line at a time: numbered lines edit the program, anything else executes
immediately.

Key classes:
- Engine: fetch/execute loop over the program store
- ExecutionResult: outcome of a complete program run
- Interpreter: session owning the environment, program and console
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from linebasic.errors import BasicError, BasicRuntimeError
from linebasic.language.parser import parse_line
from linebasic.language.statement import Statement
from linebasic.language.values import Integer
from linebasic.runtime import signals
from linebasic.runtime.console import Console, StreamConsole
from linebasic.runtime.environment import Environment
from linebasic.runtime.executor import ExecutionConfig, StatementExecutor
from linebasic.runtime.program import Program
from linebasic.runtime.signals import ControlSignal
from linebasic.runtime.state import ExecutionFrame, LoopFrame

logger = logging.getLogger(__name__)


class Engine:
    """
    Program-counter driven execution engine.

    Control state lives in an ExecutionFrame created fresh for each run.
    Execution continues until the PC runs off the end of the program, END
    clears the running flag, or an error is raised. The first error ends the
    run; state changed before it is kept.
    """

    def __init__(self,
                 program: Program,
                 environment: Environment,
                 executor: StatementExecutor,
                 config: ExecutionConfig = None):
        self.program = program
        self.environment = environment
        self.executor = executor
        self.config = config or executor.config
        self.frame = ExecutionFrame()

    def run(self) -> ExecutionFrame:
        """Run the program from its first line."""
        self.frame = frame = ExecutionFrame()
        max_steps = self.config.max_steps
        logger.debug("Run started: %d lines", len(self.program))

        while frame.running and frame.pc < len(self.program):
            line_number, statement = self.program[frame.pc]

            if max_steps is not None and frame.steps >= max_steps:
                raise BasicRuntimeError.step_limit(max_steps).at_line(line_number)
            frame.steps += 1

            if self.config.trace:
                logger.debug("[%d] %s", line_number, statement)

            try:
                signal = self.executor.execute(statement, self.environment)
                self.apply(signal, frame)
            except BasicError as e:
                # Wrap errors to give line number info to user.
                raise e.at_line(line_number)

        logger.debug("Run finished after %d steps", frame.steps)
        return frame

    def apply(self, signal: Optional[ControlSignal], frame: ExecutionFrame) -> None:
        """Act on the signal returned by the statement at frame.pc."""
        if signal is None:
            frame.pc += 1

        elif isinstance(signal, signals.Jump):
            frame.pc = self._resolve(signal.line)

        elif isinstance(signal, signals.Call):
            target = self._resolve(signal.line)
            frame.call_stack.append(frame.pc)
            logger.debug("GOSUB %d from index %d", signal.line, frame.pc)
            frame.pc = target

        elif isinstance(signal, signals.Return):
            if not frame.call_stack:
                raise BasicRuntimeError.return_without_gosub()
            frame.pc = frame.call_stack.pop() + 1

        elif isinstance(signal, signals.StartLoop):
            self._start_loop(signal, frame)

        elif isinstance(signal, signals.EndLoop):
            self._end_loop(signal, frame)

        elif isinstance(signal, signals.ClearVars):
            self.environment.clear()
            frame.pc += 1

        elif isinstance(signal, signals.End):
            frame.running = False

        elif isinstance(signal, signals.HOST_SIGNALS):
            # Would corrupt the control state of this run.
            raise BasicRuntimeError.invalid_in_program(signal.keyword.value)

        else:
            raise BasicRuntimeError(f"Unknown signal: {type(signal).__name__}")

    def _resolve(self, line_number: int) -> int:
        idx = self.program.find(line_number)
        if idx is None:
            raise BasicRuntimeError.unknown_line()
        return idx

    def _start_loop(self, signal: signals.StartLoop, frame: ExecutionFrame) -> None:
        step = signal.step
        if step is None:
            step = -1 if signal.end < signal.start else 1
        if step == 0:
            raise BasicRuntimeError.step_zero()

        # Frames are keyed by the FOR statement's position, so NEXT jumping
        # back here re-enters the loop instead of restarting it.
        innermost = frame.innermost_loop()
        if innermost is None or innermost.for_pc != frame.pc:
            self.environment.set(signal.var, Integer(signal.start))
            frame.loop_stack.append(LoopFrame(signal.var, signal.end, step, frame.pc))
            logger.debug("FOR %s=%d TO %d STEP %d", signal.var, signal.start, signal.end, step)

        frame.pc += 1

    def _end_loop(self, signal: signals.EndLoop, frame: ExecutionFrame) -> None:
        loop = frame.innermost_loop()
        if loop is None:
            raise BasicRuntimeError.next_without_for()
        if signal.var is not None and signal.var != loop.var:
            raise BasicRuntimeError.next_mismatch(loop.var, signal.var)

        value = self.environment.get(loop.var) + Integer(loop.step)
        self.environment.set(loop.var, value)

        if loop.finished(value.value):
            frame.loop_stack.pop()
            frame.pc += 1
            logger.debug("Loop over %s finished", loop.var)
        else:
            frame.pc = loop.for_pc


@dataclass
class ExecutionResult:
    """Result of a complete program run."""
    success: bool
    steps: int = 0
    variables: Dict[str, Any] = field(default_factory=dict)
    error: Optional[BasicError] = None
    execution_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "steps": self.steps,
            "variables": self.variables,
            "error": str(self.error) if self.error else None,
            "execution_time_ms": self.execution_time_ms,
        }


class Interpreter:
    """
    Interactive interpreter session.

    Owns the variable environment, the program store and the console, and
    acts as the host for LIST, RUN, LOAD, SAVE and CLEAR.
    """

    def __init__(self,
                 console: Console = None,
                 config: ExecutionConfig = None,
                 program: Program = None,
                 environment: Environment = None):
        self.console = console or StreamConsole()
        self.config = config or ExecutionConfig()
        self.program = program if program is not None else Program()
        self.environment = environment if environment is not None else Environment()
        self.executor = StatementExecutor(self.console, self.config)

    #---------------------------------------------------------------------------
    # Line handling
    #---------------------------------------------------------------------------

    def handle_line(self, text: str) -> None:
        """Store a numbered line, or execute an unnumbered one immediately."""
        line_number, statement = parse_line(text)
        if line_number is not None:
            self.program.upsert(line_number, statement)
        else:
            self.execute_immediate(statement)

    def execute_immediate(self, statement: Statement) -> None:
        """Execute a statement outside of any running program."""
        signal = self.executor.execute(statement, self.environment)

        if signal is None:
            return
        if isinstance(signal, signals.FLOW_SIGNALS):
            raise BasicRuntimeError.invalid_in_immediate_mode(signal.keyword.value)

        if isinstance(signal, signals.List):
            self.list_program()
        elif isinstance(signal, signals.Run):
            self.run()
        elif isinstance(signal, signals.Load):
            self.load(signal.path)
        elif isinstance(signal, signals.Save):
            self.save(signal.path)
        elif isinstance(signal, signals.ClearVars):
            self.environment.clear()
        else:
            raise BasicRuntimeError(f"Unknown signal: {type(signal).__name__}")

    #---------------------------------------------------------------------------
    # Host commands
    #---------------------------------------------------------------------------

    def run(self) -> ExecutionFrame:
        """Run the stored program with fresh control state."""
        return Engine(self.program, self.environment, self.executor, self.config).run()

    def list_program(self) -> None:
        for line in self.program.render():
            self.console.write(line + "\n")

    def load(self, path: Union[str, Path]) -> int:
        return self.program.load(path)

    def save(self, path: Union[str, Path]) -> int:
        return self.program.save(path)

    def load_source(self, lines: Iterable[str]) -> int:
        """Add numbered source lines to the program."""
        return self.program.load_lines(lines)

    def execute_program(self) -> ExecutionResult:
        """
        Run the stored program and report the outcome.

        Unlike run(), errors are captured in the result rather than raised.
        """
        start = time.time()
        engine = Engine(self.program, self.environment, self.executor, self.config)
        result = ExecutionResult(success=False)

        try:
            engine.run()
            result.success = True
        except BasicError as e:
            logger.debug("Run failed: %s", e)
            result.error = e

        result.steps = engine.frame.steps
        result.variables = self.environment.snapshot()
        result.execution_time_ms = (time.time() - start) * 1000
        return result

    #---------------------------------------------------------------------------
    # Interactive loop
    #---------------------------------------------------------------------------

    def repl(self) -> None:
        """Read and handle lines until end of input, reporting each error."""
        self.console.write("Ready.\n")

        while True:
            text = self.console.read_line()
            if text is None:
                break
            try:
                self.handle_line(text)
            except BasicError as e:
                self.report_error(e)

    def report_error(self, error: BasicError) -> None:
        self.console.write(f"{error}\n")
