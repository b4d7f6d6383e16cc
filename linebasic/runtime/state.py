"""
linebasic Runtime State Management

Per-run control state owned by the engine. A fresh frame is created at the
start of every RUN and discarded when the run ends or fails.

Key classes:
- LoopFrame: saved state of one active FOR loop
- ExecutionFrame: program counter, call stack, loop stack, running flag
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class LoopFrame:
    """
    Saved state of one active FOR loop.

    for_pc is the program index of the FOR statement that opened the loop;
    NEXT jumps back to it while the loop continues.
    """
    var: str
    end: int
    step: int
    for_pc: int

    def finished(self, value: Any) -> bool:
        """Has the loop variable passed the loop bound?"""
        if self.step < 0:
            return value < self.end
        return value > self.end

    def to_dict(self) -> Dict[str, Any]:
        return {
            "var": self.var,
            "end": self.end,
            "step": self.step,
            "for_pc": self.for_pc,
        }


@dataclass
class ExecutionFrame:
    """
    Control state of a single program run.

    The program counter is an index into the program's ordered lines, not a
    line number. The call stack holds the PCs of GOSUB statements awaiting a
    RETURN.
    """
    pc: int = 0
    call_stack: List[int] = field(default_factory=list)
    loop_stack: List[LoopFrame] = field(default_factory=list)
    running: bool = True
    steps: int = 0

    def innermost_loop(self) -> Optional[LoopFrame]:
        return self.loop_stack[-1] if self.loop_stack else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pc": self.pc,
            "call_stack": list(self.call_stack),
            "loop_stack": [frame.to_dict() for frame in self.loop_stack],
            "running": self.running,
            "steps": self.steps,
        }
