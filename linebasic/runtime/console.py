"""
linebasic Console

Line-buffered text output and blocking line input, used by PRINT, INPUT,
LIST and the interactive session.

Key classes:
- Console: interface
- StreamConsole: reads and writes text streams (stdin/stdout by default)
- BufferedConsole: scripted input and captured output
"""

from __future__ import annotations

import sys
from collections import deque
from typing import Iterable, List, Optional, TextIO


class Console:
    """Text console used by the interpreter."""

    def write(self, text: str) -> None:
        raise NotImplementedError

    def read_line(self, prompt: str = "") -> Optional[str]:
        """Write a prompt and read one line; None at end of input."""
        raise NotImplementedError


class StreamConsole(Console):
    def __init__(self, stdin: TextIO = None, stdout: TextIO = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def read_line(self, prompt: str = "") -> Optional[str]:
        if prompt:
            self.write(prompt)
        line = self.stdin.readline()
        if line == "":
            return None
        return line.rstrip("\r\n")


class BufferedConsole(Console):
    """
    Console fed from a list of input lines that records all output.

    Used by the HTTP service and by tests.
    """

    def __init__(self, inputs: Iterable[str] = ()):
        self.inputs = deque(inputs)
        self.chunks: List[str] = []

    def write(self, text: str) -> None:
        self.chunks.append(text)

    def read_line(self, prompt: str = "") -> Optional[str]:
        if prompt:
            self.write(prompt)
        if not self.inputs:
            return None
        return self.inputs.popleft()

    @property
    def text(self) -> str:
        return "".join(self.chunks)

    @property
    def lines(self) -> List[str]:
        """Output split into lines; a trailing partial line is kept."""
        return self.text.splitlines()
