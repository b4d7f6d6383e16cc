"""
linebasic Program Store

The loaded program: (line_number, Statement) pairs with unique line numbers,
kept in ascending order. The only mutation is upsert, which inserts a new
line, replaces an existing one, or deletes it when given an Empty statement.

Key classes:
- Program: ordered store of numbered statements
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from linebasic.errors import BasicRuntimeError, BasicSyntaxError, ErrorCode
from linebasic.language.parser import parse_line
from linebasic.language.statement import Empty, Statement

logger = logging.getLogger(__name__)

Line = Tuple[int, Statement]


class Program:
    """
    Ordered program store.

    Indexing yields (line_number, statement) pairs; an index is what the
    engine's program counter holds.
    """

    def __init__(self, lines: Iterable[Line] = ()):
        self._numbers: List[int] = []
        self._statements: List[Statement] = []
        for line_number, statement in lines:
            self.upsert(line_number, statement)

    def upsert(self, line_number: int, statement: Statement) -> None:
        """Insert, replace, or (for an Empty statement) delete a line."""
        idx = bisect_left(self._numbers, line_number)
        exists = idx < len(self._numbers) and self._numbers[idx] == line_number

        if isinstance(statement, Empty):
            if exists:
                del self._numbers[idx]
                del self._statements[idx]
                logger.debug("Deleted line %d", line_number)
            return

        if exists:
            self._statements[idx] = statement
            logger.debug("Replaced line %d", line_number)
        else:
            self._numbers.insert(idx, line_number)
            self._statements.insert(idx, statement)
            logger.debug("Inserted line %d", line_number)

    def find(self, line_number: int) -> Optional[int]:
        """Find the index of the line with the given number, if any."""
        idx = bisect_left(self._numbers, line_number)
        if idx < len(self._numbers) and self._numbers[idx] == line_number:
            return idx
        return None

    def clear(self) -> None:
        self._numbers.clear()
        self._statements.clear()

    @property
    def line_numbers(self) -> List[int]:
        return list(self._numbers)

    def __len__(self) -> int:
        return len(self._numbers)

    def __getitem__(self, idx: int) -> Line:
        return self._numbers[idx], self._statements[idx]

    def __iter__(self) -> Iterator[Line]:
        return iter(zip(self._numbers, self._statements))

    #---------------------------------------------------------------------------
    # Text form
    #---------------------------------------------------------------------------

    def render(self) -> List[str]:
        """Render each line as '<line-number> <statement>'."""
        return [f"{number} {statement}" for number, statement in self]

    def load_lines(self, lines: Iterable[str]) -> int:
        """
        Parse numbered source lines and upsert each into the program.

        Blank lines are skipped. A line without a line number is a syntax
        error. Lines parsed before an error stay in the program.

        Returns:
            Number of lines read
        """
        count = 0
        for text in lines:
            if not text.strip():
                continue
            line_number, statement = parse_line(text)
            if line_number is None:
                raise BasicSyntaxError(f"Missing line number: {text.strip()}")
            self.upsert(line_number, statement)
            count += 1
        return count

    def load(self, path: Union[str, Path]) -> int:
        """Read a program file and upsert its lines."""
        try:
            text = Path(path).read_text()
        except OSError as e:
            raise BasicRuntimeError(f"Can't load {path}: {e.strerror}", ErrorCode.IO_ERROR) from e

        count = self.load_lines(text.splitlines())
        logger.debug("Loaded %d lines from %s", count, path)
        return count

    def save(self, path: Union[str, Path]) -> int:
        """Write the program to a file, one rendered line per statement."""
        lines = self.render()
        try:
            Path(path).write_text("".join(f"{line}\n" for line in lines))
        except OSError as e:
            raise BasicRuntimeError(f"Can't save {path}: {e.strerror}", ErrorCode.IO_ERROR) from e

        logger.debug("Saved %d lines to %s", len(lines), path)
        return len(lines)


def check_source(lines: Iterable[str]) -> List[BasicSyntaxError]:
    """Parse numbered source lines without storing them; collect every syntax error."""
    errors: List[BasicSyntaxError] = []
    for text in lines:
        if not text.strip():
            continue
        try:
            line_number, _ = parse_line(text)
        except BasicSyntaxError as e:
            errors.append(e)
            continue
        if line_number is None:
            errors.append(BasicSyntaxError(f"Missing line number: {text.strip()}"))
    return errors
