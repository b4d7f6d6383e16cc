"""Test fixtures for the linebasic test suite."""
import pytest
import sys
from pathlib import Path
from typing import List

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from linebasic.runtime.console import BufferedConsole
from linebasic.runtime.environment import Environment
from linebasic.runtime.executor import ExecutionConfig, StatementExecutor
from linebasic.runtime.interpreter import Interpreter


@pytest.fixture
def console() -> BufferedConsole:
    """Console with no scripted input that records output."""
    return BufferedConsole()


@pytest.fixture
def env() -> Environment:
    """Empty variable environment."""
    return Environment()


@pytest.fixture
def executor(console: BufferedConsole) -> StatementExecutor:
    """Statement executor writing to the buffered console."""
    return StatementExecutor(console=console, config=ExecutionConfig(random_seed=1))


@pytest.fixture
def interpreter(console: BufferedConsole) -> Interpreter:
    """Interpreter session with a step limit so runaway tests fail fast."""
    return Interpreter(console=console, config=ExecutionConfig(max_steps=10_000, random_seed=1))


@pytest.fixture
def counting_program() -> List[str]:
    """Loop calling a subroutine three times."""
    return [
        "10 FOR I=1 TO 3",
        "20 GOSUB 100",
        "30 NEXT",
        "40 END",
        "100 N=N-1",
        "110 RETURN",
    ]
