"""Health check endpoint."""

import logging

from fastapi import APIRouter

from linebasic import __version__
from linebasic.errors import BasicError
from linebasic.language.parser import parse_line
from linebasic.runtime.console import BufferedConsole
from linebasic.runtime.executor import ExecutionConfig
from linebasic.runtime.interpreter import Interpreter

logger = logging.getLogger(__name__)

router = APIRouter()

# Exercises parsing, GOSUB/RETURN, FOR/NEXT and PRINT.
READINESS_PROGRAM = [
    "10 FOR I=1 TO 2",
    "20 GOSUB 100",
    "30 NEXT I",
    "40 END",
    "100 PRINT I",
    "110 RETURN",
]


def check_parser() -> bool:
    try:
        return all(parse_line(line)[0] is not None for line in READINESS_PROGRAM)
    except BasicError as e:
        logger.warning("Parser check failed: %s", e)
        return False


def check_runtime() -> bool:
    console = BufferedConsole()
    interpreter = Interpreter(console=console, config=ExecutionConfig(max_steps=100))
    try:
        interpreter.load_source(READINESS_PROGRAM)
        interpreter.run()
    except BasicError as e:
        logger.warning("Runtime check failed: %s", e)
        return False
    return console.lines == ["1", "2"]


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "service": "linebasic-api"
    }


@router.get("/health/ready")
async def readiness_check():
    """Readiness check: parse and run a small program."""
    checks = {
        "parser": check_parser(),
        "runtime": check_runtime(),
    }
    return {
        "ready": all(checks.values()),
        "checks": checks,
    }
