"""Run endpoint for program execution."""

import time
from typing import Dict, List, Optional, Union

from fastapi import APIRouter
from pydantic import BaseModel, Field

from linebasic.errors import BasicError
from linebasic.runtime.console import BufferedConsole
from linebasic.runtime.executor import ExecutionConfig
from linebasic.runtime.interpreter import Interpreter

router = APIRouter()

# Upper bound on executed statements for a single request.
MAX_STEPS = 100_000


class RunRequest(BaseModel):
    """Request body for program execution."""
    source: List[str]
    input: List[str] = []
    max_steps: Optional[int] = Field(default=None, ge=1)
    seed: Optional[int] = None


class RunResponse(BaseModel):
    """Response body for program execution."""
    success: bool
    output: List[str] = []
    variables: Dict[str, Union[int, float]] = {}
    steps: int = 0
    execution_time_ms: float
    error: Optional[str] = None
    error_line: Optional[int] = None


@router.post("/run", response_model=RunResponse)
async def run_program(request: RunRequest):
    """Load numbered source lines and run them."""
    start_time = time.time()

    max_steps = min(request.max_steps or MAX_STEPS, MAX_STEPS)
    console = BufferedConsole(request.input)
    interpreter = Interpreter(
        console=console,
        config=ExecutionConfig(max_steps=max_steps, input_prompt="", random_seed=request.seed),
    )

    try:
        interpreter.load_source(request.source)
    except BasicError as e:
        return RunResponse(
            success=False,
            execution_time_ms=(time.time() - start_time) * 1000,
            error=str(e),
            error_line=e.line_number,
        )

    result = interpreter.execute_program()

    return RunResponse(
        success=result.success,
        output=console.lines,
        variables=result.variables,
        steps=result.steps,
        execution_time_ms=(time.time() - start_time) * 1000,
        error=str(result.error) if result.error else None,
        error_line=result.error.line_number if result.error else None,
    )
