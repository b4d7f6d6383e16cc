"""Validate endpoint for program source."""

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from linebasic.runtime.program import Program, check_source

router = APIRouter()


class ValidateRequest(BaseModel):
    """Request body for program validation."""
    source: List[str]


class ValidateResponse(BaseModel):
    """Response body for program validation."""
    valid: bool
    lines: List[str] = []
    errors: List[str] = []


@router.post("/validate", response_model=ValidateResponse)
async def validate_program(request: ValidateRequest):
    """Check every line of a program and return its canonical listing."""
    errors = check_source(request.source)
    if errors:
        return ValidateResponse(valid=False, errors=[str(e) for e in errors])

    program = Program()
    program.load_lines(request.source)
    return ValidateResponse(valid=True, lines=program.render())
