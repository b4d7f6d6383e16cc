# linebasic error types
# Error domain for parsing and program execution errors

from __future__ import annotations

from enum import Enum
from typing import Optional


#==============================================================================
# Error Codes
#==============================================================================

class ErrorCode(str, Enum):
    """Error code constants for linebasic errors"""

    # Error kinds
    SYNTAX_ERROR = "SyntaxError"
    RUNTIME_ERROR = "RuntimeError"

    # Lookup errors
    UNKNOWN_VARIABLE = "UnknownVariable"
    UNKNOWN_LINE = "UnknownLine"
    UNKNOWN_FUNCTION = "UnknownFunction"

    # Control stack errors
    RETURN_WITHOUT_GOSUB = "ReturnWithoutGosub"
    NEXT_WITHOUT_FOR = "NextWithoutFor"
    NEXT_MISMATCH = "NextMismatch"
    STEP_ZERO = "StepZero"

    # Value errors
    TYPE_ERROR = "TypeError"
    ARITY_ERROR = "ArityError"
    DIVIDE_BY_ZERO = "DivideByZero"
    OVERFLOW = "Overflow"
    INPUT_ERROR = "InputError"

    # Host errors
    INVALID_IN_IMMEDIATE_MODE = "InvalidInImmediateMode"
    INVALID_IN_PROGRAM = "InvalidInProgram"
    STEP_LIMIT = "StepLimit"
    IO_ERROR = "IOError"


#==============================================================================
# Error Classes
#==============================================================================

class BasicError(Exception):
    """Base exception class for all linebasic errors"""

    kind = "Basic"

    def __init__(self, message: str, code: ErrorCode = ErrorCode.RUNTIME_ERROR,
                 line_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.line_number = line_number

    def __str__(self) -> str:
        text = f"{self.kind} error: {self.message}"
        if self.line_number is not None:
            text += f" in line {self.line_number}"
        return text

    def at_line(self, line_number: int) -> "BasicError":
        """Annotate the error with the source line it was raised from.

        An error that already names a line keeps it.
        """
        if self.line_number is None:
            self.line_number = line_number
        return self

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "code": self.code.value,
            "message": self.message,
            "line_number": self.line_number,
        }


class BasicSyntaxError(BasicError):
    """Malformed source text, detected while parsing a line."""

    kind = "Syntax"

    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message, ErrorCode.SYNTAX_ERROR, line_number)


class BasicRuntimeError(BasicError):
    """A well-formed statement that failed while being evaluated or executed."""

    kind = "Runtime"

    def __init__(self, message: str, code: ErrorCode = ErrorCode.RUNTIME_ERROR,
                 line_number: Optional[int] = None):
        super().__init__(message, code, line_number)

    #---------------------------------------------------------------------------
    # Static factory methods for common errors
    #---------------------------------------------------------------------------

    @staticmethod
    def unknown_variable(name: str) -> "BasicRuntimeError":
        return BasicRuntimeError(f"Unknown variable {name}", ErrorCode.UNKNOWN_VARIABLE)

    @staticmethod
    def unknown_line() -> "BasicRuntimeError":
        # Reported against the jumping line, not the missing target.
        return BasicRuntimeError("Unknown line number", ErrorCode.UNKNOWN_LINE)

    @staticmethod
    def unknown_function(name: str) -> "BasicRuntimeError":
        return BasicRuntimeError(f"Unknown function {name}", ErrorCode.UNKNOWN_FUNCTION)

    @staticmethod
    def arity_error(name: str, expected: int, got: int) -> "BasicRuntimeError":
        return BasicRuntimeError(
            f"{name} expects {expected} argument{'s' if expected != 1 else ''}, got {got}",
            ErrorCode.ARITY_ERROR,
        )

    @staticmethod
    def type_error(message: str) -> "BasicRuntimeError":
        return BasicRuntimeError(message, ErrorCode.TYPE_ERROR)

    @staticmethod
    def divide_by_zero() -> "BasicRuntimeError":
        return BasicRuntimeError("Division by zero", ErrorCode.DIVIDE_BY_ZERO)

    @staticmethod
    def overflow() -> "BasicRuntimeError":
        return BasicRuntimeError("Numeric overflow", ErrorCode.OVERFLOW)

    @staticmethod
    def return_without_gosub() -> "BasicRuntimeError":
        return BasicRuntimeError("Return without gosub", ErrorCode.RETURN_WITHOUT_GOSUB)

    @staticmethod
    def next_without_for() -> "BasicRuntimeError":
        return BasicRuntimeError("Next without for", ErrorCode.NEXT_WITHOUT_FOR)

    @staticmethod
    def next_mismatch(expected: str, got: str) -> "BasicRuntimeError":
        return BasicRuntimeError(
            f"Next variable mismatch: expected {expected}, got {got}",
            ErrorCode.NEXT_MISMATCH,
        )

    @staticmethod
    def step_zero() -> "BasicRuntimeError":
        return BasicRuntimeError("Step cannot be zero", ErrorCode.STEP_ZERO)

    @staticmethod
    def invalid_in_immediate_mode(keyword: str) -> "BasicRuntimeError":
        return BasicRuntimeError(
            f"{keyword} is not valid in immediate mode",
            ErrorCode.INVALID_IN_IMMEDIATE_MODE,
        )

    @staticmethod
    def invalid_in_program(keyword: str) -> "BasicRuntimeError":
        return BasicRuntimeError(
            f"{keyword} is not valid inside a running program",
            ErrorCode.INVALID_IN_PROGRAM,
        )

    @staticmethod
    def step_limit(max_steps: int) -> "BasicRuntimeError":
        return BasicRuntimeError(f"Step limit of {max_steps} exceeded", ErrorCode.STEP_LIMIT)
