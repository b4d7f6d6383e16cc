"""
linebasic Expression Evaluator

Reduces an expression tree to a Number given a variable environment.

Evaluates expression kinds:
- NumericLiteral: its value
- Variable: environment lookup
- BinaryOp: both operands, then Integer/Float arithmetic
- Call: built-in function from the FunctionRegistry
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from linebasic.errors import BasicRuntimeError
from linebasic.language.expression import (
    BinaryOp,
    Call,
    Expression,
    NumericLiteral,
    StringLiteral,
    Variable,
)
from linebasic.language.values import Float, Number
from linebasic.runtime.environment import Environment


@dataclass(frozen=True)
class Function:
    """A built-in function with a fixed number of arguments."""
    name: str
    arity: int
    impl: Callable[..., Number]


class FunctionRegistry:
    """
    Registry of built-in functions, looked up by name.

    Defaults:
    - RND(): uniformly distributed Float in [0, 1)
    - INT(x): truncate a Float toward zero; Integers pass through
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.functions: Dict[str, Function] = {}
        self.register("RND", 0, lambda: Float(self.rng.random()))
        self.register("INT", 1, lambda x: x.truncate())

    def register(self, name: str, arity: int, impl: Callable[..., Number]) -> None:
        """Register (or replace) a function."""
        self.functions[name] = Function(name, arity, impl)

    def call(self, name: str, args: List[Number]) -> Number:
        function = self.functions.get(name)
        if function is None:
            raise BasicRuntimeError.unknown_function(name)
        if len(args) != function.arity:
            raise BasicRuntimeError.arity_error(name, function.arity, len(args))
        return function.impl(*args)


class ExpressionEvaluator:
    """Evaluates expression trees. Reads, but never writes, the environment."""

    def __init__(self, functions: Optional[FunctionRegistry] = None):
        self.functions = functions or FunctionRegistry()

    def evaluate(self, expr: Expression, env: Environment) -> Number:
        if isinstance(expr, NumericLiteral):
            return expr.value
        elif isinstance(expr, Variable):
            return env.get(expr.name)
        elif isinstance(expr, BinaryOp):
            # No short-circuiting: both sides are always evaluated.
            left = self.evaluate(expr.left, env)
            right = self.evaluate(expr.right, env)
            return expr.op.apply(left, right)
        elif isinstance(expr, Call):
            args = [self.evaluate(arg, env) for arg in expr.args]
            return self.functions.call(expr.name, args)
        elif isinstance(expr, StringLiteral):
            raise BasicRuntimeError.type_error("Can't use a string in a numeric expression")
        else:
            raise BasicRuntimeError(f"Unknown expression kind: {type(expr).__name__}")
