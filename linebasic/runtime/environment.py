"""
linebasic Runtime Environment

The variable environment maps single-letter names to Numbers. It is global to
an interpreter session: shared by every statement of a run, kept across
immediate commands and across RUN, and only emptied by CLEAR.

Key classes:
- Environment: variable name -> Number
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Union

from linebasic.errors import BasicRuntimeError
from linebasic.language.values import Number

logger = logging.getLogger(__name__)


class Environment:
    """
    Runtime environment mapping variable names to values.

    Passed explicitly to the evaluator and executor rather than held as
    ambient state.
    """

    def __init__(self, variables: Optional[Dict[str, Number]] = None):
        self.variables: Dict[str, Number] = dict(variables or {})

    def get(self, name: str) -> Number:
        """Get a variable, failing if it was never assigned."""
        try:
            return self.variables[name]
        except KeyError:
            raise BasicRuntimeError.unknown_variable(name) from None

    def set(self, name: str, value: Number) -> None:
        """Set a variable."""
        self.variables[name] = value

    def clear(self) -> None:
        """Forget every variable."""
        logger.debug("Clearing %d variables", len(self.variables))
        self.variables.clear()

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __len__(self) -> int:
        return len(self.variables)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.variables))

    def snapshot(self) -> Dict[str, Union[int, float]]:
        """Create a plain-number snapshot of the environment."""
        return {name: self.variables[name].value for name in sorted(self.variables)}

    def restore(self, snapshot: Dict[str, Union[int, float]]) -> None:
        """Restore the environment from a snapshot."""
        self.variables = {name: Number.of(value) for name, value in snapshot.items()}
