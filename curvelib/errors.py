"""Exception hierarchy shared by the curve construction stack.

Validation problems are raised eagerly when objects are built. Solver and
bootstrap failures carry enough state to diagnose the offending point or
helper, and are re-raised with added context rather than swallowed.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class CurvelibError(Exception):
    """Base class for all library errors."""


class ValidationError(CurvelibError, ValueError):
    """Raised when inputs are malformed (empty sets, unsorted pillars, bad quotes...)."""


class ExtrapolationError(CurvelibError, ValueError):
    """Raised when a query falls outside a curve domain with extrapolation disabled."""

    def __init__(self, message: str, time: Optional[float] = None, max_time: Optional[float] = None):
        super().__init__(message)
        self.time = time
        self.max_time = max_time


class SolverError(CurvelibError, RuntimeError):
    """Base for one-dimensional solver failures."""

    def __init__(
        self,
        message: str,
        *,
        last_x: Optional[float] = None,
        last_value: Optional[float] = None,
        evaluations: int = 0,
    ):
        super().__init__(message)
        self.last_x = last_x
        self.last_value = last_value
        self.evaluations = evaluations


class BracketingFailure(SolverError):
    """Raised when the outward search finds no sign change."""


class InvalidBracketError(SolverError, ValueError):
    """Raised when an explicit bracket does not enclose a root."""


class ConvergenceFailure(SolverError):
    """Raised when the evaluation budget is exhausted before convergence."""


class BootstrapError(CurvelibError, RuntimeError):
    """Raised when a curve pillar cannot be solved."""

    def __init__(
        self,
        message: str,
        *,
        helper_index: Optional[int] = None,
        helper: Any = None,
        pass_number: Optional[int] = None,
    ):
        super().__init__(message)
        self.helper_index = helper_index
        self.helper = helper
        self.pass_number = pass_number


class BootstrapNonConvergence(BootstrapError):
    """Raised when global bootstrap passes do not settle within the pass limit."""

    def __init__(
        self,
        message: str,
        *,
        curve_name: str = "",
        improvement: float = float("nan"),
        worst_helpers: Sequence[Any] = (),
        pass_number: Optional[int] = None,
    ):
        super().__init__(message, pass_number=pass_number)
        self.curve_name = curve_name
        self.improvement = improvement
        self.worst_helpers = list(worst_helpers)


__all__ = [
    "CurvelibError",
    "ValidationError",
    "ExtrapolationError",
    "SolverError",
    "BracketingFailure",
    "InvalidBracketError",
    "ConvergenceFailure",
    "BootstrapError",
    "BootstrapNonConvergence",
]
