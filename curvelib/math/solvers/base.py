"""Shared contract of the one-dimensional solvers.

Every solver exposes two entry points:

* ``solve(f, accuracy, guess, step)`` searches outward from ``guess`` for a
  sign change, then refines the bracket it found;
* ``solve_in_bracket(f, accuracy, x_min, x_max, guess=None)`` refines an
  explicit bracket.

Concrete solvers only implement ``_solve_impl``, the update rule applied once
a bracket is known. The objective is a plain callable; derivative-based
solvers also take ``derivative=``.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Optional

from curvelib.errors import BracketingFailure, ConvergenceFailure, InvalidBracketError

logger = logging.getLogger(__name__)

Func = Callable[[float], float]

QL_EPSILON = sys.float_info.epsilon
GROWTH_FACTOR = 1.6
MAX_FUNCTION_EVALUATIONS = 100


@dataclass
class SolverState:
    """Bracket and bookkeeping for one solve call."""

    x_min: float
    x_max: float
    fx_min: float
    fx_max: float
    root: float
    evaluations: int
    max_evaluations: int

    def exhausted(self) -> bool:
        return self.evaluations > self.max_evaluations


def sign_of(a: float, b: float) -> float:
    """Return ``|a|`` carrying the sign of ``b``."""
    return abs(a) if b >= 0.0 else -abs(a)


class Solver1D:
    """Base class holding the solver configuration."""

    name = "SOLVER1D"
    requires_derivative = False

    def __init__(
        self,
        max_evaluations: int = MAX_FUNCTION_EVALUATIONS,
        lower_bound: Optional[float] = None,
        upper_bound: Optional[float] = None,
    ):
        if max_evaluations < 2:
            raise ValueError(f"max_evaluations must be at least 2, got {max_evaluations}")
        self.max_evaluations = max_evaluations
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound

    def set_lower_bound(self, value: Optional[float]) -> None:
        self.lower_bound = value

    def set_upper_bound(self, value: Optional[float]) -> None:
        self.upper_bound = value

    def _enforce_bounds(self, x: float) -> float:
        if self.lower_bound is not None and x < self.lower_bound:
            return self.lower_bound
        if self.upper_bound is not None and x > self.upper_bound:
            return self.upper_bound
        return x

    def _check_derivative(self, derivative: Optional[Func]) -> None:
        if self.requires_derivative and derivative is None:
            raise ValueError(f"{type(self).__name__} requires the function's derivative")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def solve(
        self,
        f: Func,
        accuracy: float,
        guess: float,
        step: float,
        derivative: Optional[Func] = None,
    ) -> float:
        """Bracket a root starting from ``guess`` and refine it.

        Raises:
            BracketingFailure: no sign change within ``max_evaluations``.
            ConvergenceFailure: the refinement ran out of evaluations.
        """
        self._check_derivative(derivative)
        accuracy = max(accuracy, QL_EPSILON)

        root = guess
        fx_max = f(root)
        if fx_max == 0.0:
            return root
        if fx_max > 0.0:
            x_min = self._enforce_bounds(root - step)
            fx_min = f(x_min)
            x_max = root
        else:
            x_min = root
            fx_min = fx_max
            x_max = self._enforce_bounds(root + step)
            fx_max = f(x_max)

        evaluations = 2
        flipflop = -1
        while evaluations <= self.max_evaluations:
            if fx_min * fx_max <= 0.0:
                if fx_min == 0.0:
                    return x_min
                if fx_max == 0.0:
                    return x_max
                state = SolverState(
                    x_min, x_max, fx_min, fx_max, (x_min + x_max) / 2.0,
                    evaluations, self.max_evaluations,
                )
                return self._finish(f, accuracy, state, derivative)
            if abs(fx_min) < abs(fx_max):
                expand_lower = True
            elif abs(fx_min) > abs(fx_max):
                expand_lower = False
            else:
                # equal magnitudes: alternate sides
                expand_lower = flipflop == -1
                flipflop = -flipflop
            if expand_lower:
                x_min = self._enforce_bounds(x_min + GROWTH_FACTOR * (x_min - x_max))
                fx_min = f(x_min)
            else:
                x_max = self._enforce_bounds(x_max + GROWTH_FACTOR * (x_max - x_min))
                fx_max = f(x_max)
            evaluations += 1

        raise BracketingFailure(
            f"unable to bracket root in {self.max_evaluations} function evaluations "
            f"(last bracket attempt: f[{x_min}, {x_max}] -> [{fx_min}, {fx_max}])",
            last_x=x_max if abs(fx_max) < abs(fx_min) else x_min,
            last_value=min(fx_min, fx_max, key=abs),
            evaluations=evaluations,
        )

    def solve_in_bracket(
        self,
        f: Func,
        accuracy: float,
        x_min: float,
        x_max: float,
        guess: Optional[float] = None,
        derivative: Optional[Func] = None,
    ) -> float:
        """Refine a root known to lie within ``[x_min, x_max]``.

        An endpoint whose value is already within ``accuracy`` of zero is
        returned as is.

        Raises:
            InvalidBracketError: empty range, bounds violated, or no sign change.
            ConvergenceFailure: the refinement ran out of evaluations.
        """
        self._check_derivative(derivative)
        accuracy = max(accuracy, QL_EPSILON)

        if not x_min < x_max:
            raise InvalidBracketError(f"invalid range: x_min ({x_min}) >= x_max ({x_max})")
        if self.lower_bound is not None and x_min < self.lower_bound:
            raise InvalidBracketError(
                f"x_min ({x_min}) < enforced lower bound ({self.lower_bound})"
            )
        if self.upper_bound is not None and x_max > self.upper_bound:
            raise InvalidBracketError(
                f"x_max ({x_max}) > enforced upper bound ({self.upper_bound})"
            )

        fx_min = f(x_min)
        if abs(fx_min) <= accuracy:
            return x_min
        fx_max = f(x_max)
        if abs(fx_max) <= accuracy:
            return x_max
        if fx_min * fx_max >= 0.0:
            raise InvalidBracketError(
                f"root not bracketed: f[{x_min}, {x_max}] -> [{fx_min}, {fx_max}]",
                last_x=x_max,
                last_value=fx_max,
                evaluations=2,
            )

        if guess is None:
            guess = (x_min + x_max) / 2.0
        if not x_min < guess < x_max:
            raise InvalidBracketError(
                f"guess ({guess}) outside the bracket [{x_min}, {x_max}]",
                last_x=guess,
                evaluations=2,
            )

        state = SolverState(x_min, x_max, fx_min, fx_max, guess, 2, self.max_evaluations)
        return self._finish(f, accuracy, state, derivative)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _finish(
        self, f: Func, accuracy: float, state: SolverState, derivative: Optional[Func]
    ) -> float:
        root = self._solve_impl(f, accuracy, state, derivative)
        logger.debug(
            "%s converged to %.16g after %d evaluations", self.name, root, state.evaluations
        )
        return root

    def _fail(self, state: SolverState, last_value: Optional[float] = None) -> ConvergenceFailure:
        return ConvergenceFailure(
            f"{self.name}: maximum number of function evaluations "
            f"({self.max_evaluations}) exceeded",
            last_x=state.root,
            last_value=last_value,
            evaluations=state.evaluations,
        )

    def _solve_impl(
        self, f: Func, accuracy: float, state: SolverState, derivative: Optional[Func]
    ) -> float:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_evaluations={self.max_evaluations})"
