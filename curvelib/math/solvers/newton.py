"""Newton-Raphson solvers."""

from __future__ import annotations

import logging
from typing import Optional

from .base import Func, Solver1D, SolverState

logger = logging.getLogger(__name__)


class NewtonSafe(Solver1D):
    """Newton steps safeguarded by bisection.

    A bisection step is taken whenever the Newton step would land outside the
    current bracket or would not shrink the interval fast enough.
    """

    name = "NEWTON_SAFE"
    requires_derivative = True

    def _solve_impl(
        self, f: Func, accuracy: float, state: SolverState, derivative: Optional[Func]
    ) -> float:
        # orient the search so that f(xl) < 0
        if state.fx_min < 0.0:
            xl, xh = state.x_min, state.x_max
        else:
            xh, xl = state.x_min, state.x_max

        dx_old = state.x_max - state.x_min
        dx = dx_old
        root = state.root
        froot = f(root)
        dfroot = derivative(root)
        state.evaluations += 1

        while state.evaluations <= state.max_evaluations:
            out_of_range = ((root - xh) * dfroot - froot) * ((root - xl) * dfroot - froot) > 0.0
            too_slow = abs(2.0 * froot) > abs(dx_old * dfroot)
            if out_of_range or too_slow:
                dx_old = dx
                dx = (xh - xl) / 2.0
                root = xl + dx
            else:
                dx_old = dx
                dx = froot / dfroot
                root -= dx
            state.root = root
            if abs(dx) < accuracy:
                f(root)
                state.evaluations += 1
                return root
            froot = f(root)
            dfroot = derivative(root)
            state.evaluations += 1
            if froot < 0.0:
                xl = root
            else:
                xh = root

        raise self._fail(state, froot)


class Newton(Solver1D):
    """Plain Newton iteration.

    If a step jumps out of the bracket, the remaining evaluations are handed
    to ``NewtonSafe`` on the same bracket.
    """

    name = "NEWTON"
    requires_derivative = True

    def _solve_impl(
        self, f: Func, accuracy: float, state: SolverState, derivative: Optional[Func]
    ) -> float:
        root = state.root
        froot = f(root)
        dfroot = derivative(root)
        state.evaluations += 1

        while state.evaluations <= state.max_evaluations:
            if dfroot == 0.0:
                break
            dx = froot / dfroot
            root -= dx
            state.root = root
            if (state.x_min - root) * (root - state.x_max) < 0.0:
                logger.debug("Newton step left [%s, %s]; switching to NewtonSafe", state.x_min, state.x_max)
                return self._fall_back(f, accuracy, state, root + dx, derivative)
            if abs(dx) < accuracy:
                f(root)
                state.evaluations += 1
                return root
            froot = f(root)
            dfroot = derivative(root)
            state.evaluations += 1
        else:
            raise self._fail(state, froot)

        logger.debug("Zero derivative at %s; switching to NewtonSafe", root)
        return self._fall_back(f, accuracy, state, root, derivative)

    def _fall_back(
        self, f: Func, accuracy: float, state: SolverState, guess: float, derivative: Func
    ) -> float:
        remaining = max(self.max_evaluations - state.evaluations, 2)
        safe = NewtonSafe(max_evaluations=remaining)
        inner = SolverState(
            state.x_min, state.x_max, state.fx_min, state.fx_max,
            guess, 0, remaining,
        )
        try:
            return safe._solve_impl(f, accuracy, inner, derivative)
        finally:
            state.evaluations += inner.evaluations
            state.root = inner.root
