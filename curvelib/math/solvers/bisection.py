"""Bisection."""

from __future__ import annotations

from typing import Optional

from .base import Func, Solver1D, SolverState


class Bisection(Solver1D):
    name = "BISECTION"

    def _solve_impl(
        self, f: Func, accuracy: float, state: SolverState, derivative: Optional[Func]
    ) -> float:
        # orient the search so that f > 0 lies at root + dx
        if state.fx_min < 0.0:
            dx = state.x_max - state.x_min
            root = state.x_min
        else:
            dx = state.x_min - state.x_max
            root = state.x_max

        f_mid = float("nan")
        while state.evaluations <= state.max_evaluations:
            dx /= 2.0
            x_mid = root + dx
            f_mid = f(x_mid)
            state.evaluations += 1
            if f_mid <= 0.0:
                root = x_mid
            state.root = root
            if abs(dx) < accuracy or f_mid == 0.0:
                f(root)
                state.evaluations += 1
                return root

        raise self._fail(state, f_mid)
