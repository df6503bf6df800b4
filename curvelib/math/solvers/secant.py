"""Secant method."""

from __future__ import annotations

from typing import Optional

from .base import Func, Solver1D, SolverState


class Secant(Solver1D):
    name = "SECANT"

    def _solve_impl(
        self, f: Func, accuracy: float, state: SolverState, derivative: Optional[Func]
    ) -> float:
        # start from the bound with the smaller function value
        if abs(state.fx_min) < abs(state.fx_max):
            root, froot = state.x_min, state.fx_min
            xl, fl = state.x_max, state.fx_max
        else:
            root, froot = state.x_max, state.fx_max
            xl, fl = state.x_min, state.fx_min

        while state.evaluations <= state.max_evaluations:
            dx = (xl - root) * froot / (froot - fl)
            xl, fl = root, froot
            root += dx
            froot = f(root)
            state.evaluations += 1
            state.root = root
            if abs(dx) < accuracy or froot == 0.0:
                f(root)
                state.evaluations += 1
                return root

        raise self._fail(state, froot)
