"""False-position (regula falsi) method."""

from __future__ import annotations

from typing import Optional

from .base import Func, Solver1D, SolverState


class FalsePosition(Solver1D):
    name = "FALSE_POSITION"

    def _solve_impl(
        self, f: Func, accuracy: float, state: SolverState, derivative: Optional[Func]
    ) -> float:
        # xl always sits on the negative side
        if state.fx_min < 0.0:
            xl, fl = state.x_min, state.fx_min
            xh, fh = state.x_max, state.fx_max
        else:
            xl, fl = state.x_max, state.fx_max
            xh, fh = state.x_min, state.fx_min

        froot = float("nan")
        while state.evaluations <= state.max_evaluations:
            root = xl + (xh - xl) * fl / (fl - fh)
            froot = f(root)
            state.evaluations += 1
            state.root = root
            if froot < 0.0:
                delta = xl - root
                xl, fl = root, froot
            else:
                delta = xh - root
                xh, fh = root, froot
            if abs(delta) < accuracy or froot == 0.0:
                f(root)
                state.evaluations += 1
                return root

        raise self._fail(state, froot)
