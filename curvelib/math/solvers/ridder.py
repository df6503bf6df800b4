"""Ridder's method."""

from __future__ import annotations

import math
from typing import Optional

from .base import Func, Solver1D, SolverState, sign_of


class Ridder(Solver1D):
    """Midpoint evaluation followed by an exponential correction.

    Ridder tends to deliver far less accuracy than its x-step suggests, so the
    internal tolerance is tightened by a factor of 100.
    """

    name = "RIDDER"

    def _solve_impl(
        self, f: Func, accuracy: float, state: SolverState, derivative: Optional[Func]
    ) -> float:
        x_accuracy = accuracy / 100.0
        x_min, x_max = state.x_min, state.x_max
        fx_min, fx_max = state.fx_min, state.fx_max

        root = None
        froot = float("nan")
        while state.evaluations <= state.max_evaluations:
            x_mid = 0.5 * (x_min + x_max)
            fx_mid = f(x_mid)
            state.evaluations += 1
            s = math.sqrt(fx_mid * fx_mid - fx_min * fx_max)
            if s == 0.0:
                root = x_mid if root is None else root
                state.root = root
                f(root)
                state.evaluations += 1
                return root

            direction = 1.0 if fx_min >= fx_max else -1.0
            next_root = x_mid + (x_mid - x_min) * (direction * fx_mid / s)
            if root is not None and abs(next_root - root) <= x_accuracy:
                f(root)
                state.evaluations += 1
                return root

            root = next_root
            state.root = root
            froot = f(root)
            state.evaluations += 1
            if froot == 0.0:
                return root

            # keep the root bracketed
            if sign_of(fx_mid, froot) != fx_mid:
                x_min, fx_min = x_mid, fx_mid
                x_max, fx_max = root, froot
            elif sign_of(fx_min, froot) != fx_min:
                x_max, fx_max = root, froot
            elif sign_of(fx_max, froot) != fx_max:
                x_min, fx_min = root, froot
            else:
                raise self._fail(state, froot)

            if abs(x_max - x_min) <= x_accuracy:
                f(root)
                state.evaluations += 1
                return root

        raise self._fail(state, froot)
