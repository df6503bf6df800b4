"""Brent's method."""

from __future__ import annotations

from typing import Optional

from .base import QL_EPSILON, Func, Solver1D, SolverState, sign_of


class Brent(Solver1D):
    """Inverse quadratic interpolation with secant and bisection fallbacks.

    The guess is not used: iteration starts from the upper end of the bracket.
    Convergence is declared on the bracket width (``accuracy`` in x).
    """

    name = "BRENT"

    def _solve_impl(
        self, f: Func, accuracy: float, state: SolverState, derivative: Optional[Func]
    ) -> float:
        x_min, x_max = state.x_min, state.x_max
        fx_min, fx_max = state.fx_min, state.fx_max
        d = e = 0.0

        root = x_max
        froot = fx_max
        while state.evaluations <= state.max_evaluations:
            if (froot > 0.0 and fx_max > 0.0) or (froot < 0.0 and fx_max < 0.0):
                # rename x_min, root, x_max and adjust bounds
                x_max, fx_max = x_min, fx_min
                e = d = root - x_min
            if abs(fx_max) < abs(froot):
                x_min, root, x_max = root, x_max, root
                fx_min, froot, fx_max = froot, fx_max, froot

            x_acc1 = 2.0 * QL_EPSILON * abs(root) + 0.5 * accuracy
            x_mid = (x_max - root) / 2.0
            if abs(x_mid) <= x_acc1 or froot == 0.0:
                f(root)
                state.evaluations += 1
                state.root = root
                return root

            if abs(e) >= x_acc1 and abs(fx_min) > abs(froot):
                s = froot / fx_min
                if x_min == x_max:
                    p = 2.0 * x_mid * s
                    q = 1.0 - s
                else:
                    q = fx_min / fx_max
                    r = froot / fx_max
                    p = s * (2.0 * x_mid * q * (q - r) - (root - x_min) * (r - 1.0))
                    q = (q - 1.0) * (r - 1.0) * (s - 1.0)
                if p > 0.0:
                    q = -q
                p = abs(p)
                min1 = 3.0 * x_mid * q - abs(x_acc1 * q)
                min2 = abs(e * q)
                if 2.0 * p < min(min1, min2):
                    # accept interpolation
                    e = d
                    d = p / q
                else:
                    d = x_mid
                    e = d
            else:
                # bounds decreasing too slowly
                d = x_mid
                e = d

            x_min, fx_min = root, froot
            if abs(d) > x_acc1:
                root += d
            else:
                root += sign_of(x_acc1, x_mid)
            froot = f(root)
            state.evaluations += 1
            state.root = root

        raise self._fail(state, froot)
