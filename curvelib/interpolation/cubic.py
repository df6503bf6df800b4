"""
Natural cubic spline interpolation.
"""
import numpy as np

from .base import Interpolator


class CubicSplineInterpolator(Interpolator):
    """Natural cubic spline (zero second derivative at both ends).

    Every coefficient depends on every node, so the scheme is global: curves
    using it need repeated bootstrap passes until the nodes settle.
    Extrapolation extends the cubic of the end segment.
    """

    is_global = True

    def _calculate(self) -> None:
        n = self.size
        h = np.diff(self.x)
        second = np.zeros(n)
        if n > 2:
            # Tridiagonal system for interior second derivatives.
            system = np.zeros((n - 2, n - 2))
            rhs = np.zeros(n - 2)
            for k in range(n - 2):
                system[k, k] = 2.0 * (h[k] + h[k + 1])
                if k > 0:
                    system[k, k - 1] = h[k]
                if k < n - 3:
                    system[k, k + 1] = h[k + 1]
                rhs[k] = 6.0 * (
                    (self.y[k + 2] - self.y[k + 1]) / h[k + 1] - (self.y[k + 1] - self.y[k]) / h[k]
                )
            second[1:-1] = np.linalg.solve(system, rhs)

        self.a = self.y[:-1].copy()
        self.b = np.diff(self.y) / h - h * (2.0 * second[:-1] + second[1:]) / 6.0
        self.c = second[:-1] / 2.0
        self.d = np.diff(second) / (6.0 * h)
        self._primitives = self._cumulate(
            np.array([self._segment_integral(i, h[i]) for i in range(n - 1)])
        )

    def _segment_integral(self, i: int, dx: float) -> float:
        return float(
            dx * (self.a[i] + dx * (self.b[i] / 2.0 + dx * (self.c[i] / 3.0 + dx * self.d[i] / 4.0)))
        )

    def _value(self, x: float) -> float:
        i = self._locate(x)
        dx = x - self.x[i]
        return float(self.a[i] + dx * (self.b[i] + dx * (self.c[i] + dx * self.d[i])))

    def _derivative(self, x: float) -> float:
        i = self._locate(x)
        dx = x - self.x[i]
        return float(self.b[i] + dx * (2.0 * self.c[i] + 3.0 * dx * self.d[i]))

    def second_derivative(self, x: float) -> float:
        i = self._locate(x)
        return float(2.0 * self.c[i] + 6.0 * (x - self.x[i]) * self.d[i])

    def _primitive(self, x: float) -> float:
        i = self._locate(x)
        return float(self._primitives[i]) + self._segment_integral(i, x - self.x[i])
