"""
Linear interpolation methods for yield curves.
"""
import math

import numpy as np

from curvelib.errors import ValidationError

from .base import Interpolator


class LinearInterpolator(Interpolator):
    """Linear interpolation between nodes.

    Used on discount factors, zero rates or forwards depending on the curve
    trait. Extrapolation extends the first or last segment.
    """

    def _calculate(self) -> None:
        dx = np.diff(self.x)
        self.slopes = np.diff(self.y) / dx
        self._primitives = self._cumulate(dx * (self.y[:-1] + 0.5 * dx * self.slopes))

    def _value(self, x: float) -> float:
        i = self._locate(x)
        return float(self.y[i] + (x - self.x[i]) * self.slopes[i])

    def _derivative(self, x: float) -> float:
        return float(self.slopes[self._locate(x)])

    def _primitive(self, x: float) -> float:
        i = self._locate(x)
        dx = x - self.x[i]
        return float(self._primitives[i] + dx * (self.y[i] + 0.5 * dx * self.slopes[i]))


class LogLinearInterpolator(Interpolator):
    """Linear interpolation on ``log y``.

    On discount factors this gives piecewise constant forwards. All values
    must be strictly positive.
    """

    def _calculate(self) -> None:
        if np.any(self.y <= 0.0):
            raise ValidationError("Log-linear interpolation needs positive values")
        dx = np.diff(self.x)
        self.log_y = np.log(self.y)
        self.slopes = np.diff(self.log_y) / dx
        self._primitives = self._cumulate(
            np.array([self._segment_integral(i, dx[i]) for i in range(self.size - 1)])
        )

    def _segment_integral(self, i: int, dx: float) -> float:
        s = self.slopes[i]
        if abs(s * dx) < 1.0e-12:
            return float(self.y[i] * dx * (1.0 + 0.5 * s * dx))
        return float(self.y[i] * math.expm1(s * dx) / s)

    def _value(self, x: float) -> float:
        i = self._locate(x)
        return math.exp(self.log_y[i] + (x - self.x[i]) * self.slopes[i])

    def _derivative(self, x: float) -> float:
        return self._value(x) * float(self.slopes[self._locate(x)])

    def _primitive(self, x: float) -> float:
        i = self._locate(x)
        return float(self._primitives[i]) + self._segment_integral(i, x - self.x[i])
