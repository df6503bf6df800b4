"""
Piecewise constant (step) interpolation methods.
"""
import numpy as np

from .base import Interpolator


class BackwardFlatInterpolator(Interpolator):
    """Step function taking the value of the right node.

    On instantaneous forwards this is the usual "flat forward" curve: the
    rate applying on ``(x_i, x_{i+1}]`` is the one solved at ``x_{i+1}``.
    """

    required_points = 2

    def _calculate(self) -> None:
        dx = np.diff(self.x)
        self._primitives = self._cumulate(dx * self.y[1:])

    def _value(self, x: float) -> float:
        if x <= self.x[0]:
            return float(self.y[0])
        i = self._locate(x)
        if x == self.x[i]:
            return float(self.y[i])
        return float(self.y[i + 1])

    def _derivative(self, x: float) -> float:
        return 0.0

    def _primitive(self, x: float) -> float:
        i = self._locate(x)
        return float(self._primitives[i] + (x - self.x[i]) * self.y[i + 1])


class ForwardFlatInterpolator(Interpolator):
    """Step function taking the value of the left node."""

    def _calculate(self) -> None:
        dx = np.diff(self.x)
        self._primitives = self._cumulate(dx * self.y[:-1])

    def _value(self, x: float) -> float:
        if x >= self.x[-1]:
            return float(self.y[-1])
        return float(self.y[self._locate(x)])

    def _derivative(self, x: float) -> float:
        return 0.0

    def _primitive(self, x: float) -> float:
        i = self._locate(x)
        dx = x - self.x[i]
        if x >= self.x[-1]:
            return float(self._primitives[-1] + (x - self.x[-1]) * self.y[-1])
        return float(self._primitives[i] + dx * self.y[i])
