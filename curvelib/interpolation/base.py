"""
Base classes for curve interpolation methods.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from curvelib.errors import ExtrapolationError, ValidationError

# Relative slack when testing the domain boundaries.
RANGE_TOLERANCE = 1.0e-12


class Interpolator(ABC):
    """Base class for one-dimensional interpolation schemes.

    The interpolator keeps references to the caller's ``x`` and ``y``
    sequences. After mutating ``y`` in place (as the bootstrap does) call
    ``update()`` to refresh the cached coefficients.
    """

    is_global = False
    required_points = 2

    def __init__(self, x: Sequence[float], y: Sequence[float], size: Optional[int] = None):
        """
        Initialize interpolator.

        Args:
            x: Abscissae, strictly increasing (curve times in years)
            y: Values to interpolate (discount factors, zero rates, etc.)
            size: Use only the first ``size`` points (default: all)
        """
        self._x_ref = x
        self._y_ref = y
        self.size = len(x) if size is None else size
        if self.size > len(x) or self.size > len(y):
            raise ValidationError(
                f"size {self.size} exceeds the data ({len(x)} x, {len(y)} y values)"
            )
        if self.size < self.required_points:
            raise ValidationError(
                f"{type(self).__name__} needs at least {self.required_points} points, "
                f"{self.size} given"
            )
        self.x = np.asarray(x[: self.size], dtype=float)
        if np.any(np.diff(self.x) <= 0.0):
            raise ValidationError("Interpolation abscissae must be strictly increasing")
        self.update()

    def update(self) -> None:
        """Re-read ``y`` and recompute coefficients."""
        self.x = np.asarray(self._x_ref[: self.size], dtype=float)
        self.y = np.asarray(self._y_ref[: self.size], dtype=float)
        self._calculate()

    @abstractmethod
    def _calculate(self) -> None:
        """Rebuild scheme-specific coefficients from ``self.x``/``self.y``."""

    @property
    def x_min(self) -> float:
        return float(self.x[0])

    @property
    def x_max(self) -> float:
        return float(self.x[-1])

    def is_in_range(self, x: float) -> bool:
        span = max(abs(self.x_min), abs(self.x_max), 1.0)
        tol = RANGE_TOLERANCE * span
        return self.x_min - tol <= x <= self.x_max + tol

    def _check_range(self, x: float, allow_extrapolation: bool) -> None:
        if not allow_extrapolation and not self.is_in_range(x):
            raise ExtrapolationError(
                f"interpolation range is [{self.x_min}, {self.x_max}]: "
                f"extrapolation at {x} not allowed",
                time=x,
                max_time=self.x_max,
            )

    def _locate(self, x: float) -> int:
        """Index of the segment ``[x_i, x_{i+1}]`` used for ``x``."""
        if x < self.x[0]:
            return 0
        if x >= self.x[-1]:
            return self.size - 2
        return int(np.searchsorted(self.x, x, side="right")) - 1

    def value(self, x: float, allow_extrapolation: bool = False) -> float:
        self._check_range(x, allow_extrapolation)
        return self._value(x)

    def derivative(self, x: float, allow_extrapolation: bool = False) -> float:
        self._check_range(x, allow_extrapolation)
        return self._derivative(x)

    def primitive(self, x: float, allow_extrapolation: bool = False) -> float:
        """Integral of the interpolant from ``x_min`` to ``x``."""
        self._check_range(x, allow_extrapolation)
        return self._primitive(x)

    def __call__(self, x: float, allow_extrapolation: bool = False) -> float:
        return self.value(x, allow_extrapolation)

    @abstractmethod
    def _value(self, x: float) -> float:
        pass

    @abstractmethod
    def _derivative(self, x: float) -> float:
        pass

    @abstractmethod
    def _primitive(self, x: float) -> float:
        pass

    def _cumulate(self, segment_integrals: np.ndarray) -> np.ndarray:
        """Primitive at each node from per-segment integrals."""
        primitive = np.zeros(self.size)
        primitive[1:] = np.cumsum(segment_integrals)
        return primitive
