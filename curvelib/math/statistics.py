"""One-pass weighted sample statistics.

Central moments are updated in place as samples arrive (weighted form of the
West/Pebay updates), so no raw power sums are kept and the results do not
suffer from the cancellation that plagues ``E[x^2] - E[x]^2``. The reported
estimators carry the usual small-sample corrections.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from curvelib.errors import ValidationError


class IncrementalStatistics:
    """Running mean, variance, skewness, kurtosis, extrema and downside risk."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._samples = 0
        self._weight_sum = 0.0
        self._mean = 0.0
        self._m2 = 0.0
        self._m3 = 0.0
        self._m4 = 0.0
        self._min = math.inf
        self._max = -math.inf
        self._downside_samples = 0
        self._downside_weight_sum = 0.0
        self._downside_quadratic_sum = 0.0

    # ------------------------------------------------------------------
    # Accumulation
    # ------------------------------------------------------------------
    def add(self, value: float, weight: float = 1.0) -> None:
        if weight < 0.0:
            raise ValidationError(f"negative weight ({weight}) not allowed")
        value = float(value)
        weight = float(weight)

        self._samples += 1
        self._min = min(self._min, value)
        self._max = max(self._max, value)
        if value < 0.0:
            self._downside_samples += 1
            self._downside_weight_sum += weight
            self._downside_quadratic_sum += weight * value * value

        if weight == 0.0:
            return

        w_a = self._weight_sum
        w = w_a + weight
        delta = value - self._mean
        delta_w = delta * weight / w
        delta_w2 = delta_w * delta_w
        term = delta * delta_w * w_a

        self._m4 += (
            term * delta_w2 * (w_a * w_a - w_a * weight + weight * weight) / (weight * weight)
            + 6.0 * delta_w2 * self._m2
            - 4.0 * delta_w * self._m3
        )
        self._m3 += term * delta_w * (w_a - weight) / weight - 3.0 * delta_w * self._m2
        self._m2 += term
        self._mean += delta_w
        self._weight_sum = w

    def add_sequence(self, values: Iterable[float], weights: Optional[Iterable[float]] = None) -> None:
        if weights is None:
            for value in values:
                self.add(value)
            return
        values = list(values)
        weights = list(weights)
        if len(values) != len(weights):
            raise ValidationError(
                f"values and weights must have the same length ({len(values)} vs {len(weights)})"
            )
        for value, weight in zip(values, weights):
            self.add(value, weight)

    # ------------------------------------------------------------------
    # Inspectors
    # ------------------------------------------------------------------
    @property
    def samples(self) -> int:
        return self._samples

    @property
    def weight_sum(self) -> float:
        return self._weight_sum

    def mean(self) -> float:
        if self._weight_sum <= 0.0:
            raise ValidationError("sum of weights is zero: not enough samples")
        return self._mean

    def variance(self) -> float:
        if self._weight_sum <= 0.0:
            raise ValidationError("sum of weights is zero: not enough samples")
        n = self._samples
        if n <= 1:
            raise ValidationError(f"sample number ({n}) too small for variance")
        return (n / (n - 1.0)) * self._m2 / self._weight_sum

    def standard_deviation(self) -> float:
        return math.sqrt(self.variance())

    def error_estimate(self) -> float:
        return math.sqrt(self.variance() / self._samples)

    def skewness(self) -> float:
        n = self._samples
        if n <= 2:
            raise ValidationError(f"sample number ({n}) too small for skewness")
        s = self.standard_deviation()
        if s == 0.0:
            return 0.0
        result = (self._m3 / self._weight_sum) / (s * s * s)
        return result * (n / (n - 1.0)) * (n / (n - 2.0))

    def kurtosis(self) -> float:
        """Excess kurtosis."""
        n = self._samples
        if n <= 3:
            raise ValidationError(f"sample number ({n}) too small for kurtosis")
        v = self.variance()
        if v == 0.0:
            return 0.0
        result = (self._m4 / self._weight_sum) / (v * v)
        result *= (n / (n - 1.0)) * (n / (n - 2.0)) * ((n + 1.0) / (n - 3.0))
        c = 3.0 * (n - 1.0) / (n - 2.0) * (n - 1.0) / (n - 3.0)
        return result - c

    def min(self) -> float:
        if self._samples == 0:
            raise ValidationError("empty sample set")
        return self._min

    def max(self) -> float:
        if self._samples == 0:
            raise ValidationError("empty sample set")
        return self._max

    def downside_variance(self) -> float:
        if self._downside_weight_sum == 0.0:
            return 0.0
        n = self._downside_samples
        if n <= 1:
            raise ValidationError("sample number below zero too small")
        return (n / (n - 1.0)) * self._downside_quadratic_sum / self._downside_weight_sum

    def downside_deviation(self) -> float:
        return math.sqrt(self.downside_variance())

    def __repr__(self) -> str:
        return f"IncrementalStatistics(samples={self._samples}, weight_sum={self._weight_sum:.6g})"
