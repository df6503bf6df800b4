"""
Time grids.

Times are year fractions from the reference date. A grid always starts at 0.0
and contains every *mandatory* time verbatim; the intervals between mandatory
times are split into (roughly) equal steps no longer than ``last / steps``.
"""

from __future__ import annotations

import sys
from typing import Iterable, Iterator, List, Optional

import numpy as np

from curvelib.errors import ValidationError

_EPS = sys.float_info.epsilon


def close_enough(x: float, y: float, n: int = 42) -> bool:
    """Relative float comparison (true if either side is within n ulps-ish)."""
    if x == y:
        return True
    diff = abs(x - y)
    tolerance = n * _EPS
    return diff <= tolerance * abs(x) or diff <= tolerance * abs(y)


def _unique_sorted(times: Iterable[float]) -> List[float]:
    ordered = sorted(float(t) for t in times)
    unique: List[float] = []
    for t in ordered:
        if not unique or not close_enough(unique[-1], t):
            unique.append(t)
    return unique


class TimeGrid:
    """
    Time grid with optional mandatory points.

    Parameters
    ----------
    end : float
        Horizon in years, for the regular grid constructor.
    steps : int
        Number of steps of the regular grid.
    """

    def __init__(self, end: float, steps: int):
        if end <= 0.0:
            raise ValidationError(f"TimeGrid: end must be > 0, got {end}")
        if steps <= 0:
            raise ValidationError(f"TimeGrid: steps must be > 0, got {steps}")
        dt = end / steps
        self._times = np.array([dt * i for i in range(steps + 1)], dtype=float)
        self._times[-1] = end
        self._mandatory = [float(end)]

    @classmethod
    def from_mandatory_times(cls, times: Iterable[float], steps: Optional[int] = None) -> "TimeGrid":
        """
        Build a grid that contains every mandatory time.

        With ``steps`` omitted (or 0), the grid is 0.0 followed by the mandatory
        times themselves when ``steps`` is None, or refined down to the smallest
        mandatory spacing when ``steps`` is 0. Otherwise each interval between
        mandatory times is split into ``max(1, round(length / dt_max))`` equal
        steps, with ``dt_max = last / steps``.
        """
        mandatory = _unique_sorted(times)
        if not mandatory:
            raise ValidationError("TimeGrid: empty time sequence")
        if mandatory[0] < 0.0:
            raise ValidationError(f"TimeGrid: negative times not allowed ({mandatory[0]})")

        grid = cls.__new__(cls)
        grid._mandatory = mandatory

        if steps is None:
            points = ([0.0] if mandatory[0] > 0.0 else []) + mandatory
            grid._times = np.array(points, dtype=float)
            return grid

        last = mandatory[-1]
        if steps == 0:
            diffs = np.diff(np.array([0.0] + mandatory))
            diffs = diffs[diffs > 0.0]
            if diffs.size == 0:
                raise ValidationError("TimeGrid: cannot derive a step from a single zero time")
            dt_max = float(diffs.min())
        elif steps < 0:
            raise ValidationError(f"TimeGrid: steps must be >= 0, got {steps}")
        else:
            if last == 0.0:
                raise ValidationError("TimeGrid: last mandatory time must be > 0")
            dt_max = last / steps

        points = [0.0]
        period_begin = 0.0
        for period_end in mandatory:
            if period_end != 0.0:
                n_steps = max(int((period_end - period_begin) / dt_max + 0.5), 1)
                dt = (period_end - period_begin) / n_steps
                for n in range(1, n_steps):
                    points.append(period_begin + n * dt)
                points.append(period_end)
            period_begin = period_end

        grid._times = np.array(points, dtype=float)
        return grid

    # ------------------------------------------------------------------
    # Inspectors
    # ------------------------------------------------------------------
    @property
    def times(self) -> np.ndarray:
        return self._times.copy()

    @property
    def mandatory_times(self) -> List[float]:
        return list(self._mandatory)

    def dt(self, i: int) -> float:
        return float(self._times[i + 1] - self._times[i])

    def closest_index(self, t: float) -> int:
        size = len(self._times)
        result = int(np.searchsorted(self._times, t, side="left"))
        if result == 0:
            return 0
        if result == size:
            return size - 1
        dt1 = self._times[result] - t
        dt2 = t - self._times[result - 1]
        return result if dt1 < dt2 else result - 1

    def closest_time(self, t: float) -> float:
        return float(self._times[self.closest_index(t)])

    def index(self, t: float) -> int:
        """Index of ``t`` on the grid; raises if ``t`` is not a grid node."""
        i = self.closest_index(t)
        if close_enough(t, float(self._times[i])):
            return i
        if t < self._times[0]:
            raise ValidationError(
                f"using inadequate time grid: all nodes are later than the required time t = {t:.12f} "
                f"(earliest node is t1 = {self._times[0]:.12f})"
            )
        if t > self._times[-1]:
            raise ValidationError(
                f"using inadequate time grid: all nodes are earlier than the required time t = {t:.12f} "
                f"(latest node is t1 = {self._times[-1]:.12f})"
            )
        j = i if t > self._times[i] else i - 1
        raise ValidationError(
            f"using inadequate time grid: the nodes closest to the required time t = {t:.12f} "
            f"are t1 = {self._times[j]:.12f} and t2 = {self._times[j + 1]:.12f}"
        )

    def __len__(self) -> int:
        return len(self._times)

    def __getitem__(self, i: int) -> float:
        return float(self._times[i])

    def __iter__(self) -> Iterator[float]:
        return (float(t) for t in self._times)

    def __repr__(self) -> str:
        return f"TimeGrid(size={len(self)}, end={self._times[-1]:.6g})"
