"""
Piecewise yield curve bootstrapped on rate helpers.

The curve stores one node per helper pillar plus the reference date. What a
node means is decided by the trait (discount factor, zero yield or
instantaneous forward) and how nodes are joined by the interpolation.
Nodes are solved lazily on the first query after any input changes.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple, Union

import pandas as pd

from curvelib.context import EvaluationContext
from curvelib.conventions.calendars import Calendar
from curvelib.conventions.daycount import ACT_365F, DayCountConvention
from curvelib.errors import ValidationError
from curvelib.interpolation.base import Interpolator
from curvelib.interpolation.factory import Interpolation, Linear, get_interpolation

from .base import YieldTermStructure
from .bootstrap import BootstrapConfig, IterativeBootstrap
from .ratehelpers.base import RateHelper
from .traits import BootstrapTrait, ZeroYield, get_trait

logger = logging.getLogger(__name__)


class PiecewiseYieldCurve(YieldTermStructure):
    """Yield curve whose nodes reprice a set of rate helpers.

    Example:
        >>> ctx = EvaluationContext(date(2024, 1, 2))
        >>> helpers = [DepositRateHelper(0.04, "3M", 2, TARGET, MF, False, ACT_360, context=ctx)]
        >>> curve = PiecewiseYieldCurve(date(2024, 1, 4), helpers, trait=Discount())
        >>> curve.discount(date(2024, 4, 4))
    """

    def __init__(
        self,
        reference_date: Optional[Union[date, datetime]],
        helpers: Sequence[RateHelper],
        day_count: Union[DayCountConvention, str] = ACT_365F,
        trait: Union[BootstrapTrait, str, None] = None,
        interpolation: Union[Interpolation, str, None] = None,
        config: Optional[BootstrapConfig] = None,
        context: Optional[EvaluationContext] = None,
        name: str = "",
        settlement_days: Optional[int] = None,
        calendar: Union[Calendar, str, None] = None,
    ):
        """
        Initialize piecewise curve.

        Args:
            reference_date: Fixed reference date, or None for a curve that
                floats ``settlement_days`` after the context's date
            helpers: Instruments to reprice, in any order
            day_count: Day count turning dates into curve times
            trait: Node quantity; defaults to zero yields
            interpolation: Node interpolation; defaults to linear
            config: Bootstrap settings
            context: Evaluation context, needed for a floating reference
            name: Label used in logs and errors
            settlement_days: Business days from today to the reference date
            calendar: Calendar for the settlement lag

        Raises:
            ValidationError: No helpers, fewer helpers than the
                interpolation needs, or two helpers sharing a pillar
        """
        self.config = config or BootstrapConfig()
        super().__init__(
            reference_date,
            day_count,
            calendar,
            settlement_days,
            context,
            allow_extrapolation=self.config.allow_extrapolation,
        )
        self.name = name
        self.trait: BootstrapTrait = get_trait(trait) if trait is not None else ZeroYield()
        self.interpolation: Interpolation = (
            get_interpolation(interpolation) if interpolation is not None else Linear()
        )
        self.helpers: List[RateHelper] = list(helpers)
        self._bootstrap = IterativeBootstrap(self.config)

        if not self.helpers:
            raise ValidationError("no bootstrap helpers given")
        if len(self.helpers) + 1 < self.interpolation.required_points:
            raise ValidationError(
                f"not enough bootstrap helpers: {len(self.helpers)} provided, "
                f"{self.interpolation.required_points - 1} required"
            )
        pillars = sorted(self._bootstrap.pillar_of(h) for h in self.helpers)
        for previous, current in zip(pillars, pillars[1:]):
            if previous == current:
                raise ValidationError(f"two helpers have the same pillar ({current})")

        for helper in self.helpers:
            self.register_with(helper)

        self._dates: Optional[List[date]] = None
        self._times: Optional[List[float]] = None
        self._data: Optional[List[float]] = None
        self._interpolation: Optional[Interpolator] = None
        self._max_date: Optional[date] = None
        self.passes = 0

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------
    def perform_calculations(self) -> None:
        snapshot = (
            self._dates,
            self._times,
            self._data,
            self._interpolation,
            self._max_date,
        )
        try:
            self.passes = self._bootstrap.calculate(self)
        except Exception:
            logger.error(
                "Bootstrap of %s failed; keeping the last solved nodes",
                self.name or type(self).__name__,
            )
            (
                self._dates,
                self._times,
                self._data,
                self._interpolation,
                self._max_date,
            ) = snapshot
            raise

    # ------------------------------------------------------------------
    # Curve interface
    # ------------------------------------------------------------------
    @property
    def max_date(self) -> date:
        self.calculate()
        return self._max_date

    def discount_impl(self, t: float) -> float:
        return self.trait.discount_impl(self._interpolation, t)

    def zero_yield_impl(self, t: float) -> float:
        return self.trait.zero_yield_impl(self._interpolation, t)

    def forward_impl(self, t: float) -> float:
        return self.trait.forward_impl(self._interpolation, t)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    def dates(self) -> List[date]:
        self.calculate()
        return list(self._dates)

    def times(self) -> List[float]:
        self.calculate()
        return list(self._times)

    def data(self) -> List[float]:
        self.calculate()
        return list(self._data)

    def nodes(self) -> List[Tuple[date, float]]:
        self.calculate()
        return list(zip(self._dates, self._data))

    def to_frame(self) -> pd.DataFrame:
        """Nodes as a DataFrame with discount factors and zero rates."""
        self.calculate()
        rows = []
        for d, t, value in zip(self._dates, self._times, self._data):
            discount = self.discount_impl(t)
            rows.append(
                {
                    "date": d,
                    "time": t,
                    "value": value,
                    "discount": discount,
                    "zero_rate": self.zero_yield_impl(t) if t > 0.0 else float("nan"),
                }
            )
        return pd.DataFrame(rows, columns=["date", "time", "value", "discount", "zero_rate"])

    def __repr__(self) -> str:
        label = self.name or type(self).__name__
        return (
            f"PiecewiseYieldCurve({label}, {type(self.trait).__name__}/"
            f"{type(self.interpolation).__name__}, {len(self.helpers)} helpers)"
        )
