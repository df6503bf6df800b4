"""
Base yield term structure.

Concrete curves implement ``discount_impl(t)`` (and may override
``zero_yield_impl`` / ``forward_impl``); this class handles dates, range
checks, compounding conventions and the lazy recalculation hook.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional, Union

from curvelib.context import EvaluationContext
from curvelib.conventions.calendars import Calendar, get_calendar
from curvelib.conventions.daycount import ACT_365F, DayCountConvention, get_day_count_convention
from curvelib.conventions.types import Compounding, Frequency
from curvelib.errors import ExtrapolationError, ValidationError
from curvelib.patterns.lazy import LazyObject

from .interest_rate import implied_rate

DateOrTime = Union[date, datetime, float]

# Step used for instantaneous forwards and zero rates at t=0.
FORWARD_DT = 1.0e-4
# Relative slack when comparing a query time with the curve domain.
TIME_TOLERANCE = 1.0e-12


class YieldTermStructure(LazyObject):
    """Discount-factor curve anchored at a reference date.

    The reference date is either fixed or floats with the evaluation
    context: ``settlement_days`` business days after today on ``calendar``.
    A floating curve observes the context.
    """

    def __init__(
        self,
        reference_date: Optional[Union[date, datetime]] = None,
        day_count: Union[DayCountConvention, str] = ACT_365F,
        calendar: Union[Calendar, str, None] = None,
        settlement_days: Optional[int] = None,
        context: Optional[EvaluationContext] = None,
        allow_extrapolation: bool = False,
    ):
        super().__init__()
        if isinstance(reference_date, datetime):
            reference_date = reference_date.date()
        if reference_date is None:
            if settlement_days is None or calendar is None or context is None:
                raise ValidationError(
                    "either a reference date or settlement days, a calendar and a context are required"
                )
            if settlement_days < 0:
                raise ValidationError(f"negative settlement days ({settlement_days}) not allowed")
        self._fixed_reference = reference_date
        self.settlement_days = settlement_days
        self.calendar = get_calendar(calendar) if calendar is not None else None
        self.day_count = get_day_count_convention(day_count)
        self.context = context
        self.allow_extrapolation = allow_extrapolation
        if reference_date is None:
            self.register_with(context)

    # ------------------------------------------------------------------
    # Dates and times
    # ------------------------------------------------------------------
    @property
    def moving(self) -> bool:
        return self._fixed_reference is None

    @property
    def reference_date(self) -> date:
        if self._fixed_reference is not None:
            return self._fixed_reference
        return self.calendar.advance(self.context.evaluation_date, self.settlement_days)

    def time_from_reference(self, d: Union[date, datetime]) -> float:
        if isinstance(d, datetime):
            d = d.date()
        return self.day_count.year_fraction(self.reference_date, d)

    def _to_time(self, x: DateOrTime) -> float:
        if isinstance(x, (date, datetime)):
            return self.time_from_reference(x)
        return float(x)

    @property
    def max_date(self) -> date:
        raise NotImplementedError

    @property
    def max_time(self) -> float:
        return self.time_from_reference(self.max_date)

    def enable_extrapolation(self, flag: bool = True) -> None:
        self.allow_extrapolation = flag

    def check_range(self, t: float, extrapolate: bool = False) -> None:
        if t < 0.0:
            raise ValidationError(f"negative time ({t}) given")
        if extrapolate or self.allow_extrapolation:
            return
        max_time = self.max_time
        if t > max_time + TIME_TOLERANCE * max(1.0, max_time):
            raise ExtrapolationError(
                f"time ({t}) is past max curve time ({max_time})", time=t, max_time=max_time
            )

    # ------------------------------------------------------------------
    # Public queries
    # ------------------------------------------------------------------
    def discount(self, x: DateOrTime, extrapolate: bool = False) -> float:
        """Discount factor for a date or a time in years."""
        self.calculate()
        t = self._to_time(x)
        self.check_range(t, extrapolate)
        return self.discount_impl(t)

    def zero_rate(
        self,
        x: DateOrTime,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
        extrapolate: bool = False,
    ) -> float:
        """
        Zero rate to a date or time.

        Args:
            x: Date or time in years
            compounding: Compounding of the returned rate
            frequency: Compounding frequency where relevant
            extrapolate: Allow a query beyond the curve domain

        Returns:
            The zero rate; at ``t == 0`` the short rate over a small step
        """
        self.calculate()
        t = self._to_time(x)
        self.check_range(t, extrapolate)
        if t == 0.0:
            compound = 1.0 / self.discount_impl(FORWARD_DT)
            return implied_rate(compound, FORWARD_DT, compounding, frequency)
        if compounding is Compounding.CONTINUOUS:
            return self.zero_yield_impl(t)
        return implied_rate(1.0 / self.discount_impl(t), t, compounding, frequency)

    def forward_rate(
        self,
        x1: DateOrTime,
        x2: DateOrTime,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
        extrapolate: bool = False,
        day_count: Optional[DayCountConvention] = None,
    ) -> float:
        """Forward rate between two dates or times.

        When dates and a ``day_count`` are given, the rate is expressed over
        that day count's period fraction instead of the curve's.
        """
        self.calculate()
        t1 = self._to_time(x1)
        t2 = self._to_time(x2)
        if t2 < t1:
            raise ValidationError(f"forward start ({x1}) later than end ({x2})")
        self.check_range(t2, extrapolate)
        self.check_range(t1, extrapolate)
        if t1 == t2:
            t1 = max(t1 - FORWARD_DT / 2.0, 0.0)
            t2 = t1 + FORWARD_DT
            tau = t2 - t1
        elif day_count is not None and isinstance(x1, (date, datetime)) and isinstance(x2, (date, datetime)):
            tau = day_count.year_fraction(x1, x2)
        else:
            tau = t2 - t1
        compound = self.discount_impl(t1) / self.discount_impl(t2)
        return implied_rate(compound, tau, compounding, frequency)

    def instantaneous_forward(self, x: DateOrTime, extrapolate: bool = False) -> float:
        self.calculate()
        t = self._to_time(x)
        self.check_range(t, extrapolate)
        return self.forward_impl(t)

    # ------------------------------------------------------------------
    # Implementation hooks
    # ------------------------------------------------------------------
    def discount_impl(self, t: float) -> float:
        raise NotImplementedError

    def zero_yield_impl(self, t: float) -> float:
        return -math.log(self.discount_impl(t)) / t

    def forward_impl(self, t: float) -> float:
        t1 = max(t - FORWARD_DT / 2.0, 0.0)
        t2 = t1 + FORWARD_DT
        return math.log(self.discount_impl(t1) / self.discount_impl(t2)) / (t2 - t1)

    def perform_calculations(self) -> None:
        """Nothing to compute for curves defined in closed form."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.reference_date.isoformat()})"
