"""Flat forward curve."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional, Union

from curvelib.context import EvaluationContext
from curvelib.conventions.calendars import Calendar
from curvelib.conventions.daycount import ACT_365F, DayCountConvention
from curvelib.conventions.types import Compounding, Frequency
from curvelib.market.handle import Handle
from curvelib.market.quote import Quote, quote_handle

from .base import YieldTermStructure
from .interest_rate import equivalent_rate

# Latest date QuantLib's calendars handle.
MAX_DATE = date(2199, 12, 31)


class FlatForward(YieldTermStructure):
    """Curve with a single rate for every maturity; its domain is unbounded.

    The rate may be a number or a quote handle, in which case the curve
    follows the quote.
    """

    def __init__(
        self,
        reference_date: Optional[Union[date, datetime]],
        rate: Union[float, Quote, Handle],
        day_count: Union[DayCountConvention, str] = ACT_365F,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
        context: Optional[EvaluationContext] = None,
        settlement_days: Optional[int] = None,
        calendar: Union[Calendar, str, None] = None,
    ):
        super().__init__(reference_date, day_count, calendar, settlement_days, context)
        self.rate = quote_handle(rate)
        self.compounding = compounding
        self.frequency = frequency
        self.register_with(self.rate)

    @property
    def max_date(self) -> date:
        return MAX_DATE

    @property
    def max_time(self) -> float:
        return math.inf

    def _continuous_rate(self, t: float) -> float:
        r = self.rate.value()
        if self.compounding is Compounding.CONTINUOUS:
            return r
        return equivalent_rate(
            r, max(t, 1.0e-4), self.compounding, Compounding.CONTINUOUS, self.frequency
        )

    def discount_impl(self, t: float) -> float:
        return math.exp(-self._continuous_rate(t) * t)

    def zero_yield_impl(self, t: float) -> float:
        return self._continuous_rate(t)
