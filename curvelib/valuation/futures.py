"""Overnight index futures (SOFR 1M/3M style contracts)."""

import logging
from datetime import date
from enum import Enum

from curvelib.errors import ValidationError
from curvelib.indexes.ibor import OvernightIndex

logger = logging.getLogger(__name__)


class RateAveraging(Enum):
    """How daily overnight rates are combined over the reference period."""

    SIMPLE = "SIMPLE"  # arithmetic average
    COMPOUND = "COMPOUND"


class OvernightIndexFuture:
    """Future settling on the average overnight rate between two dates.

    Args:
        index: Overnight index; its forwarding curve and context supply rates
        value_date: First day of the reference period
        maturity_date: End of the reference period
        averaging: Arithmetic averaging or daily compounding
        convexity_adjustment: Added to the rate before converting to a price
    """

    def __init__(
        self,
        index: OvernightIndex,
        value_date: date,
        maturity_date: date,
        averaging: RateAveraging = RateAveraging.COMPOUND,
        convexity_adjustment: float = 0.0,
    ):
        if value_date >= maturity_date:
            raise ValidationError(
                f"value date ({value_date}) must be before maturity date ({maturity_date})"
            )
        if index.context is None:
            raise ValidationError(f"{index.name} has no evaluation context")
        self.index = index
        self.value_date = value_date
        self.maturity_date = maturity_date
        self.averaging = averaging
        self.convexity_adjustment = convexity_adjustment

    def _known_fixing(self, d: date) -> float:
        value = self.index.past_fixing(d)
        if value is None:
            raise ValidationError(f"missing rate on {d} for index {self.index.name}")
        return value

    def averaged_rate(self) -> float:
        today = self.index.context.evaluation_date
        calendar = self.index.calendar
        day_count = self.index.day_count
        curve = None
        total = 0.0
        d1 = self.value_date
        while d1 < self.maturity_date:
            d2 = calendar.advance(d1, 1)
            if d1 < today:
                rate = self._known_fixing(d1)
            else:
                curve = curve or self.index.forwarding_curve()
                rate = (curve.discount(d1) / curve.discount(d2) - 1.0) / day_count.year_fraction(d1, d2)
            total += rate * day_count.year_fraction(d1, d2)
            d1 = d2
        return total / day_count.year_fraction(self.value_date, self.maturity_date)

    def compounded_rate(self) -> float:
        today = self.index.context.evaluation_date
        calendar = self.index.calendar
        day_count = self.index.day_count
        growth = 1.0
        d1 = self.value_date
        while d1 < today:
            d2 = calendar.advance(d1, 1)
            growth *= 1.0 + self._known_fixing(d1) * day_count.year_fraction(d1, d2)
            d1 = d2

        curve = self.index.forwarding_curve()
        forward_discount = curve.discount(self.maturity_date) / curve.discount(max(self.value_date, today))
        growth /= forward_discount
        return (growth - 1.0) / day_count.year_fraction(self.value_date, self.maturity_date)

    def rate(self) -> float:
        if self.averaging is RateAveraging.SIMPLE:
            return self.averaged_rate()
        return self.compounded_rate()

    def npv(self) -> float:
        """Quoted price, ``100 * (1 - (rate + convexity))``."""
        return 100.0 * (1.0 - (self.rate() + self.convexity_adjustment))

    def __repr__(self) -> str:
        return (
            f"OvernightIndexFuture({self.index.name}, {self.value_date} -> {self.maturity_date}, "
            f"{self.averaging.value})"
        )
