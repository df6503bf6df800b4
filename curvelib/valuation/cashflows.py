"""Coupon types and leg builders.

A leg is a plain list of coupons. Fixed coupons know their amount up front;
floating coupons ask their index for the rate each time ``amount()`` is
called, so a leg priced inside a bootstrap always sees the curve's current
nodes.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Union

from curvelib.conventions.daycount import DayCountConvention
from curvelib.conventions.types import BusinessDayAdjustment
from curvelib.errors import ValidationError
from curvelib.indexes.ibor import IborIndex, OvernightIndex
from curvelib.schedule.core import Schedule


@dataclass
class Coupon:
    """Accrual period paid at ``payment_date``."""

    payment_date: date
    nominal: float
    accrual_start: date
    accrual_end: date
    day_count: DayCountConvention

    @property
    def accrual_period(self) -> float:
        return self.day_count.year_fraction(self.accrual_start, self.accrual_end)

    def rate(self) -> float:
        raise NotImplementedError

    def amount(self) -> float:
        return self.nominal * self.rate() * self.accrual_period

    def has_occurred(self, reference_date: date) -> bool:
        """Payments on the reference date are treated as already settled."""
        return self.payment_date <= reference_date


@dataclass
class FixedRateCoupon(Coupon):
    fixed_rate: float = 0.0

    def rate(self) -> float:
        return self.fixed_rate


@dataclass
class IborCoupon(Coupon):
    """Coupon fixing in advance on an IBOR index.

    The forecast uses the index's own deposit period (value date to index
    maturity) and accrues over the coupon period.
    """

    index: Optional[IborIndex] = None
    spread: float = 0.0
    fixing_days: Optional[int] = None

    def __post_init__(self):
        if self.index is None:
            raise ValidationError("IborCoupon needs an index")
        days = self.index.fixing_days if self.fixing_days is None else self.fixing_days
        self.fixing_date = self.index.calendar.advance(
            self.accrual_start, -days, BusinessDayAdjustment.PRECEDING
        )
        self.fixing_value_date = self.index.calendar.advance(self.fixing_date, self.index.fixing_days)
        self.fixing_end_date = self.index.maturity_date(self.fixing_value_date)

    def index_fixing(self) -> float:
        return self.index.fixing(self.fixing_date)

    def rate(self) -> float:
        return self.index_fixing() + self.spread


@dataclass
class OvernightIndexedCoupon(Coupon):
    """Coupon paying the daily-compounded overnight rate over its accrual period."""

    index: Optional[OvernightIndex] = None
    spread: float = 0.0

    def __post_init__(self):
        if self.index is None:
            raise ValidationError("OvernightIndexedCoupon needs an overnight index")

    def rate(self) -> float:
        return self.index.compounded_rate(self.accrual_start, self.accrual_end) + self.spread


Leg = List[Coupon]


def _as_list(value: Union[float, Sequence[float]], n: int, what: str) -> List[float]:
    if isinstance(value, (int, float)):
        return [float(value)] * n
    values = [float(v) for v in value]
    if not values:
        raise ValidationError(f"no {what} given")
    if len(values) > n:
        raise ValidationError(f"too many {what} ({len(values)}), only {n} required")
    return values + [values[-1]] * (n - len(values))


def fixed_leg(
    schedule: Schedule,
    notional: Union[float, Sequence[float]],
    rate: Union[float, Sequence[float]],
    day_count: DayCountConvention,
) -> Leg:
    """Fixed coupons over each schedule period, paid at period end."""
    n = len(schedule) - 1
    notionals = _as_list(notional, n, "notionals")
    rates = _as_list(rate, n, "coupon rates")
    return [
        FixedRateCoupon(
            payment_date=p.accrual_end,
            nominal=notionals[i],
            accrual_start=p.accrual_start,
            accrual_end=p.accrual_end,
            day_count=day_count,
            fixed_rate=rates[i],
        )
        for i, p in enumerate(schedule.periods())
    ]


def ibor_leg(
    schedule: Schedule,
    index: IborIndex,
    notional: Union[float, Sequence[float]],
    spread: Union[float, Sequence[float]] = 0.0,
    day_count: Optional[DayCountConvention] = None,
    fixing_days: Optional[int] = None,
) -> Leg:
    """Floating coupons on ``index``; accrual uses the index day count unless overridden."""
    n = len(schedule) - 1
    notionals = _as_list(notional, n, "notionals")
    spreads = _as_list(spread, n, "spreads")
    return [
        IborCoupon(
            payment_date=p.accrual_end,
            nominal=notionals[i],
            accrual_start=p.accrual_start,
            accrual_end=p.accrual_end,
            day_count=day_count or index.day_count,
            index=index,
            spread=spreads[i],
            fixing_days=fixing_days,
        )
        for i, p in enumerate(schedule.periods())
    ]


def overnight_leg(
    schedule: Schedule,
    index: OvernightIndex,
    notional: Union[float, Sequence[float]],
    spread: Union[float, Sequence[float]] = 0.0,
    day_count: Optional[DayCountConvention] = None,
) -> Leg:
    n = len(schedule) - 1
    notionals = _as_list(notional, n, "notionals")
    spreads = _as_list(spread, n, "spreads")
    return [
        OvernightIndexedCoupon(
            payment_date=p.accrual_end,
            nominal=notionals[i],
            accrual_start=p.accrual_start,
            accrual_end=p.accrual_end,
            day_count=day_count or index.day_count,
            index=index,
            spread=spreads[i],
        )
        for i, p in enumerate(schedule.periods())
    ]
