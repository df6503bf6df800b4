"""Swap pricing.

This module discounts legs off a yield curve handle and exposes the fair
rate and fair spread used by the swap-based rate helpers.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence

from curvelib.conventions.calendars import Calendar
from curvelib.conventions.daycount import DayCountConvention
from curvelib.conventions.types import BusinessDayAdjustment, DateGeneration, Period
from curvelib.errors import ValidationError
from curvelib.indexes.ibor import IborIndex
from curvelib.market.handle import Handle
from curvelib.schedule.adjustments import add_period
from curvelib.schedule.generator import make_schedule

from .cashflows import Leg, fixed_leg, ibor_leg

logger = logging.getLogger(__name__)

BASIS_POINT = 1.0e-4


def leg_npv(leg: Leg, discount_curve) -> float:
    """
    Present value of a leg at the discount curve's reference date.

    Args:
        leg: Coupons to discount
        discount_curve: Curve providing ``reference_date`` and ``discount``

    Returns:
        Sum of amounts times discount factors, skipping settled payments
    """
    reference = discount_curve.reference_date
    npv = 0.0
    for cf in leg:
        if cf.has_occurred(reference):
            continue
        npv += cf.amount() * discount_curve.discount(cf.payment_date)
    return npv


def leg_bps(leg: Leg, discount_curve) -> float:
    """Value of one basis point of coupon rate on the leg."""
    reference = discount_curve.reference_date
    bps = 0.0
    for cf in leg:
        if cf.has_occurred(reference):
            continue
        bps += cf.nominal * cf.accrual_period * discount_curve.discount(cf.payment_date)
    return bps * BASIS_POINT


class Swap:
    """Exchange of two or more legs discounted on one curve.

    Args:
        legs: Cash flow legs
        payer: One flag per leg; payer legs count negatively
        discount: Handle to the discounting curve
    """

    def __init__(self, legs: Sequence[Leg], payer: Sequence[bool], discount: Handle):
        if len(legs) != len(payer):
            raise ValidationError(f"{len(legs)} legs but {len(payer)} payer flags")
        if not legs:
            raise ValidationError("a swap needs at least one leg")
        self.legs: List[Leg] = [list(leg) for leg in legs]
        self.payer = list(payer)
        self.discount = discount

    def _sign(self, i: int) -> float:
        return -1.0 if self.payer[i] else 1.0

    def _curve(self):
        if self.discount.empty():
            raise ValidationError("discounting term structure handle is empty")
        return self.discount.current_link()

    def leg_npv(self, i: int) -> float:
        return self._sign(i) * leg_npv(self.legs[i], self._curve())

    def leg_bps(self, i: int) -> float:
        return self._sign(i) * leg_bps(self.legs[i], self._curve())

    def npv(self) -> float:
        return sum(self.leg_npv(i) for i in range(len(self.legs)))

    @property
    def start_date(self) -> date:
        return min(cf.accrual_start for leg in self.legs for cf in leg)

    @property
    def maturity_date(self) -> date:
        return max(cf.payment_date for leg in self.legs for cf in leg)


class VanillaSwap(Swap):
    """Fixed against IBOR swap; leg 0 is fixed, leg 1 floating."""

    def __init__(
        self,
        payer_fixed: bool,
        nominal: float,
        fixed_schedule,
        fixed_rate: float,
        fixed_day_count: DayCountConvention,
        float_schedule,
        index: IborIndex,
        spread: float,
        discount: Handle,
        float_day_count: Optional[DayCountConvention] = None,
    ):
        self.nominal = nominal
        self.fixed_rate = fixed_rate
        self.spread = spread
        self.index = index
        super().__init__(
            [
                fixed_leg(fixed_schedule, nominal, fixed_rate, fixed_day_count),
                ibor_leg(float_schedule, index, nominal, spread, float_day_count),
            ],
            [payer_fixed, not payer_fixed],
            discount,
        )

    @property
    def fixed_leg(self) -> Leg:
        return self.legs[0]

    @property
    def floating_leg(self) -> Leg:
        return self.legs[1]

    def fair_rate(self) -> float:
        """Fixed rate that sets the NPV to zero."""
        bps = self.leg_bps(0)
        if bps == 0.0:
            raise ValidationError("fixed leg has no remaining cash flows")
        return self.fixed_rate - self.npv() / (bps / BASIS_POINT)

    def fair_spread(self) -> float:
        """Floating spread that sets the NPV to zero."""
        bps = self.leg_bps(1)
        if bps == 0.0:
            raise ValidationError("floating leg has no remaining cash flows")
        return self.spread - self.npv() / (bps / BASIS_POINT)


def make_vanilla_swap(
    tenor: Period,
    index: IborIndex,
    fixed_rate: float,
    discount: Handle,
    effective_date: date,
    fixed_calendar: Optional[Calendar] = None,
    fixed_tenor: Optional[Period] = None,
    fixed_convention: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    fixed_termination_convention: Optional[BusinessDayAdjustment] = None,
    fixed_day_count: Optional[DayCountConvention] = None,
    spread: float = 0.0,
    nominal: float = 1.0,
    end_of_month: bool = False,
    payer_fixed: bool = True,
) -> VanillaSwap:
    """
    Build a spot-style vanilla swap from market conventions.

    The floating leg follows the index (tenor, calendar, business day rule,
    end-of-month flag); both schedules are generated backward from the
    unadjusted maturity ``effective_date + tenor``.

    Args:
        tenor: Swap length from the effective date
        index: Floating leg index
        fixed_rate: Fixed coupon
        discount: Handle to the discounting curve
        effective_date: Start of both legs
        fixed_calendar: Fixed leg calendar (index calendar by default)
        fixed_tenor: Fixed leg period (1Y by default)
        fixed_convention: Fixed leg business day rule
        fixed_termination_convention: Rule for the fixed leg end date
        fixed_day_count: Fixed leg day count (index day count by default)
        spread: Floating leg spread
        nominal: Notional of both legs
        end_of_month: End-of-month rule of the fixed leg
        payer_fixed: Pay fixed, receive floating

    Returns:
        The swap
    """
    fixed_calendar = fixed_calendar or index.calendar
    termination = add_period(effective_date, Period.of(tenor))
    fixed_schedule = make_schedule(
        effective_date,
        termination,
        fixed_tenor or Period.parse("1Y"),
        fixed_calendar,
        fixed_convention,
        fixed_termination_convention or fixed_convention,
        DateGeneration.BACKWARD,
        end_of_month,
    )
    float_schedule = make_schedule(
        effective_date,
        termination,
        index.tenor,
        index.calendar,
        index.business_day_convention,
        index.business_day_convention,
        DateGeneration.BACKWARD,
        index.end_of_month,
    )
    return VanillaSwap(
        payer_fixed,
        nominal,
        fixed_schedule,
        fixed_rate,
        fixed_day_count or index.day_count,
        float_schedule,
        index,
        spread,
        discount,
    )
