"""Par swap rate helper."""

from __future__ import annotations

from typing import Optional, Union

from curvelib.context import EvaluationContext
from curvelib.conventions.calendars import Calendar
from curvelib.conventions.daycount import DayCountConvention
from curvelib.conventions.types import BusinessDayAdjustment, Frequency, Period, TimeUnit
from curvelib.errors import ValidationError
from curvelib.indexes.ibor import IborIndex
from curvelib.market.handle import Handle, RelinkableHandle
from curvelib.market.quote import QuoteLike, quote_handle
from curvelib.valuation.swap import BASIS_POINT, make_vanilla_swap

from .base import RelativeDateRateHelper


class SwapRateHelper(RelativeDateRateHelper):
    """Spot (or forward) starting fixed-vs-IBOR swap quoted by its par rate.

    The floating leg forecasts off the curve being built. It is discounted
    on ``discount`` when given, otherwise on the curve being built too.
    """

    def __init__(
        self,
        rate: QuoteLike,
        tenor: Union[Period, str],
        calendar: Calendar,
        fixed_frequency: Frequency,
        fixed_convention: BusinessDayAdjustment,
        fixed_day_count: DayCountConvention,
        index: IborIndex,
        spread: QuoteLike = 0.0,
        forward_start: Union[Period, str, int] = 0,
        discount: Optional[Handle] = None,
        *,
        context: EvaluationContext,
        settlement_days: Optional[int] = None,
        end_of_month: bool = False,
    ):
        super().__init__(rate, context)
        self.tenor = Period.of(tenor)
        if self.tenor.length <= 0:
            raise ValidationError(f"non positive swap tenor ({self.tenor}) given")
        if isinstance(forward_start, int):
            forward_start = Period(forward_start, TimeUnit.DAYS)
        self.forward_start = Period.of(forward_start)
        self.calendar = calendar
        self.fixed_frequency = fixed_frequency
        self.fixed_convention = fixed_convention
        self.fixed_day_count = fixed_day_count
        self.end_of_month = end_of_month
        self.settlement_days = index.fixing_days if settlement_days is None else settlement_days
        self.spread = quote_handle(spread)
        self.register_with(self.spread)

        self.index = index.clone(self.term_structure_handle)
        self.index.unregister_with(self.term_structure_handle)
        self.register_with(self.index)

        self.discount_handle = discount if discount is not None else Handle()
        self.register_with(self.discount_handle)
        self.discount_relinkable: RelinkableHandle = RelinkableHandle()
        self.initialize_dates()

    def initialize_dates(self) -> None:
        reference = self.calendar.adjust(self.evaluation_date)
        spot = self.calendar.advance(reference, self.settlement_days)
        start = self.calendar.advance(spot, self.forward_start, BusinessDayAdjustment.FOLLOWING)
        # The spread is applied in implied_quote, not in the swap.
        self.swap = make_vanilla_swap(
            self.tenor,
            self.index,
            0.0,
            self.discount_relinkable,
            start,
            fixed_calendar=self.calendar,
            fixed_tenor=Period.of(self.fixed_frequency),
            fixed_convention=self.fixed_convention,
            fixed_termination_convention=self.fixed_convention,
            fixed_day_count=self.fixed_day_count,
            end_of_month=self.end_of_month,
        )
        last_coupon = self.swap.floating_leg[-1]
        maturity = self.swap.maturity_date
        self._set_dates(self.swap.start_date, maturity, max(maturity, last_coupon.fixing_end_date))

    def set_term_structure(self, curve) -> None:
        super().set_term_structure(curve)
        target = curve if self.discount_handle.empty() else self.discount_handle
        self.discount_relinkable.link_to(target, register_as_observer=False)

    def implied_quote(self) -> float:
        floating_npv = self.swap.leg_npv(1)
        spread_npv = self.swap.leg_bps(1) / BASIS_POINT * self.spread.value()
        fixed_bps = self.swap.leg_bps(0)
        if fixed_bps == 0.0:
            raise ValidationError(f"{self.describe()}: fixed leg has no remaining cash flows")
        return -(floating_npv + spread_npv) / (fixed_bps / BASIS_POINT)

    def describe(self) -> str:
        return f"SwapRateHelper({self.tenor} vs {self.index.name}, pillar={self.pillar_date})"
