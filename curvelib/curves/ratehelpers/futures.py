"""Interest rate futures helpers."""

from __future__ import annotations

from datetime import date
from typing import Optional

from curvelib.context import EvaluationContext
from curvelib.conventions.calendars import Calendar
from curvelib.conventions.daycount import DayCountConvention
from curvelib.conventions.imm import is_imm_date, next_imm_date, third_wednesday
from curvelib.conventions.types import BusinessDayAdjustment, Frequency, Period, TimeUnit
from curvelib.errors import ValidationError
from curvelib.indexes.definitions import Sofr
from curvelib.indexes.ibor import OvernightIndex
from curvelib.market.quote import QuoteLike, quote_handle
from curvelib.valuation.futures import OvernightIndexFuture, RateAveraging

from .base import RateHelper


class FuturesRateHelper(RateHelper):
    """IMM-dated IBOR future quoted as ``100 * (1 - rate)``."""

    def __init__(
        self,
        price: QuoteLike,
        imm_date: date,
        length_in_months: int,
        calendar: Calendar,
        convention: BusinessDayAdjustment,
        end_of_month: bool,
        day_count: DayCountConvention,
        convexity_adjustment: QuoteLike = 0.0,
    ):
        super().__init__(price)
        if not is_imm_date(imm_date, main_cycle=False):
            raise ValidationError(f"{imm_date} is not a valid IMM date")
        if length_in_months <= 0:
            raise ValidationError(f"non positive futures length ({length_in_months}) not allowed")
        self.convexity_adjustment = quote_handle(convexity_adjustment)
        self.register_with(self.convexity_adjustment)
        maturity = calendar.advance(
            imm_date, Period(length_in_months, TimeUnit.MONTHS), convention, end_of_month
        )
        self.year_fraction = day_count.year_fraction(imm_date, maturity)
        self._set_dates(imm_date, maturity)

    def implied_quote(self) -> float:
        curve = self.term_structure
        forward = (
            curve.discount(self.earliest_date) / curve.discount(self.maturity_date) - 1.0
        ) / self.year_fraction
        convexity = self.convexity_adjustment.value()
        if convexity < 0.0:
            raise ValidationError(f"Negative ({convexity}) futures convexity adjustment")
        return 100.0 * (1.0 - (forward + convexity))

    def describe(self) -> str:
        return f"FuturesRateHelper({self.earliest_date} -> {self.maturity_date})"


class OvernightIndexFutureRateHelper(RateHelper):
    """Future on the averaged or compounded overnight rate between two dates."""

    def __init__(
        self,
        price: QuoteLike,
        value_date: date,
        maturity_date: date,
        index: OvernightIndex,
        convexity_adjustment: float = 0.0,
        averaging: RateAveraging = RateAveraging.COMPOUND,
    ):
        super().__init__(price)
        self.index = index.clone(self.term_structure_handle)
        self.index.unregister_with(self.term_structure_handle)
        # Stored fixings enter the implied price.
        self.register_with(self.index)
        self.future = OvernightIndexFuture(
            self.index, value_date, maturity_date, averaging, convexity_adjustment
        )
        self._set_dates(value_date, maturity_date)

    def implied_quote(self) -> float:
        return self.future.npv()

    @property
    def convexity_adjustment(self) -> float:
        return self.future.convexity_adjustment

    def describe(self) -> str:
        return (
            f"{type(self).__name__}({self.index.name} {self.future.averaging.value}, "
            f"{self.earliest_date} -> {self.maturity_date})"
        )


def sofr_contract_dates(reference_month: int, reference_year: int, frequency: Frequency):
    """Reference period of a SOFR 1M or 3M contract."""
    if frequency is Frequency.QUARTERLY:
        if reference_month not in (3, 6, 9, 12):
            raise ValidationError(
                f"quarterly SOFR futures must have reference month March, June, September "
                f"or December, got {reference_month}"
            )
        value_date = third_wednesday(reference_year, reference_month)
        return value_date, next_imm_date(value_date), RateAveraging.COMPOUND
    if frequency is Frequency.MONTHLY:
        value_date = date(reference_year, reference_month, 1)
        if reference_month == 12:
            maturity = date(reference_year + 1, 1, 1)
        else:
            maturity = date(reference_year, reference_month + 1, 1)
        return value_date, maturity, RateAveraging.SIMPLE
    raise ValidationError(f"reference frequency must be monthly or quarterly, got {frequency}")


class SofrFutureRateHelper(OvernightIndexFutureRateHelper):
    """CME SOFR future identified by its reference month.

    Monthly contracts average SOFR arithmetically over the calendar month;
    quarterly contracts compound it from one IMM date to the next.
    """

    def __init__(
        self,
        price: QuoteLike,
        reference_month: int,
        reference_year: int,
        reference_frequency: Frequency,
        index: Optional[OvernightIndex] = None,
        convexity_adjustment: float = 0.0,
        *,
        context: Optional[EvaluationContext] = None,
    ):
        if index is None:
            if context is None:
                raise ValidationError("SofrFutureRateHelper needs an index or an evaluation context")
            index = Sofr(context=context)
        value_date, maturity, averaging = sofr_contract_dates(
            reference_month, reference_year, reference_frequency
        )
        super().__init__(price, value_date, maturity, index, convexity_adjustment, averaging)
        self.reference_frequency = reference_frequency
