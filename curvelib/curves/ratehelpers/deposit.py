"""Deposit and FRA rate helpers."""

from __future__ import annotations

from typing import Optional, Union

from curvelib.context import EvaluationContext
from curvelib.conventions.calendars import Calendar
from curvelib.conventions.daycount import DayCountConvention
from curvelib.conventions.types import BusinessDayAdjustment, Period, TimeUnit
from curvelib.errors import ValidationError
from curvelib.indexes.ibor import IborIndex
from curvelib.market.quote import QuoteLike

from .base import RelativeDateRateHelper


class DepositRateHelper(RelativeDateRateHelper):
    """Spot-starting deposit quoted as a simple rate.

    The implied quote is the forecast fixing of a synthetic index with the
    deposit's conventions, forecast off the curve being built.
    """

    def __init__(
        self,
        rate: QuoteLike,
        tenor: Union[Period, str],
        fixing_days: int,
        calendar: Calendar,
        convention: BusinessDayAdjustment,
        end_of_month: bool,
        day_count: DayCountConvention,
        *,
        context: EvaluationContext,
    ):
        super().__init__(rate, context)
        self.index = IborIndex(
            "no-fix",
            tenor,
            fixing_days,
            calendar,
            convention,
            end_of_month,
            day_count,
            self.term_structure_handle,
        )
        # Notifications from the curve being built would re-enter the bootstrap.
        self.index.unregister_with(self.term_structure_handle)
        self.initialize_dates()

    def initialize_dates(self) -> None:
        reference = self.index.calendar.adjust(self.evaluation_date)
        earliest = self.index.value_date(reference)
        self.fixing_date = self.index.fixing_date(earliest)
        self._set_dates(earliest, self.index.maturity_date(earliest))

    def implied_quote(self) -> float:
        return self.index.forecast_fixing(self.fixing_date)

    def describe(self) -> str:
        return f"DepositRateHelper({self.index.tenor}, pillar={self.pillar_date})"


class FraRateHelper(RelativeDateRateHelper):
    """Forward rate agreement ``months_to_start`` x ``months_to_end``.

    Either give the index conventions explicitly or pass ``index=``; in the
    latter case ``months_to_end`` is implied by the index tenor.
    """

    def __init__(
        self,
        rate: QuoteLike,
        months_to_start: int,
        months_to_end: Optional[int] = None,
        fixing_days: Optional[int] = None,
        calendar: Optional[Calendar] = None,
        convention: Optional[BusinessDayAdjustment] = None,
        end_of_month: Optional[bool] = None,
        day_count: Optional[DayCountConvention] = None,
        *,
        index: Optional[IborIndex] = None,
        context: EvaluationContext,
    ):
        super().__init__(rate, context)
        if months_to_start < 0:
            raise ValidationError(f"negative months to start ({months_to_start}) not allowed")
        if index is not None:
            self.index = index.clone(self.term_structure_handle)
        else:
            if months_to_end is None or None in (fixing_days, calendar, convention, end_of_month, day_count):
                raise ValidationError("FraRateHelper needs either an index or the full conventions")
            if months_to_end <= months_to_start:
                raise ValidationError(
                    f"months to end ({months_to_end}) must be greater than "
                    f"months to start ({months_to_start})"
                )
            self.index = IborIndex(
                "no-fix",
                Period(months_to_end - months_to_start, TimeUnit.MONTHS),
                fixing_days,
                calendar,
                convention,
                end_of_month,
                day_count,
                self.term_structure_handle,
            )
        self.index.unregister_with(self.term_structure_handle)
        self.period_to_start = Period(months_to_start, TimeUnit.MONTHS)
        self.initialize_dates()

    def initialize_dates(self) -> None:
        calendar = self.index.calendar
        reference = calendar.adjust(self.evaluation_date)
        spot = calendar.advance(reference, self.index.fixing_days)
        earliest = calendar.advance(
            spot, self.period_to_start, self.index.business_day_convention, self.index.end_of_month
        )
        maturity = calendar.advance(
            spot,
            Period(self.period_to_start.months + self.index.tenor.months, TimeUnit.MONTHS),
            self.index.business_day_convention,
            self.index.end_of_month,
        )
        self.fixing_date = self.index.fixing_date(earliest)
        self._set_dates(earliest, maturity, self.index.maturity_date(earliest))

    def implied_quote(self) -> float:
        return self.index.forecast_fixing(self.fixing_date)

    def describe(self) -> str:
        return (
            f"FraRateHelper({self.period_to_start.months}x"
            f"{self.period_to_start.months + self.index.tenor.months}, pillar={self.pillar_date})"
        )
