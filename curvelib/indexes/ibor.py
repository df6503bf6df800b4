"""Interbank offered rate indexes.

An index turns a fixing date into a rate: past fixings come from the
evaluation context's history, future ones are forecast off the index's
forwarding curve.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Union

from curvelib.context import EvaluationContext
from curvelib.conventions.calendars import Calendar
from curvelib.conventions.daycount import ACT_360, DayCountConvention
from curvelib.conventions.types import BusinessDayAdjustment, Period, TimeUnit
from curvelib.errors import ValidationError
from curvelib.market.handle import Handle
from curvelib.patterns.observable import ObservableObserver

logger = logging.getLogger(__name__)


class IborIndex(ObservableObserver):
    """Term rate index such as Euribor 6M.

    Observes its forwarding handle and the evaluation context, and forwards
    their notifications to whatever depends on the index.
    """

    def __init__(
        self,
        family_name: str,
        tenor: Union[Period, str],
        fixing_days: int,
        calendar: Calendar,
        business_day_convention: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
        end_of_month: bool = False,
        day_count: DayCountConvention = ACT_360,
        forwarding: Optional[Handle] = None,
        context: Optional[EvaluationContext] = None,
    ):
        super().__init__()
        if fixing_days < 0:
            raise ValidationError(f"negative fixing days ({fixing_days}) for {family_name}")
        self.family_name = family_name
        self.tenor = Period.of(tenor)
        self.fixing_days = fixing_days
        self.calendar = calendar
        self.business_day_convention = business_day_convention
        self.end_of_month = end_of_month
        self.day_count = day_count
        self.forwarding = forwarding if forwarding is not None else Handle()
        self.context = context
        self.register_with(self.forwarding)
        if context is not None:
            self.register_with(context)

    @property
    def name(self) -> str:
        return f"{self.family_name}{self.tenor}"

    # ------------------------------------------------------------------
    # Date rules
    # ------------------------------------------------------------------
    def is_valid_fixing_date(self, fixing_date: date) -> bool:
        return self.calendar.is_business_day(fixing_date)

    def fixing_date(self, value_date: date) -> date:
        return self.calendar.advance(value_date, -self.fixing_days)

    def value_date(self, fixing_date: date) -> date:
        if not self.is_valid_fixing_date(fixing_date):
            raise ValidationError(f"Fixing date {fixing_date} is not valid for {self.name}")
        return self.calendar.advance(fixing_date, self.fixing_days)

    def maturity_date(self, value_date: date) -> date:
        return self.calendar.advance(
            value_date, self.tenor, self.business_day_convention, self.end_of_month
        )

    # ------------------------------------------------------------------
    # Rates
    # ------------------------------------------------------------------
    def forwarding_curve(self):
        if self.forwarding.empty():
            raise ValidationError(f"null term structure set to this instance of {self.name}")
        return self.forwarding.current_link()

    def forecast_fixing(self, fixing_date: date) -> float:
        """Simple forward rate over the deposit period starting at the value date."""
        value = self.value_date(fixing_date)
        return self.forecast_between(value, self.maturity_date(value))

    def forecast_between(self, start: date, end: date) -> float:
        curve = self.forwarding_curve()
        tau = self.day_count.year_fraction(start, end)
        if tau <= 0.0:
            raise ValidationError(f"non positive accrual period {start} -> {end} for {self.name}")
        return (curve.discount(start) / curve.discount(end) - 1.0) / tau

    def past_fixing(self, fixing_date: date) -> Optional[float]:
        if self.context is None:
            return None
        return self.context.fixing(self.name, fixing_date)

    def fixing(self, fixing_date: date, forecast_todays_fixing: bool = False) -> float:
        """
        Rate fixed (or expected to fix) on ``fixing_date``.

        Args:
            fixing_date: Fixing date, a business day of the index calendar
            forecast_todays_fixing: Forecast today's fixing even if stored

        Returns:
            Stored fixing for past dates, forecast for future ones

        Raises:
            ValidationError: On an invalid fixing date or a missing past fixing
        """
        if not self.is_valid_fixing_date(fixing_date):
            raise ValidationError(f"Fixing date {fixing_date} is not valid for {self.name}")
        if self.context is None:
            return self.forecast_fixing(fixing_date)

        today = self.context.evaluation_date
        if fixing_date > today or (fixing_date == today and forecast_todays_fixing):
            return self.forecast_fixing(fixing_date)

        stored = self.past_fixing(fixing_date)
        if fixing_date < today or self.context.enforce_todays_historic_fixings:
            if stored is None:
                raise ValidationError(f"Missing {self.name} fixing for {fixing_date}")
            return stored
        if stored is not None:
            return stored
        return self.forecast_fixing(fixing_date)

    def clone(self, forwarding: Handle) -> "IborIndex":
        """Same index forecasting off another curve."""
        return IborIndex(
            self.family_name,
            self.tenor,
            self.fixing_days,
            self.calendar,
            self.business_day_convention,
            self.end_of_month,
            self.day_count,
            forwarding,
            self.context,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class OvernightIndex(IborIndex):
    """Overnight rate index (SOFR, ESTR...): 1-day tenor, fixed on the value date."""

    def __init__(
        self,
        family_name: str,
        fixing_days: int,
        calendar: Calendar,
        day_count: DayCountConvention = ACT_360,
        forwarding: Optional[Handle] = None,
        context: Optional[EvaluationContext] = None,
    ):
        super().__init__(
            family_name,
            Period(1, TimeUnit.DAYS),
            fixing_days,
            calendar,
            BusinessDayAdjustment.FOLLOWING,
            False,
            day_count,
            forwarding,
            context,
        )

    @property
    def name(self) -> str:
        return self.family_name

    def compounded_rate(self, start: date, end: date) -> float:
        """
        Daily-compounded rate over ``[start, end)``.

        Past fixings are compounded day by day from the context history, as is
        today's when the context includes today's fixings and one is stored.
        From there on the compounding telescopes into ``D(d)/D(end)``.

        Args:
            start: Accrual start (a business day)
            end: Accrual end

        Returns:
            Simple rate equivalent to the compounded growth over the period
        """
        tau = self.day_count.year_fraction(start, end)
        if tau <= 0.0:
            raise ValidationError(f"non positive accrual period {start} -> {end} for {self.name}")
        growth = 1.0
        d = start
        today = self.context.evaluation_date if self.context is not None else None
        while d < end:
            known = today is not None and (
                d < today
                or (
                    d == today
                    and self.context.include_todays_fixings
                    and self.context.has_fixing(self.name, d)
                )
            )
            if not known:
                curve = self.forwarding_curve()
                growth *= curve.discount(d) / curve.discount(end)
                break
            nxt = min(self.calendar.advance(d, 1), end)
            growth *= 1.0 + self.fixing(self.fixing_date(d)) * self.day_count.year_fraction(d, nxt)
            d = nxt
        return (growth - 1.0) / tau

    def clone(self, forwarding: Handle) -> "OvernightIndex":
        return OvernightIndex(
            self.family_name,
            self.fixing_days,
            self.calendar,
            self.day_count,
            forwarding,
            self.context,
        )
