"""
QuantLib-backed calendar implementations.

Holiday tables are QuantLib's; this module only converts between Python dates
and QuantLib dates and exposes the adjustment and advancing rules used by
schedules, indexes and rate helpers.
"""

from datetime import date, datetime
from typing import Union

import QuantLib as ql

from curvelib.errors import ValidationError

from .types import BusinessDayAdjustment, Period, TimeUnit

DateLike = Union[date, datetime]


def to_ql_date(dt: DateLike) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    if isinstance(dt, datetime):
        dt = dt.date()
    return ql.Date(dt.day, dt.month, dt.year)


def to_py_date(ql_date: ql.Date) -> date:
    """Convert QuantLib Date to Python date."""
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class Calendar:
    """Base calendar class for QuantLib-backed business day calculations."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    @property
    def ql_calendar(self) -> ql.Calendar:
        return self._ql_calendar

    def is_business_day(self, dt: DateLike) -> bool:
        """Check if date is a business day (not weekend or holiday)."""
        return self._ql_calendar.isBusinessDay(to_ql_date(dt))

    def is_holiday(self, dt: DateLike) -> bool:
        return self._ql_calendar.isHoliday(to_ql_date(dt))

    def is_end_of_month(self, dt: DateLike) -> bool:
        """True if ``dt`` is the last business day of its month."""
        return self._ql_calendar.isEndOfMonth(to_ql_date(dt))

    def end_of_month(self, dt: DateLike) -> date:
        return to_py_date(self._ql_calendar.endOfMonth(to_ql_date(dt)))

    def adjust(
        self,
        dt: DateLike,
        convention: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING,
    ) -> date:
        return to_py_date(self._ql_calendar.adjust(to_ql_date(dt), convention.to_ql()))

    def advance(
        self,
        dt: DateLike,
        period: Union[Period, str, int],
        convention: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING,
        end_of_month: bool = False,
        unit: TimeUnit = TimeUnit.DAYS,
    ) -> date:
        """Move ``dt`` by a period; day periods count business days.

        ``period`` may be a Period, a tenor string ("3M") or an integer
        number of ``unit``.
        """
        if isinstance(period, int):
            period = Period(period, unit)
        else:
            period = Period.of(period)
        result = self._ql_calendar.advance(
            to_ql_date(dt), period.to_ql(), convention.to_ql(), end_of_month
        )
        return to_py_date(result)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Calendar) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Calendar({self.name})"


class TargetCalendar(Calendar):
    """TARGET (Trans-European Automated Real-time Gross settlement Express Transfer) calendar."""

    def __init__(self):
        super().__init__("TARGET", ql.TARGET())


class WeekendCalendar(Calendar):
    """Simple calendar that only considers weekends as non-business days."""

    def __init__(self):
        super().__init__("WEEKEND", ql.WeekendsOnly())


class UnitedStatesGovernmentBondCalendar(Calendar):
    """US government bond market calendar (SIFMA); used for SOFR."""

    def __init__(self):
        super().__init__("USNY", ql.UnitedStates(ql.UnitedStates.GovernmentBond))


class UnitedKingdomCalendar(Calendar):
    def __init__(self):
        super().__init__("UK", ql.UnitedKingdom())


class JointCalendar(Calendar):
    """Business day only if it is one in every member calendar."""

    def __init__(self, *calendars: Calendar):
        if len(calendars) < 2:
            raise ValidationError("JointCalendar needs at least two calendars")
        name = "+".join(c.name for c in calendars)
        super().__init__(name, ql.JointCalendar(*[c.ql_calendar for c in calendars]))


TARGET = TargetCalendar()
WEEKEND_ONLY = WeekendCalendar()
US_GOVERNMENT_BOND = UnitedStatesGovernmentBondCalendar()
UNITED_KINGDOM = UnitedKingdomCalendar()

CALENDARS = {
    "TARGET": TARGET,
    "EUR": TARGET,
    "WEEKEND": WEEKEND_ONLY,
    "USNY": US_GOVERNMENT_BOND,
    "US-GOVERNMENTBOND": US_GOVERNMENT_BOND,
    "UK": UNITED_KINGDOM,
}


def get_calendar(name: Union[str, Calendar]) -> Calendar:
    """Resolve a calendar by name ("TARGET", "USNY", "UK" or "TARGET+UK").

    Names joined with ``+`` give a joint calendar; calendars pass through.
    """
    if isinstance(name, Calendar):
        return name
    keys = [part.strip().upper() for part in str(name).split("+")]
    unknown = [key for key in keys if key not in CALENDARS]
    if unknown:
        raise ValidationError(f"Unknown calendar: {name}. Available: {sorted(CALENDARS)}")
    if len(keys) == 1:
        return CALENDARS[keys[0]]
    return JointCalendar(*[CALENDARS[key] for key in keys])
