"""
Basic types and enums shared by dates, schedules and rates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

import QuantLib as ql


class Frequency(Enum):
    """Coupon / compounding frequencies, valued in months per period."""

    ANNUAL = 12
    SEMIANNUAL = 6
    QUARTERLY = 3
    MONTHLY = 1

    def months(self) -> int:
        return self.value

    def per_year(self) -> int:
        return 12 // self.value


class BusinessDayAdjustment(Enum):
    """Business day adjustment rules."""

    NO_ADJUSTMENT = "NO_ADJUSTMENT"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"

    def to_ql(self) -> int:
        return _QL_BDC[self]


_QL_BDC = {
    BusinessDayAdjustment.NO_ADJUSTMENT: ql.Unadjusted,
    BusinessDayAdjustment.FOLLOWING: ql.Following,
    BusinessDayAdjustment.MODIFIED_FOLLOWING: ql.ModifiedFollowing,
    BusinessDayAdjustment.PRECEDING: ql.Preceding,
    BusinessDayAdjustment.MODIFIED_PRECEDING: ql.ModifiedPreceding,
}


class DateGeneration(Enum):
    """Direction in which schedule dates are generated."""

    FORWARD = "FORWARD"
    BACKWARD = "BACKWARD"


class Compounding(Enum):
    """Interest compounding rules."""

    SIMPLE = "SIMPLE"
    COMPOUNDED = "COMPOUNDED"
    CONTINUOUS = "CONTINUOUS"
    SIMPLE_THEN_COMPOUNDED = "SIMPLE_THEN_COMPOUNDED"


class TimeUnit(Enum):
    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"

    def to_ql(self) -> int:
        return _QL_UNITS[self]


_QL_UNITS = {
    TimeUnit.DAYS: ql.Days,
    TimeUnit.WEEKS: ql.Weeks,
    TimeUnit.MONTHS: ql.Months,
    TimeUnit.YEARS: ql.Years,
}

_TENOR_RE = re.compile(r"^\s*(-?\d+)\s*([DWMY])\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class Period:
    """A tenor such as 1W, 3M or 10Y."""

    length: int
    unit: TimeUnit

    @classmethod
    def parse(cls, tenor: str) -> "Period":
        match = _TENOR_RE.match(tenor)
        if not match:
            raise ValueError(f"Unsupported tenor: {tenor}")
        return cls(int(match.group(1)), TimeUnit(match.group(2).upper()))

    @classmethod
    def of(cls, value) -> "Period":
        """Accept a Period, a tenor string or a Frequency."""
        if isinstance(value, Period):
            return value
        if isinstance(value, Frequency):
            return cls(value.months(), TimeUnit.MONTHS)
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"Cannot interpret {value!r} as a period")

    @property
    def months(self) -> int:
        """Length in months for month/year tenors."""
        if self.unit is TimeUnit.MONTHS:
            return self.length
        if self.unit is TimeUnit.YEARS:
            return 12 * self.length
        raise ValueError(f"{self} is not a month-based tenor")

    def to_ql(self) -> ql.Period:
        return ql.Period(self.length, self.unit.to_ql())

    def __neg__(self) -> "Period":
        return Period(-self.length, self.unit)

    def __str__(self) -> str:
        return f"{self.length}{self.unit.value}"
