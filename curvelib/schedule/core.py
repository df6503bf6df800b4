"""
Core data structures for schedule generation.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, List, Optional

from curvelib.conventions.calendars import Calendar
from curvelib.conventions.types import BusinessDayAdjustment, DateGeneration, Period


@dataclass
class SchedulePeriod:
    """A single accrual period of a schedule."""

    accrual_start: date
    accrual_end: date
    is_regular: bool = True

    @property
    def accrual_days(self) -> int:
        """Number of calendar days in accrual period."""
        return (self.accrual_end - self.accrual_start).days


@dataclass
class Schedule:
    """Adjusted schedule dates plus the rules that produced them."""

    dates: List[date]
    tenor: Optional[Period] = None
    calendar: Optional[Calendar] = None
    convention: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING
    rule: DateGeneration = DateGeneration.BACKWARD
    end_of_month: bool = False
    is_regular: List[bool] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.dates)

    def __getitem__(self, i: int) -> date:
        return self.dates[i]

    def __iter__(self) -> Iterator[date]:
        return iter(self.dates)

    @property
    def start_date(self) -> date:
        return self.dates[0]

    @property
    def end_date(self) -> date:
        return self.dates[-1]

    def periods(self) -> List[SchedulePeriod]:
        regular = self.is_regular or [True] * (len(self.dates) - 1)
        return [
            SchedulePeriod(self.dates[i], self.dates[i + 1], regular[i])
            for i in range(len(self.dates) - 1)
        ]
