"""
Main schedule generation logic.
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Union

from curvelib.conventions.calendars import Calendar
from curvelib.conventions.types import BusinessDayAdjustment, DateGeneration, Frequency, Period
from curvelib.errors import ValidationError

from .adjustments import add_period, get_month_end
from .core import Schedule

logger = logging.getLogger(__name__)


class ScheduleGenerator:
    """Generates regular schedules rolled forward or backward from an anchor date.

    Dates are first rolled on the null calendar, then adjusted on
    ``calendar``. A stub, if any, sits at the end opposite the anchor.
    """

    def __init__(
        self,
        calendar: Calendar,
        convention: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
        termination_convention: Optional[BusinessDayAdjustment] = None,
        end_of_month: bool = False,
    ):
        self.calendar = calendar
        self.convention = convention
        self.termination_convention = (
            convention if termination_convention is None else termination_convention
        )
        self.end_of_month = end_of_month

    def generate(
        self,
        effective_date: Union[date, datetime],
        termination_date: Union[date, datetime],
        tenor: Union[Period, Frequency, str],
        rule: DateGeneration = DateGeneration.BACKWARD,
    ) -> Schedule:
        """
        Generate a schedule.

        Args:
            effective_date: Start date (unadjusted)
            termination_date: End date (unadjusted)
            tenor: Length of a regular period
            rule: Roll direction; FORWARD anchors on the effective date

        Returns:
            The adjusted schedule

        Raises:
            ValidationError: If the dates are not increasing or the tenor is empty
        """
        if isinstance(effective_date, datetime):
            effective_date = effective_date.date()
        if isinstance(termination_date, datetime):
            termination_date = termination_date.date()
        tenor = Period.of(tenor)
        if effective_date >= termination_date:
            raise ValidationError(
                f"effective date ({effective_date}) later than or equal to "
                f"termination date ({termination_date})"
            )
        if tenor.length <= 0:
            raise ValidationError(f"non positive tenor ({tenor}) not allowed")

        if rule is DateGeneration.FORWARD:
            dates, regular = self._roll_forward(effective_date, termination_date, tenor)
            seed = effective_date
        else:
            dates, regular = self._roll_backward(effective_date, termination_date, tenor)
            seed = termination_date

        if self.end_of_month and self.calendar.is_end_of_month(seed):
            self._adjust_end_of_month(dates, rule)
        else:
            dates[0] = self.calendar.adjust(dates[0], self.convention)
            for i in range(1, len(dates) - 1):
                dates[i] = self.calendar.adjust(dates[i], self.convention)
            if self.termination_convention is not BusinessDayAdjustment.NO_ADJUSTMENT:
                dates[-1] = self.calendar.adjust(dates[-1], self.termination_convention)

        # Adjustment may push the penultimate date onto the last one.
        if len(dates) > 2 and dates[-2] >= dates[-1]:
            del dates[-2]
            del regular[-2]
        if len(dates) > 2 and dates[1] <= dates[0]:
            del dates[1]
            del regular[1]

        return Schedule(
            dates=dates,
            tenor=tenor,
            calendar=self.calendar,
            convention=self.convention,
            rule=rule,
            end_of_month=self.end_of_month,
            is_regular=regular,
        )

    def _roll_forward(self, effective: date, termination: date, tenor: Period):
        dates: List[date] = [effective]
        regular: List[bool] = []
        periods = 1
        while True:
            candidate = add_period(effective, Period(periods * tenor.length, tenor.unit), self.end_of_month)
            if candidate > termination:
                break
            if self._adjusted(dates[-1]) != self._adjusted(candidate):
                dates.append(candidate)
                regular.append(True)
            periods += 1
        if self._adjusted(dates[-1], self.termination_convention) != self._adjusted(
            termination, self.termination_convention
        ):
            dates.append(termination)
            regular.append(False)
        return dates, regular

    def _roll_backward(self, effective: date, termination: date, tenor: Period):
        dates: List[date] = [termination]
        regular: List[bool] = []
        periods = 1
        while True:
            candidate = add_period(
                termination, Period(-periods * tenor.length, tenor.unit), self.end_of_month
            )
            if candidate < effective:
                break
            if self._adjusted(dates[-1]) != self._adjusted(candidate):
                dates.append(candidate)
                regular.append(True)
            periods += 1
        if self._adjusted(dates[-1]) != self._adjusted(effective):
            dates.append(effective)
            regular.append(False)
        dates.reverse()
        regular.reverse()
        return dates, regular

    def _adjusted(self, dt: date, convention: Optional[BusinessDayAdjustment] = None) -> date:
        return self.calendar.adjust(dt, convention or self.convention)

    def _adjust_end_of_month(self, dates: List[date], rule: DateGeneration) -> None:
        unadjusted = self.convention is BusinessDayAdjustment.NO_ADJUSTMENT
        for i in range(1, len(dates) - 1):
            if unadjusted:
                dates[i] = get_month_end(dates[i].year, dates[i].month)
            else:
                dates[i] = self.calendar.end_of_month(dates[i])

        first, last = dates[0], dates[-1]
        if self.termination_convention is not BusinessDayAdjustment.NO_ADJUSTMENT:
            first = self.calendar.end_of_month(first)
            last = self.calendar.end_of_month(last)
        elif rule is DateGeneration.BACKWARD:
            last = get_month_end(last.year, last.month)
        else:
            first = get_month_end(first.year, first.month)
        if first != last:
            dates[0], dates[-1] = first, last


def make_schedule(
    effective_date: Union[date, datetime],
    termination_date: Union[date, datetime],
    tenor: Union[Period, Frequency, str],
    calendar: Calendar,
    convention: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    termination_convention: Optional[BusinessDayAdjustment] = None,
    rule: DateGeneration = DateGeneration.BACKWARD,
    end_of_month: bool = False,
) -> Schedule:
    """Convenience wrapper building a ``ScheduleGenerator`` and running it."""
    schedule = ScheduleGenerator(calendar, convention, termination_convention, end_of_month).generate(
        effective_date, termination_date, tenor, rule
    )
    logger.debug(
        "Schedule %s -> %s every %s: %d dates", effective_date, termination_date, tenor, len(schedule)
    )
    return schedule
