"""
Unadjusted date arithmetic for schedule generation.
"""

from datetime import date, datetime, timedelta
from typing import Union

from dateutil.relativedelta import relativedelta

from curvelib.conventions.types import Period, TimeUnit


def _as_date(dt: Union[date, datetime]) -> date:
    return dt.date() if isinstance(dt, datetime) else dt


def is_end_of_month(dt: Union[date, datetime]) -> bool:
    """Check if date is the last calendar day of its month."""
    dt = _as_date(dt)
    return (dt + timedelta(days=1)).month != dt.month


def get_month_end(year: int, month: int) -> date:
    """Get the last calendar day of a given month."""
    return date(year, month, 1) + relativedelta(months=1, days=-1)


def add_period(dt: Union[date, datetime], period: Period, end_of_month: bool = False) -> date:
    """Add a period on the null calendar (no holidays, no adjustment).

    Month arithmetic clips to the target month's last day. With
    ``end_of_month`` a month-end start stays on month ends.
    """
    dt = _as_date(dt)
    if period.unit is TimeUnit.DAYS:
        return dt + timedelta(days=period.length)
    if period.unit is TimeUnit.WEEKS:
        return dt + timedelta(weeks=period.length)

    result = dt + relativedelta(months=period.months)
    if end_of_month and is_end_of_month(dt):
        return get_month_end(result.year, result.month)
    return result
