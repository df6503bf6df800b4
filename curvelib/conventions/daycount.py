"""
Day count conventions.

A curve turns dates into times with its day count; coupons use one for their
accrual fractions. The arithmetic is QuantLib's; conventions are resolved from
configuration strings through ``get_day_count_convention``.
"""

from datetime import date, datetime
from typing import Dict, Tuple, Union

import QuantLib as ql

from curvelib.errors import ValidationError

from .calendars import to_ql_date

DateLike = Union[date, datetime]


class DayCountConvention:
    """Named wrapper around a QuantLib day counter.

    Two conventions are equal when their names are, so they can key
    dictionaries and be compared after a round trip through configuration.
    """

    __slots__ = ("name", "_ql_day_counter")

    def __init__(self, name: str, ql_day_counter: ql.DayCounter):
        self.name = name
        self._ql_day_counter = ql_day_counter

    @property
    def ql_day_counter(self) -> ql.DayCounter:
        return self._ql_day_counter

    def year_fraction(self, start: DateLike, end: DateLike) -> float:
        """Accrual fraction from ``start`` to ``end``; negative when reversed."""
        if start == end:
            return 0.0
        return self._ql_day_counter.yearFraction(to_ql_date(start), to_ql_date(end))

    def day_count(self, start: DateLike, end: DateLike) -> int:
        return self._ql_day_counter.dayCount(to_ql_date(start), to_ql_date(end))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DayCountConvention) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"DayCountConvention({self.name})"


# Money market, IBOR and overnight legs
ACT_360 = DayCountConvention("ACT/360", ql.Actual360())
# Default curve time axis
ACT_365F = DayCountConvention("ACT/365F", ql.Actual365Fixed())
# EUR fixed swap legs
THIRTY_360E = DayCountConvention("30E/360", ql.Thirty360(ql.Thirty360.European))
THIRTY_360U = DayCountConvention("30U/360", ql.Thirty360(ql.Thirty360.BondBasis))
ACT_ACT = DayCountConvention("ACT/ACT", ql.ActualActual(ql.ActualActual.ISDA))

_ALIASES: Dict[DayCountConvention, Tuple[str, ...]] = {
    ACT_360: ("ACTUAL/360", "A360"),
    ACT_365F: ("ACT/365", "ACTUAL/365F", "A365F"),
    THIRTY_360E: ("30/360E", "30/360 EUROPEAN"),
    THIRTY_360U: ("30/360", "30/360 US", "30/360 BOND BASIS"),
    ACT_ACT: ("ACTUAL/ACTUAL", "ACT/ACT ISDA"),
}

DAY_COUNT_CONVENTIONS: Dict[str, DayCountConvention] = {
    key: convention
    for convention, aliases in _ALIASES.items()
    for key in (convention.name,) + aliases
}


def get_day_count_convention(name: Union[str, DayCountConvention]) -> DayCountConvention:
    """
    Resolve a day count convention.

    Args:
        name: Convention name or alias (case-insensitive), or a convention

    Returns:
        The shared convention instance

    Raises:
        ValidationError: Unknown name
    """
    if isinstance(name, DayCountConvention):
        return name
    key = " ".join(str(name).upper().split())
    if key not in DAY_COUNT_CONVENTIONS:
        raise ValidationError(
            f"Unknown day count convention: {name}. Available: {sorted(DAY_COUNT_CONVENTIONS)}"
        )
    return DAY_COUNT_CONVENTIONS[key]
