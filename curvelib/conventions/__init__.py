"""Market conventions: calendars, day counts, periods and enums."""

from .calendars import (
    TARGET,
    UNITED_KINGDOM,
    US_GOVERNMENT_BOND,
    WEEKEND_ONLY,
    Calendar,
    JointCalendar,
    get_calendar,
    to_py_date,
    to_ql_date,
)
from .daycount import (
    ACT_360,
    ACT_365F,
    ACT_ACT,
    THIRTY_360E,
    THIRTY_360U,
    DayCountConvention,
    get_day_count_convention,
)
from .imm import is_imm_date, next_imm_date, third_wednesday
from .types import (
    BusinessDayAdjustment,
    Compounding,
    DateGeneration,
    Frequency,
    Period,
    TimeUnit,
)

__all__ = [
    "Calendar",
    "JointCalendar",
    "get_calendar",
    "to_ql_date",
    "to_py_date",
    "TARGET",
    "WEEKEND_ONLY",
    "US_GOVERNMENT_BOND",
    "UNITED_KINGDOM",
    "DayCountConvention",
    "get_day_count_convention",
    "ACT_360",
    "ACT_365F",
    "ACT_ACT",
    "THIRTY_360E",
    "THIRTY_360U",
    "BusinessDayAdjustment",
    "Compounding",
    "DateGeneration",
    "Frequency",
    "Period",
    "TimeUnit",
    "is_imm_date",
    "next_imm_date",
    "third_wednesday",
]
