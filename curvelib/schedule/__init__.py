# Re-export schedule components
from .adjustments import add_period, get_month_end, is_end_of_month
from .core import Schedule, SchedulePeriod
from .generator import ScheduleGenerator, make_schedule

__all__ = [
    "Schedule",
    "SchedulePeriod",
    "ScheduleGenerator",
    "make_schedule",
    "add_period",
    "get_month_end",
    "is_end_of_month",
]
