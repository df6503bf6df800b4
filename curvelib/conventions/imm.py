"""IMM dates (third Wednesday of the month)."""

from datetime import date, timedelta

MAIN_CYCLE_MONTHS = (3, 6, 9, 12)


def third_wednesday(year: int, month: int) -> date:
    first = date(year, month, 1)
    offset = (2 - first.weekday()) % 7
    return first + timedelta(days=offset + 14)


def is_imm_date(d: date, main_cycle: bool = True) -> bool:
    if main_cycle and d.month not in MAIN_CYCLE_MONTHS:
        return False
    return d == third_wednesday(d.year, d.month)


def next_imm_date(d: date, main_cycle: bool = True) -> date:
    """First IMM date strictly after ``d``."""
    year, month = d.year, d.month
    while True:
        if not main_cycle or month in MAIN_CYCLE_MONTHS:
            candidate = third_wednesday(year, month)
            if candidate > d:
                return candidate
        month += 1
        if month > 12:
            month = 1
            year += 1
