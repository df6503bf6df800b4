"""Schedules, periods and calendar arithmetic."""

from datetime import date

import pytest

from curvelib.conventions import (
    TARGET,
    BusinessDayAdjustment,
    DateGeneration,
    Frequency,
    Period,
    TimeUnit,
    is_imm_date,
    next_imm_date,
)
from curvelib.errors import ValidationError
from curvelib.schedule import add_period, is_end_of_month, make_schedule

MF = BusinessDayAdjustment.MODIFIED_FOLLOWING


def test_period_parsing():
    assert Period.parse("3M") == Period(3, TimeUnit.MONTHS)
    assert Period.of("10y").months == 120
    assert Period.of(Frequency.SEMIANNUAL) == Period(6, TimeUnit.MONTHS)
    assert str(-Period.parse("2D")) == "-2D"
    with pytest.raises(ValueError):
        Period.parse("3X")


def test_add_period_clips_and_keeps_month_end():
    assert add_period(date(2024, 1, 31), Period.parse("1M")) == date(2024, 2, 29)
    assert add_period(date(2024, 2, 29), Period.parse("1M")) == date(2024, 3, 29)
    assert add_period(date(2024, 2, 29), Period.parse("1M"), end_of_month=True) == date(2024, 3, 31)
    assert add_period(date(2024, 1, 10), Period.parse("2W")) == date(2024, 1, 24)
    assert is_end_of_month(date(2024, 2, 29))


def test_calendar_advance():
    assert TARGET.advance(date(2024, 4, 26), 2) == date(2024, 4, 30)
    assert TARGET.adjust(date(2024, 5, 1), MF) == date(2024, 5, 2)


def test_backward_regular_schedule():
    schedule = make_schedule(date(2024, 1, 15), date(2025, 1, 15), "3M", TARGET, MF)
    assert schedule.dates == [
        date(2024, 1, 15),
        date(2024, 4, 15),
        date(2024, 7, 15),
        date(2024, 10, 15),
        date(2025, 1, 15),
    ]
    assert all(p.is_regular for p in schedule.periods())


def test_backward_schedule_has_front_stub():
    schedule = make_schedule(date(2024, 2, 1), date(2025, 1, 15), "3M", TARGET, MF)
    assert schedule.start_date == date(2024, 2, 1)
    assert schedule[1] == date(2024, 4, 15)
    assert not schedule.periods()[0].is_regular
    assert schedule.periods()[-1].is_regular


def test_forward_schedule_has_back_stub():
    schedule = make_schedule(
        date(2024, 2, 1), date(2025, 1, 15), "3M", TARGET, MF, rule=DateGeneration.FORWARD
    )
    assert schedule.dates == [
        date(2024, 2, 1),
        date(2024, 5, 2),
        date(2024, 8, 1),
        date(2024, 11, 1),
        date(2025, 1, 15),
    ]
    assert [p.is_regular for p in schedule.periods()] == [True, True, True, False]


def test_end_of_month_schedule():
    schedule = make_schedule(
        date(2024, 1, 31),
        date(2024, 7, 31),
        "1M",
        TARGET,
        MF,
        rule=DateGeneration.FORWARD,
        end_of_month=True,
    )
    assert schedule.dates == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 28),
        date(2024, 4, 30),
        date(2024, 5, 31),
        date(2024, 6, 28),
        date(2024, 7, 31),
    ]


def test_schedule_rejects_bad_inputs():
    with pytest.raises(ValidationError):
        make_schedule(date(2024, 1, 15), date(2024, 1, 15), "3M", TARGET)
    with pytest.raises(ValidationError):
        make_schedule(date(2024, 1, 15), date(2025, 1, 15), "0M", TARGET)


def test_imm_dates():
    assert is_imm_date(date(2019, 3, 20))
    assert not is_imm_date(date(2019, 4, 17))
    assert is_imm_date(date(2019, 4, 17), main_cycle=False)
    assert next_imm_date(date(2019, 3, 20)) == date(2019, 6, 19)
