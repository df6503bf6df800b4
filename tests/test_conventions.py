"""Day counts, calendars and rate conversions."""

import math
from datetime import date

import pytest

from curvelib.context import EvaluationContext
from curvelib.conventions import (
    ACT_360,
    ACT_365F,
    TARGET,
    THIRTY_360E,
    UNITED_KINGDOM,
    US_GOVERNMENT_BOND,
    Compounding,
    Frequency,
    JointCalendar,
    get_calendar,
    get_day_count_convention,
)
from curvelib.curves import FlatForward, compound_factor, equivalent_rate, implied_rate
from curvelib.errors import ValidationError


# ---------------------------------------------------------------------------
# Day counts
# ---------------------------------------------------------------------------
def test_year_fractions():
    start, end = date(2024, 1, 1), date(2024, 7, 1)
    assert ACT_360.year_fraction(start, end) == pytest.approx(182.0 / 360.0)
    assert ACT_365F.year_fraction(start, end) == pytest.approx(182.0 / 365.0)
    assert ACT_360.day_count(date(2024, 1, 1), date(2024, 3, 1)) == 60
    assert THIRTY_360E.year_fraction(date(2024, 1, 31), date(2024, 2, 29)) == pytest.approx(29.0 / 360.0)
    assert ACT_365F.year_fraction(end, end) == 0.0


def test_day_count_lookup():
    assert get_day_count_convention("act/360") is ACT_360
    assert get_day_count_convention("Actual/365F") is ACT_365F
    assert get_day_count_convention("30/360  european") is THIRTY_360E
    assert get_day_count_convention(ACT_360) is ACT_360
    with pytest.raises(ValidationError):
        get_day_count_convention("BUS/252")


# ---------------------------------------------------------------------------
# Calendars
# ---------------------------------------------------------------------------
def test_calendar_lookup():
    assert get_calendar("target") is TARGET
    assert get_calendar(US_GOVERNMENT_BOND) is US_GOVERNMENT_BOND
    with pytest.raises(ValidationError):
        get_calendar("MARS")


def test_joint_calendar():
    # UK early May bank holiday, a TARGET business day
    holiday = date(2024, 5, 6)
    joint = get_calendar("TARGET+UK")
    assert TARGET.is_business_day(holiday)
    assert not UNITED_KINGDOM.is_business_day(holiday)
    assert not joint.is_business_day(holiday)
    assert joint.advance(date(2024, 5, 3), 1) == date(2024, 5, 7)
    with pytest.raises(ValidationError):
        JointCalendar(TARGET)


def test_sofr_calendar_holidays():
    assert not US_GOVERNMENT_BOND.is_business_day(date(2018, 10, 8))
    assert US_GOVERNMENT_BOND.advance(date(2018, 10, 5), 1) == date(2018, 10, 9)


# ---------------------------------------------------------------------------
# Rates
# ---------------------------------------------------------------------------
def test_compound_factors():
    assert compound_factor(0.05, 2.0, Compounding.COMPOUNDED, Frequency.SEMIANNUAL) == pytest.approx(1.025**4)
    assert compound_factor(0.05, 0.5, Compounding.SIMPLE) == pytest.approx(1.025)
    assert compound_factor(0.05, 2.0, Compounding.CONTINUOUS) == pytest.approx(math.exp(0.1))
    assert compound_factor(
        0.04, 0.25, Compounding.SIMPLE_THEN_COMPOUNDED, Frequency.QUARTERLY
    ) == pytest.approx(1.01)


def test_implied_and_equivalent_rates():
    compound = compound_factor(0.03, 3.0, Compounding.COMPOUNDED, Frequency.QUARTERLY)
    assert implied_rate(compound, 3.0, Compounding.COMPOUNDED, Frequency.QUARTERLY) == pytest.approx(0.03)
    assert equivalent_rate(0.05, 1.0, Compounding.CONTINUOUS, Compounding.SIMPLE) == pytest.approx(
        math.exp(0.05) - 1.0
    )
    assert implied_rate(1.0, 2.0, Compounding.CONTINUOUS) == 0.0
    with pytest.raises(ValidationError):
        implied_rate(0.0, 1.0, Compounding.CONTINUOUS)
    with pytest.raises(ValidationError):
        compound_factor(0.05, -1.0, Compounding.SIMPLE)


def test_flat_curve_from_names():
    context = EvaluationContext(date(2024, 1, 2))
    curve = FlatForward(
        None, 0.03, "ACT/365F", context=context, settlement_days=2, calendar="target"
    )
    assert curve.day_count is ACT_365F
    assert curve.reference_date == date(2024, 1, 4)
    assert curve.discount(2.0) == pytest.approx(math.exp(-0.06))
    assert curve.zero_rate(2.0, Compounding.SIMPLE) == pytest.approx((math.exp(0.06) - 1.0) / 2.0)

    context.set_evaluation_date(date(2024, 1, 5))
    assert curve.reference_date == date(2024, 1, 9)
