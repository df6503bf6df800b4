"""SOFR futures bootstrap with known fixings for the running month."""

from datetime import date

import pytest

from curvelib.context import EvaluationContext
from curvelib.conventions import ACT_365F, Frequency
from curvelib.curves import (
    Discount,
    FlatForward,
    PiecewiseYieldCurve,
    SofrFutureRateHelper,
    sofr_contract_dates,
)
from curvelib.errors import BootstrapError, ValidationError
from curvelib.indexes import Sofr
from curvelib.interpolation import Linear
from curvelib.market import Handle
from curvelib.patterns import Observer
from curvelib.valuation import OvernightIndexFuture, RateAveraging

TODAY = date(2018, 10, 26)

FIXINGS = {
    date(2018, 10, 1): 0.0222,
    date(2018, 10, 2): 0.0218,
    date(2018, 10, 3): 0.0216,
    date(2018, 10, 4): 0.0218,
    date(2018, 10, 5): 0.0217,
    date(2018, 10, 9): 0.0219,
    date(2018, 10, 10): 0.0219,
    date(2018, 10, 11): 0.0219,
    date(2018, 10, 12): 0.0218,
    date(2018, 10, 15): 0.0217,
    date(2018, 10, 16): 0.0218,
    date(2018, 10, 17): 0.0219,
    date(2018, 10, 18): 0.0219,
    date(2018, 10, 19): 0.0219,
    date(2018, 10, 22): 0.0218,
    date(2018, 10, 23): 0.0217,
    date(2018, 10, 24): 0.0218,
    date(2018, 10, 25): 0.0219,
}

MONTHLY = [
    (10, 2018, 97.8175),
    (11, 2018, 97.770),
    (12, 2018, 97.685),
    (1, 2019, 97.595),
    (2, 2019, 97.590),
    (3, 2019, 97.525),
]
QUARTERLY = [
    (3, 2019, 97.440),
    (6, 2019, 97.295),
    (9, 2019, 97.220),
    (12, 2019, 97.170),
    (3, 2020, 97.160),
    (6, 2020, 97.165),
    (9, 2020, 97.175),
]


@pytest.fixture
def context():
    ctx = EvaluationContext(TODAY)
    ctx.add_fixings("SOFR", FIXINGS)
    return ctx


@pytest.fixture
def curve(context):
    helpers = [
        SofrFutureRateHelper(price, month, year, Frequency.MONTHLY, context=context)
        for month, year, price in MONTHLY
    ]
    helpers += [
        SofrFutureRateHelper(price, month, year, Frequency.QUARTERLY, context=context)
        for month, year, price in QUARTERLY
    ]
    return PiecewiseYieldCurve(TODAY, helpers, ACT_365F, Discount(), Linear(), context=context)


def test_quarterly_future_is_repriced(context, curve):
    future = OvernightIndexFuture(
        Sofr(Handle(curve), context), date(2019, 3, 20), date(2019, 6, 19)
    )
    assert future.npv() == pytest.approx(97.44, abs=1.0e-8)


def test_monthly_future_is_repriced(context, curve):
    future = OvernightIndexFuture(
        Sofr(Handle(curve), context),
        date(2018, 11, 1),
        date(2018, 12, 1),
        RateAveraging.SIMPLE,
    )
    assert future.npv() == pytest.approx(97.770, abs=1.0e-8)


def test_every_helper_is_repriced(curve):
    curve.calculate()
    for helper in curve.helpers:
        assert abs(helper.quote_error()) < 1.0e-8


def test_running_month_uses_stored_fixings(context):
    flat = Handle(FlatForward(TODAY, 0.022, ACT_365F))
    october = OvernightIndexFuture(
        Sofr(flat, context), date(2018, 10, 1), date(2018, 11, 1), RateAveraging.SIMPLE
    )
    before = october.npv()
    context.add_fixing("SOFR", date(2018, 10, 1), 0.0300, force_overwrite=True)
    assert october.npv() < before


def test_missing_fixing(context):
    context.clear_fixings("SOFR")
    helper = SofrFutureRateHelper(97.8175, 10, 2018, Frequency.MONTHLY, context=context)
    curve = PiecewiseYieldCurve(TODAY, [helper], ACT_365F, Discount(), Linear(), context=context)
    with pytest.raises(BootstrapError) as info:
        curve.discount(0.05)
    assert isinstance(info.value.__cause__, ValidationError)


def test_contract_dates():
    assert sofr_contract_dates(3, 2019, Frequency.QUARTERLY) == (
        date(2019, 3, 20),
        date(2019, 6, 19),
        RateAveraging.COMPOUND,
    )
    assert sofr_contract_dates(12, 2018, Frequency.MONTHLY) == (
        date(2018, 12, 1),
        date(2019, 1, 1),
        RateAveraging.SIMPLE,
    )
    with pytest.raises(ValidationError):
        sofr_contract_dates(4, 2019, Frequency.QUARTERLY)
    with pytest.raises(ValidationError):
        sofr_contract_dates(4, 2019, Frequency.ANNUAL)


def test_helper_needs_index_or_context():
    with pytest.raises(ValidationError):
        SofrFutureRateHelper(97.5, 3, 2019, Frequency.QUARTERLY)


# ---------------------------------------------------------------------------
# Fixing history
# ---------------------------------------------------------------------------
class Counter(Observer):
    def __init__(self):
        super().__init__()
        self.count = 0

    def update(self):
        self.count += 1


def test_conflicting_batch_stores_nothing(context):
    counter = Counter()
    counter.register_with(context)
    before = context.fixing_history("SOFR")

    with pytest.raises(ValidationError):
        context.add_fixings(
            "SOFR", [(date(2018, 10, 26), 0.0220), (date(2018, 10, 25), 0.0300)]
        )
    assert context.fixing_history("SOFR") == before
    assert not context.has_fixing("SOFR", date(2018, 10, 26))
    assert counter.count == 0

    context.add_fixings("SOFR", [(date(2018, 10, 26), 0.0220), (date(2018, 10, 25), 0.0219)])
    assert context.fixing("SOFR", date(2018, 10, 26)) == 0.0220
    assert counter.count == 1


def test_batch_notifies_clean_curve(context, curve):
    curve.calculate()
    assert curve.is_clean
    context.add_fixings("SOFR", {date(2018, 10, 26): 0.0219})
    assert not curve.is_clean


def test_todays_overnight_fixing_needs_inclusion():
    flat = Handle(FlatForward(TODAY, 0.022, ACT_365F))
    start, end = date(2018, 10, 26), date(2018, 10, 29)

    excluded = EvaluationContext(TODAY)
    excluded.add_fixing("SOFR", start, 0.05)
    forecast = Sofr(flat, excluded).compounded_rate(start, end)
    assert forecast == pytest.approx(0.022, abs=5.0e-4)

    included = EvaluationContext(TODAY, include_todays_fixings=True)
    included.add_fixing("SOFR", start, 0.05)
    assert Sofr(flat, included).compounded_rate(start, end) == pytest.approx(0.05, abs=1.0e-12)
