"""Basis swap helpers: bootstrap one IBOR curve against a known curve."""

from datetime import date

import pytest

from curvelib.context import EvaluationContext
from curvelib.conventions import (
    ACT_365F,
    US_GOVERNMENT_BOND,
    BusinessDayAdjustment,
    DateGeneration,
    Period,
    TimeUnit,
)
from curvelib.curves import (
    BootstrapConfig,
    FlatForward,
    IborIborBasisSwapRateHelper,
    OvernightIborBasisSwapRateHelper,
    PiecewiseYieldCurve,
    ZeroYield,
)
from curvelib.errors import ValidationError
from curvelib.indexes import Sofr, USDLibor
from curvelib.interpolation import Linear
from curvelib.market import Handle, RelinkableHandle, SimpleQuote
from curvelib.patterns import Observer
from curvelib.schedule import make_schedule
from curvelib.valuation import Swap, ibor_leg, overnight_leg

TODAY = date(2021, 3, 15)
CALENDAR = US_GOVERNMENT_BOND
FOLLOWING = BusinessDayAdjustment.FOLLOWING
SETTLEMENT_DAYS = 2

QUOTES = [
    (1, 0.0010),
    (2, 0.0012),
    (3, 0.0015),
    (5, 0.0015),
    (8, 0.0018),
    (10, 0.0020),
    (15, 0.0021),
    (20, 0.0021),
]


class Flag(Observer):
    def __init__(self):
        super().__init__()
        self.raised = False

    def update(self):
        self.raised = True


@pytest.fixture
def context():
    return EvaluationContext(TODAY)


@pytest.fixture
def known():
    return RelinkableHandle(FlatForward(TODAY, 0.01, ACT_365F))


@pytest.fixture
def external_discount():
    return Handle(FlatForward(TODAY, 0.005, ACT_365F))


def _bootstrap(helpers, context):
    return PiecewiseYieldCurve(
        TODAY,
        helpers,
        ACT_365F,
        ZeroYield(),
        Linear(),
        BootstrapConfig(allow_extrapolation=True),
        context=context,
        name="USD basis",
    )


def _schedule(maturity, tenor):
    spot = CALENDAR.advance(TODAY, SETTLEMENT_DAYS)
    return make_schedule(
        spot, maturity, tenor, CALENDAR, FOLLOWING, FOLLOWING, DateGeneration.FORWARD, False
    )


def _maturity(years):
    spot = CALENDAR.advance(TODAY, SETTLEMENT_DAYS)
    return CALENDAR.advance(spot, Period(years, TimeUnit.YEARS), FOLLOWING, False)


# ---------------------------------------------------------------------------
# IBOR vs IBOR
# ---------------------------------------------------------------------------
def _ibor_ibor_helpers(context, known, discount, bootstrap_base):
    base = USDLibor("3M", None if bootstrap_base else known, context)
    other = USDLibor("6M", known if bootstrap_base else None, context)
    return [
        IborIborBasisSwapRateHelper(
            SimpleQuote(basis),
            Period(years, TimeUnit.YEARS),
            SETTLEMENT_DAYS,
            CALENDAR,
            FOLLOWING,
            False,
            base,
            other,
            discount,
            bootstrap_base,
            context=context,
        )
        for years, basis in QUOTES
    ]


@pytest.mark.parametrize("bootstrap_base", [True, False])
@pytest.mark.parametrize("use_external_discount", [True, False])
def test_ibor_ibor_basis_reprices(context, known, external_discount, bootstrap_base, use_external_discount):
    discount = external_discount if use_external_discount else None
    curve = _bootstrap(_ibor_ibor_helpers(context, known, discount, bootstrap_base), context)
    curve_handle = Handle(curve)
    discount_handle = discount if discount is not None else curve_handle

    base = USDLibor("3M", curve_handle if bootstrap_base else known, context)
    other = USDLibor("6M", known if bootstrap_base else curve_handle, context)
    for years, basis in QUOTES:
        maturity = _maturity(years)
        swap = Swap(
            [
                ibor_leg(_schedule(maturity, base.tenor), base, 100.0, spread=basis),
                ibor_leg(_schedule(maturity, other.tenor), other, 100.0),
            ],
            [True, False],
            discount_handle,
        )
        assert abs(swap.npv()) < 1.0e-8

    for helper in curve.helpers:
        assert abs(helper.quote_error()) < 1.0e-10


def test_ibor_ibor_needs_known_curve(context):
    with pytest.raises(ValidationError):
        IborIborBasisSwapRateHelper(
            0.001,
            "5Y",
            SETTLEMENT_DAYS,
            CALENDAR,
            FOLLOWING,
            False,
            USDLibor("3M", context=context),
            USDLibor("6M", context=context),
            context=context,
        )


def test_relinking_known_curve_dirties_bootstrap(context, known):
    curve = _bootstrap(_ibor_ibor_helpers(context, known, None, True), context)
    before = curve.zero_rate(5.0)
    flag = Flag()
    flag.register_with(curve)

    known.link_to(FlatForward(TODAY, 0.012, ACT_365F))
    assert flag.raised
    assert curve.zero_rate(5.0) > before + 0.001
    for helper in curve.helpers:
        assert abs(helper.quote_error()) < 1.0e-10


# ---------------------------------------------------------------------------
# Overnight vs IBOR
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("use_external_discount", [True, False])
def test_overnight_ibor_basis_reprices(context, known, external_discount, use_external_discount):
    discount = external_discount if use_external_discount else None
    helpers = [
        OvernightIborBasisSwapRateHelper(
            SimpleQuote(basis),
            Period(years, TimeUnit.YEARS),
            SETTLEMENT_DAYS,
            CALENDAR,
            FOLLOWING,
            False,
            Sofr(known, context),
            USDLibor("6M", context=context),
            discount,
            context=context,
        )
        for years, basis in QUOTES
    ]
    curve = _bootstrap(helpers, context)
    curve_handle = Handle(curve)
    discount_handle = discount if discount is not None else curve_handle

    sofr = Sofr(known, context)
    libor = USDLibor("6M", curve_handle, context)
    for years, basis in QUOTES:
        schedule = _schedule(_maturity(years), libor.tenor)
        swap = Swap(
            [
                overnight_leg(schedule, sofr, 100.0, spread=basis),
                ibor_leg(schedule, libor, 100.0),
            ],
            [True, False],
            discount_handle,
        )
        assert abs(swap.npv()) < 1.0e-8


def test_overnight_ibor_needs_overnight_base(context, known):
    with pytest.raises(ValidationError):
        OvernightIborBasisSwapRateHelper(
            0.001,
            "5Y",
            SETTLEMENT_DAYS,
            CALENDAR,
            FOLLOWING,
            False,
            USDLibor("3M", known, context),
            USDLibor("6M", context=context),
            context=context,
        )
