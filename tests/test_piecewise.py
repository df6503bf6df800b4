"""Piecewise yield curve bootstrap on EUR deposits, FRAs, futures and swaps."""

import logging
import math
from datetime import date, timedelta

import pytest

from curvelib.context import EvaluationContext
from curvelib.conventions import (
    ACT_360,
    TARGET,
    THIRTY_360E,
    BusinessDayAdjustment,
    Frequency,
    Period,
    TimeUnit,
)
from curvelib.curves import (
    BootstrapConfig,
    DepositRateHelper,
    Discount,
    ForwardRate,
    FraRateHelper,
    FuturesRateHelper,
    IterativeBootstrap,
    PiecewiseYieldCurve,
    SwapRateHelper,
    ZeroYield,
)
from curvelib.errors import BootstrapError, BootstrapNonConvergence, ExtrapolationError, ValidationError
from curvelib.indexes import Euribor3M, Euribor6M
from curvelib.interpolation import BackwardFlat, Cubic, Linear, LogLinear
from curvelib.market import Handle, SimpleQuote
from curvelib.patterns import LazyState, Observer
from curvelib.valuation import make_vanilla_swap

TODAY = date(2023, 3, 14)
MF = BusinessDayAdjustment.MODIFIED_FOLLOWING
TOLERANCE = 1.0e-9

DEPOSITS = [
    (1, TimeUnit.WEEKS, 4.559),
    (1, TimeUnit.MONTHS, 4.581),
    (2, TimeUnit.MONTHS, 4.573),
    (3, TimeUnit.MONTHS, 4.557),
    (6, TimeUnit.MONTHS, 4.496),
    (9, TimeUnit.MONTHS, 4.490),
]
FRAS = [(1, 4, 4.581), (2, 5, 4.573), (3, 6, 4.557), (6, 9, 4.496), (9, 12, 4.490)]
SWAPS = [
    (1, 4.54),
    (2, 4.63),
    (3, 4.75),
    (4, 4.86),
    (5, 4.99),
    (6, 5.11),
    (7, 5.23),
    (8, 5.33),
    (9, 5.41),
    (10, 5.47),
    (12, 5.60),
    (15, 5.75),
    (20, 5.89),
    (25, 5.95),
    (30, 5.96),
]
FUTURES = [
    (date(2023, 3, 15), 96.50),
    (date(2023, 6, 21), 96.30),
    (date(2023, 9, 20), 96.20),
    (date(2023, 12, 20), 96.25),
]

CONFIGURATIONS = [
    (Discount, LogLinear),
    (Discount, Linear),
    (Discount, Cubic),
    (ZeroYield, Linear),
    (ZeroYield, Cubic),
    (ForwardRate, BackwardFlat),
    (ForwardRate, Linear),
]


class Flag(Observer):
    def __init__(self):
        super().__init__()
        self.raised = False

    def update(self):
        self.raised = True


class Market:
    """Quotes and helpers of one EUR market snapshot."""

    def __init__(self):
        self.context = EvaluationContext(TODAY)
        self.settlement = TARGET.advance(TODAY, 2)
        self.deposit_quotes = [SimpleQuote(r / 100.0) for _, _, r in DEPOSITS]
        self.fra_quotes = [SimpleQuote(r / 100.0) for _, _, r in FRAS]
        self.swap_quotes = [SimpleQuote(r / 100.0) for _, r in SWAPS]

    def deposit_helpers(self):
        return [
            DepositRateHelper(
                quote, Period(n, unit), 2, TARGET, MF, True, ACT_360, context=self.context
            )
            for (n, unit, _), quote in zip(DEPOSITS, self.deposit_quotes)
        ]

    def fra_helpers(self):
        return [
            FraRateHelper(quote, start, end, 2, TARGET, MF, True, ACT_360, context=self.context)
            for (start, end, _), quote in zip(FRAS, self.fra_quotes)
        ]

    def swap_helpers(self):
        return [
            SwapRateHelper(
                quote,
                Period(n, TimeUnit.YEARS),
                TARGET,
                Frequency.ANNUAL,
                BusinessDayAdjustment.NO_ADJUSTMENT,
                THIRTY_360E,
                Euribor6M(context=self.context),
                context=self.context,
            )
            for (n, _), quote in zip(SWAPS, self.swap_quotes)
        ]

    def curve(self, trait=ZeroYield, interpolation=Linear, helpers=None, **config):
        if helpers is None:
            helpers = self.deposit_helpers() + self.swap_helpers()
        return PiecewiseYieldCurve(
            self.settlement,
            helpers,
            ACT_360,
            trait(),
            interpolation(),
            BootstrapConfig(accuracy=1.0e-12, **config),
            context=self.context,
            name="EUR",
        )


@pytest.fixture
def market():
    return Market()


def _simple_rate(curve, start, end):
    return (curve.discount(start) / curve.discount(end) - 1.0) / ACT_360.year_fraction(start, end)


# ---------------------------------------------------------------------------
# Repricing
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("trait,interpolation", CONFIGURATIONS)
def test_curve_reprices_deposits_and_swaps(market, trait, interpolation):
    curve = market.curve(trait, interpolation)
    assert curve.reference_date == market.settlement

    for (n, unit, rate), _ in zip(DEPOSITS, market.deposit_quotes):
        maturity = TARGET.advance(market.settlement, Period(n, unit), MF, True)
        assert _simple_rate(curve, market.settlement, maturity) == pytest.approx(
            rate / 100.0, abs=TOLERANCE
        )

    index = Euribor6M(Handle(curve), market.context)
    for n, rate in SWAPS:
        swap = make_vanilla_swap(
            Period(n, TimeUnit.YEARS),
            index,
            0.0,
            Handle(curve),
            market.settlement,
            fixed_calendar=TARGET,
            fixed_tenor=Period.of(Frequency.ANNUAL),
            fixed_convention=BusinessDayAdjustment.NO_ADJUSTMENT,
            fixed_termination_convention=BusinessDayAdjustment.NO_ADJUSTMENT,
            fixed_day_count=THIRTY_360E,
        )
        assert swap.fair_rate() == pytest.approx(rate / 100.0, abs=TOLERANCE)


@pytest.mark.parametrize("trait,interpolation", CONFIGURATIONS)
def test_helpers_report_zero_quote_error(market, trait, interpolation):
    curve = market.curve(trait, interpolation)
    curve.calculate()
    for helper in curve.helpers:
        assert abs(helper.quote_error()) < TOLERANCE


def test_curve_reprices_fras(market):
    curve = market.curve(helpers=market.fra_helpers())
    for start_months, _, rate in FRAS:
        start = TARGET.advance(market.settlement, Period(start_months, TimeUnit.MONTHS), MF, True)
        end = TARGET.advance(start, Period(3, TimeUnit.MONTHS), MF, True)
        assert _simple_rate(curve, start, end) == pytest.approx(rate / 100.0, abs=TOLERANCE)


def test_fra_from_index_matches_explicit_conventions(market):
    explicit = FraRateHelper(0.045, 3, 6, 2, TARGET, MF, True, ACT_360, context=market.context)
    from_index = FraRateHelper(0.045, 3, index=Euribor3M(context=market.context), context=market.context)
    assert from_index.earliest_date == explicit.earliest_date
    assert from_index.latest_relevant_date == explicit.latest_relevant_date


def test_curve_reprices_futures():
    helpers = [
        FuturesRateHelper(price, imm, 3, TARGET, MF, False, ACT_360) for imm, price in FUTURES
    ]
    curve = PiecewiseYieldCurve(TODAY, helpers, ACT_360, Discount(), LogLinear())
    for imm, price in FUTURES:
        maturity = TARGET.advance(imm, Period(3, TimeUnit.MONTHS), MF)
        implied = 100.0 * (1.0 - _simple_rate(curve, imm, maturity))
        assert implied == pytest.approx(price, abs=1.0e-8)


def test_futures_need_imm_dates():
    with pytest.raises(ValidationError):
        FuturesRateHelper(96.5, date(2023, 3, 16), 3, TARGET, MF, False, ACT_360)


def test_newton_solver_matches_brent(market):
    brent = market.curve(Discount, LogLinear, helpers=market.deposit_helpers())
    newton = market.curve(
        Discount, LogLinear, helpers=market.deposit_helpers(), solver="NEWTON_SAFE"
    )
    for d in newton.dates():
        assert newton.discount(d) == pytest.approx(brent.discount(d), abs=1.0e-10)


def test_forced_global_passes_on_local_interpolation(market):
    curve = market.curve(ZeroYield, Linear, global_passes=True)
    curve.calculate()
    assert curve.passes >= 2
    for helper in curve.helpers:
        assert abs(helper.quote_error()) < TOLERANCE


def test_maturity_pillars_trigger_global_passes(market):
    curve = market.curve(ZeroYield, Linear, pillar_choice="MATURITY_DATE")
    bootstrap = IterativeBootstrap(curve.config)
    late = [h for h in curve.helpers if bootstrap.is_interdependent(h)]
    assert late
    assert all(h.latest_relevant_date > h.maturity_date for h in late)

    curve.calculate()
    assert curve.passes >= 2
    for helper in curve.helpers:
        assert abs(helper.quote_error()) < TOLERANCE


def test_last_relevant_pillars_need_single_pass(market):
    curve = market.curve(ZeroYield, Linear)
    bootstrap = IterativeBootstrap(curve.config)
    assert not any(bootstrap.is_interdependent(h) for h in curve.helpers)
    curve.calculate()
    assert curve.passes == 1


@pytest.mark.parametrize("trait", [Discount, ZeroYield, ForwardRate])
@pytest.mark.parametrize("new_rate", [0.005, -0.002])
def test_curve_follows_large_quote_moves(market, trait, new_rate, caplog):
    curve = market.curve(trait, Linear, helpers=market.deposit_helpers())
    curve.calculate()

    for quote in market.deposit_quotes:
        quote.set_value(new_rate)
    with caplog.at_level(logging.WARNING, logger="curvelib.curves.bootstrap.iterative"):
        curve.calculate()
    assert curve.is_clean
    if trait is not Discount:
        assert "retrying from default guesses" in caplog.text
    for helper in curve.helpers:
        assert abs(helper.quote_error()) < TOLERANCE
    last = curve.dates()[-1]
    assert curve.zero_rate(last) == pytest.approx(new_rate, abs=5.0e-4)


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------
def test_nodes_and_frame(market):
    curve = market.curve(Discount, LogLinear)
    dates = curve.dates()
    assert len(dates) == len(DEPOSITS) + len(SWAPS) + 1
    assert dates[0] == market.settlement
    assert dates == sorted(dates)
    assert curve.data()[0] == 1.0
    assert curve.times()[0] == 0.0
    assert curve.nodes()[-1][0] == dates[-1]

    frame = curve.to_frame()
    assert list(frame.columns) == ["date", "time", "value", "discount", "zero_rate"]
    assert len(frame) == len(dates)
    assert frame["discount"].iloc[0] == pytest.approx(1.0)
    assert frame["discount"].iloc[5] == pytest.approx(frame["value"].iloc[5])


def test_max_date_covers_latest_relevant_dates(market):
    curve = market.curve()
    assert curve.max_date == max(h.latest_relevant_date for h in curve.helpers)
    assert curve.max_date == curve.dates()[-1]


# ---------------------------------------------------------------------------
# Observability
# ---------------------------------------------------------------------------
def test_curve_follows_quote_changes(market):
    curve = market.curve(Discount, LogLinear)
    horizon = market.settlement + timedelta(days=365 * 5)
    before = curve.discount(horizon)
    flag = Flag()
    flag.register_with(curve)

    quote = market.swap_quotes[3]
    quote.set_value(quote.value() * 1.01)
    assert flag.raised
    assert curve.state is LazyState.DIRTY
    assert curve.discount(horizon) != pytest.approx(before, abs=1.0e-12)
    for helper in curve.helpers:
        assert abs(helper.quote_error()) < TOLERANCE


def test_curve_follows_evaluation_date(market):
    curve = market.curve(Discount, LogLinear)
    curve.calculate()
    flag = Flag()
    flag.register_with(curve)

    market.context.set_evaluation_date(TARGET.advance(TODAY, 15))
    assert flag.raised
    # helpers now start later; the curve still reprices them
    curve.calculate()
    for helper in curve.helpers:
        assert abs(helper.quote_error()) < TOLERANCE


def test_moving_reference_date(market):
    curve = PiecewiseYieldCurve(
        None,
        market.deposit_helpers(),
        ACT_360,
        Discount(),
        LogLinear(),
        context=market.context,
        settlement_days=2,
        calendar=TARGET,
    )
    assert curve.dates()[0] == market.settlement

    new_today = TARGET.advance(TODAY, 10)
    market.context.set_evaluation_date(new_today)
    assert curve.reference_date == TARGET.advance(new_today, 2)
    assert curve.dates()[0] == curve.reference_date
    assert curve.discount(curve.reference_date) == pytest.approx(1.0)


def test_moving_reference_needs_context(market):
    with pytest.raises(ValidationError):
        PiecewiseYieldCurve(None, market.deposit_helpers(), settlement_days=2, calendar=TARGET)


# ---------------------------------------------------------------------------
# Domain and validation
# ---------------------------------------------------------------------------
def test_extrapolation(market):
    curve = market.curve()
    beyond = curve.max_date + timedelta(days=30)

    with pytest.raises(ExtrapolationError):
        curve.discount(beyond)
    with pytest.raises(ExtrapolationError):
        curve.zero_rate(curve.max_time + 1.0)
    assert 0.0 < curve.discount(beyond, extrapolate=True) < curve.discount(curve.max_date)

    curve.enable_extrapolation()
    assert curve.discount(beyond) == pytest.approx(curve.discount(beyond, extrapolate=True))


def test_extrapolation_from_config(market):
    curve = market.curve(allow_extrapolation=True)
    assert curve.discount(curve.max_time + 5.0) > 0.0


def test_negative_time_rejected(market):
    curve = market.curve()
    with pytest.raises(ValidationError):
        curve.discount(-0.5)
    with pytest.raises(ValidationError):
        curve.forward_rate(2.0, 1.0)


def test_rates_are_consistent(market):
    curve = market.curve(ZeroYield, Linear)
    t = 3.0
    zero = curve.zero_rate(t)
    assert curve.discount(t) == pytest.approx(math.exp(-zero * t))
    assert curve.forward_rate(0.0, t) == pytest.approx(zero, rel=1e-8)
    assert curve.instantaneous_forward(t) == pytest.approx(curve.forward_rate(t - 1e-4, t + 1e-4), rel=1e-4)


def test_no_helpers():
    with pytest.raises(ValidationError):
        PiecewiseYieldCurve(TODAY, [])


def test_duplicate_pillars(market):
    helpers = market.deposit_helpers()
    helpers.append(
        DepositRateHelper(0.045, "3M", 2, TARGET, MF, True, ACT_360, context=market.context)
    )
    with pytest.raises(ValidationError, match="same pillar"):
        market.curve(helpers=helpers)


def test_invalid_quote(market):
    market.deposit_quotes[2].reset()
    curve = market.curve(helpers=market.deposit_helpers())
    with pytest.raises(ValidationError, match="invalid quote"):
        curve.discount(0.5)


def test_pillar_before_reference(market):
    curve = PiecewiseYieldCurve(date(2023, 5, 1), market.deposit_helpers(), ACT_360)
    with pytest.raises(ValidationError):
        curve.discount(0.1)


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------
def test_failed_bootstrap_keeps_last_nodes(market):
    curve = market.curve(ZeroYield, Linear, helpers=market.deposit_helpers())
    before = curve.data()
    horizon = curve.dates()[-1]
    discount = curve.discount(horizon)

    quote = market.deposit_quotes[3]
    original = quote.value()
    quote.set_value(10.0)
    with pytest.raises(BootstrapError) as info:
        curve.discount(horizon)
    assert info.value.helper_index == 3
    assert info.value.helper is not None
    assert info.value.pass_number == 1
    assert curve.state is LazyState.DIRTY
    assert curve._data == before

    quote.set_value(original)
    assert curve.discount(horizon) == pytest.approx(discount, abs=1.0e-12)


def test_global_bootstrap_without_enough_passes(market):
    curve = market.curve(ZeroYield, Cubic, max_bootstrap_passes=1)
    with pytest.raises(BootstrapNonConvergence) as info:
        curve.calculate()
    assert info.value.curve_name == "EUR"
    assert 0 < len(info.value.worst_helpers) <= 3
    assert info.value.improvement > 1.0e-12
    assert curve.state is LazyState.UNINITIALIZED


def test_config_validation():
    with pytest.raises(ValidationError):
        BootstrapConfig(accuracy=0.0)
    with pytest.raises(ValidationError):
        BootstrapConfig(solver="golden")
    with pytest.raises(ValidationError):
        BootstrapConfig(max_bootstrap_passes=0)
    assert BootstrapConfig(pillar_choice="maturity_date").pillar_choice.name == "MATURITY_DATE"
