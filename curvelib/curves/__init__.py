"""Yield term structures and the piecewise bootstrap."""

from .base import YieldTermStructure
from .bootstrap import BootstrapConfig, IterativeBootstrap, PillarChoice
from .flat import FlatForward
from .interest_rate import compound_factor, equivalent_rate, implied_rate
from .piecewise import PiecewiseYieldCurve
from .ratehelpers import (
    DepositRateHelper,
    FraRateHelper,
    FuturesRateHelper,
    IborIborBasisSwapRateHelper,
    OvernightIborBasisSwapRateHelper,
    OvernightIndexFutureRateHelper,
    RateHelper,
    RelativeDateRateHelper,
    SofrFutureRateHelper,
    SwapRateHelper,
    sofr_contract_dates,
)
from .traits import BootstrapTrait, Discount, ForwardRate, ZeroYield, get_trait

__all__ = [
    "YieldTermStructure",
    "FlatForward",
    "PiecewiseYieldCurve",
    "BootstrapConfig",
    "IterativeBootstrap",
    "PillarChoice",
    "BootstrapTrait",
    "Discount",
    "ZeroYield",
    "ForwardRate",
    "get_trait",
    "compound_factor",
    "implied_rate",
    "equivalent_rate",
    "RateHelper",
    "RelativeDateRateHelper",
    "DepositRateHelper",
    "FraRateHelper",
    "FuturesRateHelper",
    "SwapRateHelper",
    "IborIborBasisSwapRateHelper",
    "OvernightIborBasisSwapRateHelper",
    "OvernightIndexFutureRateHelper",
    "SofrFutureRateHelper",
    "sofr_contract_dates",
]
