"""Rate helpers: market quotes the piecewise curves are bootstrapped on."""

from .base import RateHelper, RelativeDateRateHelper
from .basis import IborIborBasisSwapRateHelper, OvernightIborBasisSwapRateHelper
from .deposit import DepositRateHelper, FraRateHelper
from .futures import (
    FuturesRateHelper,
    OvernightIndexFutureRateHelper,
    SofrFutureRateHelper,
    sofr_contract_dates,
)
from .swap import SwapRateHelper

__all__ = [
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
