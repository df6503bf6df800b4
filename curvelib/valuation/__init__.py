"""Instrument valuation used by the rate helpers.

Exports:
    - Coupon types and leg builders
    - leg_npv / leg_bps and the Swap instruments
    - OvernightIndexFuture
"""

from .cashflows import (
    Coupon,
    FixedRateCoupon,
    IborCoupon,
    Leg,
    OvernightIndexedCoupon,
    fixed_leg,
    ibor_leg,
    overnight_leg,
)
from .futures import OvernightIndexFuture, RateAveraging
from .swap import BASIS_POINT, Swap, VanillaSwap, leg_bps, leg_npv, make_vanilla_swap

__all__ = [
    "Coupon",
    "FixedRateCoupon",
    "IborCoupon",
    "OvernightIndexedCoupon",
    "Leg",
    "fixed_leg",
    "ibor_leg",
    "overnight_leg",
    "leg_npv",
    "leg_bps",
    "BASIS_POINT",
    "Swap",
    "VanillaSwap",
    "make_vanilla_swap",
    "OvernightIndexFuture",
    "RateAveraging",
]
