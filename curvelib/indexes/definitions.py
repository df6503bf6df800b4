"""
Predefined index conventions.
"""

from typing import Optional, Union

from curvelib.context import EvaluationContext
from curvelib.conventions.calendars import TARGET, US_GOVERNMENT_BOND
from curvelib.conventions.daycount import ACT_360
from curvelib.conventions.types import BusinessDayAdjustment, Period
from curvelib.market.handle import Handle

from .ibor import IborIndex, OvernightIndex


def Euribor(
    tenor: Union[Period, str],
    forwarding: Optional[Handle] = None,
    context: Optional[EvaluationContext] = None,
) -> IborIndex:
    """Euribor: TARGET, ACT/360, T+2, modified following, end of month."""
    return IborIndex(
        "Euribor",
        tenor,
        2,
        TARGET,
        BusinessDayAdjustment.MODIFIED_FOLLOWING,
        True,
        ACT_360,
        forwarding,
        context,
    )


def Euribor3M(forwarding: Optional[Handle] = None, context: Optional[EvaluationContext] = None) -> IborIndex:
    return Euribor("3M", forwarding, context)


def Euribor6M(forwarding: Optional[Handle] = None, context: Optional[EvaluationContext] = None) -> IborIndex:
    return Euribor("6M", forwarding, context)


def USDLibor(
    tenor: Union[Period, str],
    forwarding: Optional[Handle] = None,
    context: Optional[EvaluationContext] = None,
) -> IborIndex:
    """USD Libor on the US government bond calendar, ACT/360, T+2."""
    return IborIndex(
        "USDLibor",
        tenor,
        2,
        US_GOVERNMENT_BOND,
        BusinessDayAdjustment.MODIFIED_FOLLOWING,
        True,
        ACT_360,
        forwarding,
        context,
    )


def Sofr(forwarding: Optional[Handle] = None, context: Optional[EvaluationContext] = None) -> OvernightIndex:
    """Secured overnight financing rate."""
    return OvernightIndex("SOFR", 0, US_GOVERNMENT_BOND, ACT_360, forwarding, context)


def Estr(forwarding: Optional[Handle] = None, context: Optional[EvaluationContext] = None) -> OvernightIndex:
    """Euro short-term rate."""
    return OvernightIndex("ESTR", 0, TARGET, ACT_360, forwarding, context)
