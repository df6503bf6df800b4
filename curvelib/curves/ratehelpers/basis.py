"""Basis swap rate helpers.

Both helpers quote the spread paid on the base leg (leg 0) that makes a
spot-starting two-leg swap worth zero. Exactly one of the two indexes is
forecast off the curve being built; the other keeps its own curve.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from curvelib.context import EvaluationContext
from curvelib.conventions.calendars import Calendar
from curvelib.conventions.types import BusinessDayAdjustment, DateGeneration, Period
from curvelib.errors import ValidationError
from curvelib.indexes.ibor import IborIndex, OvernightIndex
from curvelib.market.handle import Handle, RelinkableHandle
from curvelib.market.quote import QuoteLike
from curvelib.schedule.generator import make_schedule
from curvelib.valuation.cashflows import ibor_leg, overnight_leg
from curvelib.valuation.swap import BASIS_POINT, Swap

from .base import RelativeDateRateHelper

logger = logging.getLogger(__name__)

NOTIONAL = 100.0


class BasisSwapRateHelper(RelativeDateRateHelper):
    """Shared plumbing of the two basis helpers."""

    def __init__(
        self,
        basis: QuoteLike,
        tenor: Union[Period, str],
        settlement_days: int,
        calendar: Calendar,
        convention: BusinessDayAdjustment,
        end_of_month: bool,
        discount: Optional[Handle],
        context: EvaluationContext,
    ):
        super().__init__(basis, context)
        self.tenor = Period.of(tenor)
        if settlement_days < 0:
            raise ValidationError(f"negative settlement days ({settlement_days}) not allowed")
        self.settlement_days = settlement_days
        self.calendar = calendar
        self.convention = convention
        self.end_of_month = end_of_month
        self.discount_handle = discount if discount is not None else Handle()
        self.register_with(self.discount_handle)
        self.discount_relinkable: RelinkableHandle = RelinkableHandle()

    def _bootstrapped(self, index: IborIndex) -> IborIndex:
        clone = index.clone(self.term_structure_handle)
        clone.unregister_with(self.term_structure_handle)
        return clone

    def _schedule(self, start, end, tenor: Period):
        return make_schedule(
            start,
            end,
            tenor,
            self.calendar,
            self.convention,
            self.convention,
            DateGeneration.FORWARD,
            self.end_of_month,
        )

    def _spot_and_maturity(self):
        spot = self.calendar.advance(
            self.evaluation_date, self.settlement_days, BusinessDayAdjustment.FOLLOWING
        )
        maturity = self.calendar.advance(spot, self.tenor, self.convention, self.end_of_month)
        return spot, maturity

    def set_term_structure(self, curve) -> None:
        super().set_term_structure(curve)
        target = curve if self.discount_handle.empty() else self.discount_handle
        self.discount_relinkable.link_to(target, register_as_observer=False)

    def implied_quote(self) -> float:
        bps = self.swap.leg_bps(0)
        if bps == 0.0:
            raise ValidationError(f"{self.describe()}: base leg has no remaining cash flows")
        return -(self.swap.npv() / bps) * BASIS_POINT


class IborIborBasisSwapRateHelper(BasisSwapRateHelper):
    """IBOR vs IBOR basis swap (e.g. 3M vs 6M).

    With ``bootstrap_base_curve`` the base index is forecast off the curve
    being built and the other index must already carry a curve; otherwise the
    roles are swapped.
    """

    def __init__(
        self,
        basis: QuoteLike,
        tenor: Union[Period, str],
        settlement_days: int,
        calendar: Calendar,
        convention: BusinessDayAdjustment,
        end_of_month: bool,
        base_index: IborIndex,
        other_index: IborIndex,
        discount: Optional[Handle] = None,
        bootstrap_base_curve: bool = True,
        *,
        context: EvaluationContext,
    ):
        super().__init__(
            basis, tenor, settlement_days, calendar, convention, end_of_month, discount, context
        )
        self.bootstrap_base_curve = bootstrap_base_curve
        if bootstrap_base_curve:
            if other_index.forwarding.empty():
                raise ValidationError(f"{other_index.name} needs a forwarding curve")
            self.base_index = self._bootstrapped(base_index)
            self.other_index = other_index
        else:
            if base_index.forwarding.empty():
                raise ValidationError(f"{base_index.name} needs a forwarding curve")
            self.base_index = base_index
            self.other_index = self._bootstrapped(other_index)
        self.register_with(self.base_index)
        self.register_with(self.other_index)
        self.initialize_dates()

    def initialize_dates(self) -> None:
        spot, maturity = self._spot_and_maturity()
        base_schedule = self._schedule(spot, maturity, self.base_index.tenor)
        other_schedule = self._schedule(spot, maturity, self.other_index.tenor)
        self.swap = Swap(
            [
                ibor_leg(base_schedule, self.base_index, NOTIONAL),
                ibor_leg(other_schedule, self.other_index, NOTIONAL),
            ],
            [True, False],
            self.discount_relinkable,
        )
        latest = max(
            self.swap.maturity_date,
            self.swap.legs[0][-1].fixing_end_date,
            self.swap.legs[1][-1].fixing_end_date,
        )
        self._set_dates(spot, self.swap.maturity_date, latest)

    def describe(self) -> str:
        return (
            f"IborIborBasisSwapRateHelper({self.tenor} {self.base_index.name}/"
            f"{self.other_index.name}, pillar={self.pillar_date})"
        )


class OvernightIborBasisSwapRateHelper(BasisSwapRateHelper):
    """Overnight vs IBOR basis swap; the IBOR curve is the one bootstrapped.

    Both legs run on the IBOR tenor schedule. The overnight index must carry
    its own forwarding curve.
    """

    def __init__(
        self,
        basis: QuoteLike,
        tenor: Union[Period, str],
        settlement_days: int,
        calendar: Calendar,
        convention: BusinessDayAdjustment,
        end_of_month: bool,
        base_index: OvernightIndex,
        other_index: IborIndex,
        discount: Optional[Handle] = None,
        *,
        context: EvaluationContext,
    ):
        super().__init__(
            basis, tenor, settlement_days, calendar, convention, end_of_month, discount, context
        )
        if not isinstance(base_index, OvernightIndex):
            raise ValidationError(f"{base_index.name} is not an overnight index")
        if base_index.forwarding.empty():
            raise ValidationError(f"{base_index.name} needs a forwarding curve")
        self.base_index = base_index
        self.other_index = self._bootstrapped(other_index)
        self.register_with(self.base_index)
        self.register_with(self.other_index)
        self.initialize_dates()

    def initialize_dates(self) -> None:
        spot, maturity = self._spot_and_maturity()
        schedule = self._schedule(spot, maturity, self.other_index.tenor)
        self.swap = Swap(
            [
                overnight_leg(schedule, self.base_index, NOTIONAL),
                ibor_leg(schedule, self.other_index, NOTIONAL),
            ],
            [True, False],
            self.discount_relinkable,
        )
        latest = max(self.swap.maturity_date, self.swap.legs[1][-1].fixing_end_date)
        self._set_dates(spot, self.swap.maturity_date, latest)

    def describe(self) -> str:
        return (
            f"OvernightIborBasisSwapRateHelper({self.tenor} {self.base_index.name}/"
            f"{self.other_index.name}, pillar={self.pillar_date})"
        )
