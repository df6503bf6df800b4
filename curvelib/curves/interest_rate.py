"""Conversions between rates and compound factors."""

import math

from curvelib.conventions.types import Compounding, Frequency
from curvelib.errors import ValidationError


def compound_factor(
    rate: float, t: float, compounding: Compounding, frequency: Frequency = Frequency.ANNUAL
) -> float:
    """Growth of one unit invested at ``rate`` over ``t`` years."""
    if t < 0.0:
        raise ValidationError(f"negative time ({t}) not allowed")
    f = frequency.per_year()
    if compounding is Compounding.SIMPLE:
        return 1.0 + rate * t
    if compounding is Compounding.COMPOUNDED:
        return (1.0 + rate / f) ** (f * t)
    if compounding is Compounding.CONTINUOUS:
        return math.exp(rate * t)
    if compounding is Compounding.SIMPLE_THEN_COMPOUNDED:
        if t <= 1.0 / f:
            return 1.0 + rate * t
        return (1.0 + rate / f) ** (f * t)
    raise ValidationError(f"unknown compounding {compounding}")


def implied_rate(
    compound: float, t: float, compounding: Compounding, frequency: Frequency = Frequency.ANNUAL
) -> float:
    """Rate that grows one unit into ``compound`` over ``t`` years."""
    if compound <= 0.0:
        raise ValidationError(f"positive compound factor required ({compound} not allowed)")
    if t <= 0.0:
        raise ValidationError(f"positive time required ({t} not allowed)")
    if compound == 1.0:
        return 0.0
    f = frequency.per_year()
    if compounding is Compounding.SIMPLE:
        return (compound - 1.0) / t
    if compounding is Compounding.COMPOUNDED:
        return (compound ** (1.0 / (f * t)) - 1.0) * f
    if compounding is Compounding.CONTINUOUS:
        return math.log(compound) / t
    if compounding is Compounding.SIMPLE_THEN_COMPOUNDED:
        if t <= 1.0 / f:
            return (compound - 1.0) / t
        return (compound ** (1.0 / (f * t)) - 1.0) * f
    raise ValidationError(f"unknown compounding {compounding}")


def equivalent_rate(
    rate: float,
    t: float,
    from_compounding: Compounding,
    to_compounding: Compounding,
    from_frequency: Frequency = Frequency.ANNUAL,
    to_frequency: Frequency = Frequency.ANNUAL,
) -> float:
    return implied_rate(
        compound_factor(rate, t, from_compounding, from_frequency), t, to_compounding, to_frequency
    )
