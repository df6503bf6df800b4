"""
Bootstrap traits.

A trait fixes what the curve nodes mean (discount factors, zero yields or
instantaneous forwards). It supplies the bootstrap with starting values,
guesses and solver brackets for each pillar, and maps the node
interpolation to discount factors, zero yields and forwards.
"""

import math
import sys

from curvelib.interpolation.base import Interpolator

AVERAGE_RATE = 0.05
# Bracket half-width (in rate) for discount factors between pillars.
MAX_DISCOUNT_RATE = 1.0
# Bracket for rate-valued nodes before any data is known.
MAX_RATE = 3.0


class BootstrapTrait:
    """Base trait; subclasses override the node-specific parts."""

    name = ""
    value_axis = ""
    max_iterations = 30

    def __init__(self, allow_negative_rates: bool = True):
        self.allow_negative_rates = allow_negative_rates

    def initial_value(self) -> float:
        return AVERAGE_RATE

    def guess(self, i, times, data, valid_data) -> float:
        if valid_data:
            return data[i]
        if i == 1:
            return AVERAGE_RATE
        return data[i - 1]

    def min_value_after(self, i, times, data, valid_data) -> float:
        if valid_data:
            r = min(data)
            if self.allow_negative_rates and r < 0.0:
                return r * 2.0
            return r / 2.0
        if self.allow_negative_rates:
            return -MAX_RATE
        return sys.float_info.epsilon

    def max_value_after(self, i, times, data, valid_data) -> float:
        if valid_data:
            r = max(data)
            if self.allow_negative_rates and r < 0.0:
                return r / 2.0
            return r * 2.0
        return MAX_RATE

    def update_guess(self, data, value: float, i: int) -> None:
        data[i] = value
        if i == 1:
            # The node at the reference date follows the first pillar.
            data[0] = value

    def discount_impl(self, interpolation: Interpolator, t: float) -> float:
        raise NotImplementedError

    def zero_yield_impl(self, interpolation: Interpolator, t: float) -> float:
        raise NotImplementedError

    def forward_impl(self, interpolation: Interpolator, t: float) -> float:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        return (
            type(other) is type(self)
            and other.allow_negative_rates == self.allow_negative_rates
        )

    def __hash__(self) -> int:
        return hash((self.name, self.allow_negative_rates))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Discount(BootstrapTrait):
    """Nodes are discount factors; the reference node is 1."""

    name = "DISCOUNT"
    value_axis = "discount"
    max_iterations = 100

    def initial_value(self) -> float:
        return 1.0

    def guess(self, i, times, data, valid_data) -> float:
        if valid_data:
            return data[i]
        if i == 1:
            return 1.0 / (1.0 + AVERAGE_RATE * times[1])
        # Flat rate extrapolation from the previous pillar.
        r = -math.log(data[i - 1]) / times[i - 1]
        return math.exp(-r * times[i])

    def min_value_after(self, i, times, data, valid_data) -> float:
        if valid_data:
            return min(data) / 2.0
        dt = times[i] - times[i - 1]
        return data[i - 1] * math.exp(-MAX_DISCOUNT_RATE * dt)

    def max_value_after(self, i, times, data, valid_data) -> float:
        if not self.allow_negative_rates:
            # Discount factors cannot grow without negative rates.
            return data[i - 1]
        dt = times[i] - times[i - 1]
        return data[i - 1] * math.exp(MAX_DISCOUNT_RATE * dt)

    def update_guess(self, data, value: float, i: int) -> None:
        data[i] = value

    def discount_impl(self, interpolation: Interpolator, t: float) -> float:
        return interpolation.value(t, True)

    def zero_yield_impl(self, interpolation: Interpolator, t: float) -> float:
        return -math.log(interpolation.value(t, True)) / t

    def forward_impl(self, interpolation: Interpolator, t: float) -> float:
        return -interpolation.derivative(t, True) / interpolation.value(t, True)


class ZeroYield(BootstrapTrait):
    """Nodes are continuously compounded zero yields."""

    name = "ZERO_YIELD"
    value_axis = "zero_rate"
    max_iterations = 30

    def discount_impl(self, interpolation: Interpolator, t: float) -> float:
        return math.exp(-interpolation.value(t, True) * t)

    def zero_yield_impl(self, interpolation: Interpolator, t: float) -> float:
        return interpolation.value(t, True)

    def forward_impl(self, interpolation: Interpolator, t: float) -> float:
        return interpolation.value(t, True) + t * interpolation.derivative(t, True)


class ForwardRate(BootstrapTrait):
    """Nodes are instantaneous forward rates."""

    name = "FORWARD_RATE"
    value_axis = "forward_rate"
    max_iterations = 30

    def discount_impl(self, interpolation: Interpolator, t: float) -> float:
        if t == 0.0:
            return 1.0
        return math.exp(-interpolation.primitive(t, True))

    def zero_yield_impl(self, interpolation: Interpolator, t: float) -> float:
        if t == 0.0:
            return self.forward_impl(interpolation, 0.0)
        return interpolation.primitive(t, True) / t

    def forward_impl(self, interpolation: Interpolator, t: float) -> float:
        return interpolation.value(t, True)


TRAITS = {
    "DISCOUNT": Discount,
    "ZERO_YIELD": ZeroYield,
    "ZEROYIELD": ZeroYield,
    "FORWARD_RATE": ForwardRate,
    "FORWARDRATE": ForwardRate,
}


def get_trait(name, allow_negative_rates: bool = True) -> BootstrapTrait:
    """Map a configuration string to a trait; instances pass through."""
    if isinstance(name, BootstrapTrait):
        return name
    key = name.upper().replace("-", "_").strip()
    if key not in TRAITS:
        raise ValueError(f"Unknown bootstrap trait: {name}. Available: {sorted(TRAITS)}")
    return TRAITS[key](allow_negative_rates)
