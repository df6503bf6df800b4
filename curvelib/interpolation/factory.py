"""
Factory objects and functions for creating interpolators.

Curves are configured with an ``Interpolation`` factory rather than an
interpolator: the factory knows whether its scheme is global and how many
points it needs, and builds interpolators over the curve's node lists.
"""
from typing import Dict, Optional, Sequence, Type, Union

from curvelib.errors import ValidationError

from .base import Interpolator
from .cubic import CubicSplineInterpolator
from .flat import BackwardFlatInterpolator, ForwardFlatInterpolator
from .linear import LinearInterpolator, LogLinearInterpolator


class Interpolation:
    """Factory for one interpolation scheme."""

    name = ""
    interpolator_class: Type[Interpolator] = Interpolator

    @property
    def is_global(self) -> bool:
        return self.interpolator_class.is_global

    @property
    def required_points(self) -> int:
        return self.interpolator_class.required_points

    def interpolate(
        self, x: Sequence[float], y: Sequence[float], size: Optional[int] = None
    ) -> Interpolator:
        return self.interpolator_class(x, y, size)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Interpolation) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Linear(Interpolation):
    name = "LINEAR"
    interpolator_class = LinearInterpolator


class LogLinear(Interpolation):
    name = "LOGLINEAR"
    interpolator_class = LogLinearInterpolator


class BackwardFlat(Interpolation):
    name = "BACKWARD_FLAT"
    interpolator_class = BackwardFlatInterpolator


class ForwardFlat(Interpolation):
    name = "FORWARD_FLAT"
    interpolator_class = ForwardFlatInterpolator


class Cubic(Interpolation):
    name = "CUBIC"
    interpolator_class = CubicSplineInterpolator


INTERPOLATIONS: Dict[str, Type[Interpolation]] = {
    "LINEAR": Linear,
    "LOGLINEAR": LogLinear,
    "LOG_LINEAR": LogLinear,
    "BACKWARD_FLAT": BackwardFlat,
    "BACKWARDFLAT": BackwardFlat,
    "FORWARD_FLAT": ForwardFlat,
    "FORWARDFLAT": ForwardFlat,
    "PIECEWISE_CONSTANT": ForwardFlat,
    "CUBIC": Cubic,
    "CUBIC_SPLINE": Cubic,
    "NATURAL_CUBIC": Cubic,
}


def get_interpolation(name: Union[str, Interpolation]) -> Interpolation:
    """Map a configuration string (e.g. ``"loglinear"``) to a factory; instances pass through."""
    if isinstance(name, Interpolation):
        return name
    key = name.upper().replace("-", "_").strip()
    if key not in INTERPOLATIONS:
        raise ValidationError(
            f"Unknown interpolation method: {name}. Available: {sorted(INTERPOLATIONS)}"
        )
    return INTERPOLATIONS[key]()


def create_interpolator(
    method: Union[str, Interpolation], x: Sequence[float], y: Sequence[float]
) -> Interpolator:
    """
    Create an interpolator based on method name.

    Args:
        method: Interpolation method name or factory
        x: Abscissae, strictly increasing
        y: Values to interpolate

    Returns:
        Configured interpolator
    """
    return get_interpolation(method).interpolate(x, y)
