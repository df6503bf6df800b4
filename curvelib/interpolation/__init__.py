"""
Interpolation methods for yield curves.

This module provides the one-dimensional schemes curves interpolate their
nodes with, together with the factory objects used to configure them.
"""

# Base classes
from .base import Interpolator
from .cubic import CubicSplineInterpolator

# Factory and utilities
from .factory import (
    BackwardFlat,
    Cubic,
    ForwardFlat,
    Interpolation,
    Linear,
    LogLinear,
    create_interpolator,
    get_interpolation,
)
from .flat import BackwardFlatInterpolator, ForwardFlatInterpolator
from .linear import LinearInterpolator, LogLinearInterpolator

__all__ = [
    # Base classes
    'Interpolator',
    'Interpolation',

    # Schemes
    'LinearInterpolator',
    'LogLinearInterpolator',
    'BackwardFlatInterpolator',
    'ForwardFlatInterpolator',
    'CubicSplineInterpolator',

    # Factories
    'Linear',
    'LogLinear',
    'BackwardFlat',
    'ForwardFlat',
    'Cubic',
    'create_interpolator',
    'get_interpolation',
]
