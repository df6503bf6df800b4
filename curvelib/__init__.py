"""
curvelib: yield curve bootstrapping on rate helpers.

Quotes and handles feed rate helpers; a ``PiecewiseYieldCurve`` solves its
nodes so that every helper reprices its quote, and recalculates lazily when
a quote, a relinked handle or the evaluation date changes.
"""

from .context import EvaluationContext
from .curves import (
    BootstrapConfig,
    Discount,
    FlatForward,
    ForwardRate,
    PiecewiseYieldCurve,
    YieldTermStructure,
    ZeroYield,
)
from .errors import (
    BootstrapError,
    BootstrapNonConvergence,
    CurvelibError,
    ExtrapolationError,
    SolverError,
    ValidationError,
)
from .market import Handle, RelinkableHandle, SimpleQuote

__version__ = "0.1.0"

__all__ = [
    "EvaluationContext",
    "Handle",
    "RelinkableHandle",
    "SimpleQuote",
    "YieldTermStructure",
    "FlatForward",
    "PiecewiseYieldCurve",
    "BootstrapConfig",
    "Discount",
    "ZeroYield",
    "ForwardRate",
    "CurvelibError",
    "ValidationError",
    "ExtrapolationError",
    "SolverError",
    "BootstrapError",
    "BootstrapNonConvergence",
]
