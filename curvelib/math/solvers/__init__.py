"""One-dimensional root finders sharing the ``Solver1D`` contract."""

from .base import MAX_FUNCTION_EVALUATIONS, Solver1D, SolverState
from .bisection import Bisection
from .brent import Brent
from .false_position import FalsePosition
from .newton import Newton, NewtonSafe
from .ridder import Ridder
from .secant import Secant

SOLVERS = {
    "BRENT": Brent,
    "BISECTION": Bisection,
    "FALSE_POSITION": FalsePosition,
    "FALSEPOSITION": FalsePosition,
    "NEWTON": Newton,
    "NEWTON_SAFE": NewtonSafe,
    "NEWTONSAFE": NewtonSafe,
    "RIDDER": Ridder,
    "SECANT": Secant,
}


def create_solver(name: str, **kwargs) -> Solver1D:
    """Build a solver from its configuration name (e.g. ``"BRENT"``)."""
    key = name.upper().replace("-", "_").strip()
    if key not in SOLVERS:
        raise ValueError(f"Unknown solver: {name}. Available: {sorted(set(SOLVERS))}")
    return SOLVERS[key](**kwargs)


__all__ = [
    "Solver1D",
    "SolverState",
    "MAX_FUNCTION_EVALUATIONS",
    "Brent",
    "Bisection",
    "FalsePosition",
    "Newton",
    "NewtonSafe",
    "Ridder",
    "Secant",
    "SOLVERS",
    "create_solver",
]
