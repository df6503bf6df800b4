"""One-dimensional solvers on f(x) = x^2 - 1."""

import pytest

from curvelib.errors import InvalidBracketError
from curvelib.math.solvers import (
    Bisection,
    Brent,
    FalsePosition,
    Newton,
    NewtonSafe,
    Ridder,
    Secant,
    create_solver,
)

ACCURACIES = [1.0e-4, 1.0e-6, 1.0e-8]
SOLVERS = [Brent, Bisection, FalsePosition, Newton, NewtonSafe, Ridder, Secant]


def f(x):
    return x * x - 1.0


def df(x):
    return 2.0 * x


def _derivative_for(solver):
    return df if solver.requires_derivative else None


@pytest.mark.parametrize("solver_class", SOLVERS)
@pytest.mark.parametrize("accuracy", ACCURACIES)
@pytest.mark.parametrize("guess", [1.5, 0.5])
def test_solve_from_guess(solver_class, accuracy, guess):
    solver = solver_class()
    root = solver.solve(f, accuracy, guess, 0.1, derivative=_derivative_for(solver))
    assert root == pytest.approx(1.0, abs=10.0 * accuracy)


@pytest.mark.parametrize("solver_class", SOLVERS)
@pytest.mark.parametrize("accuracy", ACCURACIES)
@pytest.mark.parametrize("x_max", [1.0, 1.5])
def test_solve_in_bracket(solver_class, accuracy, x_max):
    solver = solver_class()
    root = solver.solve_in_bracket(f, accuracy, 0.0, x_max, 0.5, derivative=_derivative_for(solver))
    assert root == pytest.approx(1.0, abs=10.0 * accuracy)


def test_endpoint_within_accuracy_is_returned():
    assert Brent().solve_in_bracket(f, 1.0e-8, 1.0, 3.0) == 1.0


def test_bracket_without_sign_change():
    with pytest.raises(InvalidBracketError):
        Brent().solve_in_bracket(f, 1.0e-8, 2.0, 3.0)


def test_guess_outside_bracket():
    with pytest.raises(InvalidBracketError):
        Brent().solve_in_bracket(f, 1.0e-8, 0.0, 1.5, 2.0)


def test_derivative_required():
    with pytest.raises(ValueError):
        Newton().solve_in_bracket(f, 1.0e-8, 0.0, 1.5)


def test_create_solver_by_name():
    assert isinstance(create_solver("newton-safe"), NewtonSafe)
    assert isinstance(create_solver("brent", max_evaluations=50), Brent)
    with pytest.raises(ValueError):
        create_solver("golden")
