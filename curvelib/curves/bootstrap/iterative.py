"""Iterative bootstrap.

Nodes are solved one pillar at a time, left to right: for pillar ``i`` the
solver moves ``data[i]`` until helper ``i`` reprices its quote, with every
earlier node already fixed. Global interpolations and interdependent
helpers make earlier nodes depend on later ones; in that case whole passes
are repeated until no node moves by more than the accuracy.
"""

import logging
from typing import Callable, List

from curvelib.errors import BootstrapError, BootstrapNonConvergence, CurvelibError, ValidationError
from curvelib.interpolation.factory import Linear
from curvelib.math.solvers import create_solver

from .base import BootstrapConfig, PillarChoice

logger = logging.getLogger(__name__)

# Relative step of the finite-difference derivative handed to Newton solvers.
DERIVATIVE_STEP = 1.0e-7


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _finite_difference(f: Callable[[float], float]) -> Callable[[float], float]:
    def derivative(x: float) -> float:
        h = DERIVATIVE_STEP * max(1.0, abs(x))
        return (f(x + h) - f(x - h)) / (2.0 * h)

    return derivative


class IterativeBootstrap:
    """Solves the nodes of a ``PiecewiseYieldCurve`` in place.

    The curve exposes its node lists (``_dates``, ``_times``, ``_data``) and
    its current interpolation to the helpers while they are being solved;
    restoring them after a failure is up to the curve.
    """

    def __init__(self, config: BootstrapConfig):
        self.config = config

    def pillar_of(self, helper):
        if self.config.pillar_choice is PillarChoice.MATURITY_DATE:
            return helper.maturity_date
        return helper.latest_relevant_date

    def sorted_helpers(self, helpers, reference_date) -> List:
        """
        Sort helpers by pillar and validate them.

        Args:
            helpers: Rate helpers
            reference_date: Curve reference date

        Returns:
            Helpers in pillar order

        Raises:
            ValidationError: Duplicate pillars, pillars not after the
                reference date, or invalid quotes
        """
        ordered = sorted(helpers, key=self.pillar_of)
        for i in range(1, len(ordered)):
            if self.pillar_of(ordered[i - 1]) == self.pillar_of(ordered[i]):
                raise ValidationError(
                    f"two helpers have the same pillar ({self.pillar_of(ordered[i])}): "
                    f"{ordered[i - 1].describe()} and {ordered[i].describe()}"
                )
        for j, helper in enumerate(ordered, start=1):
            pillar = self.pillar_of(helper)
            if pillar <= reference_date:
                raise ValidationError(
                    f"{_ordinal(j)} instrument (pillar: {pillar}) has a pillar on or before "
                    f"the reference date ({reference_date})"
                )
            if not helper.quote_is_valid():
                raise ValidationError(
                    f"{_ordinal(j)} instrument (maturity: {helper.maturity_date}, "
                    f"pillar: {pillar}) has an invalid quote"
                )
        return ordered

    def is_interdependent(self, helper) -> bool:
        """Whether ``helper`` prices off nodes beyond its own pillar."""
        return helper.is_interdependent or helper.latest_relevant_date > self.pillar_of(helper)

    def calculate(self, curve) -> int:
        """
        Bootstrap ``curve`` and return the number of passes used.

        When the curve already holds nodes for the same helpers, they seed
        the guesses and brackets. A warm start that fails is retried once
        from the default guesses and brackets.
        """
        helpers = self.sorted_helpers(curve.helpers, curve.reference_date)
        valid_curve = curve._data is not None and len(curve._data) == len(helpers) + 1
        if not valid_curve:
            return self._solve(curve, helpers, False)
        try:
            return self._solve(curve, helpers, True)
        except BootstrapError as exc:
            logger.warning(
                "%s: warm start failed (%s), retrying from default guesses",
                curve.name or type(curve).__name__,
                exc,
            )
            return self._solve(curve, helpers, False)

    def _solve(self, curve, helpers, valid_curve: bool) -> int:
        config = self.config
        trait = curve.trait
        interpolation = curve.interpolation
        reference = curve.reference_date
        n = len(helpers)

        dates = [reference] + [self.pillar_of(h) for h in helpers]
        times = [curve.time_from_reference(d) for d in dates]
        if valid_curve:
            data = list(curve._data)
        else:
            data = [trait.initial_value()] * (n + 1)
        data[0] = trait.initial_value()
        max_date = max([dates[-1]] + [h.latest_relevant_date for h in helpers])

        curve._dates, curve._times, curve._data = dates, times, data
        curve._max_date = max_date
        for helper in helpers:
            helper.set_term_structure(curve)
        if valid_curve:
            curve._interpolation = interpolation.interpolate(times, data)

        loop_required = config.global_passes
        if loop_required is None:
            loop_required = interpolation.is_global or any(
                self.is_interdependent(h) for h in helpers
            )
        max_passes = config.max_bootstrap_passes or trait.max_iterations
        solver = create_solver(config.solver)
        accuracy = config.accuracy
        node_log = logger.info if config.verbose else logger.debug

        logger.info(
            "Bootstrapping %s: %d helpers, %s on %s, %s",
            curve.name or type(curve).__name__,
            n,
            type(trait).__name__,
            type(interpolation).__name__,
            "global passes" if loop_required else "single pass",
        )

        valid_data = valid_curve
        change = float("nan")
        for iteration in range(max_passes):
            previous = list(data)
            for i in range(1, n + 1):
                helper = helpers[i - 1]
                min_value = trait.min_value_after(i, times, data, valid_data)
                max_value = trait.max_value_after(i, times, data, valid_data)
                guess = trait.guess(i, times, data, valid_data)
                if not min_value < guess < max_value:
                    guess = (min_value + max_value) / 2.0

                if not valid_data:
                    curve._interpolation = self._extend(curve, interpolation, times, data, i)

                def objective(x, i=i, helper=helper):
                    trait.update_guess(data, x, i)
                    curve._interpolation.update()
                    return helper.quote_error()

                derivative = _finite_difference(objective) if solver.requires_derivative else None
                try:
                    root = solver.solve_in_bracket(
                        objective, accuracy, min_value, max_value, guess, derivative=derivative
                    )
                except CurvelibError as exc:
                    raise BootstrapError(
                        f"{_ordinal(iteration + 1)} iteration: failed at {_ordinal(i)} alive "
                        f"instrument, pillar {dates[i]}, {helper.describe()}, "
                        f"reference date {reference}: {exc}",
                        helper_index=i - 1,
                        helper=helper,
                        pass_number=iteration + 1,
                    ) from exc
                # The last evaluation is not necessarily at the root.
                trait.update_guess(data, root, i)
                curve._interpolation.update()
                node_log("pass %d node %d (%s): %.12g", iteration + 1, i, dates[i], data[i])

            if not loop_required:
                return iteration + 1

            change = max(abs(data[i] - previous[i]) for i in range(1, n + 1))
            if change <= accuracy:
                logger.info(
                    "%s converged after %d passes (last change %.3g)",
                    curve.name or type(curve).__name__,
                    iteration + 1,
                    change,
                )
                return iteration + 1
            valid_data = True

        residuals = sorted(
            ((abs(h.quote_error()), h) for h in helpers), key=lambda pair: pair[0], reverse=True
        )
        worst = [h for _, h in residuals[:3]]
        raise BootstrapNonConvergence(
            f"convergence not reached after {max_passes} passes; last improvement {change}, "
            f"required accuracy {accuracy}; worst helpers: "
            + ", ".join(h.describe() for h in worst),
            curve_name=curve.name,
            improvement=change,
            worst_helpers=worst,
            pass_number=max_passes,
        )

    def _extend(self, curve, interpolation, times, data, i: int):
        """Interpolation over nodes ``0..i``, falling back to linear for global schemes."""
        try:
            built = interpolation.interpolate(times, data, i + 1)
        except CurvelibError:
            if not interpolation.is_global:
                raise
            logger.warning(
                "%s: %s unusable on %d nodes, using linear until the first pass completes",
                curve.name or type(curve).__name__,
                type(interpolation).__name__,
                i + 1,
            )
            built = Linear().interpolate(times, data, i + 1)
        return built
