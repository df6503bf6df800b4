"""Rate helper base classes.

A rate helper wraps one market quote and the instrument it prices. During the
bootstrap the curve links itself into the helper's term-structure handle and
asks for ``quote_error()`` while moving its newest node.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from curvelib.context import EvaluationContext
from curvelib.errors import ValidationError
from curvelib.market.handle import RelinkableHandle
from curvelib.market.quote import QuoteLike, quote_handle
from curvelib.patterns.observable import ObservableObserver

logger = logging.getLogger(__name__)


class RateHelper(ObservableObserver):
    """Quote plus the instrument whose fair value reproduces it."""

    is_interdependent = False

    def __init__(self, quote: QuoteLike):
        super().__init__()
        self.quote = quote_handle(quote)
        self.register_with(self.quote)
        self.term_structure_handle: RelinkableHandle = RelinkableHandle()
        self._term_structure = None
        self.earliest_date: Optional[date] = None
        self.maturity_date: Optional[date] = None
        self.latest_date: Optional[date] = None
        self.latest_relevant_date: Optional[date] = None
        self.pillar_date: Optional[date] = None

    def _set_dates(
        self,
        earliest: date,
        maturity: date,
        latest_relevant: Optional[date] = None,
    ) -> None:
        self.earliest_date = earliest
        self.maturity_date = maturity
        self.latest_relevant_date = latest_relevant or maturity
        self.latest_date = self.latest_relevant_date
        self.pillar_date = self.latest_relevant_date

    # ------------------------------------------------------------------
    # Bootstrap interface
    # ------------------------------------------------------------------
    @property
    def term_structure(self):
        if self._term_structure is None:
            raise ValidationError(f"term structure not set for {self.describe()}")
        return self._term_structure

    def set_term_structure(self, curve) -> None:
        if curve is None:
            raise ValidationError("null term structure given")
        self._term_structure = curve
        # The curve is being solved: it must not hear back from the handle.
        self.term_structure_handle.link_to(curve, register_as_observer=False)

    def quote_is_valid(self) -> bool:
        return not self.quote.empty() and self.quote.current_link().is_valid()

    def implied_quote(self) -> float:
        raise NotImplementedError

    def quote_error(self) -> float:
        """Implied minus market quote; zero once the curve reprices the instrument."""
        return self.implied_quote() - self.quote.value()

    def describe(self) -> str:
        pillar = self.pillar_date.isoformat() if self.pillar_date else "?"
        return f"{type(self).__name__}(pillar={pillar})"

    def __repr__(self) -> str:
        return self.describe()


class RelativeDateRateHelper(RateHelper):
    """Helper whose dates are derived from the evaluation date.

    It observes the context and recomputes its dates when today moves.
    """

    def __init__(self, quote: QuoteLike, context: EvaluationContext):
        super().__init__(quote)
        if context is None:
            raise ValidationError(f"{type(self).__name__} needs an evaluation context")
        self.context = context
        self.evaluation_date = context.evaluation_date
        self.register_with(context)

    def update(self) -> None:
        if self.evaluation_date != self.context.evaluation_date:
            self.evaluation_date = self.context.evaluation_date
            logger.debug("%s re-deriving dates for %s", type(self).__name__, self.evaluation_date)
            self.initialize_dates()
        super().update()

    def initialize_dates(self) -> None:
        raise NotImplementedError
