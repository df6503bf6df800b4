"""Explicit evaluation context.

Curves, helpers and indexes receive an ``EvaluationContext`` instead of reading
a process-wide setting. The context carries today's date, the fixing history of
every index and the flags that decide whether today's fixings are treated as
known.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, Iterable, Optional, Union

from curvelib.errors import ValidationError
from curvelib.patterns.observable import Observable

logger = logging.getLogger(__name__)


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


class EvaluationContext(Observable):
    """Today's date plus index fixing history."""

    def __init__(
        self,
        evaluation_date: Union[date, datetime],
        include_todays_fixings: bool = False,
        enforce_todays_historic_fixings: bool = False,
    ):
        super().__init__()
        self._evaluation_date = _as_date(evaluation_date)
        self.include_todays_fixings = include_todays_fixings
        self.enforce_todays_historic_fixings = enforce_todays_historic_fixings
        self._fixings: Dict[str, Dict[date, float]] = {}

    # ------------------------------------------------------------------
    # Evaluation date
    # ------------------------------------------------------------------
    @property
    def evaluation_date(self) -> date:
        return self._evaluation_date

    def set_evaluation_date(self, value: Union[date, datetime]) -> None:
        new_date = _as_date(value)
        if new_date == self._evaluation_date:
            return
        logger.debug("Evaluation date moved from %s to %s", self._evaluation_date, new_date)
        self._evaluation_date = new_date
        self.notify_observers()

    # ------------------------------------------------------------------
    # Fixings
    # ------------------------------------------------------------------
    def add_fixing(
        self,
        index_name: str,
        fixing_date: Union[date, datetime],
        value: float,
        force_overwrite: bool = False,
    ) -> None:
        self.add_fixings(index_name, [(fixing_date, value)], force_overwrite)

    def add_fixings(
        self,
        index_name: str,
        fixings: Iterable,
        force_overwrite: bool = False,
    ) -> None:
        """
        Store ``(date, value)`` pairs (or a mapping) for ``index_name``.

        Either every pair is stored or, on a conflict, none is.

        Raises:
            ValidationError: A pair differs from a stored fixing and
                ``force_overwrite`` is not set
        """
        if isinstance(fixings, dict):
            fixings = fixings.items()
        history = self._fixings.get(index_name.upper(), {})
        incoming: Dict[date, float] = {}
        for fixing_date, value in fixings:
            d = _as_date(fixing_date)
            existing = incoming.get(d, history.get(d))
            if existing is not None and existing != value and not force_overwrite:
                raise ValidationError(
                    f"duplicated fixing for {index_name} on {d}: {existing} vs {value}"
                )
            incoming[d] = float(value)
        if not incoming:
            return
        self._fixings.setdefault(index_name.upper(), {}).update(incoming)
        self.notify_observers()

    def has_fixing(self, index_name: str, fixing_date: date) -> bool:
        return _as_date(fixing_date) in self._fixings.get(index_name.upper(), {})

    def fixing(self, index_name: str, fixing_date: date) -> Optional[float]:
        return self._fixings.get(index_name.upper(), {}).get(_as_date(fixing_date))

    def fixing_history(self, index_name: str) -> Dict[date, float]:
        return dict(self._fixings.get(index_name.upper(), {}))

    def clear_fixings(self, index_name: Optional[str] = None) -> None:
        if index_name is None:
            self._fixings.clear()
        else:
            self._fixings.pop(index_name.upper(), None)
        self.notify_observers()

    def __repr__(self) -> str:
        return f"EvaluationContext({self._evaluation_date.isoformat()})"
