"""Market quotes."""

from __future__ import annotations

import math
from numbers import Real
from typing import Callable, Optional, Union

from curvelib.errors import ValidationError
from curvelib.patterns.observable import Observable, ObservableObserver

from .handle import Handle


class Quote(Observable):
    """A single observable market value."""

    def value(self) -> float:
        raise NotImplementedError

    def is_valid(self) -> bool:
        raise NotImplementedError


class SimpleQuote(Quote):
    """Quote whose value is set directly."""

    def __init__(self, value: Optional[float] = None):
        super().__init__()
        self._value = None if value is None else float(value)

    def value(self) -> float:
        if self._value is None:
            raise ValidationError("invalid SimpleQuote")
        return self._value

    def is_valid(self) -> bool:
        return self._value is not None and not math.isnan(self._value)

    def set_value(self, value: Optional[float] = None) -> float:
        """Update the quote and notify dependents if it changed.

        Returns the difference between the new and the old value (0.0 when
        either side is missing).
        """
        new = None if value is None else float(value)
        if new == self._value:
            return 0.0
        diff = 0.0
        if new is not None and self._value is not None:
            diff = new - self._value
        self._value = new
        self.notify_observers()
        return diff

    def reset(self) -> None:
        self.set_value(None)

    def __repr__(self) -> str:
        return f"SimpleQuote({self._value!r})"


class DerivedQuote(Quote, ObservableObserver):
    """Quote computed from another quote through a unary function."""

    def __init__(self, element: Handle, func: Callable[[float], float]):
        ObservableObserver.__init__(self)
        self._element = element
        self._func = func
        self.register_with(element)

    def value(self) -> float:
        if not self.is_valid():
            raise ValidationError("invalid DerivedQuote")
        return self._func(self._element.value())

    def is_valid(self) -> bool:
        return not self._element.empty() and self._element.current_link().is_valid()


QuoteLike = Union[Handle, Quote, float]


def quote_handle(quote: QuoteLike) -> Handle:
    """Wrap a number or quote in a handle; handles pass through unchanged."""
    if isinstance(quote, Handle):
        return quote
    if isinstance(quote, Quote):
        return Handle(quote)
    if isinstance(quote, Real):
        return Handle(SimpleQuote(float(quote)))
    raise ValidationError(f"cannot build a quote handle from {type(quote).__name__}")
