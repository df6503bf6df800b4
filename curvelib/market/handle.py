"""Indirection cells over quotes and curves.

A handle never stores its payload directly. It stores a shared slot that the
payload is linked into, and observers subscribe to that slot. Relinking swaps
the payload and notifies the slot's observers once, so nothing holding the
handle loses its subscription.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from curvelib.errors import ValidationError
from curvelib.patterns.observable import ObservableObserver

T = TypeVar("T")


class _Link(ObservableObserver):
    """Shared slot behind one or more handles."""

    def __init__(self, target: Any = None, register_as_observer: bool = True):
        super().__init__()
        self._target = None
        self._is_observer = False
        self.link_to(target, register_as_observer)

    @property
    def target(self) -> Any:
        return self._target

    def empty(self) -> bool:
        if self._target is None:
            return True
        if isinstance(self._target, Handle):
            return self._target.empty()
        return False

    def link_to(self, target: Any, register_as_observer: bool = True) -> None:
        if target is self._target and register_as_observer == self._is_observer:
            return
        if self._target is not None and self._is_observer:
            self.unregister_with(self._target)
        self._target = target
        self._is_observer = register_as_observer
        if target is not None and register_as_observer:
            self.register_with(target)
        self.notify_observers()


class Handle(Generic[T]):
    """Read-only handle to a quote or curve."""

    def __init__(self, target: Optional[T] = None, register_as_observer: bool = True):
        self._link = _Link(target, register_as_observer)

    def observable(self) -> _Link:
        return self._link

    def empty(self) -> bool:
        return self._link.empty()

    def current_link(self) -> T:
        """Return the linked object, following chained handles."""
        target = self._link.target
        if target is None:
            raise ValidationError("empty handle cannot be dereferenced")
        if isinstance(target, Handle):
            return target.current_link()
        return target

    def value(self) -> float:
        """Shortcut for quote handles."""
        return self.current_link().value()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Handle) and other._link is self._link

    def __hash__(self) -> int:
        return id(self._link)

    def __repr__(self) -> str:
        if self._link.target is None:
            return f"{type(self).__name__}(<empty>)"
        return f"{type(self).__name__}({self._link.target!r})"


class RelinkableHandle(Handle[T]):
    """Handle whose target can be replaced at runtime."""

    def link_to(self, target: Optional[T], register_as_observer: bool = True) -> None:
        self._link.link_to(target, register_as_observer)
