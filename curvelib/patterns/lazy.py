"""Lazy recalculation on top of the invalidation graph."""

from __future__ import annotations

from enum import Enum

from .observable import ObservableObserver


class LazyState(Enum):
    """Calculation state of a lazy object."""

    UNINITIALIZED = "UNINITIALIZED"
    DIRTY = "DIRTY"
    SOLVING = "SOLVING"
    CLEAN = "CLEAN"


class LazyObject(ObservableObserver):
    """Defers ``perform_calculations`` until results are requested.

    Notifications move the object to DIRTY and are forwarded to
    dependents. Notifications received while SOLVING are ignored: they come
    from the object wiring itself into its own inputs.
    """

    def __init__(self) -> None:
        super().__init__()
        self._state = LazyState.UNINITIALIZED

    @property
    def state(self) -> LazyState:
        return self._state

    @property
    def is_clean(self) -> bool:
        return self._state is LazyState.CLEAN

    def update(self) -> None:
        if self._state is LazyState.SOLVING:
            return
        self._state = LazyState.DIRTY
        self.notify_observers()

    def calculate(self) -> None:
        if self._state not in (LazyState.UNINITIALIZED, LazyState.DIRTY):
            return
        previous = self._state
        self._state = LazyState.SOLVING
        try:
            self.perform_calculations()
        except BaseException:
            self._state = previous
            raise
        self._state = LazyState.CLEAN

    def recalculate(self) -> None:
        """Force a fresh calculation and notify dependents."""
        if self._state is LazyState.CLEAN:
            self._state = LazyState.DIRTY
        self.calculate()
        self.notify_observers()

    def perform_calculations(self) -> None:
        raise NotImplementedError
