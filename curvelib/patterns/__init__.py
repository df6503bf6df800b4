"""Observer pattern and lazy recalculation."""

from .lazy import LazyObject, LazyState
from .observable import Observable, ObservableObserver, Observer, as_observable

__all__ = [
    "Observable",
    "Observer",
    "ObservableObserver",
    "as_observable",
    "LazyObject",
    "LazyState",
]
