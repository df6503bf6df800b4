"""Push-based invalidation graph.

Subjects keep weak back-references to their dependents; dependents keep strong
references to what they watch. Notification only flips flags and forwards the
signal, it never recomputes anything.

Every top-level ``notify_observers`` call opens a cascade. Nested notifications
triggered while walking the graph join that cascade, and each observer runs its
``update`` at most once per cascade no matter how many paths lead to it.

Cycles (A observes B observes A) are a caller error. They are not detected
unless ``check_cycles`` is requested at registration time.
"""

from __future__ import annotations

import logging
import weakref
from typing import Dict, Iterator, List, Optional

from curvelib.errors import ValidationError

logger = logging.getLogger(__name__)


class _Cascade:
    """Tracks the notification cascade currently being delivered."""

    depth = 0
    counter = 0

    @classmethod
    def enter(cls) -> int:
        if cls.depth == 0:
            cls.counter += 1
        cls.depth += 1
        return cls.counter

    @classmethod
    def leave(cls) -> None:
        cls.depth -= 1


def as_observable(obj) -> "Observable":
    """Resolve the object observers should actually subscribe to.

    Handles expose their shared slot through ``observable()`` so that
    subscribers survive relinking.
    """
    if isinstance(obj, Observable):
        return obj
    resolver = getattr(obj, "observable", None)
    if callable(resolver):
        return resolver()
    raise TypeError(f"{type(obj).__name__} is not observable")


class Observable:
    """Subject that notifies registered observers."""

    def __init__(self) -> None:
        self._observers: Dict[int, weakref.ref] = {}

    def _add_observer(self, observer: "Observer") -> None:
        key = id(observer)
        if key in self._observers and self._observers[key]() is observer:
            return
        self._observers[key] = weakref.ref(observer, self._make_reaper(key))

    def _remove_observer(self, observer: "Observer") -> None:
        self._observers.pop(id(observer), None)

    def _make_reaper(self, key: int):
        owner = weakref.ref(self)

        def _reap(_ref) -> None:
            subject = owner()
            if subject is not None and subject._observers.get(key) is _ref:
                del subject._observers[key]

        return _reap

    def observers(self) -> List["Observer"]:
        """Live observers in registration order."""
        alive = []
        for ref in list(self._observers.values()):
            obs = ref()
            if obs is not None:
                alive.append(obs)
        return alive

    def notify_observers(self) -> None:
        cascade = _Cascade.enter()
        try:
            for observer in self.observers():
                observer._receive(cascade)
        finally:
            _Cascade.leave()


class Observer:
    """Dependent that reacts to notifications from observables."""

    check_cycles = False

    def __init__(self) -> None:
        self._observables: Dict[int, Observable] = {}
        self._last_cascade: Optional[int] = None

    def register_with(self, observable, check_cycles: Optional[bool] = None) -> None:
        if observable is None:
            return
        subject = as_observable(observable)
        if check_cycles if check_cycles is not None else self.check_cycles:
            _reject_back_edge(self, subject)
        subject._add_observer(self)
        self._observables[id(subject)] = subject

    def unregister_with(self, observable) -> None:
        if observable is None:
            return
        subject = as_observable(observable)
        subject._remove_observer(self)
        self._observables.pop(id(subject), None)

    def unregister_with_all(self) -> None:
        for subject in list(self._observables.values()):
            subject._remove_observer(self)
        self._observables.clear()

    def observables(self) -> List[Observable]:
        return list(self._observables.values())

    def _receive(self, cascade: int) -> None:
        if self._last_cascade == cascade:
            return
        self._last_cascade = cascade
        self.update()

    def update(self) -> None:
        """Called once per notification cascade."""


class ObservableObserver(Observable, Observer):
    """Dependent that forwards notifications to its own observers."""

    def __init__(self) -> None:
        Observable.__init__(self)
        Observer.__init__(self)

    def update(self) -> None:
        self.notify_observers()


def _iter_dependents(node: Observable) -> Iterator[Observable]:
    for observer in node.observers():
        if isinstance(observer, Observable):
            yield observer


def _reject_back_edge(observer: Observer, subject: Observable) -> None:
    """Raise if ``subject`` already depends, directly or not, on ``observer``."""
    if subject is observer:
        raise ValidationError("an object cannot observe itself")
    if not isinstance(observer, Observable):
        return
    seen = set()
    stack = [observer]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        for dependent in _iter_dependents(node):
            if dependent is subject:
                logger.debug("Rejected cyclic registration %r -> %r", observer, subject)
                raise ValidationError(
                    f"registering {type(observer).__name__} with {type(subject).__name__} "
                    "would create a notification cycle"
                )
            stack.append(dependent)
