"""Derived atoms: cached values computed from other atoms.

A Derived is seeded eagerly and subscribes once to each dependency. Every
upstream notification recomputes the whole function and re-broadcasts,
even when the new value equals the old one. Two writes to two dependencies
therefore produce two recomputations, and a subscriber can observe the
value computed between them.

Dependencies are fixed at construction and the wiring lasts as long as the
dependencies do; there is no dispose().
"""

from __future__ import annotations

from typing import Callable, Generic, Iterable, TypeVar

from snapfx.atom import Readable
from snapfx.subscription import ListenerSet, Subscription

T = TypeVar("T")


class Derived(Generic[T]):
    """A read-only cell whose value is compute() over its dependencies."""

    __slots__ = ("_compute", "_deps", "_cached", "_listeners", "name")

    def __init__(
        self,
        compute: Callable[[], T],
        deps: Iterable[Readable],
        name: str | None = None,
    ) -> None:
        self._compute = compute
        self._deps = tuple(deps)
        self._listeners = ListenerSet()
        self.name = name
        self._cached = compute()
        for dep in self._deps:
            dep.subscribe(self._recompute)

    @property
    def dependencies(self) -> tuple[Readable, ...]:
        return self._deps

    def get(self) -> T:
        return self._cached

    def subscribe(self, callback: Callable[[], None]) -> Subscription:
        return self._listeners.add(callback)

    def _recompute(self) -> None:
        self._cached = self._compute()
        self._listeners.notify()

    def __repr__(self) -> str:
        label = self.name or getattr(self._compute, "__name__", "compute")
        return f"Derived({label}, cached={self._cached!r}, deps={len(self._deps)})"


def derived(compute: Callable[[], T], deps: Iterable[Readable], name: str | None = None) -> Derived[T]:
    """Create a Derived atom from compute and its dependency list.

    Usage:
        a = atom(2)
        doubled = derived(lambda: a.get() * 2, [a])
        doubled.get()  # 4
        a.set(5)
        doubled.get()  # 10
    """
    return Derived(compute, deps, name)
