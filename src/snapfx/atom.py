"""Atoms: single-value reactive cells built on Store.

Atom subscribers take no arguments: they are told that something changed
and pull the new value with get() if they care.
"""

from __future__ import annotations

from typing import Callable, Generic, Protocol, TypeVar

from snapfx.patch import Value
from snapfx.store import Store
from snapfx.subscription import Subscription

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Readable(Protocol[T_co]):
    """Anything a Derived atom can depend on."""

    def get(self) -> T_co: ...

    def subscribe(self, callback: Callable[[], None]) -> Subscription: ...


class Atom(Generic[T]):
    """A named, writable reactive cell."""

    __slots__ = ("_store", "name")

    def __init__(self, initial: T, name: str | None = None) -> None:
        self._store: Store[T] = Store(initial)
        self.name = name

    def get(self) -> T:
        return self._store.get_state()

    def set(self, value: T) -> None:
        """Replace the value. Callables are stored as-is, never invoked."""
        self._store.set_state(Value(value), replace=True)

    def subscribe(self, callback: Callable[[], None]) -> Subscription:
        return self._store.subscribe(lambda _next, _prev: callback())

    def __repr__(self) -> str:
        label = f"{self.name}=" if self.name else ""
        return f"Atom({label}{self.get()!r})"


def atom(initial: T, name: str | None = None) -> Atom[T]:
    """Create an Atom.

    Usage:
        count = atom(0)
        count.subscribe(lambda: print(count.get()))
        count.set(1)  # prints 1
    """
    return Atom(initial, name)
