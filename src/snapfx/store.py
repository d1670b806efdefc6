"""Store: a single state value with change notification.

setState-style updates are merged shallowly into the current state (or
replace it outright), and every listener hears about the change with
(next, previous). Nothing is deferred: the fan-out completes before
set_state returns, including any nested writes a listener makes.
"""

from __future__ import annotations

import enum
from typing import Callable, Generic, TypeVar

from snapfx.patch import next_state
from snapfx.subscription import ListenerSet, Subscription

T = TypeVar("T")

Listener = Callable[[T, T], None]
Setter = Callable[..., None]
Getter = Callable[[], T]
Initializer = Callable[[Setter, Getter], T]
Middleware = Callable[[Initializer], Initializer]

# Compared by equality when the types match; everything else by identity.
_VALUE_TYPES = (int, float, complex, str, bytes, bool, type(None), tuple, frozenset, enum.Enum)


def _unchanged(previous, nxt) -> bool:
    if nxt is previous:
        return True
    return (
        type(nxt) is type(previous)
        and isinstance(nxt, _VALUE_TYPES)
        and nxt == previous
    )


class Store(Generic[T]):
    """Single-value container with merge-or-replace updates."""

    __slots__ = ("_state", "_listeners")

    def __init__(self, initial: T) -> None:
        self._state = initial
        self._listeners = ListenerSet()

    def get_state(self) -> T:
        return self._state

    def set_state(self, update, replace: bool = False) -> None:
        """Apply an update and notify listeners if the state changed.

        update is a Patch, a plain value, or a function of the current state
        returning a partial. With replace=False a mapping partial is merged
        shallowly into the current state.
        """
        previous = self._state
        nxt = next_state(update, previous, replace)
        if _unchanged(previous, nxt):
            return
        self._state = nxt
        self._listeners.notify(nxt, previous)

    def subscribe(self, listener: Listener) -> Subscription:
        """Register listener(next, previous). Returns its disposer."""
        return self._listeners.add(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def __repr__(self) -> str:
        return f"Store({self._state!r}, listeners={len(self._listeners)})"


def create_store(initializer: Initializer, *middleware: Middleware) -> Store:
    """Build a store whose initial state comes from initializer(set, get).

    Middleware wrap the initializer; the first one listed is outermost and
    sees the store's own writer. The initial state is installed without
    notifying anyone.

    Usage:
        counter = create_store(lambda set, get: {
            "count": 0,
            "inc": lambda: set(lambda s: {"count": s["count"] + 1}),
        })
        counter.get_state()["inc"]()
        counter.get_state()["count"]  # 1
    """
    for wrap in reversed(middleware):
        initializer = wrap(initializer)
    store: Store = Store(None)
    store._state = initializer(store.set_state, store.get_state)
    return store
