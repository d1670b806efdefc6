"""Selective subscriptions: listen to a slice of a store's state.

subscribe_selected() runs a selector on every store change and only calls
the listener when the selected slice differs from last time.
"""

from __future__ import annotations

import operator
from typing import Callable, TypeVar

from snapfx.store import Store
from snapfx.subscription import Subscription

T = TypeVar("T")
S = TypeVar("S")


def subscribe_selected(
    store: Store[T],
    selector: Callable[[T], S],
    listener: Callable[[S, S], None],
    *,
    equality: Callable[[S, S], bool] = operator.eq,
    fire_immediately: bool = False,
) -> Subscription:
    """Call listener(selected, previous_selected) when selector's result changes.

    Usage:
        store = Store({"count": 0, "name": "a"})
        sub = subscribe_selected(store, lambda s: s["count"], lambda n, _: print(n))
        store.set_state({"name": "b"})   # silent
        store.set_state({"count": 1})    # prints 1
        sub.dispose()
    """
    current = selector(store.get_state())

    def _on_change(state: T, _previous: T) -> None:
        nonlocal current
        selected = selector(state)
        previous = current
        if equality(previous, selected):
            return
        current = selected
        listener(selected, previous)

    if fire_immediately:
        listener(current, current)
    return store.subscribe(_on_change)
