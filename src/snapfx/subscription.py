"""Listener registry with disposable subscription handles.

Store and Derived both fan out through a ListenerSet. Each registration gets
its own Subscription, so registering the same callable twice yields two
independent entries.
"""

from __future__ import annotations

import itertools
from typing import Callable


class Subscription:
    """Disposable handle for one listener registration.

    Calling the handle is the same as dispose(), so it can be used anywhere
    a plain disposer function is expected.
    """

    __slots__ = ("_owner", "_key", "_disposed")

    def __init__(self, owner: ListenerSet, key: int) -> None:
        self._owner = owner
        self._key = key
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Remove this registration. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        self._owner._discard(self._key)

    unsubscribe = dispose

    def __call__(self) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"Subscription({state})"


class ListenerSet:
    """Ordered listener registrations with snapshot-then-iterate fan-out."""

    __slots__ = ("_entries", "_keys")

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Callable, Subscription]] = {}
        self._keys = itertools.count()

    def add(self, listener: Callable) -> Subscription:
        key = next(self._keys)
        sub = Subscription(self, key)
        self._entries[key] = (listener, sub)
        return sub

    def notify(self, *args) -> None:
        """Call every listener registered when the pass began, in order.

        Registrations added during the pass wait for the next one. A
        registration disposed during the pass is skipped if not yet reached.
        """
        for listener, sub in list(self._entries.values()):
            if sub.disposed:
                continue
            listener(*args)

    def _discard(self, key: int) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
