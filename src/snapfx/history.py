"""Time-travel history: linear undo/redo over full-state snapshots.

History sits on a store's write path. Each write is resolved into a
complete merged snapshot, appended after the current pointer (dropping any
undone future), and forwarded to the store with replace=True. undo() and
redo() move the pointer and replay the snapshot verbatim.

The state before the first tracked write is not recorded, so undo() never
goes further back than the first snapshot.
"""

from __future__ import annotations

import functools
import logging

from snapfx.patch import Value, next_state
from snapfx.store import Getter, Initializer, Setter, Store

logger = logging.getLogger("snapfx.history")


class History:
    """Snapshot sequence plus a pointer to the current snapshot."""

    def __init__(self, get: Getter, set: Setter) -> None:
        self._get = get
        self._set = set
        self._snapshots: list = []
        self._pointer = -1

    @classmethod
    def of(cls, store: Store) -> History:
        """Track writes made through the returned History's set_state."""
        return cls(store.get_state, store.set_state)

    @property
    def snapshots(self) -> tuple:
        return tuple(self._snapshots)

    @property
    def pointer(self) -> int:
        return self._pointer

    @property
    def can_undo(self) -> bool:
        return self._pointer > 0

    @property
    def can_redo(self) -> bool:
        return self._pointer < len(self._snapshots) - 1

    def set_state(self, update, replace: bool = False) -> None:
        """Record a write. Merging happens here, the store only ever replaces."""
        snapshot = next_state(update, self._get(), replace)
        del self._snapshots[self._pointer + 1:]
        self._snapshots.append(snapshot)
        self._pointer = len(self._snapshots) - 1
        self._set(Value(snapshot), True)

    def undo(self) -> None:
        if not self.can_undo:
            logger.debug("undo ignored at pointer %d", self._pointer)
            return
        self._pointer -= 1
        self._set(Value(self._snapshots[self._pointer]), True)

    def redo(self) -> None:
        if not self.can_redo:
            logger.debug("redo ignored at pointer %d of %d", self._pointer, len(self._snapshots))
            return
        self._pointer += 1
        self._set(Value(self._snapshots[self._pointer]), True)

    def __len__(self) -> int:
        return len(self._snapshots)

    def __repr__(self) -> str:
        return f"History(pointer={self._pointer}, snapshots={len(self._snapshots)})"


def time_travel(initializer: Initializer) -> Initializer:
    """Middleware: route the initializer's writer through a History.

    The resulting state carries undo, redo and history next to its own
    fields.

    Usage:
        store = create_store(time_travel(lambda set, get: {
            "count": 0,
            "inc": lambda: set(lambda s: {"count": s["count"] + 1}),
        }))
        store.get_state()["inc"]()
        store.get_state()["undo"]()
    """

    @functools.wraps(initializer)
    def wrapped(set: Setter, get: Getter):
        history = History(get, set)
        state = initializer(history.set_state, get)
        return {**state, "undo": history.undo, "redo": history.redo, "history": history}

    return wrapped

