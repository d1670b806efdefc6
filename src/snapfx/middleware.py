"""Logging middleware: records every state transition.

Wraps the writer handed to an initializer so each write logs the update it
was given and the state that resulted. Exceptions from listeners pass
through untouched.
"""

from __future__ import annotations

import functools
import logging

from snapfx.store import Getter, Initializer, Setter

logger = logging.getLogger("snapfx.middleware")


def logged(
    initializer: Initializer,
    name: str | None = None,
    log: logging.Logger | None = None,
    level: int = logging.DEBUG,
) -> Initializer:
    """Middleware: log each write through the store's writer.

    Usage:
        store = create_store(counter_init, logged)
        store = create_store(counter_init, functools.partial(logged, name="counter"))
    """
    log = log or logger
    label = name or getattr(initializer, "__name__", "store")

    @functools.wraps(initializer)
    def wrapped(set: Setter, get: Getter):
        def logged_set(update, replace: bool = False) -> None:
            log.log(level, "%s applying %r (replace=%s)", label, update, replace)
            set(update, replace)
            log.log(level, "%s new state %r", label, get())

        return initializer(logged_set, get)

    return wrapped
