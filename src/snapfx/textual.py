"""Textual integration for snapfx. Opt-in, requires textual.

Guards, NoMatches handling and thread marshaling live here so widget code
can subscribe to stores and atoms without repeating them.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

from snapfx.selector import subscribe_selected

# Keyed by id(app) so several apps can coexist in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend bound effects during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def _guard(app, effect):
    main = threading.get_ident()

    def _safe(value):
        try:
            effect(value)
        except NoMatches:
            pass

    def _guarded(value):
        if not is_safe(app):
            return
        if threading.get_ident() != main:
            app.call_from_thread(_safe, value)
        else:
            _safe(value)

    return _guarded


def bind(app, store, selector, effect, *, fire_immediately=False):
    """Push selector(state) into effect whenever it changes.

    Returns the Subscription; dispose it when the widget unmounts.
    """
    guarded = _guard(app, effect)
    return subscribe_selected(
        store,
        selector,
        lambda selected, _previous: guarded(selected),
        fire_immediately=fire_immediately,
    )


def bind_atom(app, readable, effect, *, fire_immediately=False):
    """Push an Atom's or Derived's value into effect on every notification."""
    guarded = _guard(app, effect)
    if fire_immediately:
        guarded(readable.get())
    return readable.subscribe(lambda: guarded(readable.get()))
