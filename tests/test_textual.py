"""Tests for snapfx.textual: Textual binding layer."""

import threading

import pytest
from textual.css.query import NoMatches

from snapfx import Store, atom, derived
from snapfx import textual as stx


class _MockApp:
    """Minimal mock matching the Textual App interface stx needs."""

    def __init__(self, *, is_running=True):
        self.is_running = is_running
        self._call_from_thread_log = []

    def call_from_thread(self, fn, *args):
        self._call_from_thread_log.append((fn, args))
        fn(*args)


class TestBind:
    def test_fires_when_safe(self):
        app = _MockApp()
        store = Store({"count": 0, "name": "a"})
        effects = []
        stx.bind(app, store, lambda s: s["count"], effects.append)
        store.set_state({"name": "b"})
        store.set_state({"count": 1})
        assert effects == [1]

    def test_fire_immediately(self):
        app = _MockApp()
        store = Store({"count": 4})
        effects = []
        stx.bind(app, store, lambda s: s["count"], effects.append, fire_immediately=True)
        assert effects == [4]

    def test_skips_when_not_running(self):
        app = _MockApp(is_running=False)
        store = Store({"count": 0})
        effects = []
        stx.bind(app, store, lambda s: s["count"], effects.append)
        store.set_state({"count": 1})
        assert effects == []

    def test_skips_during_pause(self):
        app = _MockApp()
        store = Store({"count": 0})
        effects = []
        stx.bind(app, store, lambda s: s["count"], effects.append)
        with stx.pause(app):
            store.set_state({"count": 1})
        assert effects == []

    def test_catches_nomatch(self):
        app = _MockApp()
        store = Store({"count": 0})

        def _raise_nomatch(v):
            raise NoMatches("StatusFooter")

        sub = stx.bind(app, store, lambda s: s["count"], _raise_nomatch)
        store.set_state({"count": 1})
        sub.dispose()

    def test_propagates_real_errors(self):
        app = _MockApp()
        store = Store({"count": 0})

        def _raise_value_error(v):
            raise ValueError("boom")

        stx.bind(app, store, lambda s: s["count"], _raise_value_error)
        with pytest.raises(ValueError, match="boom"):
            store.set_state({"count": 1})

    def test_dispose_stops_binding(self):
        app = _MockApp()
        store = Store({"count": 0})
        effects = []
        sub = stx.bind(app, store, lambda s: s["count"], effects.append)
        store.set_state({"count": 1})
        sub.dispose()
        store.set_state({"count": 2})
        assert effects == [1]

    def test_thread_marshal(self):
        """Writes from a background thread go through call_from_thread."""
        app = _MockApp()
        store = Store({"count": 0})
        effects = []
        stx.bind(app, store, lambda s: s["count"], effects.append)

        t = threading.Thread(target=lambda: store.set_state({"count": 2}))
        t.start()
        t.join()

        assert effects == [2]
        assert len(app._call_from_thread_log) == 1


class TestBindAtom:
    def test_atom(self):
        app = _MockApp()
        a = atom(1)
        effects = []
        stx.bind_atom(app, a, effects.append, fire_immediately=True)
        a.set(2)
        assert effects == [1, 2]

    def test_derived(self):
        app = _MockApp()
        a = atom(1)
        doubled = derived(lambda: a.get() * 2, [a])
        effects = []
        stx.bind_atom(app, doubled, effects.append)
        a.set(5)
        assert effects == [10]

    def test_skips_during_pause(self):
        app = _MockApp()
        a = atom(1)
        effects = []
        stx.bind_atom(app, a, effects.append)
        with stx.pause(app):
            a.set(2)
        assert effects == []


class TestPause:
    def test_pause_restores_on_exception(self):
        app = _MockApp()
        assert stx.is_safe(app)

        with pytest.raises(RuntimeError):
            with stx.pause(app):
                assert not stx.is_safe(app)
                raise RuntimeError("oops")

        assert stx.is_safe(app)

    def test_pause_does_not_mutate_app(self):
        app = _MockApp()
        attrs_before = set(vars(app))
        with stx.pause(app):
            attrs_during = set(vars(app))
        assert attrs_before == attrs_during
        assert attrs_before == set(vars(app))

    def test_multiple_apps_independent(self):
        app_a = _MockApp()
        app_b = _MockApp()
        with stx.pause(app_a):
            assert not stx.is_safe(app_a)
            assert stx.is_safe(app_b)
