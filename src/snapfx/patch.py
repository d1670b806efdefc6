"""Patches: the tagged shape of a state update.

An update is either a plain value (Value) or a function of the current
state that returns a partial patch (Fn). Resolution and merging live here
so Store and History agree on exactly one set of merge rules.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Value(Generic[T]):
    """An update given as a value. Use this to store a callable as state."""

    value: Any


@dataclass(frozen=True)
class Fn(Generic[T]):
    """An update computed from the current state."""

    fn: Callable[[T], Any]


Patch = Union[Value[T], Fn[T]]


def as_patch(update) -> Patch:
    """Tag a raw update. Callables become Fn, everything else Value."""
    if isinstance(update, (Value, Fn)):
        return update
    if callable(update):
        return Fn(update)
    return Value(update)


def resolve(patch: Patch, current):
    """Evaluate a patch against the current state, returning the partial."""
    if isinstance(patch, Fn):
        return patch.fn(current)
    return patch.value


def merge(current, partial):
    """Shallow merge. Never mutates current.

    Mapping over mapping gives a new dict, mapping over a dataclass gives
    dataclasses.replace(). A non-mapping partial replaces the state outright.
    """
    if not isinstance(partial, Mapping):
        return partial
    if isinstance(current, Mapping):
        return {**current, **partial}
    if dataclasses.is_dataclass(current) and not isinstance(current, type):
        return dataclasses.replace(current, **partial)
    return dict(partial)


def next_state(update, current, replace: bool = False):
    """Resolve update against current and apply merge-or-replace."""
    partial = resolve(as_patch(update), current)
    if replace:
        return partial
    return merge(current, partial)
