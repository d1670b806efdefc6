"""snapfx: minimal reactive state with stores, atoms, derived atoms and undo/redo."""

from importlib.metadata import version as _version

__version__ = _version("snapfx")

from snapfx.patch import Value, Fn, Patch
from snapfx.subscription import Subscription
from snapfx.store import Store, create_store
from snapfx.selector import subscribe_selected
from snapfx.atom import Atom, Readable, atom
from snapfx.derived import Derived, derived
from snapfx.history import History, time_travel
from snapfx.middleware import logged
# textual NOT auto-imported, opt-in only

__all__ = [
    "Value",
    "Fn",
    "Patch",
    "Subscription",
    "Store",
    "create_store",
    "subscribe_selected",
    "Atom",
    "Readable",
    "atom",
    "Derived",
    "derived",
    "History",
    "time_travel",
    "logged",
]
