"""Selection state, change notification, search strategies and the controller."""

from .autocomplete import Autocomplete
from .notifier import ChangeNotifier
from .search import LocalSearch, RemoteSearch
from .selection import SelectionState

__all__ = [
    "Autocomplete",
    "ChangeNotifier",
    "LocalSearch",
    "RemoteSearch",
    "SelectionState",
]
