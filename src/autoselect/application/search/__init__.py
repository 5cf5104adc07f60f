"""Search strategies: local substring filter and debounced remote query."""

from .base import SearchStrategy, exclude_selected
from .local import LocalSearch, matches, serialize_item
from .remote import RemoteSearch

__all__ = [
    "SearchStrategy",
    "exclude_selected",
    "LocalSearch",
    "RemoteSearch",
    "matches",
    "serialize_item",
]
