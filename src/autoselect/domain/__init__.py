"""Domain types, errors and collaborator protocols."""

from .errors import (
    AutocompleteError,
    ConfigurationError,
    FieldResolutionError,
    SearchTransportError,
    SelectionStateError,
)
from .protocols import FormBinding, SearchResult, SearchSource, SelectionListener
from .types import Item, Key, SelectedEntry, SelectedId

__all__ = [
    "AutocompleteError",
    "ConfigurationError",
    "FieldResolutionError",
    "SearchTransportError",
    "SelectionStateError",
    "FormBinding",
    "SearchResult",
    "SearchSource",
    "SelectionListener",
    "Item",
    "Key",
    "SelectedEntry",
    "SelectedId",
]
