"""Selection-state and search engine for autocomplete controls."""

from autoselect.application import Autocomplete, ChangeNotifier, LocalSearch, RemoteSearch, SelectionState
from autoselect.core import (
    AutocompleteConfig,
    Debouncer,
    TemplateRenderer,
    extract_placeholders,
    load_configuration,
    normalize_configuration,
    render,
)
from autoselect.domain import (
    AutocompleteError,
    ConfigurationError,
    FieldResolutionError,
    SearchTransportError,
    SelectionStateError,
    SelectedEntry,
)

__version__ = "0.1.0"

__all__ = [
    "Autocomplete",
    "AutocompleteConfig",
    "AutocompleteError",
    "ChangeNotifier",
    "ConfigurationError",
    "Debouncer",
    "FieldResolutionError",
    "LocalSearch",
    "RemoteSearch",
    "SearchTransportError",
    "SelectionStateError",
    "SelectedEntry",
    "SelectionState",
    "TemplateRenderer",
    "extract_placeholders",
    "load_configuration",
    "normalize_configuration",
    "render",
]
