"""Error taxonomy for the selection and search engine."""

from typing import Any, Optional


class AutocompleteError(Exception):
    """Base class for all errors raised by autoselect."""


class ConfigurationError(AutocompleteError):
    """Invalid configuration, or a selected id whose shape does not match the selection mode."""


class FieldResolutionError(AutocompleteError):
    """A template placeholder path does not resolve against an item."""

    def __init__(self, path: str, segment: str, obj: Any) -> None:
        self.path = path
        self.segment = segment
        super().__init__(f"Can't find the key {segment!r} of path {path!r} in {obj!r}")


class SearchTransportError(AutocompleteError):
    """The remote search capability failed or returned an unusable result."""

    def __init__(self, message: str, query: str = "", source: Optional[str] = None) -> None:
        self.query = query
        self.source = source
        super().__init__(message)


class SelectionStateError(AutocompleteError):
    """The selected ids and the selected items no longer pair up."""
