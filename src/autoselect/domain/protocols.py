"""Collaborator protocols.

The engine never talks to a transport or a rendering layer directly. These
structural types describe what it expects from the outside world.
"""

from typing import Any, Awaitable, Protocol, Sequence, Union

from .types import Item, SelectedId

SearchResult = Union[Sequence[Item], Awaitable[Sequence[Item]]]


class SearchSource(Protocol):
    """Remote data capability.

    An empty ``query`` means "return the default/full list". Implementations
    may be synchronous or return an awaitable.
    """

    def __call__(self, query: str, source: str) -> SearchResult:
        ...


class SelectionListener(Protocol):
    """Receives the selection projection after every selection change."""

    def __call__(self, selection: Any) -> None:
        ...


class FormBinding(Protocol):
    """Receives the raw selected id value after every selection change."""

    def __call__(self, selected_id: SelectedId) -> None:
        ...
