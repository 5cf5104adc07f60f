"""
Common pieces of the search strategies.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

from autoselect.domain.types import Item

if TYPE_CHECKING:
    from autoselect.application.selection import SelectionState


def exclude_selected(items: Iterable[Item], selection: "SelectionState") -> list[Item]:
    """Drop every item whose key is already part of ``selection``."""
    return [item for item in items if not selection.contains(item)]


class SearchStrategy(Protocol):
    """Contract shared by the local and remote strategies."""

    is_remote: bool

    def describe(self) -> str:
        """Short label used in logs."""

        ...
