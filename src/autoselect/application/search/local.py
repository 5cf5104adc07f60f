"""
Local search over an in-memory collection.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import TYPE_CHECKING

from autoselect.domain.types import Item
from autoselect.logger import get_logger

from .base import SearchStrategy, exclude_selected

if TYPE_CHECKING:
    from autoselect.application.selection import SelectionState

logger = get_logger("search.local")


def serialize_item(item: Item) -> str:
    """Text form of an item used for matching: its compact JSON serialization."""
    return json.dumps(item, ensure_ascii=False, separators=(",", ":"), default=str)


def matches(item: Item, query: str) -> bool:
    """Case-insensitive substring test of ``query`` against the whole serialized item."""
    return query.lower() in serialize_item(item).lower()


class LocalSearch(SearchStrategy):
    """Synchronous substring filter.

    The whole item is serialized before matching, so a query can hit any
    field (and even field names), not only the display field.
    """

    is_remote = False

    def __init__(self, data: Sequence[Item]) -> None:
        self._data = data

    @property
    def data(self) -> Sequence[Item]:
        return self._data

    def describe(self) -> str:
        return f"local({len(self._data)} items)"

    def search(self, query: str, selection: "SelectionState") -> list[Item]:
        """Return the items matching ``query``; an empty query matches everything."""
        if query:
            candidates = [item for item in self._data if matches(item, query)]
        else:
            candidates = list(self._data)
        results = exclude_selected(candidates, selection)
        logger.debug(f"Local search query={query!r} matched {len(candidates)}, returning {len(results)}")
        return results
