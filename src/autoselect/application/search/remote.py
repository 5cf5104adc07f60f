"""
Remote search through a pluggable search capability.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import TYPE_CHECKING

from autoselect.core.debounce import Debouncer
from autoselect.domain.errors import SearchTransportError
from autoselect.domain.protocols import SearchSource
from autoselect.domain.types import Item
from autoselect.logger import get_logger

from .base import SearchStrategy, exclude_selected

if TYPE_CHECKING:
    from autoselect.application.selection import SelectionState

logger = get_logger("search.remote")


class RemoteSearch(SearchStrategy):
    """Asynchronous search against ``source`` with a debouncer for keystrokes.

    ``search`` issues the call immediately. Callers reacting to keystrokes go
    through ``debouncer`` so that only the last query of a burst is sent.
    """

    is_remote = True

    def __init__(self, search_source: SearchSource, source: str, debounce_interval: float = 0.25) -> None:
        """
        Args:
            search_source: The ``search(query, source)`` capability
            source: Endpoint handed to the capability on every call
            debounce_interval: Quiet period in seconds before a keystroke search fires
        """
        self._search_source = search_source
        self.source = source
        self.debouncer = Debouncer(debounce_interval, name="remote-search")

    def describe(self) -> str:
        return f"remote({self.source})"

    async def fetch(self, query: str) -> list[Item]:
        """
        Call the capability and return its raw candidates.

        Raises:
            SearchTransportError: If the capability fails or returns something
                other than a sequence of items
        """
        logger.debug(f"Remote search query={query!r} source={self.source}")
        try:
            result = self._search_source(query, self.source)
            if inspect.isawaitable(result):
                result = await result
        except SearchTransportError:
            raise
        except Exception as e:
            logger.error(f"Remote search failed for query={query!r} source={self.source}: {e}")
            raise SearchTransportError(f"Remote search failed: {e}", query=query, source=self.source) from e

        if result is None or isinstance(result, (str, bytes, Mapping)) or not hasattr(result, "__iter__"):
            raise SearchTransportError(
                f"Remote search returned {type(result).__name__}, expected a sequence of items",
                query=query,
                source=self.source,
            )
        return list(result)

    async def search(self, query: str, selection: "SelectionState") -> list[Item]:
        """Fetch candidates, then exclude what is selected once the response is in."""
        candidates = await self.fetch(query)
        results = exclude_selected(candidates, selection)
        logger.debug(f"Remote search query={query!r} returned {len(candidates)}, keeping {len(results)}")
        return results

    def cancel_pending(self) -> bool:
        return self.debouncer.cancel_pending()
