"""
Completion strategy backed by an ``Autocomplete`` engine.
"""

from __future__ import annotations

import asyncio
import re

from textual_autocomplete import DropdownItem

from autoselect.application.autocomplete import Autocomplete
from autoselect.domain.types import Item
from autoselect.logger import get_logger

from .strategy import CompletionRequest, CompletionStrategy

logger = get_logger("completion.selection")

_MARKUP_TAG = re.compile(r"<[^>]+>")


def to_plain_text(view: str) -> str:
    """Strip markup tags from a rendered template so it fits a terminal dropdown."""
    return _MARKUP_TAG.sub("", view).strip()


class SelectionCompletionStrategy(CompletionStrategy):
    """Feeds the engine's filtered suggestions to a textual_autocomplete dropdown.

    The input text is forwarded to ``Autocomplete.on_key_up`` whenever it
    changes. Remote results arrive asynchronously, so the dropdown shows the
    loading view until the debounced search completes.
    """

    def __init__(self, autocomplete: Autocomplete, prefix: str | None = None) -> None:
        self._autocomplete = autocomplete
        self._prefix = prefix
        self._items: list[Item] = []
        self._search_task: asyncio.Task | None = None

    def can_handle(self, request: CompletionRequest) -> bool:
        return bool(request.query) or self._autocomplete.display_suggestions

    def get_candidates(self, request: CompletionRequest) -> list[DropdownItem]:
        autocomplete = self._autocomplete
        if request.query != autocomplete.query:
            task = autocomplete.on_key_up(request.query)
            if task is not None:
                self._track(task, request.query)

        if autocomplete.loading_data:
            self._items = []
            return [DropdownItem(main=autocomplete.loading_view)]

        self._items = list(autocomplete.filtered_suggestions)
        logger.debug(f"SelectionCompletionStrategy returning {len(self._items)} candidates")
        return [
            DropdownItem(main=to_plain_text(autocomplete.build_view(item)), prefix=self._prefix)
            for item in self._items
        ]

    def _track(self, task: asyncio.Task, query: str) -> None:
        self._search_task = task

        def _cleanup(completed: asyncio.Task) -> None:
            if self._search_task is completed:
                self._search_task = None
            if completed.cancelled():
                return
            exc = completed.exception()
            if exc is not None:
                logger.error(f"Search for {query!r} failed: {exc}")

        task.add_done_callback(_cleanup)

    def select(self, index: int) -> Item:
        """Pick the candidate at ``index`` of the last returned list."""
        item = self._items[index]
        self._autocomplete.perform_selection(item, index)
        return item
