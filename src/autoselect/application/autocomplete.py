"""
Autocomplete controller.

Composes configuration, template rendering, selection state, the search
strategy and change notification behind the interface a rendering layer
drives: keystrokes, toggling, picking and removing suggestions, and reading
the state it needs to draw.

All methods run on the event loop thread. Remote searches run as asyncio
tasks; methods that start one return the task so callers can await the
result (and observe ``SearchTransportError``).
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any, Callable

from autoselect.application.notifier import ChangeNotifier
from autoselect.application.search import LocalSearch, RemoteSearch, exclude_selected
from autoselect.application.selection import SelectionState
from autoselect.core.config import AutocompleteConfig, normalize_configuration
from autoselect.core.template import TemplateRenderer
from autoselect.domain.errors import SearchTransportError
from autoselect.domain.protocols import SearchSource
from autoselect.domain.types import Item, SelectedEntry, SelectedId
from autoselect.logger import get_logger

logger = get_logger("autocomplete")


class Autocomplete:
    """Selection-state and search engine of an autocomplete control."""

    def __init__(
        self,
        configuration: Mapping[str, Any] | AutocompleteConfig,
        search_source: SearchSource | None = None,
    ) -> None:
        """
        Initialize the control.

        Args:
            configuration: Raw or normalized configuration
            search_source: ``search(query, source)`` capability for remote
                configurations. Defaults to an HTTP source.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = normalize_configuration(configuration)
        self.renderer = TemplateRenderer(self.config.template)
        self.selection = SelectionState(self.config.key, self.config.multiple)
        self.notifier = ChangeNotifier()

        self._local: LocalSearch | None = None
        self._remote: RemoteSearch | None = None
        if self.config.is_local:
            self._local = LocalSearch(self.config.data)  # type: ignore[arg-type]
        else:
            if search_source is None:
                from autoselect.infrastructure.http_source import HttpSearchSource

                search_source = HttpSearchSource()
            self._remote = RemoteSearch(search_source, self.config.url, self.config.debounce_interval)  # type: ignore[arg-type]

        # Presentation state read by the rendering layer
        self.query: str = ""
        self.display_suggestions: bool = False
        self.loading_data: bool = False
        self.filtered_suggestions: list[Item] = []

        self._lookup_task: asyncio.Task | None = None

        logger.info(
            f"Autocomplete created ({self.strategy.describe()}, "
            f"{'multiple' if self.config.multiple else 'single'} selection)"
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def strategy(self) -> LocalSearch | RemoteSearch:
        return self._local if self._local is not None else self._remote  # type: ignore[return-value]

    @property
    def is_remote(self) -> bool:
        return self._remote is not None

    @property
    def empty_list_view(self) -> str:
        return self.config.empty_list_view

    @property
    def loading_view(self) -> str:
        return self.config.loading_view

    @property
    def selected_id(self) -> SelectedId:
        return self.selection.selected_id

    @property
    def selected_item(self) -> Item | list[Item] | None:
        """The selected item(s) as seen from outside."""
        return self.selection.project()

    @property
    def selected_entries(self) -> list[SelectedEntry]:
        return self.selection.entries

    @property
    def display_text(self) -> str:
        """Text the input shows: the selected value in single mode, else the query."""
        if not self.config.multiple and not self.selection.is_empty:
            value = self.selection.selected_item.get(self.config.value)  # type: ignore[union-attr]
            return "" if value is None else str(value)
        return self.query

    def build_view(self, item: Item) -> str:
        """Render ``item`` with the configured template."""
        return self.renderer.render(item)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[[Any], None]) -> None:
        """Register an "item selected" listener."""
        self.notifier.subscribe(listener)

    def unsubscribe(self, listener: Callable[[Any], None]) -> None:
        self.notifier.unsubscribe(listener)

    def register_on_change(self, fn: Callable[[SelectedId], None] | None) -> None:
        """Register the form binding that receives the raw selected id(s)."""
        self.notifier.register_on_change(fn)

    def register_on_touched(self, fn: Callable[[], None] | None) -> None:
        self.notifier.register_on_touched(fn)

    def _dispatch(self) -> None:
        self.notifier.notify(self.selection.project(), self.selection.selected_id)

    # ------------------------------------------------------------------
    # Suggestion panel
    # ------------------------------------------------------------------

    def open_suggestions(self) -> None:
        if not self.display_suggestions:
            self.display_suggestions = True
            logger.debug("Suggestions opened")

    def close_suggestions(self) -> None:
        """Close the panel, e.g. when the user clicked outside the control."""
        if self.display_suggestions:
            self.display_suggestions = False
            logger.debug("Suggestions closed")
            self.notifier.touch()

    def toggle_suggestions(self) -> asyncio.Task | None:
        """
        Open the panel showing every candidate, or close it when open.

        Returns:
            The remote search task when one was started, else None
        """
        if self.display_suggestions:
            self.close_suggestions()
            return None

        self.open_suggestions()
        if self._local is not None:
            self.filtered_suggestions = self._local.search("", self.selection)
            return None
        return self._schedule_remote("", delay=0)

    # ------------------------------------------------------------------
    # Keystrokes
    # ------------------------------------------------------------------

    def on_key_down(self) -> None:
        """Cancel the pending remote search before the next keystroke re-arms it."""
        if self._remote is not None:
            self._remote.cancel_pending()

    def on_key_up(self, text: str) -> asyncio.Task | None:
        """
        React to the input text after a keystroke.

        An empty text closes the panel (and clears the selection in single
        mode). Otherwise the panel opens and the suggestions are refreshed:
        synchronously for local data, through the debouncer for remote data.

        Returns:
            The debounced remote search task when one was scheduled, else None
        """
        self.query = text

        if text == "":
            self._cancel_remote()
            self.close_suggestions()
            if not self.config.multiple:
                self.clear()
                self._dispatch()
            return None

        self.open_suggestions()
        if self._local is not None:
            self.filtered_suggestions = self._local.search(text, self.selection)
            return None
        return self._schedule_remote(text)

    # ------------------------------------------------------------------
    # Remote search
    # ------------------------------------------------------------------

    def _schedule_remote(self, query: str, delay: float | None = None) -> asyncio.Task:
        assert self._remote is not None
        self.loading_data = True
        self.filtered_suggestions = []
        return self._remote.debouncer.schedule(delay, lambda: self._search_remotely(query))

    def _cancel_remote(self) -> None:
        if self._remote is not None and self._remote.cancel_pending():
            self.loading_data = False

    async def _search_remotely(self, query: str) -> list[Item]:
        assert self._remote is not None
        self.loading_data = True
        self.filtered_suggestions = []
        try:
            results = await self._remote.search(query, self.selection)
        except SearchTransportError:
            self.loading_data = False
            raise
        self.filtered_suggestions = results
        self.loading_data = False
        return results

    async def search_and_select_by_current_id(self, ids: SelectedId = None) -> None:
        """
        Resolve ``ids`` (default: the current id(s)) into selected item(s).

        Locally this scans the configured data. Remotely it fetches the full
        list (empty query) and resolves the ids against the response without
        displaying it. Ids and items are committed together once the
        candidates are known; until then the previous selection stays.

        Raises:
            SearchTransportError: If the remote lookup fails. The previous
                selection is kept.
        """
        if ids is None:
            ids = self.selection.selected_id

        if self._local is not None:
            self._resolve(ids, self._local.data)
            return

        assert self._remote is not None
        try:
            candidates = await self._remote.fetch("")
        except SearchTransportError as e:
            logger.warning(f"Lookup of selected id(s) {ids!r} failed, keeping {self.selection.selected_id!r}: {e}")
            raise
        self._resolve(ids, candidates)

    def _resolve(self, ids: SelectedId, candidates: Sequence[Item]) -> None:
        self.selection.set_selected_id(ids, candidates)
        self.filtered_suggestions = exclude_selected(self.filtered_suggestions, self.selection)

    def _cancel_lookup(self) -> None:
        if self._lookup_task is not None and not self._lookup_task.done():
            self._lookup_task.cancel()
            logger.debug("Pending id lookup cancelled")

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def set_selected_id(self, value: SelectedId) -> asyncio.Task | None:
        """
        Assign the selected id(s) from outside and look up the matching item(s).

        Local configurations resolve synchronously. Remote configurations start
        a lookup task (superseding any previous one) and return it; the
        previous selection stays in place until the lookup resolves.
        Observers are not notified: the assignment comes from them.

        Raises:
            ConfigurationError: If the value's shape does not fit the selection
                mode; the previous state is kept
        """
        ids = self.selection.normalize_id(value)
        self._cancel_lookup()
        if ids is None or ids == []:
            self.selection.clear()
            return None

        if self._local is not None:
            self._resolve(ids, self._local.data)
            return None

        self._lookup_task = asyncio.create_task(self.search_and_select_by_current_id(ids))
        return self._lookup_task

    def write_value(self, value: SelectedId) -> asyncio.Task | None:
        """Form binding entry point; empty values are ignored."""
        if value is None or value == "":
            return None
        return self.set_selected_id(value)

    def perform_selection(self, item: Item, index: int) -> None:
        """
        Pick ``item``, found at ``index`` of the filtered suggestions.

        Single mode replaces the selection, clears the query and closes the
        panel. Multiple mode appends to the selection, removes the item from
        the suggestions and closes the panel once none are left. A pick
        supersedes any id lookup still in flight.
        """
        self.selection.select(item, index)
        self._cancel_lookup()
        self.query = ""

        if self.config.multiple:
            self._remove_suggestion(item, index)
            if not self.filtered_suggestions:
                self.close_suggestions()
        else:
            self.close_suggestions()

        self._dispatch()

    def _remove_suggestion(self, item: Item, index: int) -> None:
        key = self.config.key
        if 0 <= index < len(self.filtered_suggestions) and self.filtered_suggestions[index].get(key) == item[key]:
            del self.filtered_suggestions[index]
            return
        self.filtered_suggestions = [s for s in self.filtered_suggestions if s.get(key) != item[key]]

    def delete_from_selection(self, position: int) -> SelectedEntry:
        """
        Remove the selected entry at ``position`` (multiple mode).

        Its item goes back into the suggestions at the index it was picked
        from, clamped to the current list length.

        Raises:
            ConfigurationError: In single mode
            IndexError: If ``position`` is out of range
        """
        entry = self.selection.deselect(position)
        self._cancel_lookup()
        insert_at = min(max(entry.origin_index, 0), len(self.filtered_suggestions))
        self.filtered_suggestions.insert(insert_at, entry.item)
        self._dispatch()
        return entry

    def clear(self) -> None:
        """Reset the selection and empty the suggestions."""
        self._cancel_lookup()
        self.selection.clear()
        self.filtered_suggestions = []
        logger.debug("Selection cleared")

    async def aclose(self) -> None:
        """Cancel any in-flight search or lookup."""
        self._cancel_remote()
        if self._lookup_task is not None and not self._lookup_task.done():
            self._lookup_task.cancel()
            try:
                await self._lookup_task
            except asyncio.CancelledError:
                logger.debug("Lookup task cancelled")
            except SearchTransportError as e:
                logger.debug(f"Lookup task ended with {e}")
        self._lookup_task = None
