"""
Selection state for single and multiple selection modes.

The state keeps two views of the same selection in lockstep:

- ``selected_id``: what the form sees (a key, or a list of keys)
- ``selected_item``: what the engine works with (an item, or a list of
  ``SelectedEntry`` recording where each item sat in the suggestion list)

Single mode holds ``None`` or one item. Multiple mode holds two lists of
equal length whose keys match index by index.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from autoselect.domain.errors import ConfigurationError, SelectionStateError
from autoselect.domain.types import Item, Key, SelectedEntry, SelectedId
from autoselect.logger import get_logger

logger = get_logger("selection")


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float))


class SelectionState:
    """Owns the selected id(s) and the selected item(s)."""

    def __init__(self, key: str, multiple: bool = False) -> None:
        self.key = key
        self.multiple = multiple
        self._selected_id: SelectedId = [] if multiple else None
        self._selected_item: Item | list[SelectedEntry] | None = [] if multiple else None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def selected_id(self) -> SelectedId:
        """The selected key (single mode) or a copy of the selected keys (multiple mode)."""
        if self.multiple:
            return list(self._selected_id)  # type: ignore[arg-type]
        return self._selected_id

    @property
    def selected_item(self) -> Item | list[SelectedEntry] | None:
        """The raw selection record: an item, or a copy of the selected entries."""
        if self.multiple:
            return list(self._selected_item)  # type: ignore[arg-type]
        return self._selected_item

    @property
    def entries(self) -> list[SelectedEntry]:
        if self.multiple:
            return list(self._selected_item)  # type: ignore[arg-type]
        return []

    @property
    def is_empty(self) -> bool:
        if self.multiple:
            return not self._selected_item
        return self._selected_item is None

    def project(self) -> Item | list[Item] | None:
        """The externally visible selected item(s)."""
        if self.multiple:
            return [entry.item for entry in self._selected_item]  # type: ignore[union-attr]
        return self._selected_item

    def selected_keys(self) -> list[Any]:
        """Keys of the items currently held, in selection order."""
        if self.multiple:
            return [entry.item[self.key] for entry in self._selected_item]  # type: ignore[union-attr]
        if self._selected_item is None:
            return []
        return [self._selected_item[self.key]]  # type: ignore[index]

    def contains(self, item: Item) -> bool:
        """Whether an item with the same key is already selected."""
        if self.key not in item:
            return False
        return item[self.key] in self.selected_keys()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def normalize_id(self, value: SelectedId) -> SelectedId:
        """
        Validate an externally supplied id value without touching the state.

        A scalar is wrapped in a list in multiple mode. ``None`` maps to the
        unset value of the current mode.

        Raises:
            ConfigurationError: If a sequence is given in single mode, or if
                the value (or any element) is not a scalar
        """
        if value is None:
            return [] if self.multiple else None

        is_sequence = isinstance(value, Sequence) and not isinstance(value, str)
        if not self.multiple and is_sequence:
            raise ConfigurationError(
                "A sequence was passed as the selected id; either pass a single value "
                'or set the "multiple" option to true in the configuration.'
            )

        values = list(value) if is_sequence else [value]  # type: ignore[arg-type]
        for element in values:
            if not _is_scalar(element):
                raise ConfigurationError(
                    f"Selected ids must be numbers or strings, got {type(element).__name__}"
                )
        return values if self.multiple else value

    def set_selected_id(self, value: SelectedId, items: Sequence[Item] = ()) -> SelectedId:
        """
        Replace the selection with the item(s) of ``items`` matching ``value``.

        Ids and items are committed together: ids with no matching item are
        dropped (with a warning) so both views stay paired. Multiple-mode
        entries follow the order of the ids and record the matching item's
        position in ``items``. ``None`` resets the selection.

        Returns:
            The selected id(s) after the assignment

        Raises:
            ConfigurationError: If the value's shape does not fit the selection
                mode. The state is left untouched.
        """
        ids = self.normalize_id(value)
        self._commit(ids, items)
        logger.debug(f"Selected id set to {self._selected_id!r}")
        return self.selected_id

    def reconstruct(self, items: Sequence[Item]) -> None:
        """Resolve the current id(s) again against ``items``."""
        self._commit(self.selected_id, items)

    def _commit(self, ids: SelectedId, items: Sequence[Item]) -> None:
        index_by_key: dict[Any, tuple[int, Item]] = {}
        for index, item in enumerate(items):
            if isinstance(item, Mapping) and self.key in item:
                index_by_key.setdefault(item[self.key], (index, item))

        if self.multiple:
            entries: list[SelectedEntry] = []
            found_ids: list[Key] = []
            for key in ids:  # type: ignore[union-attr]
                match = index_by_key.get(key)
                if match is None:
                    logger.warning(f"No item found for selected id {key!r}")
                    continue
                entries.append(SelectedEntry(item=match[1], origin_index=match[0]))
                found_ids.append(key)
            self._selected_id = found_ids
            self._selected_item = entries
            self._check_invariant()
            return

        match = index_by_key.get(ids) if ids is not None else None
        if ids is not None and match is None:
            logger.warning(f"No item found for selected id {ids!r}")
        if match is None:
            self._selected_id = None
            self._selected_item = None
        else:
            self._selected_id = ids
            self._selected_item = match[1]

    def select(self, item: Item, origin_index: int) -> None:
        """Add ``item`` to the selection (multiple mode) or replace it (single mode)."""
        if self.key not in item:
            raise ConfigurationError(f"Selected item has no key field {self.key!r}: {item!r}")
        if self.multiple:
            self._selected_item.append(SelectedEntry(item=item, origin_index=origin_index))  # type: ignore[union-attr]
            self._selected_id.append(item[self.key])  # type: ignore[union-attr]
            self._check_invariant()
        else:
            self._selected_item = item
            self._selected_id = item[self.key]
        logger.debug(f"Selected item with key {item[self.key]!r}")

    def deselect(self, position: int) -> SelectedEntry:
        """
        Remove the entry at ``position`` of the selection (multiple mode only).

        Returns:
            The removed entry, so its item can be put back into the suggestions

        Raises:
            ConfigurationError: In single mode
            IndexError: If ``position`` is out of range
        """
        if not self.multiple:
            raise ConfigurationError("deselect is only available in multiple selection mode")
        entries: list[SelectedEntry] = self._selected_item  # type: ignore[assignment]
        if not -len(entries) <= position < len(entries):
            raise IndexError(f"Selection position {position} out of range ({len(entries)} selected)")
        entry = entries.pop(position)
        self._selected_id.pop(position)  # type: ignore[union-attr]
        self._check_invariant()
        logger.debug(f"Deselected item with key {entry.item[self.key]!r}")
        return entry

    def clear(self) -> None:
        """Reset both views to the unset value of the current mode."""
        if self.multiple:
            self._selected_id = []
            self._selected_item = []
        else:
            self._selected_id = None
            self._selected_item = None

    def _check_invariant(self) -> None:
        keys = [entry.item[self.key] for entry in self._selected_item]  # type: ignore[union-attr]
        if keys != self._selected_id:
            raise SelectionStateError(f"Selection out of sync: ids {self._selected_id!r} vs items {keys!r}")
