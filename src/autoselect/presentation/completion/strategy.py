"""
Strategy interface for driving a textual_autocomplete dropdown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from textual_autocomplete import DropdownItem, TargetState


@dataclass(slots=True)
class CompletionRequest:
    """Input state handed to a completion strategy."""

    state: TargetState

    @property
    def text(self) -> str:
        return self.state.text

    @property
    def cursor_position(self) -> int:
        return self.state.cursor_position

    @property
    def query(self) -> str:
        """Text typed up to the cursor, which is what gets searched."""
        return self.state.text[: self.state.cursor_position]


class CompletionStrategy(Protocol):
    """Produces dropdown items for an input and maps picks back to the engine."""

    def can_handle(self, request: CompletionRequest) -> bool:
        ...

    def get_candidates(self, request: CompletionRequest) -> list[DropdownItem]:
        ...

    def select(self, index: int) -> object:
        """Apply the candidate at ``index`` of the last returned list."""

        ...
