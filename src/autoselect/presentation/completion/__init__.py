"""textual_autocomplete adapters for the autocomplete engine."""

from .selection_completion import SelectionCompletionStrategy, to_plain_text
from .strategy import CompletionRequest, CompletionStrategy

__all__ = [
    "CompletionRequest",
    "CompletionStrategy",
    "SelectionCompletionStrategy",
    "to_plain_text",
]
