"""Core value types shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

# Items are opaque structured records; only the key/value fields and the
# fields referenced by the template mean anything to the engine.
Item = Mapping[str, Any]

# Scalar identity values are the only legal ids.
Key = Union[str, int, float]

SelectedId = Union[Key, Sequence[Key], None]


@dataclass(frozen=True, slots=True)
class SelectedEntry:
    """A selected item plus the position it had in the filtered suggestions."""

    item: Item
    origin_index: int
