"""
Template rendering for suggestions and selections.

Templates are plain strings with ``#path#`` placeholders, where ``path`` is a
dot-separated chain of field names (``#user.name#``). Rendering resolves each
path against an item and substitutes the value in place.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from functools import lru_cache
from typing import Any

from autoselect.domain.errors import FieldResolutionError
from autoselect.domain.types import Item
from autoselect.logger import get_logger

logger = get_logger("template")

PLACEHOLDER_PATTERN = re.compile(r"#[A-Za-z0-9_.]+#")


@lru_cache(maxsize=128)
def extract_placeholders(template: str) -> tuple[str, ...]:
    """Return every ``#path#`` token of ``template`` in textual order, duplicates included."""
    return tuple(PLACEHOLDER_PATTERN.findall(template))


def resolve_path(item: Any, path: str) -> Any:
    """
    Descend into ``item`` following the dot-separated ``path``.

    Mapping segments are looked up by key. Numeric segments index into
    sequences (``tags.0``).

    Raises:
        FieldResolutionError: If any segment is absent from the current object
    """
    current = item
    for segment in path.split("."):
        if isinstance(current, Mapping):
            if segment not in current:
                raise FieldResolutionError(path, segment, current)
            current = current[segment]
        elif (
            isinstance(current, Sequence)
            and not isinstance(current, (str, bytes))
            and segment.isdigit()
            and int(segment) < len(current)
        ):
            current = current[int(segment)]
        else:
            raise FieldResolutionError(path, segment, current)
    return current


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def render(template: str, placeholders: Sequence[str], item: Item) -> str:
    """
    Substitute every placeholder of ``template`` with its value from ``item``.

    Each distinct token is resolved once and every occurrence of it is
    replaced with that value, in textual order. Substituted values are never
    re-scanned, so a value that itself looks like a token stays literal.

    Raises:
        FieldResolutionError: If a placeholder path does not resolve
    """
    values: dict[str, str] = {}
    for token in placeholders:
        if token not in values:
            values[token] = _to_text(resolve_path(item, token.strip("#")))

    def substitute(match: re.Match[str]) -> str:
        token = match.group(0)
        return values.get(token, token)

    return PLACEHOLDER_PATTERN.sub(substitute, template)


class TemplateRenderer:
    """Renders items with a fixed template whose placeholders are extracted once."""

    def __init__(self, template: str) -> None:
        self.template = template
        self.placeholders = extract_placeholders(template)
        logger.debug(f"Template {template!r} has placeholders {list(self.placeholders)}")

    def render(self, item: Item) -> str:
        return render(self.template, self.placeholders, item)

    __call__ = render
