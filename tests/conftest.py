"""Shared fixtures and fakes for autoselect tests."""

import asyncio
from typing import Any, Optional

import pytest

PEOPLE = [
    {"id": 1, "name": "Ann"},
    {"id": 2, "name": "Bob"},
]

COUNTRIES = [
    {"code": "fr", "label": "France", "capital": {"city": "Paris"}},
    {"code": "de", "label": "Germany", "capital": {"city": "Berlin"}},
    {"code": "it", "label": "Italy", "capital": {"city": "Rome"}},
]

REMOTE_URL = "https://api.example.com/countries"


class FakeSearchSource:
    """Async search capability recording every call.

    Matches the query against the ``label`` field so tests can predict results.
    ``delays`` overrides the response delay for specific queries.
    """

    def __init__(
        self,
        items: Optional[list[dict[str, Any]]] = None,
        delay: float = 0.0,
        error: Optional[Exception] = None,
        delays: Optional[dict[str, float]] = None,
    ):
        self.items = items if items is not None else COUNTRIES
        self.delay = delay
        self.error = error
        self.delays = delays or {}
        self.calls: list[tuple[str, str]] = []

    async def __call__(self, query: str, source: str) -> list[dict[str, Any]]:
        self.calls.append((query, source))
        delay = self.delays.get(query, self.delay)
        if delay:
            await asyncio.sleep(delay)
        if self.error is not None:
            raise self.error
        return [item for item in self.items if query.lower() in item["label"].lower()]


@pytest.fixture
def people_config() -> dict[str, Any]:
    return {"key": "id", "value": "name", "data": [dict(p) for p in PEOPLE]}


@pytest.fixture
def countries_config() -> dict[str, Any]:
    return {
        "key": "code",
        "value": "label",
        "multiple": True,
        "data": [dict(c) for c in COUNTRIES],
    }


@pytest.fixture
def remote_config() -> dict[str, Any]:
    return {"key": "code", "value": "label", "url": REMOTE_URL, "debounceInterval": 0.05}


@pytest.fixture
def search_source() -> FakeSearchSource:
    return FakeSearchSource()
