"""Tests for HttpSearchSource using httpx.MockTransport."""

import httpx
import pytest

from autoselect.domain.errors import SearchTransportError
from autoselect.infrastructure.http_source import HttpSearchSource

URL = "https://api.example.com/people"


def make_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_sends_query_parameter_and_returns_items():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": 1, "name": "Ann"}])

    async with make_client(handler) as client:
        source = HttpSearchSource(client=client, headers={"X-Token": "abc"})
        items = await source("ann", URL)

    assert items == [{"id": 1, "name": "Ann"}]
    assert seen[0].url.params["q"] == "ann"
    assert seen[0].headers["X-Token"] == "abc"


@pytest.mark.asyncio
async def test_custom_query_parameter_and_empty_query():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    async with make_client(handler) as client:
        source = HttpSearchSource(client=client, query_param="term")
        assert await source("", URL) == []

    assert seen[0].url.params["term"] == ""


@pytest.mark.asyncio
async def test_error_status_raises_transport_error():
    async with make_client(lambda request: httpx.Response(503)) as client:
        source = HttpSearchSource(client=client)

        with pytest.raises(SearchTransportError) as exc_info:
            await source("x", URL)

    assert exc_info.value.query == "x"
    assert exc_info.value.source == URL
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_network_error_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        source = HttpSearchSource(client=client)

        with pytest.raises(SearchTransportError):
            await source("x", URL)


@pytest.mark.asyncio
async def test_non_list_body_rejected():
    async with make_client(lambda request: httpx.Response(200, json={"items": []})) as client:
        source = HttpSearchSource(client=client)

        with pytest.raises(SearchTransportError):
            await source("x", URL)


@pytest.mark.asyncio
async def test_invalid_json_rejected():
    async with make_client(lambda request: httpx.Response(200, text="<html>")) as client:
        source = HttpSearchSource(client=client)

        with pytest.raises(SearchTransportError):
            await source("x", URL)
