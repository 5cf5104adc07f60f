"""
HTTP search source.

Default ``search(query, source)`` capability for remote configurations: a GET
request to ``source`` carrying the query as a parameter, answered with a
JSON array of items.
"""

from __future__ import annotations

from typing import Any

import httpx

from autoselect.domain.errors import SearchTransportError
from autoselect.domain.types import Item
from autoselect.logger import get_logger

logger = get_logger("http_source")


class HttpSearchSource:
    """Fetches candidate items over HTTP with httpx."""

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        query_param: str = "q",
        headers: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Args:
            client: Shared client to use. When None a short-lived client is
                opened per request.
            query_param: Name of the parameter carrying the query
            headers: Extra headers sent with every request
            timeout: Request timeout in seconds for per-request clients
        """
        self._client = client
        self.query_param = query_param
        self.headers = dict(headers or {})
        self.timeout = timeout

    async def __call__(self, query: str, source: str) -> list[Item]:
        """
        Search ``source`` for ``query``.

        Raises:
            SearchTransportError: On network errors, non-2xx responses, invalid
                JSON or a body that is not a JSON array
        """
        params = {self.query_param: query}
        try:
            if self._client is not None:
                response = await self._client.get(source, params=params, headers=self.headers)
            else:
                async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout)) as client:
                    response = await client.get(source, params=params, headers=self.headers)
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.HTTPStatusError as e:
            raise SearchTransportError(
                f"Search endpoint answered {e.response.status_code}", query=query, source=source
            ) from e
        except httpx.HTTPError as e:
            raise SearchTransportError(f"Search request failed: {e}", query=query, source=source) from e
        except ValueError as e:
            raise SearchTransportError(f"Search endpoint returned invalid JSON: {e}", query=query, source=source) from e

        if not isinstance(payload, list):
            raise SearchTransportError(
                f"Search endpoint returned {type(payload).__name__}, expected a JSON array",
                query=query,
                source=source,
            )
        logger.debug(f"GET {source} {self.query_param}={query!r} -> {len(payload)} item(s)")
        return payload
