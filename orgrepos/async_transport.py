"""
Async GraphQL transport for orgrepos.

Same contract as ``GraphQLTransport`` using the httpx async client.
"""

import time
from typing import Any

import httpx

from orgrepos.config import ClientConfig
from orgrepos.exceptions import TransportError
from orgrepos.logging import log_http_request, log_http_response
from orgrepos.transport import build_headers, decode_response


class AsyncGraphQLTransport:
    """Asynchronous GraphQL transport backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize async transport.

        Args:
            config: Endpoint, token and timeout
            transport: Optional httpx async transport (e.g. ``httpx.MockTransport`` in tests)
        """
        self.config = config
        self.endpoint = config.endpoint
        self._headers = build_headers(config.token)

        self._client = httpx.AsyncClient(
            timeout=config.timeout,
            headers=self._headers,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncGraphQLTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def post_graphql(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Execute a GraphQL query.

        Returns:
            The decoded response envelope

        Raises:
            TransportError: If no GraphQL response could be obtained
        """
        log_http_request("POST", self.endpoint, self._headers, variables)
        started = time.perf_counter()

        try:
            response = await self._client.post(
                self.endpoint,
                json={"query": query, "variables": variables or {}},
            )
        except httpx.RequestError as e:
            raise TransportError("CONNECTION_ERROR", str(e)) from e

        elapsed_ms = (time.perf_counter() - started) * 1000
        data = decode_response(response)
        log_http_response(response.status_code, self.endpoint, data, elapsed_ms)
        return data
