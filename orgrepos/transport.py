"""
GraphQL transport for orgrepos.

Posts a query and its variables to the GitHub GraphQL endpoint and returns
the decoded response envelope. Failures to obtain a response are raised as
``TransportError``; GraphQL-level ``errors`` are returned untouched for the
caller to interpret.
"""

import time
from typing import Any

import httpx

from orgrepos.config import ClientConfig
from orgrepos.exceptions import TransportError
from orgrepos.logging import log_http_request, log_http_response


def build_headers(token: str) -> dict[str, str]:
    """Headers sent with every GraphQL request."""
    return {
        "Authorization": f"bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def decode_response(response: httpx.Response) -> dict[str, Any]:
    """
    Turn an HTTP response into a GraphQL envelope.

    Raises:
        TransportError: On HTTP error status or an undecodable body
    """
    if response.status_code >= 400:
        raise _parse_error_response(response)

    try:
        data = response.json()
    except ValueError as e:
        raise TransportError(
            "INVALID_RESPONSE",
            f"Response body is not valid JSON: {e}",
            response.status_code,
        ) from e

    if not isinstance(data, dict):
        raise TransportError(
            "INVALID_RESPONSE",
            "Response body is not a JSON object",
            response.status_code,
        )

    return data


def _parse_error_response(response: httpx.Response) -> TransportError:
    try:
        data = response.json()
    except ValueError:
        data = {}

    message = None
    if isinstance(data, dict):
        message = data.get("message")
    if not message:
        message = response.reason_phrase or f"HTTP {response.status_code}"

    return TransportError(
        f"HTTP_{response.status_code}", message, response.status_code
    )


class GraphQLTransport:
    """
    Synchronous GraphQL transport backed by ``httpx.Client``.

    There is no retry: one call is one HTTP request.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            config: Endpoint, token and timeout
            transport: Optional httpx transport (e.g. ``httpx.MockTransport`` in tests)
        """
        self.config = config
        self.endpoint = config.endpoint
        self._headers = build_headers(config.token)

        self._client = httpx.Client(
            timeout=config.timeout,
            headers=self._headers,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "GraphQLTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def post_graphql(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Execute a GraphQL query.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The decoded response envelope (``{"data": ..., "errors": [...]}``)

        Raises:
            TransportError: If no GraphQL response could be obtained
        """
        log_http_request("POST", self.endpoint, self._headers, variables)
        started = time.perf_counter()

        try:
            response = self._client.post(
                self.endpoint,
                json={"query": query, "variables": variables or {}},
            )
        except httpx.RequestError as e:
            raise TransportError("CONNECTION_ERROR", str(e)) from e

        elapsed_ms = (time.perf_counter() - started) * 1000
        data = decode_response(response)
        log_http_response(response.status_code, self.endpoint, data, elapsed_ms)
        return data
