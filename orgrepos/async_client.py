"""
orgrepos async client.

Async counterpart of ``OrgReposClient``.
"""

from collections.abc import Callable
from typing import Any

import httpx

from orgrepos.async_transport import AsyncGraphQLTransport
from orgrepos.config import DEFAULT_TIMEOUT, ClientConfig
from orgrepos.runner import AsyncQueryRunner
from orgrepos.state_machine import RequestStateMachine, StateListener
from orgrepos.types.state import QueryState


class AsyncOrgReposClient:
    """
    Async client for browsing the repositories of a GitHub organization.

    Example:
        ```python
        import asyncio
        from orgrepos import AsyncOrgReposClient

        async def main():
            async with AsyncOrgReposClient.from_env() as client:
                await client.submit("the-road-to-learn-react")
                while client.can_load_more:
                    await client.load_more()

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = AsyncGraphQLTransport(config, transport=http_transport)
        self.machine = RequestStateMachine()
        self.runner = AsyncQueryRunner(
            self._transport, self.machine, page_size=config.page_size
        )

    @classmethod
    def from_env(cls, timeout: float = DEFAULT_TIMEOUT) -> "AsyncOrgReposClient":
        """
        Create a client from environment variables (see ``ClientConfig.from_env``).

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        return cls(ClientConfig.from_env(timeout=timeout))

    @property
    def transport(self) -> AsyncGraphQLTransport:
        """Get the underlying async GraphQL transport."""
        return self._transport

    @property
    def state(self) -> QueryState:
        return self.machine.state

    @property
    def can_load_more(self) -> bool:
        return self.runner.can_load_more

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self.machine.subscribe(listener)

    async def submit(self, organization_login: str) -> QueryState:
        return await self.runner.submit(organization_login)

    async def load_more(self) -> QueryState:
        return await self.runner.load_more()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncOrgReposClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
