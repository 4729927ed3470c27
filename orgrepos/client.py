"""
orgrepos main client.

Wires configuration, transport, state machine and runner together.
"""

from collections.abc import Callable
from typing import Any

import httpx

from orgrepos.config import DEFAULT_TIMEOUT, ClientConfig
from orgrepos.runner import QueryRunner
from orgrepos.state_machine import RequestStateMachine, StateListener
from orgrepos.transport import GraphQLTransport
from orgrepos.types.state import QueryState


class OrgReposClient:
    """
    Client for browsing the repositories of a GitHub organization.

    Example:
        ```python
        from orgrepos import ClientConfig, OrgReposClient

        # Create client with explicit configuration
        client = OrgReposClient(ClientConfig(token="ghp_..."))

        # Or create from environment variables
        client = OrgReposClient.from_env()

        client.submit("the-road-to-learn-react")
        while client.can_load_more:
            client.load_more()
        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Token, endpoint, timeout and page size
            http_transport: Optional httpx transport, for tests
        """
        self.config = config
        self._transport = GraphQLTransport(config, transport=http_transport)
        self.machine = RequestStateMachine()
        self.runner = QueryRunner(
            self._transport, self.machine, page_size=config.page_size
        )

    @classmethod
    def from_env(cls, timeout: float = DEFAULT_TIMEOUT) -> "OrgReposClient":
        """
        Create a client from environment variables (see ``ClientConfig.from_env``).

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        return cls(ClientConfig.from_env(timeout=timeout))

    @property
    def transport(self) -> GraphQLTransport:
        """Get the underlying GraphQL transport."""
        return self._transport

    @property
    def state(self) -> QueryState:
        return self.machine.state

    @property
    def can_load_more(self) -> bool:
        return self.runner.can_load_more

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns an unsubscribe function."""
        return self.machine.subscribe(listener)

    def submit(self, organization_login: str) -> QueryState:
        """Fetch the first page of ``organization_login``'s repositories."""
        return self.runner.submit(organization_login)

    def load_more(self) -> QueryState:
        """Fetch the next page of the current organization, if any."""
        return self.runner.load_more()

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "OrgReposClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
