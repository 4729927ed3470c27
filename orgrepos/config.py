"""
Client configuration.

The configuration is built once at startup (explicitly or from environment
variables) and passed into the transport and runner; nothing below this
module reads the environment.
"""

import os
from dataclasses import dataclass

from orgrepos.exceptions import ConfigurationError

DEFAULT_ENDPOINT = "https://api.github.com/graphql"
DEFAULT_TIMEOUT = 30.0
DEFAULT_PAGE_SIZE = 2


@dataclass(frozen=True)
class ClientConfig:
    """Settings for talking to the GitHub GraphQL API."""

    token: str
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigurationError("A GitHub personal access token is required")
        if self.page_size < 1:
            raise ConfigurationError(
                f"page_size must be a positive integer, got {self.page_size}"
            )

    def __repr__(self) -> str:
        return (
            f"ClientConfig(token='[REDACTED]', endpoint={self.endpoint!r}, "
            f"timeout={self.timeout!r}, page_size={self.page_size!r})"
        )

    @classmethod
    def from_env(cls, timeout: float = DEFAULT_TIMEOUT) -> "ClientConfig":
        """
        Create a configuration from environment variables.

        Environment variables:
            GITHUB_PERSONAL_ACCESS_TOKEN: Bearer token (required; GITHUB_TOKEN is
                used when it is not set)
            ORGREPOS_ENDPOINT: GraphQL endpoint (optional, default: https://api.github.com/graphql)
            ORGREPOS_PAGE_SIZE: Repositories per page (optional, default: 2)

        Raises:
            ConfigurationError: If the token is missing or the page size is invalid
        """
        token = os.environ.get("GITHUB_PERSONAL_ACCESS_TOKEN") or os.environ.get(
            "GITHUB_TOKEN"
        )
        endpoint = os.environ.get("ORGREPOS_ENDPOINT", DEFAULT_ENDPOINT)
        page_size_raw = os.environ.get("ORGREPOS_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))

        if not token:
            raise ConfigurationError(
                "GITHUB_PERSONAL_ACCESS_TOKEN environment variable not set"
            )

        try:
            page_size = int(page_size_raw)
        except ValueError:
            raise ConfigurationError(
                f"Invalid ORGREPOS_PAGE_SIZE: {page_size_raw}. Must be an integer"
            ) from None

        return cls(
            token=token,
            endpoint=endpoint,
            timeout=timeout,
            page_size=page_size,
        )
