"""orgrepos - browse a GitHub organization's repositories over GraphQL."""

from orgrepos.async_client import AsyncOrgReposClient
from orgrepos.async_transport import AsyncGraphQLTransport
from orgrepos.client import OrgReposClient
from orgrepos.config import ClientConfig
from orgrepos.exceptions import (
    ConfigurationError,
    GraphQLError,
    OrgReposError,
    ResponseFormatError,
    TransportError,
)
from orgrepos.logging import configure_logging, get_logger
from orgrepos.merge import merge_entries
from orgrepos.queries import GET_ORGANIZATION_QUERY
from orgrepos.runner import AsyncQueryRunner, QueryRunner
from orgrepos.state_machine import RequestStateMachine, transition
from orgrepos.transport import GraphQLTransport
from orgrepos.types import (
    Empty,
    Failed,
    Loading,
    OrganizationResult,
    QueryState,
    RepositoryEntry,
    RepositoryPage,
    RequestFailed,
    RequestStarted,
    RequestSucceededFirstPage,
    RequestSucceededNextPage,
    Succeeded,
)
from orgrepos.view import render_state

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Clients
    "OrgReposClient",
    "AsyncOrgReposClient",
    "ClientConfig",
    # Core
    "transition",
    "RequestStateMachine",
    "merge_entries",
    "QueryRunner",
    "AsyncQueryRunner",
    "GET_ORGANIZATION_QUERY",
    # States
    "QueryState",
    "Empty",
    "Loading",
    "Failed",
    "Succeeded",
    # Events
    "RequestStarted",
    "RequestSucceededFirstPage",
    "RequestSucceededNextPage",
    "RequestFailed",
    # Data
    "OrganizationResult",
    "RepositoryPage",
    "RepositoryEntry",
    # Exceptions
    "OrgReposError",
    "ConfigurationError",
    "TransportError",
    "GraphQLError",
    "ResponseFormatError",
    # Transport
    "GraphQLTransport",
    "AsyncGraphQLTransport",
    # Presentation
    "render_state",
    # Logging
    "configure_logging",
    "get_logger",
]
