"""orgrepos type definitions.

This module exports all data model types used by the package.
"""

from orgrepos.types.events import (
    Event,
    RequestFailed,
    RequestStarted,
    RequestSucceededFirstPage,
    RequestSucceededNextPage,
)
from orgrepos.types.organization import OrganizationResult, RepositoryEntry, RepositoryPage
from orgrepos.types.state import Empty, Failed, Loading, QueryState, Succeeded

__all__ = [
    # Organization types
    "OrganizationResult",
    "RepositoryPage",
    "RepositoryEntry",
    # Lifecycle states
    "QueryState",
    "Empty",
    "Loading",
    "Failed",
    "Succeeded",
    # Events
    "Event",
    "RequestStarted",
    "RequestSucceededFirstPage",
    "RequestSucceededNextPage",
    "RequestFailed",
]
