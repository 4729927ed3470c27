"""
Pytest fixtures and builders for orgrepos testing.

The ``create_mock_*`` helpers build typed values and GraphQL response
envelopes shaped like GitHub's.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any, Generator

import pytest

from orgrepos.runner import QueryRunner
from orgrepos.state_machine import RequestStateMachine
from orgrepos.testing.mock import MockGraphQLTransport
from orgrepos.types.organization import OrganizationResult, RepositoryEntry, RepositoryPage


# ============================================================================
# Builders
# ============================================================================


def create_mock_entry(
    id: str = "repo-1",
    name: str = "Hello-World",
    description: str | None = "My first repository on GitHub!",
    star_count: int = 0,
    viewer_has_starred: bool = False,
    created_at: datetime | None = None,
) -> RepositoryEntry:
    """Create a ``RepositoryEntry`` with sensible defaults."""
    return RepositoryEntry(
        id=id,
        name=name,
        description=description,
        star_count=star_count,
        viewer_has_starred=viewer_has_starred,
        created_at=created_at,
    )


def create_mock_organization(
    name: str = "octocat",
    url: str = "https://github.com/octocat",
    entries: Sequence[RepositoryEntry] = (),
    total_count: int | None = None,
    end_cursor: str | None = None,
    has_next_page: bool = False,
) -> OrganizationResult:
    """Create an ``OrganizationResult``; ``total_count`` defaults to ``len(entries)``."""
    return OrganizationResult(
        name=name,
        url=url,
        repositories=RepositoryPage(
            total_count=len(entries) if total_count is None else total_count,
            end_cursor=end_cursor,
            has_next_page=has_next_page,
            entries=tuple(entries),
        ),
    )


def create_mock_node(entry: RepositoryEntry) -> dict[str, Any]:
    """The GraphQL ``node`` object GitHub would return for ``entry``."""
    created_at = None
    if entry.created_at is not None:
        created_at = entry.created_at.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return {
        "id": entry.id,
        "name": entry.name,
        "viewerHasStarred": entry.viewer_has_starred,
        "stargazers": {"totalCount": entry.star_count},
        "description": entry.description,
        "createdAt": created_at,
    }


def create_mock_envelope(
    name: str = "octocat",
    url: str = "https://github.com/octocat",
    entries: Sequence[RepositoryEntry] = (),
    total_count: int | None = None,
    end_cursor: str | None = None,
    has_next_page: bool = False,
    errors: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Create a GraphQL response envelope for the organization query."""
    envelope: dict[str, Any] = {
        "data": {
            "organization": {
                "name": name,
                "url": url,
                "repositories": {
                    "totalCount": len(entries) if total_count is None else total_count,
                    "pageInfo": {"endCursor": end_cursor, "hasNextPage": has_next_page},
                    "edges": [{"node": create_mock_node(entry)} for entry in entries],
                },
            }
        }
    }
    if errors is not None:
        envelope["errors"] = errors
    return envelope


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_transport() -> Generator[MockGraphQLTransport, None, None]:
    """
    Provide a ``MockGraphQLTransport``.

    Example:
        ```python
        def test_my_feature(mock_transport):
            mock_transport.queue_response(create_mock_envelope())
            ...
            assert mock_transport.call_count == 1
        ```
    """
    transport = MockGraphQLTransport()
    yield transport
    transport.reset()


@pytest.fixture
def state_machine() -> RequestStateMachine:
    """Provide a fresh state machine in ``Empty``."""
    return RequestStateMachine()


@pytest.fixture
def query_runner(
    mock_transport: MockGraphQLTransport, state_machine: RequestStateMachine
) -> QueryRunner:
    """Provide a ``QueryRunner`` wired to ``mock_transport``."""
    return QueryRunner(mock_transport, state_machine)


@pytest.fixture
def sample_entry() -> RepositoryEntry:
    return create_mock_entry()


@pytest.fixture
def sample_organization(sample_entry: RepositoryEntry) -> OrganizationResult:
    return create_mock_organization(
        entries=[sample_entry], total_count=5, end_cursor="c1", has_next_page=True
    )
