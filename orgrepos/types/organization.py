"""Organization and repository data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from orgrepos.exceptions import ResponseFormatError


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    # GitHub returns "2014-01-01T00:00:00Z"; fromisoformat needs an explicit offset
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class RepositoryEntry:
    """A single repository of an organization."""

    id: str
    name: str
    description: str | None
    star_count: int
    viewer_has_starred: bool
    created_at: datetime | None = None

    @classmethod
    def from_graphql(cls, node: dict[str, Any]) -> "RepositoryEntry":
        """Build an entry from an ``edges[].node`` object."""
        return cls(
            id=node["id"],
            name=node["name"],
            description=node.get("description"),
            star_count=(node.get("stargazers") or {}).get("totalCount", 0),
            viewer_has_starred=bool(node.get("viewerHasStarred", False)),
            created_at=_parse_timestamp(node.get("createdAt")),
        )


@dataclass(frozen=True)
class RepositoryPage:
    """Repositories fetched so far plus the server's pagination metadata."""

    total_count: int
    end_cursor: str | None
    has_next_page: bool
    entries: tuple[RepositoryEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_graphql(cls, repositories: dict[str, Any]) -> "RepositoryPage":
        """Build a page from an ``organization.repositories`` connection."""
        page_info = repositories.get("pageInfo") or {}
        entries = tuple(
            RepositoryEntry.from_graphql(edge["node"])
            for edge in repositories.get("edges") or []
        )
        return cls(
            total_count=repositories.get("totalCount", 0),
            end_cursor=page_info.get("endCursor"),
            has_next_page=bool(page_info.get("hasNextPage", False)),
            entries=entries,
        )


@dataclass(frozen=True)
class OrganizationResult:
    """An organization together with a page of its repositories."""

    name: str
    url: str
    repositories: RepositoryPage

    @classmethod
    def from_graphql(cls, data: dict[str, Any] | None) -> "OrganizationResult":
        """
        Build a result from the ``data`` member of a GraphQL response.

        Raises:
            ResponseFormatError: If the organization is missing or malformed
        """
        if data is not None and not isinstance(data, dict):
            raise ResponseFormatError("Response data is not an object")
        organization = (data or {}).get("organization")
        if not organization:
            raise ResponseFormatError("Response contains no organization")

        try:
            return cls(
                name=organization["name"],
                url=organization["url"],
                repositories=RepositoryPage.from_graphql(organization["repositories"]),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ResponseFormatError(f"Malformed organization payload: {e}") from e
