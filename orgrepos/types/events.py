"""Events accepted by the request state machine."""

from dataclasses import dataclass

from orgrepos.types.organization import OrganizationResult


@dataclass(frozen=True)
class RequestStarted:
    """A query was issued; ``cursor`` is set when it asks for a follow-up page."""

    cursor: str | None = None


@dataclass(frozen=True)
class RequestSucceededFirstPage:
    """The first page of a fresh query arrived."""

    result: OrganizationResult


@dataclass(frozen=True)
class RequestSucceededNextPage:
    """A follow-up page (requested with a cursor) arrived."""

    result: OrganizationResult


@dataclass(frozen=True)
class RequestFailed:
    """The query failed at the transport or GraphQL level."""

    message: str


Event = RequestStarted | RequestSucceededFirstPage | RequestSucceededNextPage | RequestFailed
