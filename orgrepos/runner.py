"""
Query orchestration.

Runs the organization query against a transport and feeds the outcome into
a ``RequestStateMachine``:

1. ``RequestStarted`` is dispatched before any I/O.
2. A ``TransportError``, a GraphQL ``errors`` array (which takes precedence
   over any partial ``data``) or a malformed payload becomes ``RequestFailed``.
3. A cursor request with no loaded page to extend fails with
   ``NO_PREVIOUS_PAGE`` without touching the transport.
4. A success becomes ``RequestSucceededNextPage`` when a cursor was supplied,
   ``RequestSucceededFirstPage`` otherwise.

Only the response to the most recent ``run_query`` call is applied; a
response that arrives after a newer query was started is dropped.
"""

from typing import TYPE_CHECKING, Any

from orgrepos.config import DEFAULT_PAGE_SIZE
from orgrepos.exceptions import GraphQLError, OrgReposError
from orgrepos.logging import get_logger
from orgrepos.queries import GET_ORGANIZATION_QUERY, organization_variables
from orgrepos.state_machine import RequestStateMachine
from orgrepos.types.events import (
    Event,
    RequestFailed,
    RequestStarted,
    RequestSucceededFirstPage,
    RequestSucceededNextPage,
)
from orgrepos.types.organization import OrganizationResult
from orgrepos.types.state import QueryState, Succeeded

if TYPE_CHECKING:
    from orgrepos.async_transport import AsyncGraphQLTransport
    from orgrepos.transport import GraphQLTransport

logger = get_logger()


def interpret_response(envelope: dict[str, Any]) -> OrganizationResult:
    """
    Extract the organization from a GraphQL response envelope.

    Raises:
        GraphQLError: If the envelope carries any errors
        ResponseFormatError: If the data does not contain an organization
    """
    errors = envelope.get("errors")
    if errors:
        if not isinstance(errors, list):
            errors = [errors]
        raise GraphQLError(errors)
    return OrganizationResult.from_graphql(envelope.get("data"))


def outcome_event(
    envelope: dict[str, Any] | None,
    error: OrgReposError | None,
    cursor: str | None,
) -> Event:
    """Map a transport outcome onto the event to dispatch."""
    if error is None:
        try:
            result = interpret_response(envelope or {})
        except OrgReposError as e:
            error = e
        else:
            if cursor is not None:
                return RequestSucceededNextPage(result)
            return RequestSucceededFirstPage(result)

    logger.warning("Organization query failed: %s", error)
    return RequestFailed(str(error))


class _BaseRunner:
    def __init__(
        self,
        machine: RequestStateMachine | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.machine = machine or RequestStateMachine()
        self.page_size = page_size
        self._organization: str | None = None
        self._sequence = 0

    @property
    def state(self) -> QueryState:
        """The current state of the underlying state machine."""
        return self.machine.state

    @property
    def organization(self) -> str | None:
        """Login of the organization of the current query session."""
        return self._organization

    @property
    def can_load_more(self) -> bool:
        """True when the current result has a further page to fetch."""
        state = self.machine.state
        return (
            self._organization is not None
            and isinstance(state, Succeeded)
            and state.result.repositories.has_next_page
        )

    def _refusal(self, cursor: str | None) -> RequestFailed | None:
        """A cursor request fails up front when no loaded page is there to extend."""
        if cursor is None or isinstance(self.machine.state, Succeeded):
            return None
        logger.warning("Cursor %s given with no loaded page to continue from", cursor)
        error = OrgReposError("NO_PREVIOUS_PAGE", "No loaded page to continue from")
        return RequestFailed(str(error))

    def _start(self, organization_login: str, cursor: str | None) -> int:
        if cursor is None:
            self._organization = organization_login
        self._sequence += 1
        self.machine.dispatch(RequestStarted(cursor))
        return self._sequence

    def _finish(self, sequence: int, event: Event) -> QueryState:
        if sequence != self._sequence:
            logger.debug(
                "Dropping %s from superseded request %d (latest is %d)",
                type(event).__name__,
                sequence,
                self._sequence,
            )
            return self.machine.state
        return self.machine.dispatch(event)

    def _next_cursor(self) -> str | None:
        if not self.can_load_more:
            logger.info("No further page to load")
            return None
        state = self.machine.state
        if not isinstance(state, Succeeded):
            return None
        return state.result.repositories.end_cursor


class QueryRunner(_BaseRunner):
    """Runs organization queries over a synchronous transport."""

    def __init__(
        self,
        transport: "GraphQLTransport",
        machine: RequestStateMachine | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """
        Initialize the runner.

        Args:
            transport: Transport providing ``post_graphql``
            machine: State machine to drive (a new one by default)
            page_size: Repositories per page when ``run_query`` gets none
        """
        super().__init__(machine, page_size)
        self.transport = transport

    def run_query(
        self,
        organization_login: str,
        page_size: int | None = None,
        cursor: str | None = None,
    ) -> QueryState:
        """
        Fetch one page of an organization's repositories.

        Args:
            organization_login: Organization login, e.g. "octocat"
            page_size: Repositories per page (default: the runner's page size)
            cursor: End cursor of the previous page; None starts a fresh query

        Returns:
            The resulting state
        """
        refusal = self._refusal(cursor)
        sequence = self._start(organization_login, cursor)
        if refusal is not None:
            return self._finish(sequence, refusal)
        variables = organization_variables(
            organization_login, page_size or self.page_size, cursor
        )

        envelope: dict[str, Any] | None = None
        error: OrgReposError | None = None
        try:
            envelope = self.transport.post_graphql(GET_ORGANIZATION_QUERY, variables)
        except OrgReposError as e:
            error = e

        return self._finish(sequence, outcome_event(envelope, error, cursor))

    def submit(self, organization_login: str) -> QueryState:
        """Start a fresh query for ``organization_login``."""
        return self.run_query(organization_login)

    def load_more(self) -> QueryState:
        """Fetch the next page of the current organization, if there is one."""
        cursor = self._next_cursor()
        if cursor is None or self._organization is None:
            return self.machine.state
        return self.run_query(self._organization, cursor=cursor)


class AsyncQueryRunner(_BaseRunner):
    """Runs organization queries over an asynchronous transport."""

    def __init__(
        self,
        transport: "AsyncGraphQLTransport",
        machine: RequestStateMachine | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        super().__init__(machine, page_size)
        self.transport = transport

    async def run_query(
        self,
        organization_login: str,
        page_size: int | None = None,
        cursor: str | None = None,
    ) -> QueryState:
        """Async version of ``QueryRunner.run_query``."""
        refusal = self._refusal(cursor)
        sequence = self._start(organization_login, cursor)
        if refusal is not None:
            return self._finish(sequence, refusal)
        variables = organization_variables(
            organization_login, page_size or self.page_size, cursor
        )

        envelope: dict[str, Any] | None = None
        error: OrgReposError | None = None
        try:
            envelope = await self.transport.post_graphql(
                GET_ORGANIZATION_QUERY, variables
            )
        except OrgReposError as e:
            error = e

        return self._finish(sequence, outcome_event(envelope, error, cursor))

    async def submit(self, organization_login: str) -> QueryState:
        """Start a fresh query for ``organization_login``."""
        return await self.run_query(organization_login)

    async def load_more(self) -> QueryState:
        """Fetch the next page of the current organization, if there is one."""
        cursor = self._next_cursor()
        if cursor is None or self._organization is None:
            return self.machine.state
        return await self.run_query(self._organization, cursor=cursor)
