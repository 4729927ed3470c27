"""
Tests for query orchestration.

Covers the end-to-end flows: first page, "more", GraphQL errors and
transport failures.
"""

import asyncio

from orgrepos.exceptions import TransportError
from orgrepos.queries import GET_ORGANIZATION_QUERY
from orgrepos.runner import AsyncQueryRunner, QueryRunner, interpret_response
from orgrepos.state_machine import RequestStateMachine
from orgrepos.testing import (
    AsyncMockGraphQLTransport,
    MockGraphQLTransport,
    create_mock_entry,
    create_mock_envelope,
)
from orgrepos.types.state import Empty, Failed, Loading, Succeeded

hello_world = create_mock_entry(id="1", name="Hello-World", star_count=42)
spoon_knife = create_mock_entry(
    id="2", name="Spoon-Knife", description="This repo is for demonstration purposes only."
)


class TestOctocatSession:
    """Submit an organization, then load the second and last page."""

    def test_first_page_then_more(self, mock_transport, state_machine) -> None:
        runner = QueryRunner(mock_transport, state_machine)
        seen = []
        state_machine.subscribe(seen.append)

        mock_transport.queue_response(create_mock_envelope(
            name="octocat",
            url="https://github.com/octocat",
            entries=[hello_world],
            total_count=5,
            end_cursor="c1",
            has_next_page=True,
        ))
        state = runner.submit("octocat")

        assert seen[0] == Loading()
        assert isinstance(state, Succeeded)
        assert state.result.repositories.entries == (hello_world,)
        assert len(state.result.repositories.entries) <= state.result.repositories.total_count
        assert state.result.repositories.has_next_page is True
        assert runner.can_load_more

        mock_transport.queue_response(create_mock_envelope(
            name="octocat",
            url="https://github.com/octocat",
            entries=[spoon_knife],
            total_count=5,
            end_cursor="c2",
            has_next_page=False,
        ))
        state = runner.load_more()

        assert mock_transport.last_variables == {
            "organization": "octocat",
            "limit": 2,
            "cursor": "c1",
        }
        assert isinstance(state, Succeeded)
        assert [e.name for e in state.result.repositories.entries] == [
            "Hello-World",
            "Spoon-Knife",
        ]
        assert state.result.repositories.has_next_page is False
        assert state.result.repositories.end_cursor == "c2"
        assert len(state.result.repositories.entries) <= state.result.repositories.total_count
        assert not runner.can_load_more

    def test_load_more_without_next_page_is_noop(self, query_runner, mock_transport) -> None:
        mock_transport.queue_response(create_mock_envelope(entries=[hello_world]))
        state = query_runner.submit("octocat")

        assert query_runner.load_more() is state
        assert mock_transport.call_count == 1

    def test_load_more_before_submit_is_noop(self, query_runner, mock_transport) -> None:
        assert query_runner.load_more() == Empty()
        assert mock_transport.call_count == 0

    def test_new_submit_starts_from_empty_entries(self, query_runner, mock_transport) -> None:
        mock_transport.queue_response(create_mock_envelope(
            entries=[hello_world], total_count=3, end_cursor="c1", has_next_page=True
        ))
        query_runner.submit("octocat")

        mock_transport.queue_response(create_mock_envelope(
            name="github", url="https://github.com/github", entries=[spoon_knife]
        ))
        state = query_runner.submit("github")

        assert state.result.name == "github"
        assert state.result.repositories.entries == (spoon_knife,)
        assert mock_transport.last_variables["cursor"] is None


class TestRunQuery:
    """Tests for run_query's request and event selection."""

    def test_sends_query_and_variables(self, query_runner, mock_transport) -> None:
        query_runner.run_query("octocat", page_size=10)

        call = mock_transport.calls[0]
        assert call.query == GET_ORGANIZATION_QUERY
        assert call.variables == {"organization": "octocat", "limit": 10, "cursor": None}

    def test_uses_runner_page_size_by_default(self, mock_transport) -> None:
        runner = QueryRunner(mock_transport, page_size=7)
        runner.run_query("octocat")
        assert mock_transport.last_variables["limit"] == 7

    def test_cursor_selects_next_page_event(self, query_runner, mock_transport) -> None:
        mock_transport.queue_response(create_mock_envelope(
            entries=[hello_world], total_count=2, end_cursor="c1", has_next_page=True
        ))
        query_runner.run_query("octocat")
        mock_transport.queue_response(create_mock_envelope(entries=[spoon_knife], total_count=2))

        state = query_runner.run_query("octocat", cursor="c1")

        assert state.result.repositories.entries == (hello_world, spoon_knife)

    def test_cursor_after_failure_fails_without_request(self, query_runner, mock_transport) -> None:
        """A cursor request with no loaded page to extend settles in Failed."""
        mock_transport.queue_error(TransportError("CONNECTION_ERROR", "offline"))
        query_runner.run_query("octocat")
        mock_transport.queue_response(create_mock_envelope(entries=[spoon_knife]))

        state = query_runner.run_query("octocat", cursor="c1")

        assert state == Failed("[NO_PREVIOUS_PAGE] No loaded page to continue from")
        assert query_runner.state is state
        assert mock_transport.call_count == 1

    def test_cursor_before_any_query_fails(self, query_runner, mock_transport) -> None:
        seen = []
        query_runner.machine.subscribe(seen.append)

        state = query_runner.run_query("octocat", cursor="c1")

        assert seen == [Loading(), state]
        assert isinstance(state, Failed)
        assert mock_transport.call_count == 0


class TestFailures:
    """GraphQL errors and transport failures end in Failed."""

    def test_graphql_error(self, query_runner, mock_transport) -> None:
        mock_transport.queue_response({
            "errors": [{
                "type": "NOT_FOUND",
                "message": "Could not resolve to an Organization with the login of 'nope'.",
            }]
        })

        state = query_runner.submit("nope")

        assert state == Failed(
            "[NOT_FOUND] Could not resolve to an Organization with the login of 'nope'."
        )

    def test_errors_take_precedence_over_data(self, query_runner, mock_transport) -> None:
        mock_transport.queue_response(create_mock_envelope(
            entries=[hello_world],
            errors=[{"type": "FORBIDDEN", "message": "Resource not accessible"}],
        ))

        state = query_runner.submit("octocat")

        assert state == Failed("[FORBIDDEN] Resource not accessible")

    def test_multiple_errors_are_joined(self, query_runner, mock_transport) -> None:
        mock_transport.queue_response({
            "errors": [
                {"type": "NOT_FOUND", "message": "first"},
                {"message": "second"},
            ]
        })

        assert query_runner.submit("x") == Failed("[NOT_FOUND] first; second")

    def test_transport_error(self, query_runner, mock_transport) -> None:
        mock_transport.queue_error(TransportError("HTTP_401", "Bad credentials", 401))

        assert query_runner.submit("octocat") == Failed("[HTTP_401] Bad credentials")

    def test_missing_organization(self, query_runner, mock_transport) -> None:
        mock_transport.queue_response({"data": {"organization": None}})

        state = query_runner.submit("octocat")

        assert state == Failed("[INVALID_RESPONSE] Response contains no organization")

    def test_unparseable_timestamp(self, query_runner, mock_transport) -> None:
        envelope = create_mock_envelope(entries=[hello_world], total_count=1)
        node = envelope["data"]["organization"]["repositories"]["edges"][0]["node"]
        node["createdAt"] = "not-a-date"
        mock_transport.queue_response(envelope)

        state = query_runner.submit("octocat")

        assert isinstance(state, Failed)
        assert state.message.startswith("[INVALID_RESPONSE] Malformed organization payload")

    def test_non_object_error_entries(self, query_runner, mock_transport) -> None:
        mock_transport.queue_response({"errors": ["boom", {"message": "second"}]})

        assert query_runner.submit("octocat") == Failed("boom; second")

    def test_errors_member_that_is_not_a_list(self, query_runner, mock_transport) -> None:
        mock_transport.queue_response({"errors": "rate limited"})

        assert query_runner.submit("octocat") == Failed("rate limited")

    def test_data_that_is_not_an_object(self, query_runner, mock_transport) -> None:
        mock_transport.queue_response({"data": ["octocat"]})

        state = query_runner.submit("octocat")

        assert state == Failed("[INVALID_RESPONSE] Response data is not an object")

    def test_failure_discards_previous_data(self, query_runner, mock_transport) -> None:
        mock_transport.queue_response(create_mock_envelope(
            entries=[hello_world], end_cursor="c1", has_next_page=True, total_count=3
        ))
        query_runner.submit("octocat")
        mock_transport.queue_error(TransportError("CONNECTION_ERROR", "reset by peer"))

        state = query_runner.load_more()

        assert state == Failed("[CONNECTION_ERROR] reset by peer")
        assert not query_runner.can_load_more


def test_interpret_response_parses_organization() -> None:
    result = interpret_response(create_mock_envelope(entries=[hello_world], total_count=1))
    assert result.repositories.entries == (hello_world,)


class TestAsyncQueryRunner:
    """Tests for the async runner."""

    def test_first_page_then_more(self) -> None:
        transport = AsyncMockGraphQLTransport()
        runner = AsyncQueryRunner(transport)
        transport.queue_response(create_mock_envelope(
            entries=[hello_world], total_count=2, end_cursor="c1", has_next_page=True
        ))
        transport.queue_response(create_mock_envelope(entries=[spoon_knife], total_count=2))

        async def session():
            await runner.submit("octocat")
            return await runner.load_more()

        state = asyncio.run(session())

        assert state.result.repositories.entries == (hello_world, spoon_knife)
        assert not runner.can_load_more

    def test_stale_response_is_dropped(self) -> None:
        """A slow first response cannot overwrite the result of a newer query."""
        slow_started = None

        class SlowFirstTransport(AsyncMockGraphQLTransport):
            async def post_graphql(self, query, variables=None):
                if variables["organization"] == "slow":
                    slow_started.set()
                    await release_slow.wait()
                return await super().post_graphql(query, variables)

        transport = SlowFirstTransport()
        runner = AsyncQueryRunner(transport, RequestStateMachine())

        async def race():
            nonlocal slow_started, release_slow
            slow_started = asyncio.Event()
            release_slow = asyncio.Event()

            slow = asyncio.create_task(runner.submit("slow"))
            await slow_started.wait()
            fast_state = await runner.submit("fast")
            release_slow.set()
            slow_state = await slow
            return fast_state, slow_state

        release_slow = None
        fast_state, slow_state = asyncio.run(race())

        assert fast_state.result.name == "fast"
        assert slow_state.result.name == "fast"
        assert runner.state.result.name == "fast"
        assert transport.call_count == 2

    def test_cursor_without_loaded_page_fails(self) -> None:
        transport = AsyncMockGraphQLTransport()
        runner = AsyncQueryRunner(transport)

        state = asyncio.run(runner.run_query("octocat", cursor="c1"))

        assert state == Failed("[NO_PREVIOUS_PAGE] No loaded page to continue from")
        assert transport.call_count == 0
