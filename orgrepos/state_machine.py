"""
Request lifecycle state machine.

``transition`` is the pure transition function; ``RequestStateMachine`` owns
the current state and notifies listeners after every transition.
"""

from collections.abc import Callable
from dataclasses import replace

from orgrepos.logging import get_logger, log_transition
from orgrepos.merge import merge_entries
from orgrepos.types.events import (
    Event,
    RequestFailed,
    RequestStarted,
    RequestSucceededFirstPage,
    RequestSucceededNextPage,
)
from orgrepos.types.organization import OrganizationResult
from orgrepos.types.state import Empty, Failed, Loading, QueryState, Succeeded

logger = get_logger("state")

StateListener = Callable[[QueryState], None]


def transition(current: QueryState, event: Event) -> QueryState:
    """
    Compute the state that follows ``current`` after ``event``.

    Never raises. A next-page response is merged onto the last successful
    result: the current ``Succeeded`` state, or the result a follow-up
    ``Loading`` carries. Anywhere else (after a failure or a fresh request)
    it is ignored.
    """
    if isinstance(event, RequestStarted):
        if event.cursor is not None and isinstance(current, Succeeded):
            return Loading(previous=current.result)
        return Loading()

    if isinstance(event, RequestSucceededFirstPage):
        return Succeeded(event.result)

    if isinstance(event, RequestSucceededNextPage):
        base = _merge_base(current)
        if base is None:
            return current
        previous = base.repositories
        page = event.result.repositories
        merged = replace(page, entries=merge_entries(previous.entries, page.entries))
        return Succeeded(replace(event.result, repositories=merged))

    if isinstance(event, RequestFailed):
        return Failed(event.message)

    return current


def _merge_base(current: QueryState) -> OrganizationResult | None:
    if isinstance(current, Succeeded):
        return current.result
    if isinstance(current, Loading):
        return current.previous
    return None


class RequestStateMachine:
    """
    Holder of the current ``QueryState``.

    Example:
        ```python
        machine = RequestStateMachine()
        unsubscribe = machine.subscribe(lambda state: print(render_state(state)))
        machine.dispatch(RequestStarted())
        ```
    """

    def __init__(self, initial: QueryState | None = None) -> None:
        self._state: QueryState = initial if initial is not None else Empty()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> QueryState:
        """The current state."""
        return self._state

    def dispatch(self, event: Event) -> QueryState:
        """Apply ``event`` and return the new state."""
        previous = self._state
        self._state = transition(previous, event)

        log_transition(
            type(previous).__name__, type(event).__name__, type(self._state).__name__
        )
        if self._state is previous and isinstance(event, RequestSucceededNextPage):
            logger.debug("Ignored next page in state %s", type(previous).__name__)

        for listener in list(self._listeners):
            listener(self._state)

        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener called with the new state after every dispatch.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
