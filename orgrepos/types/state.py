"""Request lifecycle states.

Exactly one of these is current at a time. States are immutable; every
transition produces a new value.
"""

from dataclasses import dataclass, field

from orgrepos.types.organization import OrganizationResult


@dataclass(frozen=True)
class Empty:
    """No query has started."""


@dataclass(frozen=True)
class Loading:
    """
    A query is in flight.

    While a follow-up page is loading, ``previous`` keeps the result the page
    will be appended to. It is not part of the state's identity: every
    ``Loading`` compares equal to ``Loading()``.
    """

    previous: OrganizationResult | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Failed:
    """The last query failed."""

    message: str


@dataclass(frozen=True)
class Succeeded:
    """The last query succeeded."""

    result: OrganizationResult


QueryState = Empty | Loading | Failed | Succeeded
