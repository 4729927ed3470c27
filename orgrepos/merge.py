"""Pagination merge."""

from collections.abc import Iterable

from orgrepos.types.organization import RepositoryEntry


def merge_entries(
    previous: Iterable[RepositoryEntry],
    new: Iterable[RepositoryEntry],
) -> tuple[RepositoryEntry, ...]:
    """
    Append a freshly fetched page onto the entries fetched so far.

    Plain concatenation: earlier entries keep their positions and nothing is
    deduplicated, so an entry the server returns twice appears twice.
    """
    return (*previous, *new)
