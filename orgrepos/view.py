"""Plain-text rendering of a ``QueryState``."""

from orgrepos.types.organization import OrganizationResult, RepositoryEntry
from orgrepos.types.state import Empty, Failed, Loading, QueryState, Succeeded

IDLE_TEXT = "Enter an organization to show its repositories."
LOADING_TEXT = "Loading ..."
MORE_ENABLED_TEXT = "[more] load the next page"
MORE_DISABLED_TEXT = "[more] no further repositories"


def render_entry(entry: RepositoryEntry) -> str:
    """One line per repository: name, stars, description."""
    star = "*" if entry.viewer_has_starred else " "
    line = f"{star} {entry.name} ({entry.star_count} stars)"
    if entry.description:
        line += f" - {entry.description}"
    return line


def _result_lines(result: OrganizationResult) -> list[str]:
    page = result.repositories
    lines = [
        f"{result.name} <{result.url}>",
        f"Showing {len(page.entries)} of {page.total_count} repositories",
    ]
    lines.extend(render_entry(entry) for entry in page.entries)
    return lines


def render_state(state: QueryState) -> str:
    """Render idle text, a loading indicator, the error, or the repository list."""
    if isinstance(state, Empty):
        return IDLE_TEXT

    if isinstance(state, Loading):
        if state.previous is None:
            return LOADING_TEXT
        # a follow-up page keeps the list on screen
        return "\n".join([*_result_lines(state.previous), LOADING_TEXT])

    if isinstance(state, Failed):
        return f"Error: {state.message}"

    if isinstance(state, Succeeded):
        more = (
            MORE_ENABLED_TEXT
            if state.result.repositories.has_next_page
            else MORE_DISABLED_TEXT
        )
        return "\n".join([*_result_lines(state.result), more])

    raise TypeError(f"Unknown state: {state!r}")
