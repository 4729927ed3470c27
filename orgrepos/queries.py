"""GraphQL query text for the GitHub API."""

GET_ORGANIZATION_QUERY = """
query ($organization: String!, $limit: Int = 2, $cursor: String) {
  organization(login: $organization) {
    name
    url
    repositories(first: $limit, after: $cursor) {
      totalCount
      pageInfo {
        endCursor
        hasNextPage
      }
      edges {
        node {
          id
          name
          viewerHasStarred
          stargazers {
            totalCount
          }
          description
          createdAt
        }
      }
    }
  }
}
"""


def organization_variables(
    organization: str, limit: int, cursor: str | None = None
) -> dict[str, str | int | None]:
    """Variables for ``GET_ORGANIZATION_QUERY``."""
    return {"organization": organization, "limit": limit, "cursor": cursor}
