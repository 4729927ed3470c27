"""orgrepos exception classes."""

from typing import Any


class OrgReposError(Exception):
    """Base exception for all orgrepos errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(OrgReposError):
    """Raised when client configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class TransportError(OrgReposError):
    """Raised when no GraphQL response could be obtained (network or HTTP failure)."""

    def __init__(
        self, code: str, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(code, message)
        self.status_code = status_code


class ResponseFormatError(OrgReposError):
    """Raised when a response does not have the expected shape."""

    def __init__(self, message: str) -> None:
        super().__init__("INVALID_RESPONSE", message)


class GraphQLError(OrgReposError):
    """
    Raised when a GraphQL response carries an ``errors`` array.

    ``str()`` of this error is the joined, human-readable message
    (``"[NOT_FOUND] Could not resolve ..."``) without an extra prefix.
    """

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        self.code = "GRAPHQL_ERROR"
        self.message = format_graphql_errors(errors)
        Exception.__init__(self, self.message)


def format_graphql_error(error: Any) -> str:
    """Render one ``{type, message}`` entry as ``"[TYPE] message"``."""
    if not isinstance(error, dict):
        return str(error)
    message = error.get("message") or "Unknown error"
    error_type = error.get("type")
    if error_type:
        return f"[{error_type}] {message}"
    return message


def format_graphql_errors(errors: list[Any]) -> str:
    """Join all GraphQL errors into a single message."""
    return "; ".join(format_graphql_error(error) for error in errors)
