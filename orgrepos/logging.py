"""
orgrepos logging utilities.

Provides configurable logging for GraphQL requests/responses and state
transitions. Ensures the GitHub access token is never written to a log.
"""

import logging
import re
from typing import Any

_sdk_logger = logging.getLogger("orgrepos")
_http_logger = logging.getLogger("orgrepos.http")
_state_logger = logging.getLogger("orgrepos.state")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Authorization header values
    (re.compile(r"(bearer|token)\s+[A-Za-z0-9_\-\.]{8,}", re.IGNORECASE), r"\1 [REDACTED]"),
    # GitHub token formats (classic and fine-grained)
    (re.compile(r"\b(ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{20,}\b"), "[TOKEN_REDACTED]"),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}\b"), "[TOKEN_REDACTED]"),
    # Secret/token assignments
    (re.compile(r"(secret|token|password|authorization)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = {"authorization", "token", "secret", "password"}


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    state_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure orgrepos logging.

    Args:
        level: Default log level for all orgrepos loggers (default: INFO)
        http_level: Log level for GraphQL request/response logging (default: same as level)
        state_level: Log level for state transitions (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from orgrepos.logging import configure_logging

        # Show every request and state transition
        configure_logging(level=logging.INFO, http_level=logging.DEBUG,
                          state_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _sdk_logger.setLevel(level)
    _sdk_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)
    _state_logger.setLevel(state_level if state_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get an orgrepos logger.

    Args:
        name: Logger name suffix (e.g., "http", "state"). If None, returns the main logger.
    """
    if name is None:
        return _sdk_logger
    return logging.getLogger(f"orgrepos.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask sensitive data in a string.

    Replaces bearer tokens, GitHub token literals and secret assignments
    with redacted placeholders.
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Set of keys to mask (default: authorization, token, secret, password)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if key_lower in sensitive_keys or any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    variables: dict[str, Any] | None = None,
) -> None:
    """Log a GraphQL request at DEBUG level with sensitive data masked."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if headers:
        log_parts.append(f"headers={safe_log_dict(headers)}")

    if variables:
        log_parts.append(f"variables={safe_log_dict(variables)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    body: dict[str, Any] | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Log a GraphQL response at DEBUG level with sensitive data masked."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if body:
        log_parts.append(f"body={safe_log_dict(body)}")

    _http_logger.debug(" | ".join(log_parts))


def log_transition(previous: str, event: str, current: str) -> None:
    """Log a state transition at DEBUG level."""
    if not _state_logger.isEnabledFor(logging.DEBUG):
        return

    _state_logger.debug(f"{previous} --{event}--> {current}")


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_transition",
]
