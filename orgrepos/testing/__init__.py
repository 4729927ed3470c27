"""orgrepos testing utilities.

Provides mock transports and builders for testing code that uses orgrepos.
"""

from orgrepos.testing.fixtures import (
    create_mock_entry,
    create_mock_envelope,
    create_mock_node,
    create_mock_organization,
)
from orgrepos.testing.mock import (
    AsyncMockGraphQLTransport,
    MockCall,
    MockGraphQLTransport,
    MockResponse,
)

__all__ = [
    # Mock transports
    "MockGraphQLTransport",
    "AsyncMockGraphQLTransport",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_entry",
    "create_mock_organization",
    "create_mock_node",
    "create_mock_envelope",
]
