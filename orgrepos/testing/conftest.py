"""
Pytest plugin for orgrepos testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["orgrepos.testing.conftest"]
"""

from orgrepos.testing.fixtures import (
    mock_transport,
    query_runner,
    sample_entry,
    sample_organization,
    state_machine,
)

__all__ = [
    "mock_transport",
    "state_machine",
    "query_runner",
    "sample_entry",
    "sample_organization",
]
