#!/usr/bin/env python3
"""
Basic orgrepos usage example.

Lists the repositories of an organization page by page, printing every
state the client goes through.
Run with: GITHUB_PERSONAL_ACCESS_TOKEN=... python examples/basic_usage.py [organization]
"""

import logging
import sys

from orgrepos import ConfigurationError, OrgReposClient, configure_logging, render_state

organization = sys.argv[1] if len(sys.argv) > 1 else "the-road-to-learn-react"

configure_logging(level=logging.INFO)

print("=== orgrepos Basic Usage Example ===\n")

try:
    client = OrgReposClient.from_env()
except ConfigurationError as e:
    print(f"   {e}")
    sys.exit(1)

with client:
    client.subscribe(lambda state: print(render_state(state), end="\n\n"))

    print(f"1. Fetching the first page for {organization}...\n")
    client.submit(organization)

    page = 2
    while client.can_load_more:
        print(f"{page}. Loading more...\n")
        client.load_more()
        page += 1

print("Done.")
