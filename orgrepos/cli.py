"""Command-line front-end: show the repositories of a GitHub organization."""

import argparse
import logging
import sys
from collections.abc import Callable
from dataclasses import replace

from orgrepos.client import OrgReposClient
from orgrepos.config import ClientConfig
from orgrepos.exceptions import ConfigurationError
from orgrepos.logging import configure_logging
from orgrepos.types.state import Failed
from orgrepos.view import render_state

DEFAULT_ORGANIZATION = "the-road-to-learn-react"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orgrepos",
        description="Show the repositories of a GitHub organization via the GraphQL API",
    )

    parser.add_argument(
        "organization",
        nargs="?",
        default=DEFAULT_ORGANIZATION,
        help=f"Organization login (default: {DEFAULT_ORGANIZATION})",
    )

    parser.add_argument(
        "--limit",
        type=int,
        help="Repositories per page (default: ORGREPOS_PAGE_SIZE or 2)",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--all",
        action="store_true",
        help="Keep loading pages until there are no more",
    )
    mode.add_argument(
        "--interactive",
        action="store_true",
        help="Ask before loading each further page",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log GraphQL requests and state transitions",
    )

    return parser


def run(
    args: argparse.Namespace,
    client: OrgReposClient,
    prompt: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
) -> int:
    """
    Run a query session and print each settled state.

    Returns:
        Process exit code: 1 if the session ended in failure, 0 otherwise
    """
    out(render_state(client.submit(args.organization)))

    while client.can_load_more:
        if args.interactive:
            try:
                answer = prompt("more? [y/N] ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                answer = ""
            if answer not in ("y", "yes"):
                break
        elif not args.all:
            break
        out(render_state(client.load_more()))

    return 1 if isinstance(client.state, Failed) else 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging(level=logging.DEBUG)

    try:
        config = ClientConfig.from_env()
        if args.limit is not None:
            config = replace(config, page_size=args.limit)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with OrgReposClient(config) as client:
        return run(args, client)


if __name__ == "__main__":
    sys.exit(main())
