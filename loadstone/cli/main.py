"""Command-line entrypoint for loadstone."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from loadstone import __version__
from loadstone.cli import commands
from loadstone.config import get_settings
from loadstone.logging_config import setup_logging

logger = logging.getLogger(__name__)

COMMANDS = {
    "search": commands.search,
    "page": commands.page,
    "category": commands.category,
    "profile": commands.profile,
}


def _add_cache_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-cache", dest="cache", action="store_false", default=None, help="Disable cache"
    )
    parser.add_argument("--cache-ttl", metavar="HOURS", help="Cache TTL in hours")
    parser.add_argument("--cache-dir", metavar="PATH", help="Cache directory")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loadstone",
        description="CLI for accessing the RuneScape 3 Wiki",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Log level (default: LOADSTONE_LOG_LEVEL or WARNING)")

    subparsers = parser.add_subparsers(dest="command")

    # search
    p_search = subparsers.add_parser("search", help="Search the wiki for a term")
    p_search.add_argument("query", help="The term to search for")
    p_search.add_argument("-j", "--json", action="store_true", help="Output results as JSON")
    _add_cache_flags(p_search)

    # page
    p_page = subparsers.add_parser("page", help="Get the content of a specific page")
    p_page.add_argument("title", help="The title of the page")
    p_page.add_argument("-j", "--json", action="store_true", help="Output results as JSON")
    p_page.add_argument(
        "-s", "--section", metavar="NAME", help="Filter output to a specific section (fuzzy match)"
    )
    p_page.add_argument(
        "--headings", action="store_true", help="Output only section headings (JSON mode only)"
    )
    p_page.add_argument(
        "--fields", metavar="LIST", help="Comma-separated fields to include in JSON output"
    )
    _add_cache_flags(p_page)

    # category
    p_category = subparsers.add_parser("category", help="Get members of a wiki category")
    p_category.add_argument("name", help="The name of the category")
    p_category.add_argument("-j", "--json", action="store_true", help="Output results as JSON")
    p_category.add_argument(
        "-l", "--limit", type=int, default=50, help="Limit the number of results (default: 50)"
    )
    _add_cache_flags(p_category)

    # profile
    p_profile = subparsers.add_parser("profile", help="Get player profile from RuneMetrics")
    p_profile.add_argument("username", help="The RuneScape username")
    p_profile.add_argument("-j", "--json", action="store_true", help="Output results as JSON")
    p_profile.add_argument(
        "-q", "--quests", action="store_true", help="Include full quest list in output"
    )
    p_profile.add_argument("--skills-only", action="store_true", help="Return only skills data (JSON)")
    p_profile.add_argument("--quests-only", action="store_true", help="Return only quests data (JSON)")
    p_profile.add_argument(
        "--completed-quests-only", action="store_true", help="Return only completed quests (JSON)"
    )
    p_profile.add_argument(
        "--started-quests-only", action="store_true", help="Return only started quests (JSON)"
    )
    p_profile.add_argument(
        "--not-started-quests-only",
        action="store_true",
        help="Return only not started quests (JSON)",
    )
    p_profile.add_argument(
        "--include-raw", action="store_true", help="Include raw API data in JSON output"
    )
    _add_cache_flags(p_profile)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the loadstone CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 2

    setup_logging(args.log_level or get_settings().log_level)
    logger.debug("running command", extra={"command": args.command})
    return asyncio.run(COMMANDS[args.command](args))


if __name__ == "__main__":
    sys.exit(main())
