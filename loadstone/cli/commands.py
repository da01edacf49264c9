"""Command handlers — call the clients and print text or JSON."""

from __future__ import annotations

import argparse
import json
from typing import Any

from loadstone.cli import render
from loadstone.runemetrics.client import RuneMetricsClient
from loadstone.wiki import WikiClient


def _emit_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


async def search(args: argparse.Namespace) -> int:
    client = WikiClient(cache=render.build_cache_options(args))
    if not args.json:
        print(f"Searching RuneScape 3 Wiki for: {args.query}...")
    results = await client.search(args.query)
    if args.json:
        _emit_json(render.search_json(results))
    else:
        print(render.format_search_results(results))
    return 0


async def page(args: argparse.Namespace) -> int:
    client = WikiClient(cache=render.build_cache_options(args))

    if not args.json:
        print(f"Fetching content for: {args.title}...")
        text = await client.get_page(args.title, section=args.section)
        if text is None:
            print("Page not found.")
            return 1
        print(text)
        return 0

    data = await client.get_page(args.title, as_json=True)
    if data is None:
        _emit_json({"error": "Page not found"})
        return 1
    _emit_json(
        render.page_json(
            data,
            article_url=client.article_url,
            section=args.section,
            headings=args.headings,
            fields=args.fields,
        )
    )
    return 0


async def category(args: argparse.Namespace) -> int:
    client = WikiClient(cache=render.build_cache_options(args))
    if not args.json:
        print(f"Fetching members for category: {args.name}...")
    members = await client.get_category_members(args.name, limit=args.limit)
    if args.json:
        _emit_json({"category": args.name, "members": members})
    else:
        print(render.format_category(members))
    return 0


async def profile(args: argparse.Namespace) -> int:
    client = RuneMetricsClient(cache=render.build_cache_options(args))
    if not args.json:
        print(f"Fetching RuneMetrics profile for: {args.username}...")
    data = await client.get_profile(args.username)
    if data is None:
        if args.json:
            _emit_json({"error": "Profile not found or private"})
        else:
            print("Profile not found or private.")
        return 1

    if args.json:
        _emit_json(render.profile_json(data, args))
    else:
        print(render.format_profile(data, show_quests=args.quests))
    return 0
