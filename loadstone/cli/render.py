"""Output shaping for the CLI — JSON projections and plain-text layouts."""

from __future__ import annotations

import argparse
import math
from collections.abc import Callable
from pathlib import Path
from typing import Any

from loadstone.config import MS_PER_HOUR, CacheOptions
from loadstone.runemetrics.models import Profile, Quest
from loadstone.wiki import SearchResult, find_section, parse_wiki_content

PAGE_FIELDS = ("title", "pageId", "url", "lastModified", "sections")

_FIELD_ALIASES = {
    "title": "title",
    "pageid": "pageId",
    "url": "url",
    "lastmodified": "lastModified",
    "sections": "sections",
}

_QUEST_ORDER = {"STARTED": 0, "COMPLETED": 1, "NOT_STARTED": 2}


def build_cache_options(args: argparse.Namespace) -> CacheOptions:
    """Translate ``--no-cache`` / ``--cache-ttl`` (hours) / ``--cache-dir``."""
    ttl_ms = None
    cache_ttl = getattr(args, "cache_ttl", None)
    if cache_ttl:
        try:
            hours = float(cache_ttl)
        except ValueError:
            hours = None
        if hours is not None and math.isfinite(hours) and hours > 0:
            ttl_ms = hours * MS_PER_HOUR

    cache_dir = getattr(args, "cache_dir", None)
    return CacheOptions(
        enabled=getattr(args, "cache", None),
        ttl_ms=ttl_ms,
        dir=Path(cache_dir).expanduser() if cache_dir else None,
    )


def parse_fields(fields: str | None) -> set[str] | None:
    """Map a ``--fields`` list onto known page fields; ``None`` means all."""
    if not fields:
        return None
    requested = set()
    for field in fields.split(","):
        name = _FIELD_ALIASES.get(field.strip().lower())
        if name:
            requested.add(name)
    return requested


def page_json(
    data: dict[str, Any],
    *,
    article_url: Callable[[str], str],
    section: str | None = None,
    headings: bool = False,
    fields: str | None = None,
) -> dict[str, Any]:
    """Project a raw ``parse`` result onto ``{title, pageId, url, lastModified, sections}``."""
    requested = parse_fields(fields)

    def include(field: str) -> bool:
        return requested is None or field in requested

    result: dict[str, Any] = {}
    if include("title"):
        result["title"] = data.get("title")
    if include("pageId"):
        result["pageId"] = data.get("pageid")
    if include("url"):
        result["url"] = article_url(data.get("title", ""))
    if include("lastModified"):
        result["lastModified"] = data.get("revid")
    if include("sections"):
        sections = parse_wiki_content(data.get("extract") or "")
        if section:
            key = find_section(sections, section)
            sections = {key: sections[key]} if key is not None else {}
        result["sections"] = list(sections) if headings else sections
    return result


def format_search_results(results: list[SearchResult]) -> str:
    if not results:
        return "No results found."
    lines = [f"Found {len(results)} results:"]
    for result in results:
        lines.append(f"- {result.title}")
        if result.snippet:
            lines.append(f"  {result.snippet}")
        lines.append(f"  {result.url}")
        lines.append("")
    return "\n".join(lines).rstrip()


def search_json(results: list[SearchResult]) -> list[dict[str, Any]]:
    return [{"title": r.title, "snippet": r.snippet, "url": r.url} for r in results]


def format_category(members: list[str]) -> str:
    if not members:
        return "No members found in this category."
    return "\n".join([f"Found {len(members)} members:", *(f"- {m}" for m in members)])


def _quest_brief(quest: Quest) -> dict[str, str]:
    return {"title": quest.title, "status": quest.status}


def profile_json(profile: Profile, args: argparse.Namespace) -> dict[str, Any]:
    """Apply the profile ``--*-only`` filters; the first one set wins."""
    if getattr(args, "skills_only", False):
        return {"skills": profile.skills}
    if getattr(args, "quests_only", False):
        return {"quests": [_quest_brief(q) for q in profile.quests]}

    status_filters = (
        ("completed_quests_only", "COMPLETED"),
        ("started_quests_only", "STARTED"),
        ("not_started_quests_only", "NOT_STARTED"),
    )
    for flag, status in status_filters:
        if getattr(args, flag, False):
            return {"quests": [_quest_brief(q) for q in profile.quests if q.status == status]}

    exclude = None if getattr(args, "include_raw", False) else {"raw"}
    return profile.model_dump(by_alias=True, exclude=exclude)


def format_profile(profile: Profile, show_quests: bool = False) -> str:
    lines = [
        f"=== Profile: {profile.name} ===",
        f"Combat Level: {profile.combat_level}",
        f"Total Skill: {profile.total_skill}",
        f"Total XP: {profile.total_xp:,}",
        (
            f"Quests: {profile.quests_complete} complete, {profile.quests_started} started, "
            f"{profile.quests_not_started} not started"
        ),
        "",
        "--- Skills ---",
    ]

    names = sorted(profile.skills)
    for i in range(0, len(names), 2):
        left = names[i]
        line = f"{left:<15}: {profile.skills[left]:<3}"
        if i + 1 < len(names):
            right = names[i + 1]
            line += f"  | {right:<15}: {profile.skills[right]}"
        lines.append(line.rstrip())

    if show_quests:
        lines += ["", "--- Quests ---"]
        ordered = sorted(profile.quests, key=lambda q: (_QUEST_ORDER.get(q.status, 3), q.title))
        lines += [f"{q.status:<12} {q.title}" for q in ordered]

    return "\n".join(lines)
