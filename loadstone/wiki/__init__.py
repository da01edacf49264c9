"""RuneScape Wiki access: API client and article section parser."""

from __future__ import annotations

from .client import WikiClient, find_section, format_sections
from .models import SearchResult
from .parser import parse_wiki_content

__all__ = [
    "SearchResult",
    "WikiClient",
    "find_section",
    "format_sections",
    "parse_wiki_content",
]
