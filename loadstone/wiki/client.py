"""RuneScape Wiki client — search, page parse and category listing."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import quote

import httpx

from loadstone.config import CacheOptions, Settings
from loadstone.fetch import RequestFailedError, RequestOptions, fetch_json

from .models import CategoryEnvelope, ParseEnvelope, SearchEnvelope, SearchResult
from .parser import parse_wiki_content

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 5
DEFAULT_CATEGORY_LIMIT = 50
CATEGORY_PREFIX = "Category:"

_TAG_RE = re.compile(r"<[^>]+>")

# ValueError covers JSON decode errors and pydantic validation errors.
_FETCH_ERRORS = (httpx.HTTPError, RequestFailedError, ValueError)


def strip_tags(text: str) -> str:
    return _TAG_RE.sub("", text)


def find_section(sections: dict[str, str], name: str) -> str | None:
    """Return the first section title containing *name*, case-insensitively."""
    needle = name.lower()
    for key in sections:
        if needle in key.lower():
            return key
    return None


def format_sections(sections: dict[str, str]) -> str:
    return "".join(f"\n=== {key} ===\n{value}\n" for key, value in sections.items()).strip()


class WikiClient:
    """Reads from a MediaWiki ``api.php`` endpoint through the cached fetcher."""

    def __init__(
        self,
        *,
        cache: CacheOptions | None = None,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._cache = cache
        self._transport = transport

    def article_url(self, title: str) -> str:
        """Canonical article URL: spaces become underscores, the rest is percent-encoded."""
        return self._settings.wiki_article_url + quote(title.replace(" ", "_"), safe="!*'()")

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=True,
            timeout=self._settings.request_timeout,
            headers={"User-Agent": self._settings.user_agent},
        )

    async def _get(self, params: dict[str, Any]) -> Any:
        async with self._client() as client:
            return await fetch_json(
                client,
                self._settings.wiki_api_url,
                request=RequestOptions(params=params),
                cache=self._cache,
                settings=self._settings,
            )

    async def search(self, query: str) -> list[SearchResult]:
        """Relevance-ranked search. Failures yield an empty list."""
        logger.debug("wiki search", extra={"query": query[:100]})
        try:
            data = await self._get(
                {
                    "action": "query",
                    "list": "search",
                    "srsearch": query,
                    "srlimit": str(SEARCH_LIMIT),
                    "format": "json",
                }
            )
            envelope = SearchEnvelope.model_validate(data)
        except _FETCH_ERRORS:
            logger.warning("wiki search failed", extra={"query": query[:100]}, exc_info=True)
            return []

        hits = envelope.query.search if envelope.query else []
        return [
            SearchResult(
                title=hit.title,
                snippet=strip_tags(hit.snippet) if hit.snippet is not None else None,
                url=self.article_url(hit.title),
            )
            for hit in hits
        ]

    async def get_page(
        self,
        title: str,
        *,
        as_json: bool = False,
        section: str | None = None,
    ) -> dict[str, Any] | str | None:
        """Fetch a rendered article.

        With ``as_json`` the ``parse`` fields come back as a dict with the raw
        HTML under ``extract``, leaving section parsing to the caller. Otherwise
        the article is parsed and formatted as text, optionally narrowed to the
        first section whose title contains ``section``. Returns ``None`` when
        the page is missing or the request fails.
        """
        try:
            data = await self._get(
                {
                    "action": "parse",
                    "format": "json",
                    "prop": "text|properties|displaytitle|revid",
                    "page": title,
                    "redirects": "1",
                }
            )
            envelope = ParseEnvelope.model_validate(data)
        except _FETCH_ERRORS:
            logger.warning("wiki page fetch failed", extra={"title": title}, exc_info=True)
            return None

        if envelope.error is not None or envelope.parse is None:
            logger.info(
                "wiki page not found",
                extra={"title": title, "code": envelope.error.code if envelope.error else None},
            )
            return None

        page = envelope.parse
        html = page.text.html

        if as_json:
            return {**page.model_dump(by_alias=True), "extract": html}

        sections = parse_wiki_content(html)
        if section:
            key = find_section(sections, section)
            if key is None:
                return f"Section '{section}' not found. Available sections: {', '.join(sections)}"
            return f"\n=== {key} ===\n{sections[key]}\n"
        return format_sections(sections)

    async def get_category_members(
        self, category: str, *, limit: int = DEFAULT_CATEGORY_LIMIT
    ) -> list[str]:
        """Page titles in *category*. Failures yield an empty list."""
        if limit <= 0:
            limit = DEFAULT_CATEGORY_LIMIT
        if not category.startswith(CATEGORY_PREFIX):
            category = f"{CATEGORY_PREFIX}{category}"
        try:
            data = await self._get(
                {
                    "action": "query",
                    "format": "json",
                    "list": "categorymembers",
                    "cmtitle": category,
                    "cmlimit": str(limit),
                }
            )
            envelope = CategoryEnvelope.model_validate(data)
        except _FETCH_ERRORS:
            logger.warning("wiki category fetch failed", extra={"category": category}, exc_info=True)
            return []

        members = envelope.query.categorymembers if envelope.query else []
        return [member.title for member in members]
