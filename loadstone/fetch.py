"""HTTP JSON fetcher with an optional filesystem cache in front of the network."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from loadstone.cache.filesystem import FileCache, build_cache_key, serialize_body
from loadstone.config import CacheOptions, Settings, resolve_cache_options

logger = logging.getLogger(__name__)


class RequestFailedError(Exception):
    """The server answered with a non-success status."""

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"Request failed: {reason}")
        self.status_code = status_code
        self.reason = reason


@dataclass(frozen=True)
class RequestOptions:
    method: str = "GET"
    params: Mapping[str, Any] | None = None
    headers: Mapping[str, str] | None = None
    content: str | bytes | None = None
    data: Mapping[str, Any] | None = None
    json: Any = None


async def _request_json(client: httpx.AsyncClient, url: httpx.URL, request: RequestOptions) -> Any:
    response = await client.request(
        request.method,
        url,
        headers=request.headers,
        content=request.content,
        data=request.data,
        json=request.json,
    )
    if not response.is_success:
        raise RequestFailedError(response.status_code, response.reason_phrase)
    return response.json()


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    request: RequestOptions | None = None,
    cache: CacheOptions | None = None,
    cache_key: str | None = None,
    settings: Settings | None = None,
) -> Any:
    """Fetch *url* and decode its JSON body, consulting the cache first.

    A cache hit within the TTL is returned without touching the network.
    Raises :class:`RequestFailedError` on a non-success status; transport and
    decode errors propagate from httpx.
    """
    request = request or RequestOptions()
    full_url = httpx.URL(url, params=request.params) if request.params else httpx.URL(url)
    resolved = resolve_cache_options(cache, settings)

    if not resolved.enabled:
        return await _request_json(client, full_url, request)

    key = build_cache_key(
        request.method,
        str(full_url),
        serialize_body(content=request.content, data=request.data, json_body=request.json),
        cache_key,
    )
    store = FileCache(resolved.dir, resolved.ttl_ms)

    cached = store.get(key)
    if cached is not None:
        return cached

    data = await _request_json(client, full_url, request)
    store.set(key, data)
    return data
