"""Filesystem cache — one JSON file per key, with lazy TTL expiry."""

from __future__ import annotations

import base64
import hashlib
import json
import logging
import os
import tempfile
import time
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class CacheEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stored_at: int = Field(alias="storedAt")
    body: Any = None


def serialize_body(
    *,
    content: str | bytes | None = None,
    data: Mapping[str, Any] | None = None,
    json_body: Any = None,
) -> str:
    """Render a request body as the stable string used in cache keys."""
    if isinstance(content, str):
        return content
    if isinstance(content, bytes):
        return base64.b64encode(content).decode("ascii")
    if data is not None:
        return urlencode(data, doseq=True)
    if json_body is not None:
        try:
            return json.dumps(json_body)
        except (TypeError, ValueError):
            return str(json_body)
    return ""


def build_cache_key(method: str, url: str, body: str = "", cache_key: str | None = None) -> str:
    """Return ``cache_key`` verbatim, else ``METHOD:url:body``."""
    if cache_key:
        return cache_key
    return f"{method.upper()}:{url}:{body}"


def hash_key(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


class FileCache:
    """Keyed JSON store under a directory. Entries older than the TTL are misses."""

    def __init__(
        self,
        directory: Path,
        ttl_ms: float,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._dir = Path(directory)
        self._ttl_ms = ttl_ms
        self._clock = clock

    def path_for(self, key: str) -> Path:
        return self._dir / f"{hash_key(key)}.json"

    def get(self, key: str) -> Any | None:
        """Return the cached body, or ``None`` on miss, expiry or a bad entry."""
        path = self.path_for(key)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            logger.debug("cache miss", extra={"cache_file": path.name})
            return None
        except OSError:
            logger.warning("cache read failed", extra={"cache_file": path.name}, exc_info=True)
            return None

        try:
            entry = CacheEntry.model_validate_json(raw)
        except (ValidationError, UnicodeDecodeError):
            logger.debug("cache entry malformed, removing", extra={"cache_file": path.name})
            self._discard(path)
            return None

        age_ms = self._clock() - entry.stored_at
        if age_ms > self._ttl_ms:
            logger.debug(
                "cache entry expired, removing",
                extra={"cache_file": path.name, "age_ms": age_ms, "ttl_ms": self._ttl_ms},
            )
            self._discard(path)
            return None

        logger.debug("cache hit", extra={"cache_file": path.name, "age_ms": age_ms})
        return entry.body

    def set(self, key: str, body: Any) -> bool:
        """Store *body* under *key*. Returns ``False`` on error."""
        path = self.path_for(key)
        entry = CacheEntry(stored_at=self._clock(), body=body)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._dir, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(entry.model_dump_json(by_alias=True))
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError):
            logger.warning("cache set failed", extra={"cache_file": path.name}, exc_info=True)
            return False
        logger.debug("cache set", extra={"cache_file": path.name})
        return True

    def _discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.warning("cache entry removal failed", extra={"cache_file": path.name}, exc_info=True)
