"""Pydantic Settings — loads configuration from environment variables."""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

from loadstone import __version__

MS_PER_HOUR = 60 * 60 * 1000
DEFAULT_TTL_MS = 24 * MS_PER_HOUR


class Settings(BaseSettings):
    model_config = {"env_prefix": "LOADSTONE_", "env_file": ".env", "extra": "ignore"}

    cache_enabled: bool = True
    cache_ttl_ms: float | None = None
    cache_ttl_hours: float | None = None
    cache_dir: Path | None = None

    wiki_api_url: str = "https://runescape.wiki/api.php"
    wiki_article_url: str = "https://runescape.wiki/w/"
    runemetrics_url: str = "https://apps.runescape.com/runemetrics"
    user_agent: str = f"loadstone/{__version__}"
    request_timeout: float = 30.0

    log_level: str = "WARNING"

    @field_validator("cache_ttl_ms", "cache_ttl_hours", mode="before")
    @classmethod
    def _positive_or_unset(cls, value: object) -> float | None:
        """Ignore TTL values that are blank, non-numeric or not positive."""
        if value is None or value == "":
            return None
        try:
            parsed = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        if not math.isfinite(parsed) or parsed <= 0:
            return None
        return parsed


@lru_cache
def get_settings() -> Settings:
    return Settings()


@dataclass(frozen=True)
class CacheOptions:
    """Per-call cache overrides. ``None`` means "not specified"."""

    enabled: bool | None = None
    ttl_ms: float | None = None
    dir: Path | None = None


@dataclass(frozen=True)
class ResolvedCacheOptions:
    enabled: bool
    ttl_ms: float
    dir: Path


def default_cache_dir() -> Path:
    return Path.home() / ".loadstone" / "cache"


def resolve_cache_options(
    options: CacheOptions | None = None,
    settings: Settings | None = None,
) -> ResolvedCacheOptions:
    """Merge explicit options over the environment snapshot over defaults.

    ``settings`` is the environment snapshot; when omitted a fresh
    ``Settings()`` is built so the environment is read at call time.
    """
    options = options or CacheOptions()
    if settings is None:
        settings = Settings()

    if options.ttl_ms is not None:
        ttl_ms = options.ttl_ms
    elif settings.cache_ttl_ms is not None:
        ttl_ms = settings.cache_ttl_ms
    elif settings.cache_ttl_hours is not None:
        ttl_ms = settings.cache_ttl_hours * MS_PER_HOUR
    else:
        ttl_ms = DEFAULT_TTL_MS

    if options.dir is not None:
        cache_dir = Path(options.dir)
    elif settings.cache_dir is not None:
        cache_dir = settings.cache_dir
    else:
        cache_dir = default_cache_dir()

    enabled = options.enabled if options.enabled is not None else settings.cache_enabled

    return ResolvedCacheOptions(enabled=enabled, ttl_ms=ttl_ms, dir=cache_dir)
