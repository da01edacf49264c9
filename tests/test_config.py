"""Cache option resolution tests."""

from pathlib import Path

from loadstone.config import (
    DEFAULT_TTL_MS,
    MS_PER_HOUR,
    CacheOptions,
    Settings,
    resolve_cache_options,
)


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    for var in ("LOADSTONE_CACHE_TTL_MS", "LOADSTONE_CACHE_TTL_HOURS", "LOADSTONE_CACHE_DIR", "LOADSTONE_CACHE_ENABLED"):
        monkeypatch.delenv(var, raising=False)

    resolved = resolve_cache_options(None, _settings())
    assert resolved.enabled is True
    assert resolved.ttl_ms == DEFAULT_TTL_MS == 24 * 60 * 60 * 1000
    assert resolved.dir == tmp_path / ".loadstone" / "cache"


def test_environment_values(monkeypatch, tmp_path):
    monkeypatch.setenv("LOADSTONE_CACHE_TTL_MS", "5000")
    monkeypatch.setenv("LOADSTONE_CACHE_DIR", str(tmp_path / "env-cache"))
    monkeypatch.setenv("LOADSTONE_CACHE_ENABLED", "false")

    resolved = resolve_cache_options(None, _settings())
    assert resolved.ttl_ms == 5000
    assert resolved.dir == tmp_path / "env-cache"
    assert resolved.enabled is False


def test_environment_read_at_call_time(monkeypatch):
    monkeypatch.setenv("LOADSTONE_CACHE_TTL_MS", "1234")
    assert resolve_cache_options().ttl_ms == 1234
    monkeypatch.setenv("LOADSTONE_CACHE_TTL_MS", "4321")
    assert resolve_cache_options().ttl_ms == 4321


def test_hours_convert_to_milliseconds():
    resolved = resolve_cache_options(None, _settings(cache_ttl_hours=2))
    assert resolved.ttl_ms == 2 * MS_PER_HOUR


def test_ttl_ms_wins_over_hours():
    resolved = resolve_cache_options(None, _settings(cache_ttl_ms=10, cache_ttl_hours=2))
    assert resolved.ttl_ms == 10


def test_explicit_options_win_over_environment(tmp_path):
    settings = _settings(cache_ttl_ms=10, cache_dir=tmp_path / "env", cache_enabled=True)
    options = CacheOptions(enabled=False, ttl_ms=99, dir=tmp_path / "explicit")

    resolved = resolve_cache_options(options, settings)
    assert resolved.enabled is False
    assert resolved.ttl_ms == 99
    assert resolved.dir == tmp_path / "explicit"


def test_unset_explicit_fields_fall_through(tmp_path):
    settings = _settings(cache_ttl_ms=10, cache_dir=tmp_path / "env")
    resolved = resolve_cache_options(CacheOptions(enabled=False), settings)
    assert resolved.enabled is False
    assert resolved.ttl_ms == 10
    assert resolved.dir == tmp_path / "env"


def test_invalid_ttl_values_are_ignored(monkeypatch):
    monkeypatch.setenv("LOADSTONE_CACHE_TTL_MS", "not-a-number")
    monkeypatch.setenv("LOADSTONE_CACHE_TTL_HOURS", "-3")
    settings = _settings()
    assert settings.cache_ttl_ms is None
    assert settings.cache_ttl_hours is None
    assert resolve_cache_options(None, settings).ttl_ms == DEFAULT_TTL_MS


def test_cache_dir_is_path(tmp_path):
    settings = _settings(cache_dir=str(tmp_path))
    assert isinstance(settings.cache_dir, Path)
