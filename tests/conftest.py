"""Fixtures — isolated settings, cache directory, fake clock."""

import pytest

from loadstone.config import Settings


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def settings(cache_dir) -> Settings:
    """Settings that ignore the developer's .env and write the cache under tmp_path."""
    return Settings(_env_file=None, cache_dir=cache_dir)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
