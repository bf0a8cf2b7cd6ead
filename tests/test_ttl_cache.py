from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from cnb_rates.cache import TTLCache


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2025, 7, 23, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def test_get_returns_value_until_expiry() -> None:
    clock = _Clock()
    cache: TTLCache[str] = TTLCache(clock=clock)
    entry = cache.set("rates", "snapshot", timedelta(hours=1))

    assert entry.expires_at == datetime(2025, 7, 23, 13, 0, tzinfo=timezone.utc)
    clock.advance(minutes=59)
    assert cache.get("rates") == "snapshot"
    clock.advance(minutes=1)
    assert cache.get("rates") is None


def test_expired_entries_are_not_swept() -> None:
    clock = _Clock()
    cache: TTLCache[str] = TTLCache(clock=clock)
    cache.set("rates", "stale", timedelta(seconds=1))
    clock.advance(seconds=5)

    assert cache.get("rates") is None
    entry = cache.peek("rates")
    assert entry is not None
    assert entry.value == "stale"
    assert entry.is_expired(clock()) is True
    assert len(cache) == 1


def test_set_overwrites_existing_entry() -> None:
    clock = _Clock()
    cache: TTLCache[str] = TTLCache(clock=clock)
    cache.set("rates", "old", timedelta(seconds=1))
    clock.advance(seconds=5)
    cache.set("rates", "new", timedelta(minutes=5))

    assert cache.get("rates") == "new"


def test_missing_key_and_clear() -> None:
    cache: TTLCache[int] = TTLCache()
    assert cache.get("missing") is None
    assert cache.peek("missing") is None

    cache.set("a", 1, timedelta(minutes=1))
    cache.clear()
    assert len(cache) == 0


def test_set_rejects_non_positive_ttl() -> None:
    with pytest.raises(ValueError):
        TTLCache().set("rates", "value", timedelta(0))
