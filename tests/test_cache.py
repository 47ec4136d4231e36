"""Tests for the in-memory cache."""

from datetime import UTC, datetime, timedelta

from protein_exchange.services.cache import InMemoryCache


def test_cache_expires_entries() -> None:
    current = [datetime(2025, 8, 15, 12, 0, tzinfo=UTC)]
    cache = InMemoryCache(clock=lambda: current[0])

    cache.set("menu", {"a": 1}, ttl_seconds=10)
    assert cache.get("menu") == {"a": 1}

    current[0] += timedelta(seconds=10)
    assert cache.get("menu") is None


def test_cache_clear_returns_dropped_count() -> None:
    cache = InMemoryCache()
    cache.set("a", 1, ttl_seconds=60)
    cache.set("b", 2, ttl_seconds=60)

    assert cache.clear() == 2
    assert cache.get("a") is None
    assert cache.clear() == 0
