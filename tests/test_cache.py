"""Tests for the TTL-based cache."""

import time

from bus_finder.data.cache import TTLCache


def test_cache_ttl_expiration():
    """Cache should return None after TTL expires."""
    # Use a very short TTL for testing
    cache: TTLCache[str, str] = TTLCache(ttl=0.1)

    cache.set("kochi", "value")
    assert cache.get("kochi") == "value"

    # Wait for TTL to expire
    time.sleep(0.15)

    assert cache.get("kochi") is None
    assert len(cache) == 0


def test_cache_keys_are_independent():
    cache: TTLCache[str, int] = TTLCache(ttl=10.0)

    cache.set("kochi", 1)
    cache.set("pala", 2)

    assert cache.get("kochi") == 1
    assert cache.get("pala") == 2
    assert cache.get("aluva") is None


def test_cache_clear():
    """Cache clear should remove all values."""
    cache: TTLCache[str, str] = TTLCache(ttl=10.0)

    cache.set("kochi", "value")
    cache.clear()

    assert cache.get("kochi") is None


def test_cache_overwrite():
    """Setting a new value should overwrite the old one."""
    cache: TTLCache[str, str] = TTLCache(ttl=10.0)

    cache.set("kochi", "first")
    cache.set("kochi", "second")

    assert cache.get("kochi") == "second"


def test_cache_exposes_ttl():
    cache = TTLCache[str, int](ttl=42.0)

    assert cache.ttl == 42.0
