"""
Tests for the in-memory response cache.
"""

import asyncio

import pytest

from chat_relay.entities import CacheKey
from chat_relay.protocols import CacheStore
from chat_relay.repositories import InMemoryResponseCache

KEY = CacheKey(system_prompt="", user_message="Hello")


def test_satisfies_protocol():
    """The in-memory cache is a CacheStore."""
    assert isinstance(InMemoryResponseCache(ttl=300), CacheStore)


def test_lookup_miss_returns_none():
    cache = InMemoryResponseCache(ttl=300)
    assert cache.lookup(KEY) is None
    assert cache.count() == 0


def test_store_then_lookup(clock):
    cache = InMemoryResponseCache(ttl=300, clock=clock)
    cache.store(KEY, "Hi there!")
    assert cache.lookup(KEY) == "Hi there!"


def test_key_includes_system_prompt(clock):
    """Same message under a different system prompt is a different query."""
    cache = InMemoryResponseCache(ttl=300, clock=clock)
    cache.store(KEY, "Hi there!")
    assert cache.lookup(CacheKey(system_prompt="Be terse.", user_message="Hello")) is None


def test_lookup_never_returns_expired_entry(clock):
    cache = InMemoryResponseCache(ttl=300, clock=clock)
    cache.store(KEY, "Hi there!")

    clock.advance(299.9)
    assert cache.lookup(KEY) == "Hi there!"

    clock.advance(0.1)
    assert cache.lookup(KEY) is None
    assert cache.count() == 0


def test_store_without_loop_purges_expired_entries(clock):
    """Without timers, writes sweep expired entries so the map stays bounded."""
    cache = InMemoryResponseCache(ttl=300, clock=clock)
    for i in range(10):
        cache.store(CacheKey("", f"message {i}"), "reply")

    clock.advance(301)
    cache.store(KEY, "Hi there!")

    assert cache.get_stats()["total_entries"] == 1
    assert cache.get_stats()["pending_evictions"] == 0


def test_overwrite_with_fresh_ttl(clock):
    cache = InMemoryResponseCache(ttl=300, clock=clock)
    cache.store(KEY, "old")
    clock.advance(200)
    cache.store(KEY, "new")
    clock.advance(200)

    assert cache.lookup(KEY) == "new"


def test_clear_returns_count(clock):
    cache = InMemoryResponseCache(ttl=300, clock=clock)
    cache.store(KEY, "a")
    cache.store(CacheKey("", "Bye"), "b")

    assert cache.clear() == 2
    assert cache.lookup(KEY) is None


def test_stats_track_hits_and_misses(clock):
    cache = InMemoryResponseCache(ttl=300, clock=clock)
    cache.lookup(KEY)
    cache.store(KEY, "Hi there!")
    cache.lookup(KEY)
    cache.lookup(KEY)

    stats = cache.get_stats()
    assert stats["hits"] == 2
    assert stats["misses"] == 1
    assert stats["ttl"] == 300


@pytest.mark.asyncio
async def test_timer_evicts_idle_entry(clock):
    # The clock never advances, so only the timer can remove the entry.
    cache = InMemoryResponseCache(ttl=0.05, clock=clock)
    cache.store(KEY, "Hi there!")
    assert cache.get_stats()["pending_evictions"] == 1

    await asyncio.sleep(0.15)

    assert cache.get_stats()["pending_evictions"] == 0
    assert cache.count() == 0


@pytest.mark.asyncio
async def test_stale_timer_does_not_remove_newer_value():
    cache = InMemoryResponseCache(ttl=10)
    cache.store(KEY, "old", ttl=0.05)
    cache.store(KEY, "new", ttl=10)

    await asyncio.sleep(0.15)

    assert cache.lookup(KEY) == "new"
    assert cache.get_stats()["pending_evictions"] == 1
    cache.clear()


@pytest.mark.asyncio
async def test_delete_cancels_timer():
    cache = InMemoryResponseCache(ttl=10)
    cache.store(KEY, "Hi there!")

    assert cache.delete(KEY) is True
    assert cache.delete(KEY) is False
    assert cache.get_stats()["pending_evictions"] == 0


@pytest.mark.asyncio
async def test_clear_cancels_all_timers():
    cache = InMemoryResponseCache(ttl=10)
    for i in range(5):
        cache.store(CacheKey("", f"message {i}"), "reply")

    assert cache.get_stats()["pending_evictions"] == 5
    assert cache.clear() == 5
    assert cache.get_stats()["pending_evictions"] == 0


def test_ttl_defaults_to_five_minutes():
    assert InMemoryResponseCache().ttl == 300


def test_explicit_zero_ttl_is_kept(clock):
    cache = InMemoryResponseCache(ttl=0, clock=clock)
    cache.store(KEY, "Hi there!")

    assert cache.ttl == 0
    assert cache.lookup(KEY) is None
