"""Unit tests for read-through caching (legis_news/cache/read_through.py).

This module tests:
- Cache hit skips the compute function
- Cache miss computes, stores with the TTL, and returns
- None results are not stored
- Corrupt payloads are recomputed
- Cache failures propagate as DependencyError
- invalidate_cache() by key and by pattern
"""

import pytest
from unittest.mock import AsyncMock

from legis_news.cache.read_through import get_or_compute, invalidate_cache
from legis_news.config import CACHE_TTL_SECONDS
from legis_news.errors import DependencyError
from tests.fakes import FailingCache


# ==================== get_or_compute ====================


@pytest.mark.asyncio
@pytest.mark.unit
class TestGetOrCompute:

    async def test_miss_computes_and_stores(self, memory_cache):
        compute = AsyncMock(return_value={"answer": 42})

        result = await get_or_compute(memory_cache, "k", compute)

        assert result == {"answer": 42}
        compute.assert_awaited_once()
        assert await memory_cache.get("k") == '{"answer":42}'

    async def test_hit_skips_compute(self, memory_cache):
        compute = AsyncMock(return_value={"answer": 42})

        first = await get_or_compute(memory_cache, "k", compute)
        second = await get_or_compute(memory_cache, "k", compute)

        assert first == second
        assert compute.await_count == 1

    async def test_default_ttl_is_300_seconds(self, memory_cache, clock):
        compute = AsyncMock(return_value=[1, 2, 3])
        assert CACHE_TTL_SECONDS == 300

        await get_or_compute(memory_cache, "k", compute)
        clock.advance(299)
        await get_or_compute(memory_cache, "k", compute)
        assert compute.await_count == 1

        clock.advance(1)
        await get_or_compute(memory_cache, "k", compute)
        assert compute.await_count == 2

    async def test_uses_given_ttl(self):
        cache = AsyncMock()
        cache.get.return_value = None

        await get_or_compute(cache, "k", AsyncMock(return_value="v"), ttl=60)

        cache.set.assert_awaited_once_with("k", '"v"', ttl=60)

    async def test_none_is_not_cached(self, memory_cache):
        compute = AsyncMock(return_value=None)

        assert await get_or_compute(memory_cache, "article:404", compute) is None
        assert await get_or_compute(memory_cache, "article:404", compute) is None

        assert compute.await_count == 2
        assert memory_cache.keys() == []

    async def test_empty_list_is_cached(self, memory_cache):
        compute = AsyncMock(return_value=[])

        await get_or_compute(memory_cache, "states:list", compute)
        await get_or_compute(memory_cache, "states:list", compute)

        assert compute.await_count == 1

    async def test_corrupt_payload_is_recomputed(self, memory_cache):
        await memory_cache.set("k", "{not json", ttl=300)
        compute = AsyncMock(return_value={"fresh": True})

        assert await get_or_compute(memory_cache, "k", compute) == {"fresh": True}
        assert await memory_cache.get("k") == '{"fresh":true}'

    async def test_cache_failure_propagates(self):
        compute = AsyncMock(return_value="v")

        with pytest.raises(DependencyError):
            await get_or_compute(FailingCache(), "k", compute)

        compute.assert_not_awaited()

    async def test_cache_write_failure_propagates(self):
        cache = AsyncMock()
        cache.get.return_value = None
        cache.set.side_effect = DependencyError("Redis SET failed")

        with pytest.raises(DependencyError):
            await get_or_compute(cache, "k", AsyncMock(return_value="v"))

    async def test_compute_error_is_not_cached(self, memory_cache):
        compute = AsyncMock(side_effect=DependencyError("Database query failed"))

        with pytest.raises(DependencyError):
            await get_or_compute(memory_cache, "k", compute)

        assert memory_cache.keys() == []


# ==================== invalidate_cache ====================


@pytest.mark.asyncio
@pytest.mark.unit
class TestInvalidateCache:

    async def test_by_key(self, memory_cache):
        await memory_cache.set("article:5", "x")
        assert await invalidate_cache(memory_cache, key="article:5") == 1
        assert await memory_cache.get("article:5") is None

    async def test_absent_key_is_not_an_error(self, memory_cache):
        assert await invalidate_cache(memory_cache, key="article:5") == 0

    async def test_by_pattern(self, memory_cache):
        await memory_cache.set("news:a", "1")
        await memory_cache.set("news:b", "2")
        await memory_cache.set("article:1", "3")

        assert await invalidate_cache(memory_cache, pattern="news:*") == 2
        assert memory_cache.keys() == ["article:1"]

    async def test_requires_key_or_pattern(self, memory_cache):
        with pytest.raises(ValueError):
            await invalidate_cache(memory_cache)

    async def test_failure_propagates(self):
        with pytest.raises(DependencyError):
            await invalidate_cache(FailingCache(), pattern="news:*")
