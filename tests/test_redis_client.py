"""Unit tests for the Redis cache backend and pool lifecycle (legis_news/redis_client.py).

A mocked redis.asyncio client stands in for the server, so these tests cover:
- GET/SET/SETEX/DEL mapping
- SCAN-based pattern deletes in batches
- RedisError translation to DependencyError
- Pool initialization, access and shutdown
- The set/get health round trip
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from redis.exceptions import ConnectionError as RedisConnectionError

from legis_news import redis_client
from legis_news.errors import DependencyError
from legis_news.redis_client import AsyncRedisClient, RedisConfig


def scan_results(keys):
    """Build a scan_iter replacement yielding keys."""

    async def scan_iter(match=None, count=None):
        for key in keys:
            yield key

    return MagicMock(side_effect=scan_iter)


# ==================== Fixtures ====================


@pytest.fixture(autouse=True)
def cleanup_redis_pool():
    """Reset the module-level pool after each test."""
    yield
    redis_client._redis_pool = None
    redis_client._redis_config = None


@pytest.fixture
def mock_redis():
    mock = AsyncMock()
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.setex = AsyncMock(return_value=True)
    mock.delete = AsyncMock(return_value=1)
    mock.ping = AsyncMock(return_value=True)
    return mock


# ==================== AsyncRedisClient ====================


@pytest.mark.asyncio
@pytest.mark.unit
class TestAsyncRedisClient:

    async def test_get(self, mock_redis):
        mock_redis.get.return_value = '{"id":1}'
        assert await AsyncRedisClient(mock_redis).get("article:1") == '{"id":1}'
        mock_redis.get.assert_awaited_once_with("article:1")

    async def test_set_with_ttl_uses_setex(self, mock_redis):
        await AsyncRedisClient(mock_redis).set("article:1", "v", ttl=300)
        mock_redis.setex.assert_awaited_once_with("article:1", 300, "v")
        mock_redis.set.assert_not_awaited()

    async def test_set_without_ttl(self, mock_redis):
        await AsyncRedisClient(mock_redis).set("k", "v")
        mock_redis.set.assert_awaited_once_with("k", "v")

    async def test_delete_without_keys_is_noop(self, mock_redis):
        assert await AsyncRedisClient(mock_redis).delete() == 0
        mock_redis.delete.assert_not_awaited()

    async def test_delete_pattern(self, mock_redis):
        mock_redis.scan_iter = scan_results(["news:a", "news:b"])
        mock_redis.delete.return_value = 2

        assert await AsyncRedisClient(mock_redis).delete_pattern("news:*") == 2

        mock_redis.scan_iter.assert_called_once_with(match="news:*", count=redis_client.SCAN_BATCH_SIZE)
        mock_redis.delete.assert_awaited_once_with("news:a", "news:b")

    async def test_delete_pattern_batches(self, mock_redis):
        keys = [f"news:{i}" for i in range(redis_client.SCAN_BATCH_SIZE + 3)]
        mock_redis.scan_iter = scan_results(keys)
        mock_redis.delete.side_effect = lambda *batch: len(batch)

        assert await AsyncRedisClient(mock_redis).delete_pattern("news:*") == len(keys)
        assert mock_redis.delete.await_count == 2

    async def test_delete_pattern_without_matches(self, mock_redis):
        mock_redis.scan_iter = scan_results([])
        assert await AsyncRedisClient(mock_redis).delete_pattern("news:*") == 0
        mock_redis.delete.assert_not_awaited()

    @pytest.mark.parametrize("method, args", [
        ("get", ("k",)),
        ("set", ("k", "v", 300)),
        ("delete", ("k",)),
        ("ping", ()),
    ])
    async def test_redis_errors_become_dependency_errors(self, mock_redis, method, args):
        failure = RedisConnectionError("Connection refused")
        for name in ("get", "set", "setex", "delete", "ping"):
            getattr(mock_redis, name).side_effect = failure

        with pytest.raises(DependencyError) as exc_info:
            await getattr(AsyncRedisClient(mock_redis), method)(*args)

        assert exc_info.value.status_code == 503
        assert exc_info.value.__cause__ is failure


# ==================== Pool Lifecycle ====================


@pytest.mark.asyncio
@pytest.mark.unit
class TestRedisPool:

    async def test_get_pool_before_init(self):
        with pytest.raises(RuntimeError, match="not been initialized"):
            redis_client.get_redis_pool()

    async def test_init_and_close(self, mock_redis):
        with patch("legis_news.redis_client.aioredis.from_url", return_value=mock_redis) as from_url:
            pool = await redis_client.init_redis_pool()

        assert pool is mock_redis
        assert redis_client.get_redis_pool() is mock_redis
        assert from_url.call_args.kwargs["decode_responses"] is True
        mock_redis.ping.assert_awaited_once()

        await redis_client.close_redis_pool()
        mock_redis.aclose.assert_awaited_once()
        assert redis_client._redis_pool is None

    async def test_init_failure(self, mock_redis):
        mock_redis.ping.side_effect = RedisConnectionError("Connection refused")

        with patch("legis_news.redis_client.aioredis.from_url", return_value=mock_redis):
            with pytest.raises(DependencyError):
                await redis_client.init_redis_pool()

        assert redis_client._redis_pool is None

    async def test_health_round_trip(self, mock_redis):
        mock_redis.get.return_value = "ok"
        redis_client._redis_pool = mock_redis

        result = await redis_client.check_redis_health()

        assert result["status"] == "ok"
        assert result["responseTime"].endswith("ms")
        mock_redis.set.assert_awaited_once_with("health_check", "ok")

    async def test_health_without_pool(self):
        with pytest.raises(DependencyError):
            await redis_client.check_redis_health()


@pytest.mark.unit
def test_config_from_env(monkeypatch):
    monkeypatch.setenv("REDIS_HOST", "cache.internal")
    monkeypatch.setenv("REDIS_PORT", "6380")
    monkeypatch.setenv("REDIS_PASSWORD", "secret")
    monkeypatch.delenv("REDIS_DB", raising=False)

    config = RedisConfig()

    assert config.get_url() == "redis://:secret@cache.internal:6380/0"
    assert "secret" not in repr(config)
