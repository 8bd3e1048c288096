"""캐시 저장소 단위 테스트"""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core.cache import (
    CacheDecodeError,
    CacheUnavailableError,
    InMemoryCacheStore,
    RedisCacheStore,
    create_cache_store,
)
from app.core.config import Settings


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestInMemoryCacheStore:
    """인메모리 캐시 테스트"""

    @pytest.mark.asyncio
    async def test_put_and_get(self):
        """저장한 값 조회"""
        store = InMemoryCacheStore()

        await store.put("key", "value", ttl_seconds=60)

        assert await store.get("key") == "value"

    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self):
        """없는 키는 None"""
        assert await InMemoryCacheStore().get("nope") is None

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self):
        """TTL 경과 후 만료"""
        clock = FakeClock()
        store = InMemoryCacheStore(clock=clock)
        await store.put("key", "value", ttl_seconds=10)

        clock.now = 9.9
        assert await store.get("key") == "value"

        clock.now = 10.0
        assert await store.get("key") is None

    @pytest.mark.asyncio
    async def test_put_replaces_whole_value(self):
        """기존 값은 통째로 교체"""
        store = InMemoryCacheStore()
        await store.put_json("pool", {"items": [1, 2, 3]}, 60)

        await store.put_json("pool", {"items": [4]}, 60)

        assert await store.get_json("pool") == {"items": [4]}

    @pytest.mark.asyncio
    async def test_get_json_raises_on_malformed_value(self):
        """JSON이 아닌 값은 CacheDecodeError"""
        store = InMemoryCacheStore()
        await store.put("pool", "{not json", 60)

        with pytest.raises(CacheDecodeError) as exc_info:
            await store.get_json("pool")

        assert exc_info.value.key == "pool"

    @pytest.mark.asyncio
    async def test_delete(self):
        """삭제 후 조회 불가"""
        store = InMemoryCacheStore()
        await store.put("key", "value", 60)

        await store.delete("key")

        assert await store.get("key") is None


class TestRedisCacheStore:
    """Redis 캐시 테스트 (클라이언트 목)"""

    @pytest.mark.asyncio
    async def test_put_uses_set_with_expiry(self):
        """SET ... EX 로 저장"""
        redis = AsyncMock()
        store = RedisCacheStore(redis)

        await store.put("pool", "{}", ttl_seconds=21600)

        redis.set.assert_awaited_once_with("pool", "{}", ex=21600)

    @pytest.mark.asyncio
    async def test_get_decodes_bytes(self):
        """bytes 값은 UTF-8 문자열로 변환"""
        redis = AsyncMock()
        redis.get.return_value = "풀".encode("utf-8")

        assert await RedisCacheStore(redis).get("pool") == "풀"

    @pytest.mark.asyncio
    async def test_connection_error_becomes_cache_unavailable(self):
        """Redis 오류는 CacheUnavailableError로 변환"""
        redis = AsyncMock()
        redis.get.side_effect = RedisConnectionError("connection refused")

        with pytest.raises(CacheUnavailableError) as exc_info:
            await RedisCacheStore(redis).get("pool")

        assert exc_info.value.operation == "get"
        assert exc_info.value.key == "pool"


class TestCreateCacheStore:
    """캐시 저장소 팩토리 테스트"""

    def test_memory_backend(self):
        store = create_cache_store(Settings(app_env="test", cache_backend="memory"))
        assert isinstance(store, InMemoryCacheStore)

    def test_redis_backend(self):
        store = create_cache_store(
            Settings(
                app_env="test",
                cache_backend="redis",
                redis_url="redis://localhost:6379/1",
            )
        )
        assert isinstance(store, RedisCacheStore)
