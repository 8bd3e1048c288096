"""TTL 기반 키-값 캐시 저장소

후보 풀과 갱신 상태 기록을 저장합니다. 단일 키 단위의 원자적 교체만
보장하면 되므로 트랜잭션은 사용하지 않습니다.
"""

import json
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class CacheDecodeError(ValueError):
    """캐시 값이 올바른 JSON이 아닌 경우"""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Cached value for '{key}' is not valid JSON: {reason}")


class CacheUnavailableError(RuntimeError):
    """캐시 백엔드에 접근할 수 없는 경우"""

    def __init__(self, operation: str, key: str, reason: str):
        self.operation = operation
        self.key = key
        self.reason = reason
        super().__init__(f"Cache {operation} failed for '{key}': {reason}")


class CacheStore(ABC):
    """캐시 저장소 인터페이스"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """원문 문자열 조회 (없거나 만료되면 None)"""

    @abstractmethod
    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """값 저장 (기존 값은 통째로 교체)"""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """값 삭제"""

    async def get_json(self, key: str) -> Optional[Any]:
        """JSON 값 조회

        Raises:
            CacheDecodeError: 저장된 값이 JSON이 아닌 경우
        """
        raw = await self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise CacheDecodeError(key, str(e)) from e

    async def put_json(self, key: str, value: Any, ttl_seconds: int) -> None:
        await self.put(key, json.dumps(value, ensure_ascii=False), ttl_seconds)

    async def close(self) -> None:
        return None


class InMemoryCacheStore(CacheStore):
    """프로세스 내 캐시 (개발/테스트용)"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: dict[str, tuple[str, float]] = {}
        self._clock = clock

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        self._entries[key] = (value, self._clock() + ttl_seconds)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)


class RedisCacheStore(CacheStore):
    """Redis 캐시 (SET ... EX 로 원자적 교체)

    연결 오류는 CacheUnavailableError로 변환합니다.
    """

    def __init__(self, redis: Redis):
        self.redis = redis

    @classmethod
    def from_url(cls, url: str) -> "RedisCacheStore":
        return cls(Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self.redis.get(key)
        except RedisError as e:
            raise CacheUnavailableError("get", key, str(e)) from e
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self.redis.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            raise CacheUnavailableError("put", key, str(e)) from e

    async def delete(self, key: str) -> None:
        try:
            await self.redis.delete(key)
        except RedisError as e:
            raise CacheUnavailableError("delete", key, str(e)) from e

    async def close(self) -> None:
        await self.redis.aclose()


def create_cache_store(settings: Settings) -> CacheStore:
    """설정에 맞는 캐시 저장소 생성"""
    if settings.cache_backend == "redis":
        logger.info("Using Redis cache store")
        return RedisCacheStore.from_url(settings.redis_url)

    logger.info("Using in-memory cache store")
    return InMemoryCacheStore()
