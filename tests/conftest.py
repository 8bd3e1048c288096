"""테스트 설정

외부 API는 모두 httpx.MockTransport 기반 UpstreamRouter로 대체합니다.
네트워크에 접근하지 않으며 재시도 대기는 즉시 반환됩니다.
"""

from datetime import timedelta
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.cache import InMemoryCacheStore
from app.core.config import Settings, settings
from app.core.dependencies import get_app_settings, get_cache_store, get_fetcher
from app.core.http import ResilientFetcher
from app.core.utils.datetime import now_utc
from app.domains.catalog.types import ContentItem
from app.main import app
from tests.upstream import SleepRecorder, UpstreamRouter, no_sleep


@pytest.fixture
def test_settings() -> Settings:
    """테스트 설정 (인메모리 캐시)"""
    return Settings(app_env="test", cache_backend="memory", debug=False)


@pytest.fixture
def upstream() -> UpstreamRouter:
    return UpstreamRouter()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def cache() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest_asyncio.fixture
async def http_client(upstream: UpstreamRouter):
    async with httpx.AsyncClient(transport=upstream.transport()) as client:
        yield client


@pytest.fixture
def fetcher(http_client: httpx.AsyncClient) -> ResilientFetcher:
    """재시도 대기 없는 ResilientFetcher"""
    return ResilientFetcher(http_client, sleep=no_sleep)


@pytest.fixture
def item_factory() -> Callable[..., ContentItem]:
    """ContentItem 팩토리 (기본값: 활동량 기준을 통과하는 최근 게임)"""
    counter = iter(range(1000, 10**6))

    def _factory(**overrides: Any) -> ContentItem:
        data: dict[str, Any] = {
            "id": next(counter),
            "name": "Test Game",
            "current_activity": 1_000,
            "total_activity": 5_000_000,
            "updated_at": now_utc() - timedelta(days=3),
        }
        data.update(overrides)
        return ContentItem(**data)

    return _factory


@pytest.fixture
def game_record_factory() -> Callable[..., dict[str, Any]]:
    """games.roblox.com /v1/games 응답 레코드 팩토리"""

    def _factory(universe_id: int, **overrides: Any) -> dict[str, Any]:
        record = {
            "id": universe_id,
            "rootPlaceId": universe_id * 10,
            "name": f"Game {universe_id}",
            "description": "",
            "creator": {"id": 1, "name": "Builderman", "type": "User"},
            "playing": 1_000,
            "visits": 10_000_000,
            "maxPlayers": 20,
            "favoritedCount": 100,
            "genre": "All Genres",
            "updated": "2024-01-01T00:00:00.0000000Z",
        }
        record.update(overrides)
        return record

    return _factory


@pytest_asyncio.fixture
async def client(
    upstream: UpstreamRouter,
    cache: InMemoryCacheStore,
    test_settings: Settings,
    http_client: httpx.AsyncClient,
):
    """테스트용 HTTP 클라이언트 (업스트림/캐시 교체)"""
    app.dependency_overrides[get_fetcher] = lambda: ResilientFetcher(
        http_client, sleep=no_sleep
    )
    app.dependency_overrides[get_cache_store] = lambda: cache
    app.dependency_overrides[get_app_settings] = lambda: test_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def api_key_header() -> dict[str, str]:
    """Internal API Key 헤더"""
    return {"X-Internal-Api-Key": settings.internal_api_key}
