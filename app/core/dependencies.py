"""공통 의존성 함수 정의

애플리케이션 수명 동안 공유되는 자원(httpx 클라이언트, 캐시 저장소)은
lifespan에서 생성되어 app.state에 보관되고, 여기의 의존성 함수로 주입됩니다.
테스트에서는 app.dependency_overrides로 교체합니다.
"""

import secrets

import httpx
from fastapi import Header, Request

from app.core.cache import CacheStore
from app.core.config import Settings, get_settings
from app.core.exceptions import ErrorCode, UnauthorizedException
from app.core.http import ResilientFetcher


def get_app_settings() -> Settings:
    """설정 의존성"""
    return get_settings()


def get_cache_store(request: Request) -> CacheStore:
    """캐시 저장소 의존성"""
    cache: CacheStore = request.app.state.cache
    return cache


def get_fetcher(request: Request) -> ResilientFetcher:
    """업스트림 호출기 의존성"""
    client: httpx.AsyncClient = request.app.state.http_client
    return ResilientFetcher.from_settings(client, get_settings())


async def verify_internal_api_key(
    x_internal_api_key: str = Header(..., alias="X-Internal-Api-Key")
) -> None:
    """내부 API Key 검증 (풀 갱신 등 관리용)

    Args:
        x_internal_api_key: 요청 헤더의 X-Internal-Api-Key 값

    Raises:
        UnauthorizedException: API Key가 유효하지 않은 경우

    Example:
        @router.post("/refresh", dependencies=[Depends(verify_internal_api_key)])
        async def refresh_pool():
            ...
    """
    expected = get_settings().internal_api_key
    if not secrets.compare_digest(x_internal_api_key, expected):
        raise UnauthorizedException(
            message="유효하지 않은 API 키입니다.",
            error_code=ErrorCode.INVALID_API_KEY,
        )
