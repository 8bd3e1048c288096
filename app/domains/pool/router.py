"""Pool 도메인 라우터

후보 풀 갱신 및 진단 API 엔드포인트입니다.
"""

from fastapi import APIRouter, Depends

from app.core.cache import CacheStore
from app.core.config import Settings
from app.core.dependencies import (
    get_app_settings,
    get_cache_store,
    get_fetcher,
    verify_internal_api_key,
)
from app.core.http import ResilientFetcher
from app.core.schemas import APIResponse, create_response
from app.domains.pool.client import DiscoveryClient
from app.domains.pool.exceptions import PoolStatusNotFoundException
from app.domains.pool.schemas import PoolDiagnosticsResponse, PoolStatusResponse
from app.domains.pool.service import CandidatePoolManager, CandidatePoolStore
from app.domains.pool.types import PoolRefreshResult

router = APIRouter()


def get_pool_store(
    cache: CacheStore = Depends(get_cache_store),
    settings: Settings = Depends(get_app_settings),
) -> CandidatePoolStore:
    """CandidatePoolStore 의존성"""
    return CandidatePoolStore(cache, settings)


def get_discovery_client(
    fetcher: ResilientFetcher = Depends(get_fetcher),
    settings: Settings = Depends(get_app_settings),
) -> DiscoveryClient:
    """DiscoveryClient 의존성"""
    return DiscoveryClient(fetcher, settings)


def get_pool_manager(
    discovery: DiscoveryClient = Depends(get_discovery_client),
    store: CandidatePoolStore = Depends(get_pool_store),
    settings: Settings = Depends(get_app_settings),
) -> CandidatePoolManager:
    """CandidatePoolManager 의존성"""
    return CandidatePoolManager(discovery, store, settings)


@router.post(
    "/refresh",
    response_model=APIResponse[PoolRefreshResult],
    dependencies=[Depends(verify_internal_api_key)],
)
async def refresh_pool(
    manager: CandidatePoolManager = Depends(get_pool_manager),
):
    """후보 풀 갱신

    갱신 실패(후보 없음, 전부 필터링)도 200으로 반환하며
    success/outcome 필드로 구분합니다.
    """
    result = await manager.refresh_pool()
    message = (
        f"후보 풀에 {result.counts.filtered}개 항목을 저장했습니다."
        if result.success
        else "후보 풀을 갱신하지 못했습니다."
    )
    return create_response(data=result, message=message, success=result.success)


@router.get("/status", response_model=APIResponse[PoolStatusResponse])
async def get_pool_status(
    store: CandidatePoolStore = Depends(get_pool_store),
):
    """마지막 갱신 상태 조회"""
    record = await store.load_status()
    if record is None:
        raise PoolStatusNotFoundException(store.settings.pool_status_key)
    return create_response(data=PoolStatusResponse(record=record))


@router.get("/diagnostics", response_model=APIResponse[PoolDiagnosticsResponse])
async def get_pool_diagnostics(
    store: CandidatePoolStore = Depends(get_pool_store),
):
    """캐시된 후보 풀 진단"""
    info = await store.inspect()
    return create_response(data=PoolDiagnosticsResponse(**info))
