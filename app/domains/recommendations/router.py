"""Recommendations 도메인 라우터"""

from fastapi import APIRouter, Depends, Query, Response

from app.core.config import Settings
from app.core.dependencies import get_app_settings
from app.core.schemas import APIResponse, create_response
from app.domains.pool.client import DiscoveryClient
from app.domains.pool.router import get_discovery_client, get_pool_store
from app.domains.pool.service import CandidatePoolStore
from app.domains.recommendations.exceptions import RecommendationUnavailableException
from app.domains.recommendations.schemas import ScoreRequest
from app.domains.recommendations.service import (
    RecommendationService,
    recommend_from_signals,
)
from app.domains.recommendations.types import (
    RecommendationResult,
    RecommendationSource,
    RecommendationState,
)
from app.domains.signals.client import ProfileSourceClient
from app.domains.signals.router import get_profile_client
from app.domains.signals.service import SignalCollector

router = APIRouter()


def get_recommendation_service(
    client: ProfileSourceClient = Depends(get_profile_client),
    store: CandidatePoolStore = Depends(get_pool_store),
    discovery: DiscoveryClient = Depends(get_discovery_client),
    settings: Settings = Depends(get_app_settings),
) -> RecommendationService:
    """RecommendationService 의존성"""
    return RecommendationService(SignalCollector(client), store, discovery, settings)


@router.get("", response_model=APIResponse[RecommendationResult])
async def get_recommendations(
    response: Response,
    user_id: str = Query(..., description="사용자 ID"),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """사용자 맞춤 추천 목록"""
    result = await service.recommend(user_id)
    if result.state == RecommendationState.FAILED:
        raise RecommendationUnavailableException(result.error, result.diagnostics)

    response.headers["Cache-Control"] = f"public, max-age={result.cache_max_age}"
    message = (
        "실시간 후보로 추천 목록을 생성했습니다."
        if result.source == RecommendationSource.LIVE_FALLBACK
        else "추천 목록을 생성했습니다."
    )
    return create_response(data=result, message=message)


@router.post("/score", response_model=APIResponse[RecommendationResult])
async def score_candidates(
    data: ScoreRequest,
    settings: Settings = Depends(get_app_settings),
):
    """전달받은 신호와 후보로 추천 (업스트림 호출 없음)"""
    result = recommend_from_signals(data.signals, data.items, settings)
    return create_response(data=result, message="추천 목록을 생성했습니다.")
