"""Recommendations 도메인 타입 정의"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from app.domains.archetypes.types import ArchetypeKey, ArchetypeResult
from app.domains.recommendations.scorer import RecommendationEntry


class RecommendationState(str, Enum):
    """추천 요청 종료 상태

    SCORED: 캐시된 풀로 추천
    LIVE_SCORED: 풀을 쓸 수 없어 실시간 후보로 추천
    FAILED: 두 경로 모두 실패
    """

    SCORED = "SCORED"
    LIVE_SCORED = "LIVE_SCORED"
    FAILED = "FAILED"


class RecommendationSource(str, Enum):
    CACHE = "cache"
    LIVE_FALLBACK = "live_fallback"
    REQUEST = "request"


class RecommendationBasis(BaseModel):
    """추천 근거가 된 프로파일링 요약"""

    primary: ArchetypeKey
    secondary: ArchetypeKey
    confidence: float
    neutral: bool = False
    reason: str

    @classmethod
    def from_result(cls, result: ArchetypeResult, reason: str) -> "RecommendationBasis":
        return cls(
            primary=result.primary,
            secondary=result.secondary,
            confidence=result.confidence,
            neutral=result.neutral,
            reason=reason,
        )


class RecommendationResult(BaseModel):
    """추천 결과

    Attributes:
        state: 종료 상태
        source: 후보 출처
        updated_at: 후보 풀 생성 시각 (실시간 경로는 요청 시각)
        basis: 프로파일링 요약
        recommendations: 점수 내림차순 추천 목록
        pool_status: 캐시 풀 로드 상태 (대체 경로 전환 사유)
        empty_reason: 추천 목록이 비었을 때의 사유
        error: FAILED 상태의 실패 사유
        cache_max_age: 응답 캐시 허용 시간 (초)
        diagnostics: 업스트림 호출 기록
    """

    state: RecommendationState
    source: Optional[RecommendationSource] = None
    updated_at: Optional[datetime] = None
    basis: Optional[RecommendationBasis] = None
    recommendations: list[RecommendationEntry] = Field(default_factory=list)
    pool_status: Optional[str] = None
    empty_reason: Optional[str] = None
    error: Optional[str] = None
    cache_max_age: int = 0
    diagnostics: dict[str, Any] = Field(default_factory=dict)
