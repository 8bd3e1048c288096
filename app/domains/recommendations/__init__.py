"""Recommendations 도메인 모듈

아키타입 분포와 후보 풀로 추천 목록을 만드는 도메인입니다.

구조:
    - constants.py: 아키타입별 선호/비선호 태그
    - scorer.py: 태그 적합도/인기도/최신성 혼합 점수
    - types.py: 추천 결과와 종료 상태
    - service.py: 캐시 풀 → 실시간 대체 경로 오케스트레이션
    - schemas.py: Pydantic 스키마 (Request)
    - router.py: API 엔드포인트
    - exceptions.py: 도메인 예외
"""

from app.domains.recommendations.constants import ARCHETYPE_TO_TAGS, TagAffinity
from app.domains.recommendations.exceptions import (
    RecommendationErrorCode,
    RecommendationUnavailableException,
)
from app.domains.recommendations.scorer import (
    ItemScore,
    RecommendationEntry,
    RecommendationScorer,
    ScoreBreakdown,
    ScoreWeights,
    freshness_score,
    popularity_score,
)
from app.domains.recommendations.types import (
    RecommendationResult,
    RecommendationSource,
    RecommendationState,
)

__all__ = [
    "ARCHETYPE_TO_TAGS",
    "ItemScore",
    "RecommendationEntry",
    "RecommendationErrorCode",
    "RecommendationResult",
    "RecommendationScorer",
    "RecommendationSource",
    "RecommendationState",
    "RecommendationUnavailableException",
    "ScoreBreakdown",
    "ScoreWeights",
    "TagAffinity",
    "freshness_score",
    "popularity_score",
]
