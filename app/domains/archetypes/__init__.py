"""Archetypes 도메인 모듈

사용자 신호를 8개 플레이 성향 아키타입 분포로 변환하는 도메인입니다.

구조:
    - types.py: ArchetypeKey, SignalBundle, ArchetypeResult
    - constants.py: 아키타입 키워드, 추천 사유 문구
    - profiler.py: 키워드 가중 매칭, 정규화, 신뢰도 계산
    - service.py: 신호 수집 + 프로파일링
    - schemas.py: Pydantic 스키마 (Response)
    - router.py: API 엔드포인트
"""

from app.domains.archetypes.constants import (
    ARCHETYPE_KEYWORDS,
    recommendation_reason,
)
from app.domains.archetypes.profiler import (
    FULL_PROFILE,
    QUICK_PROFILE,
    ArchetypeProfiler,
    ProfilerConfig,
    get_profiler,
)
from app.domains.archetypes.types import (
    ARCHETYPE_ORDER,
    ArchetypeKey,
    ArchetypeResult,
    Badge,
    GroupMembership,
    SignalBundle,
)

__all__ = [
    "ARCHETYPE_KEYWORDS",
    "ARCHETYPE_ORDER",
    "ArchetypeKey",
    "ArchetypeProfiler",
    "ArchetypeResult",
    "Badge",
    "FULL_PROFILE",
    "GroupMembership",
    "ProfilerConfig",
    "QUICK_PROFILE",
    "SignalBundle",
    "get_profiler",
    "recommendation_reason",
]
