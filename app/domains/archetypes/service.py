"""Archetypes 도메인 서비스

신호 수집과 프로파일링을 연결합니다. 신호 수집이 완전히 실패하면
요청을 실패시키지 않고 균등 분포 결과를 반환합니다.
"""

from datetime import datetime
from typing import Literal, Optional

from app.core.logging import get_logger
from app.domains.archetypes.constants import recommendation_reason
from app.domains.archetypes.profiler import ArchetypeProfiler, get_profiler
from app.domains.archetypes.schemas import ArchetypeProfileResponse
from app.domains.archetypes.types import ArchetypeResult, SignalBundle
from app.domains.signals.service import (
    CollectedSignals,
    SignalCollector,
    validate_user_id,
)

logger = get_logger(__name__)

ProfileMode = Literal["full", "quick"]


def profile_collected(
    collected: CollectedSignals,
    profiler: ArchetypeProfiler,
    now: Optional[datetime] = None,
) -> ArchetypeResult:
    """수집 결과 프로파일링 (전체 실패 시 균등 분포)"""
    if collected.is_empty_failure:
        logger.warning("All signal sources failed, using neutral distribution")
        return profiler.neutral_result()
    return profiler.profile(collected.bundle, now)


class ArchetypeService:
    """아키타입 서비스"""

    def __init__(self, collector: SignalCollector):
        self.collector = collector

    async def profile_user(
        self, user_id: str, mode: ProfileMode = "full"
    ) -> ArchetypeProfileResponse:
        """사용자 ID로 신호를 수집하고 프로파일링

        Raises:
            InvalidUserIdException: 사용자 ID 형식이 올바르지 않은 경우
        """
        uid = validate_user_id(user_id)
        collected = await self.collector.collect(uid)
        result = profile_collected(collected, get_profiler(mode))

        logger.info(
            f"Profiled user {uid} ({mode}): primary={result.primary.value}, "
            f"confidence={result.confidence}, neutral={result.neutral}"
        )
        return ArchetypeProfileResponse(
            user_id=uid,
            mode=mode,
            result=result,
            reason=recommendation_reason(result.primary),
            sources=collected.available,
        )


def profile_signals(
    bundle: SignalBundle, mode: ProfileMode = "full"
) -> ArchetypeProfileResponse:
    """호출자가 전달한 신호 묶음 프로파일링 (I/O 없음)"""
    result = get_profiler(mode).profile(bundle)
    return ArchetypeProfileResponse(
        mode=mode,
        result=result,
        reason=recommendation_reason(result.primary),
    )
