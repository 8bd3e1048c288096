"""Recommendations 도메인 서비스

추천 요청을 상태 단계로 처리합니다.

    ProfileUser → LoadPool → Score          (SCORED)
                           ↘ LiveFallback   (LIVE_SCORED | FAILED)

- ProfileUser: 일부 출처 실패는 빈 값으로, 전체 실패는 균등 분포로 대체
- LoadPool: 풀이 없거나 비었거나 손상되면 LiveFallback으로 전환
- LiveFallback: 인기 게임 목록을 직접 조회해 같은 방식으로 태그/점수 계산

잘못된 사용자 ID만 예외로 거부하고, 나머지 실패는 결과 값으로 반환합니다.
"""

from datetime import datetime
from typing import Optional, Sequence

from app.core.config import Settings
from app.core.http import FetchDiagnostics
from app.core.logging import get_logger
from app.core.utils.datetime import now_utc
from app.domains.archetypes.constants import recommendation_reason
from app.domains.archetypes.profiler import (
    QUICK_PROFILE,
    ArchetypeProfiler,
)
from app.domains.archetypes.service import profile_collected
from app.domains.archetypes.types import ArchetypeResult, SignalBundle
from app.domains.catalog.types import ContentItem
from app.domains.pool.client import DiscoveryClient
from app.domains.pool.service import (
    CandidatePoolStore,
    build_items,
    finalize_items,
    passes_activity_filter,
)
from app.domains.recommendations.scorer import RecommendationScorer
from app.domains.recommendations.types import (
    RecommendationBasis,
    RecommendationResult,
    RecommendationSource,
    RecommendationState,
)
from app.domains.signals.service import SignalCollector, validate_user_id

logger = get_logger(__name__)

NO_ELIGIBLE_CANDIDATES = "no_eligible_candidates"


def _basis(result: ArchetypeResult) -> RecommendationBasis:
    return RecommendationBasis.from_result(
        result, recommendation_reason(result.primary)
    )


class RecommendationService:
    """추천 오케스트레이터"""

    def __init__(
        self,
        collector: SignalCollector,
        store: CandidatePoolStore,
        discovery: DiscoveryClient,
        settings: Settings,
        scorer: Optional[RecommendationScorer] = None,
        profiler: Optional[ArchetypeProfiler] = None,
    ):
        self.collector = collector
        self.store = store
        self.discovery = discovery
        self.settings = settings
        self.scorer = scorer or RecommendationScorer()
        self.profiler = profiler or ArchetypeProfiler(QUICK_PROFILE)

    def _rank(
        self,
        items: Sequence[ContentItem],
        archetype: ArchetypeResult,
        now: Optional[datetime],
    ):
        return self.scorer.rank_items(
            items,
            archetype.scores,
            limit=self.settings.recommendation_limit,
            matched_limit=self.settings.recommendation_matched_limit,
            now=now,
        )

    async def recommend(
        self, user_id: str, now: Optional[datetime] = None
    ) -> RecommendationResult:
        """사용자 추천 목록 생성

        Raises:
            InvalidUserIdException: 사용자 ID 형식이 올바르지 않은 경우
        """
        uid = validate_user_id(user_id)
        diagnostics = FetchDiagnostics()

        # ProfileUser
        collected = await self.collector.collect(uid, diagnostics)
        archetype = profile_collected(collected, self.profiler, now)

        # LoadPool
        loaded = await self.store.load()
        if loaded.usable:
            pool = loaded.pool
            entries = self._rank(pool.items, archetype, now)
            logger.info(
                f"Recommended {len(entries)} items for user {uid} from cached pool "
                f"({len(pool.items)} candidates)"
            )
            return RecommendationResult(
                state=RecommendationState.SCORED,
                source=RecommendationSource.CACHE,
                updated_at=pool.updated_at,
                basis=_basis(archetype),
                recommendations=entries,
                pool_status=loaded.status.value,
                cache_max_age=self.settings.recommendation_cache_max_age,
                diagnostics=diagnostics.to_dict(),
            )

        logger.warning(
            f"Cached pool unusable ({loaded.status.value}), "
            f"switching to live fallback for user {uid}"
        )
        try:
            result = await self._live_fallback(archetype, diagnostics, now)
        except Exception as e:
            logger.exception(f"Live fallback crashed for user {uid}")
            result = RecommendationResult(
                state=RecommendationState.FAILED,
                basis=_basis(archetype),
                error=f"{type(e).__name__}: {e}",
                diagnostics=diagnostics.to_dict(),
            )
        result.pool_status = loaded.status.value
        return result

    async def _live_fallback(
        self,
        archetype: ArchetypeResult,
        diagnostics: FetchDiagnostics,
        now: Optional[datetime],
    ) -> RecommendationResult:
        ids = await self.discovery.fetch_top_game_ids(diagnostics)
        if ids is None:
            return self._failed(archetype, diagnostics, "Live candidate list unavailable")

        records = await self.discovery.fetch_metadata(ids, diagnostics)
        if records is None:
            return self._failed(archetype, diagnostics, "Live candidate metadata unavailable")

        eligible = [
            item
            for item in build_items(records, self.settings)
            if passes_activity_filter(item, self.settings)
        ]
        items = await finalize_items(self.discovery, eligible, diagnostics)
        entries = self._rank(items, archetype, now)

        logger.info(
            f"Live fallback scored {len(items)} candidates, "
            f"returning {len(entries)}"
        )
        return RecommendationResult(
            state=RecommendationState.LIVE_SCORED,
            source=RecommendationSource.LIVE_FALLBACK,
            updated_at=now or now_utc(),
            basis=_basis(archetype),
            recommendations=entries,
            empty_reason=None if entries else NO_ELIGIBLE_CANDIDATES,
            cache_max_age=self.settings.live_fallback_cache_max_age,
            diagnostics=diagnostics.to_dict(),
        )

    @staticmethod
    def _failed(
        archetype: ArchetypeResult, diagnostics: FetchDiagnostics, error: str
    ) -> RecommendationResult:
        logger.error(f"Recommendation failed: {error}")
        return RecommendationResult(
            state=RecommendationState.FAILED,
            basis=_basis(archetype),
            error=error,
            diagnostics=diagnostics.to_dict(),
        )


def recommend_from_signals(
    signals: SignalBundle,
    items: Sequence[ContentItem],
    settings: Settings,
    profiler: Optional[ArchetypeProfiler] = None,
    scorer: Optional[RecommendationScorer] = None,
    now: Optional[datetime] = None,
) -> RecommendationResult:
    """전달받은 신호와 후보로 추천 (I/O 없음)

    후보 태그는 입력값을 무시하고 다시 생성합니다.
    """
    profiler = profiler or ArchetypeProfiler(QUICK_PROFILE)
    scorer = scorer or RecommendationScorer()

    archetype = profiler.profile(signals, now)
    tagged = [item.with_tags() for item in items]
    entries = scorer.rank_items(
        tagged,
        archetype.scores,
        limit=settings.recommendation_limit,
        matched_limit=settings.recommendation_matched_limit,
        now=now,
    )
    return RecommendationResult(
        state=RecommendationState.SCORED,
        source=RecommendationSource.REQUEST,
        updated_at=now or now_utc(),
        basis=_basis(archetype),
        recommendations=entries,
        empty_reason=None if entries else NO_ELIGIBLE_CANDIDATES,
    )
