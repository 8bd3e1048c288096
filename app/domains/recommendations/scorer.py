"""추천 점수 계산

콘텐츠 한 건과 사용자 아키타입 분포로 0~100 점수를 계산합니다.

    final = round(100 * (0.55*match + 0.30*popularity + 0.15*freshness))

- match: 사용자가 0보다 큰 점수를 가진 아키타입별 태그 적합도의 가중 평균
- popularity: 동시 접속자(0.6)와 누적 방문(0.4)의 로그 스케일 혼합
- freshness: 마지막 업데이트 후 경과 일수 구간값

누락/0 값은 오류가 아니라 중립 값으로 처리합니다.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping, Optional

from pydantic import BaseModel, Field

from app.core.utils.datetime import days_since
from app.domains.archetypes.types import ARCHETYPE_ORDER, ArchetypeKey
from app.domains.catalog.types import ContentItem
from app.domains.recommendations.constants import ARCHETYPE_TO_TAGS, TagAffinity

NEUTRAL_POPULARITY = 0.3
NEUTRAL_FRESHNESS = 0.5

# (경과 일수 미만, 점수) 순서대로 검사
FRESHNESS_STEPS: tuple[tuple[float, float], ...] = (
    (7, 1.0),
    (30, 0.85),
    (90, 0.7),
    (180, 0.5),
    (365, 0.3),
)
STALE_FRESHNESS = 0.2


@dataclass(frozen=True)
class ScoreWeights:
    match: float = 0.55
    popularity: float = 0.30
    freshness: float = 0.15
    want_tag: float = 0.3
    avoid_tag: float = 0.2


class ScoreBreakdown(BaseModel):
    """점수 구성 요소 (설명용)"""

    match: float = Field(..., ge=0.0, le=1.0)
    popularity: float = Field(..., ge=0.0, le=1.0)
    freshness: float = Field(..., ge=0.0, le=1.0)
    matched_tags: list[str] = Field(default_factory=list)


class ItemScore(BaseModel):
    """콘텐츠 한 건의 점수"""

    score: int = Field(..., ge=0, le=100)
    matched_archetypes: list[ArchetypeKey] = Field(default_factory=list)
    breakdown: ScoreBreakdown


class RecommendationEntry(BaseModel):
    """추천 결과 한 건"""

    item: ContentItem
    score: int = Field(..., ge=0, le=100)
    matched_archetypes: list[ArchetypeKey] = Field(default_factory=list)
    breakdown: Optional[ScoreBreakdown] = None


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def popularity_score(current_activity: int, total_activity: int) -> float:
    """인기도 (0~1)

    동시 접속자 500명 ≈ 0, 5만 명 이상이면 상한.
    누적 방문 10억 이상이면 상한. 둘 다 없으면 0.3.
    """
    if not current_activity and not total_activity:
        return NEUTRAL_POPULARITY

    score = 0.0
    if current_activity:
        live = (math.log10(current_activity + 1) - 2.7) / 2.5
        score += _clamp(live, 0.0, 0.6) * 0.6
    if total_activity:
        lifetime = math.log10(total_activity + 1) / 10
        score += _clamp(lifetime, 0.0, 0.4) * 0.4

    return _clamp(score + NEUTRAL_POPULARITY, 0.0, 1.0)


def freshness_score(
    updated_at: Optional[datetime], now: Optional[datetime] = None
) -> float:
    """최신성 (0~1)"""
    if updated_at is None:
        return NEUTRAL_FRESHNESS

    elapsed = days_since(updated_at, now)
    for limit, score in FRESHNESS_STEPS:
        if elapsed < limit:
            return score
    return STALE_FRESHNESS


class RecommendationScorer:
    """추천 점수 계산기

    Example:
        scorer = RecommendationScorer()
        result = scorer.score(item, archetype_result.scores)
        result.score  # 0~100
    """

    def __init__(
        self,
        weights: ScoreWeights = ScoreWeights(),
        affinities: Mapping[ArchetypeKey, TagAffinity] = ARCHETYPE_TO_TAGS,
    ):
        self.weights = weights
        self.affinities = affinities

    def _archetype_match(self, tags: set[str], affinity: TagAffinity) -> float:
        wanted = sum(1 for tag in affinity.want if tag in tags)
        avoided = sum(1 for tag in affinity.avoid if tag in tags)
        raw = self.weights.want_tag * wanted - self.weights.avoid_tag * avoided
        return _clamp(raw, 0.0, 1.0)

    def score(
        self,
        item: ContentItem,
        user_scores: Mapping[ArchetypeKey, float],
        now: Optional[datetime] = None,
    ) -> ItemScore:
        """콘텐츠 점수 계산

        Args:
            item: 태그가 생성된 콘텐츠
            user_scores: 사용자 아키타입 분포
            now: 최신성 계산 기준 시각

        Returns:
            ItemScore: 0~100 점수, 일치 아키타입, 구성 요소
        """
        tags = set(item.tags)

        # 사용자 점수 내림차순 (동점은 선언 순서)
        favored = sorted(
            (key for key in ARCHETYPE_ORDER if user_scores.get(key, 0) > 0),
            key=lambda key: -user_scores[key],
        )

        weighted = 0.0
        total_weight = 0.0
        matched_archetypes: list[ArchetypeKey] = []
        matched_tags: dict[str, None] = {}
        for archetype in favored:
            affinity = self.affinities.get(archetype)
            if affinity is None:
                continue
            user_score = user_scores[archetype]
            weighted += self._archetype_match(tags, affinity) * user_score
            total_weight += user_score

            hits = [tag for tag in affinity.want if tag in tags]
            if hits:
                matched_archetypes.append(archetype)
                for tag in hits:
                    matched_tags[tag] = None

        match = weighted / total_weight if total_weight > 0 else 0.0
        popularity = popularity_score(item.current_activity, item.total_activity)
        freshness = freshness_score(item.updated_at, now)

        w = self.weights
        final = round(
            100 * (w.match * match + w.popularity * popularity + w.freshness * freshness)
        )

        return ItemScore(
            score=int(_clamp(final, 0, 100)),
            matched_archetypes=matched_archetypes,
            breakdown=ScoreBreakdown(
                match=round(match, 4),
                popularity=round(popularity, 4),
                freshness=freshness,
                matched_tags=list(matched_tags),
            ),
        )

    def rank_items(
        self,
        items: Iterable[ContentItem],
        user_scores: Mapping[ArchetypeKey, float],
        limit: int = 12,
        matched_limit: int = 3,
        now: Optional[datetime] = None,
    ) -> list[RecommendationEntry]:
        """점수 내림차순 상위 limit개 (동점은 입력 순서 유지)"""
        entries = []
        for item in items:
            result = self.score(item, user_scores, now)
            entries.append(
                RecommendationEntry(
                    item=item,
                    score=result.score,
                    matched_archetypes=result.matched_archetypes[:matched_limit],
                    breakdown=result.breakdown,
                )
            )

        entries.sort(key=lambda entry: entry.score, reverse=True)
        return entries[:limit]
