"""아키타입 프로파일러

배지/그룹/계정 신호를 8개 아키타입의 점수 분포와 신뢰도로 변환합니다.

점수 계산 순서:
    1. 배지 이름+설명, 그룹 이름에서 키워드 부분 일치 (배지 1점, 그룹 2점)
    2. 메타 신호 보너스 (배지/그룹 수, 계정 나이)
    3. 합계로 정규화 후 소수 둘째 자리 반올림
    4. 정렬 (동점은 ArchetypeKey 선언 순서)
    5. 신호량과 1/2순위 격차로 신뢰도 계산
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional

from app.core.logging import get_logger
from app.core.utils.datetime import days_since
from app.domains.archetypes.constants import ARCHETYPE_KEYWORDS
from app.domains.archetypes.types import (
    ARCHETYPE_ORDER,
    ArchetypeKey,
    ArchetypeResult,
    ArchetypeScores,
    SignalBundle,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProfilerConfig:
    """프로파일링 파라미터

    signal = min(1, (badges + 2*groups) / signal_denominator)
    margin = top1 - top2
    confidence = min(signal_weight*signal
                     + margin_weight*margin*margin_amplifier, confidence_cap)
    confidence = max(confidence, confidence_floor)
    """

    signal_denominator: float = 80
    signal_weight: float = 0.5
    margin_weight: float = 0.5
    margin_amplifier: float = 2
    confidence_cap: float = 0.95
    confidence_floor: float = 0.3

    badge_weight: int = 1
    group_weight: int = 2

    # 메타 신호 보너스
    many_badges: int = 50
    many_badges_bonus: int = 3
    lots_of_badges: int = 100
    lots_of_badges_bonus: int = 5
    many_groups: int = 10
    many_groups_bonus: int = 3
    lots_of_groups: int = 20
    lots_of_groups_bonus: int = 5
    veteran_account_days: int = 3 * 365
    veteran_bonus: int = 3
    new_account_days: int = 180
    new_account_max_badges: int = 20
    new_account_bonus: int = 5


FULL_PROFILE = ProfilerConfig()

# 요청 시점 빠른 프로파일링 (신호가 적은 상황을 전제로 격차 비중을 높임)
QUICK_PROFILE = ProfilerConfig(
    signal_denominator=50,
    signal_weight=0.4,
    margin_weight=0.6,
    margin_amplifier=3,
    confidence_cap=0.85,
    confidence_floor=0.25,
)

PROFILE_MODES: Mapping[str, ProfilerConfig] = {
    "full": FULL_PROFILE,
    "quick": QUICK_PROFILE,
}

# 신호가 없을 때 균등 분포 값 (1/8 반올림)
NEUTRAL_SCORE = round(1 / len(ARCHETYPE_ORDER), 2)


def _round2(value: float) -> float:
    return round(value, 2)


class ArchetypeProfiler:
    """아키타입 프로파일러

    Example:
        profiler = ArchetypeProfiler(QUICK_PROFILE)
        result = profiler.profile(bundle)
        result.primary  # ArchetypeKey.GRINDER
    """

    def __init__(
        self,
        config: ProfilerConfig = FULL_PROFILE,
        keywords: Mapping[ArchetypeKey, tuple[str, ...]] = ARCHETYPE_KEYWORDS,
    ):
        self.config = config
        self.keywords = keywords

    def _match_text(self, text: str, raw: dict[ArchetypeKey, float], weight: int) -> None:
        if not text:
            return
        lowered = text.lower()
        for archetype in ARCHETYPE_ORDER:
            for keyword in self.keywords.get(archetype, ()):
                if keyword in lowered:
                    raw[archetype] += weight

    def _apply_meta_bonuses(
        self,
        raw: dict[ArchetypeKey, float],
        signals: SignalBundle,
        account_age_days: Optional[float],
    ) -> None:
        # 배지/그룹이 하나도 없으면 메타 신호도 적용하지 않음
        if signals.is_empty:
            return

        cfg = self.config
        badge_count = signals.badge_count
        group_count = signals.group_count

        # 단계별 보너스는 누적
        if badge_count > cfg.many_badges:
            raw[ArchetypeKey.GRINDER] += cfg.many_badges_bonus
        if badge_count > cfg.lots_of_badges:
            raw[ArchetypeKey.GRINDER] += cfg.lots_of_badges_bonus

        if group_count > cfg.many_groups:
            raw[ArchetypeKey.SOCIALIZER] += cfg.many_groups_bonus
        if group_count > cfg.lots_of_groups:
            raw[ArchetypeKey.SOCIALIZER] += cfg.lots_of_groups_bonus

        if account_age_days is None:
            return
        if account_age_days > cfg.veteran_account_days:
            raw[ArchetypeKey.GRINDER] += cfg.veteran_bonus
        if (
            account_age_days < cfg.new_account_days
            and badge_count < cfg.new_account_max_badges
        ):
            raw[ArchetypeKey.CASUAL] += cfg.new_account_bonus

    def _confidence(self, signal_strength: float, margin: float) -> float:
        cfg = self.config
        value = (
            cfg.signal_weight * signal_strength
            + cfg.margin_weight * margin * cfg.margin_amplifier
        )
        value = max(cfg.confidence_floor, min(cfg.confidence_cap, value))
        return _round2(value)

    def raw_scores(
        self, signals: SignalBundle, now: Optional[datetime] = None
    ) -> ArchetypeScores:
        """정규화 전 원점수"""
        raw: dict[ArchetypeKey, float] = {key: 0.0 for key in ARCHETYPE_ORDER}

        for badge in signals.badges:
            text = f"{badge.name} {badge.description or ''}"
            self._match_text(text, raw, self.config.badge_weight)
        for group in signals.groups:
            self._match_text(group.group_name, raw, self.config.group_weight)

        self._apply_meta_bonuses(
            raw, signals, self._account_age(signals, now)
        )
        return raw

    @staticmethod
    def _account_age(
        signals: SignalBundle, now: Optional[datetime]
    ) -> Optional[float]:
        if signals.account_created_at is None:
            return None
        return days_since(signals.account_created_at, now)

    def profile(
        self, signals: SignalBundle, now: Optional[datetime] = None
    ) -> ArchetypeResult:
        """신호 묶음을 아키타입 분포로 변환

        Args:
            signals: 배지/그룹/계정 생성일
            now: 계정 나이 계산 기준 시각 (기본값: 현재 UTC)

        Returns:
            ArchetypeResult: 8개 아키타입 점수와 신뢰도
        """
        raw = self.raw_scores(signals, now)
        total = sum(raw.values())
        if total > 0:
            scores = {key: _round2(raw[key] / total) for key in ARCHETYPE_ORDER}
        else:
            scores = {key: 0.0 for key in ARCHETYPE_ORDER}

        # sorted는 안정 정렬이므로 동점은 선언 순서 유지
        ranked = sorted(ARCHETYPE_ORDER, key=lambda key: -scores[key])
        primary, secondary = ranked[0], ranked[1]

        cfg = self.config
        evidence = (
            signals.badge_count * cfg.badge_weight
            + signals.group_count * cfg.group_weight
        )
        signal_strength = min(1.0, evidence / cfg.signal_denominator)
        margin = scores[primary] - scores[secondary]
        confidence = self._confidence(signal_strength, margin)

        account_age = self._account_age(signals, now)
        result = ArchetypeResult(
            scores=scores,
            primary=primary,
            secondary=secondary,
            confidence=confidence,
            signal_strength=_round2(signal_strength),
            badge_count=signals.badge_count,
            group_count=signals.group_count,
            account_age_days=(
                math.floor(account_age) if account_age is not None else None
            ),
        )

        logger.debug(
            f"Profiled signals: badges={signals.badge_count}, "
            f"groups={signals.group_count}, primary={primary.value}, "
            f"secondary={secondary.value}, confidence={confidence}"
        )
        return result

    def neutral_result(self) -> ArchetypeResult:
        """신호 수집이 완전히 실패했을 때의 균등 분포 결과"""
        return ArchetypeResult(
            scores={key: NEUTRAL_SCORE for key in ARCHETYPE_ORDER},
            primary=ARCHETYPE_ORDER[0],
            secondary=ARCHETYPE_ORDER[1],
            confidence=self.config.confidence_floor,
            neutral=True,
        )


def get_profiler(mode: str = "full") -> ArchetypeProfiler:
    """모드 이름("full" | "quick")에 맞는 프로파일러"""
    return ArchetypeProfiler(PROFILE_MODES[mode])
