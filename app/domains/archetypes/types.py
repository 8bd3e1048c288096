"""아키타입 도메인 타입 정의"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ArchetypeKey(str, Enum):
    """플레이 성향 아키타입

    선언 순서가 동점 처리 순서입니다.
    """

    EXPLORER = "explorer"
    GRINDER = "grinder"
    SOCIALIZER = "socializer"
    COMPETITOR = "competitor"
    BUILDER = "builder"
    TRADER = "trader"
    ROLEPLAYER = "roleplayer"
    CASUAL = "casual"


ARCHETYPE_ORDER: tuple[ArchetypeKey, ...] = tuple(ArchetypeKey)

# 아키타입별 점수 분포 (모든 키를 항상 포함)
ArchetypeScores = dict[ArchetypeKey, float]


class Badge(BaseModel):
    """획득 배지"""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    description: Optional[str] = None
    awarder_id: Optional[int] = Field(default=None, alias="awarderId")


class GroupMembership(BaseModel):
    """그룹 가입 정보"""

    model_config = ConfigDict(populate_by_name=True)

    group_name: str = Field(default="", alias="groupName")


class SignalBundle(BaseModel):
    """프로파일링 입력 신호

    badges/groups는 비어 있을 수 있으며, 그 경우에도 프로파일링은
    낮은 신뢰도의 결과를 반환합니다.
    """

    model_config = ConfigDict(populate_by_name=True)

    badges: list[Badge] = Field(default_factory=list)
    groups: list[GroupMembership] = Field(default_factory=list)
    account_created_at: Optional[datetime] = Field(
        default=None, alias="accountCreatedAt"
    )

    @property
    def badge_count(self) -> int:
        return len(self.badges)

    @property
    def group_count(self) -> int:
        return len(self.groups)

    @property
    def is_empty(self) -> bool:
        return not self.badges and not self.groups


class ArchetypeResult(BaseModel):
    """프로파일링 결과

    Attributes:
        scores: 아키타입별 정규화 점수 (0~1, 양수 합계일 때 합이 1)
        primary: 1순위 아키타입
        secondary: 2순위 아키타입
        confidence: 신뢰도 (하한~상한 범위)
        neutral: 신호를 전혀 얻지 못해 균등 분포로 대체된 결과 여부
        signal_strength: 신호량 지표 (0~1)
        badge_count: 분석한 배지 수
        group_count: 분석한 그룹 수
        account_age_days: 계정 생성 후 경과 일수
    """

    scores: ArchetypeScores
    primary: ArchetypeKey
    secondary: ArchetypeKey
    confidence: float = Field(..., ge=0.0, le=1.0)
    neutral: bool = False
    signal_strength: float = 0.0
    badge_count: int = 0
    group_count: int = 0
    account_age_days: Optional[int] = None
