"""카탈로그 도메인 타입 정의

추천 대상 콘텐츠(게임)와 캐시에 저장되는 후보 풀 스냅샷을 정의합니다.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.domains.catalog.tags import extract_tags


class ContentItem(BaseModel):
    """추천 후보 콘텐츠

    tags는 입력값이 아니라 genre/텍스트/활동량에서 파생된 값입니다.
    해당 필드가 바뀌면 extract_tags로 다시 생성해야 합니다.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="유니버스 ID")
    root_place_id: Optional[int] = Field(default=None, description="대표 플레이스 ID")
    name: str = ""
    description: Optional[str] = None
    genre: Optional[str] = None
    current_activity: int = Field(default=0, ge=0, description="동시 접속자 수")
    total_activity: int = Field(default=0, ge=0, description="누적 방문 수")
    favorites: int = 0
    max_players: Optional[int] = None
    creator_name: Optional[str] = None
    updated_at: Optional[datetime] = None
    icon_url: str = ""
    game_url: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    def with_tags(self) -> "ContentItem":
        """태그를 다시 생성한 사본"""
        return self.model_copy(update={"tags": list(extract_tags(self))})


class CandidatePool(BaseModel):
    """캐시에 저장되는 후보 풀 스냅샷

    갱신 시 통째로 교체되며 제자리에서 수정하지 않습니다.
    """

    updated_at: datetime
    items: list[ContentItem] = Field(default_factory=list)
    source: str = "discovery"

    @model_validator(mode="after")
    def check_unique_ids(self) -> "CandidatePool":
        seen: set[int] = set()
        for item in self.items:
            if item.id in seen:
                raise ValueError(f"duplicate item id in pool: {item.id}")
            seen.add(item.id)
        return self

    @property
    def is_empty(self) -> bool:
        return not self.items
