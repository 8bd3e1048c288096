"""Recommendations 도메인 스키마 정의"""

from pydantic import BaseModel, Field

from app.domains.archetypes.types import SignalBundle
from app.domains.catalog.types import ContentItem


class ScoreRequest(BaseModel):
    """신호와 후보를 직접 전달하는 추천 요청"""

    signals: SignalBundle = Field(default_factory=SignalBundle)
    items: list[ContentItem] = Field(
        ...,
        max_length=500,
        description="추천 후보 (tags는 서버에서 다시 생성)",
    )
