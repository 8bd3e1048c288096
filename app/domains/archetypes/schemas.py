"""Archetypes 도메인 스키마 정의"""

from typing import Optional

from pydantic import BaseModel, Field

from app.domains.archetypes.types import ArchetypeResult


class ArchetypeProfileResponse(BaseModel):
    """프로파일링 응답

    sources는 사용자 ID로 조회한 경우에만 채워집니다.
    """

    user_id: Optional[int] = None
    mode: str = "full"
    result: ArchetypeResult
    reason: str = Field(..., description="1순위 아키타입 기반 추천 사유")
    sources: dict[str, bool] = Field(default_factory=dict)
